from __future__ import annotations

import logging

import pytest

from pytally.config import TallyConfig
from pytally.state.actions import Action
from pytally.state.reducer import TallyState
from pytally.state.store import Store, Subscription, create_store


def test_initial_state_is_zero() -> None:
    store = create_store()
    assert store.get_state() == TallyState(count=0)


def test_get_state_has_no_side_effects() -> None:
    store = create_store()
    calls: list[int] = []
    store.subscribe(lambda: calls.append(1))

    assert store.get_state() is store.get_state()
    assert calls == []


def test_scenario_add_add_subtract_reset() -> None:
    store = create_store()

    store.dispatch(Action.add())
    store.dispatch(Action.add())
    assert store.get_state().count == 10

    store.dispatch(Action.subtract())
    assert store.get_state().count == 5

    store.dispatch(Action.reset())
    assert store.get_state().count == 0


def test_dispatch_returns_action() -> None:
    store = create_store()
    action = Action.add()
    assert store.dispatch(action) is action


def test_subscribers_called_in_registration_order_after_state_change() -> None:
    store = create_store()
    seen: list[tuple[str, int]] = []

    store.subscribe(lambda: seen.append(("first", store.get_state().count)))
    store.subscribe(lambda: seen.append(("second", store.get_state().count)))

    store.dispatch(Action.add())

    assert seen == [("first", 5), ("second", 5)]


def test_subscribers_notified_even_when_state_unchanged() -> None:
    store = create_store()
    calls: list[int] = []
    store.subscribe(lambda: calls.append(store.get_state().count))

    store.dispatch(Action.subtract())
    store.dispatch(Action.model_validate({"type": "NOPE"}))

    assert calls == [0, 0]


def test_unsubscribe_prevents_further_notification() -> None:
    store = create_store()
    calls: list[int] = []

    unsubscribe = store.subscribe(lambda: calls.append(1))
    store.dispatch(Action.add())
    unsubscribe()
    store.dispatch(Action.add())

    assert calls == [1]
    assert store.subscriber_count == 0


def test_double_unsubscribe_is_no_op() -> None:
    store = create_store()
    keep: list[int] = []
    store.subscribe(lambda: keep.append(1))
    unsubscribe = store.subscribe(lambda: None)

    unsubscribe()
    unsubscribe()

    assert store.subscriber_count == 1
    store.dispatch(Action.add())
    assert keep == [1]


def test_same_listener_registered_twice_is_removed_by_handle() -> None:
    store = create_store()
    calls: list[int] = []

    def listener() -> None:
        calls.append(1)

    first = store.subscribe(listener)
    store.subscribe(listener)
    first.unsubscribe()

    store.dispatch(Action.add())

    assert calls == [1]
    assert not first.active


def test_unsubscribe_during_dispatch_takes_effect_next_time() -> None:
    store = create_store()
    calls: list[str] = []
    handles: list[Subscription] = []

    def first() -> None:
        calls.append("first")
        handles[1]()

    handles.append(store.subscribe(first))
    handles.append(store.subscribe(lambda: calls.append("second")))

    store.dispatch(Action.add())
    store.dispatch(Action.add())

    assert calls == ["first", "second", "first"]


def test_subscriber_exception_propagates_after_state_change() -> None:
    store = create_store()
    later: list[int] = []

    def boom() -> None:
        raise RuntimeError("subscriber failed")

    store.subscribe(boom)
    store.subscribe(lambda: later.append(1))

    with pytest.raises(RuntimeError, match="subscriber failed"):
        store.dispatch(Action.add())

    assert store.get_state().count == 5
    assert later == []


def test_nested_dispatch_from_subscriber() -> None:
    store = create_store()
    seen: list[int] = []

    def listener() -> None:
        seen.append(store.get_state().count)
        if store.get_state().count == 5:
            store.dispatch(Action.add())

    store.subscribe(listener)
    store.dispatch(Action.add())

    assert seen == [5, 10]
    assert store.get_state().count == 10


def test_subscribe_rejects_non_callable() -> None:
    store = create_store()
    with pytest.raises(TypeError):
        store.subscribe("not callable")  # type: ignore[arg-type]


def test_close_drops_subscriptions() -> None:
    calls: list[int] = []
    with create_store() as store:
        handle = store.subscribe(lambda: calls.append(1))
        store.dispatch(Action.add())

    assert store.subscriber_count == 0
    assert not handle.active
    store.dispatch(Action.add())
    assert calls == [1]
    assert store.get_state().count == 10


def test_store_with_custom_config() -> None:
    store = create_store(config=TallyConfig(max_count=7, step=7))
    store.dispatch(Action.add())
    store.dispatch(Action.add())
    assert store.get_state().count == 7


def test_store_accepts_any_reducer() -> None:
    def history(state: list[str] | None, action: Action) -> list[str]:
        return [*(state or []), str(action.type)]

    store: Store[list[str]] = Store(history)
    store.dispatch(Action.add())
    assert store.get_state() == ["@@INIT", "ADD"]


def test_dispatch_logs_transition(caplog: pytest.LogCaptureFixture) -> None:
    store = create_store()
    with caplog.at_level(logging.DEBUG, logger="pytally.state.store"):
        store.dispatch(Action.add())
    assert any("Dispatched ADD" in record.getMessage() for record in caplog.records)


def test_dispatch_accepts_plain_mapping() -> None:
    store = create_store()
    action = store.dispatch({"type": "ADD"})
    assert isinstance(action, Action)
    assert store.get_state().count == 5


def test_dispatch_mapping_with_unknown_tag_is_no_op() -> None:
    store = create_store()
    before = store.get_state()
    store.dispatch({"type": "MULTIPLY"})
    assert store.get_state() is before


def test_dispatch_rejects_other_types() -> None:
    store = create_store()
    with pytest.raises(TypeError, match="action must be"):
        store.dispatch("ADD")  # type: ignore[arg-type]
    assert store.get_state().count == 0


def test_store_from_env_resets_to_zero(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TALLY_MIN_COUNT", "3")
    monkeypatch.delenv("TALLY_MAX_COUNT", raising=False)
    monkeypatch.delenv("TALLY_STEP", raising=False)
    store = create_store(config=TallyConfig.from_env())

    store.dispatch(Action.add())
    store.dispatch(Action.reset())

    assert store.get_state().count == 0
