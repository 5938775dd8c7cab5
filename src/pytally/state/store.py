"""In-memory store holding a single reduced state.

This is the only component allowed to replace the current state. It is
constructed explicitly by the caller; there is no module-level instance.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar

from pytally.config import TallyConfig
from pytally.state.actions import INIT_ACTION, Action
from pytally.state.reducer import TallyState, make_reducer

_logger = logging.getLogger(__name__)

S = TypeVar("S")

Listener = Callable[[], Any]


class Subscription:
    """Handle for one registration of a listener on a :class:`Store`.

    Calling the handle (or :meth:`unsubscribe`) removes exactly this
    registration. Removing it twice is a no-op.
    """

    __slots__ = ("_listener", "_store")

    def __init__(self, store: Store[Any], listener: Listener) -> None:
        self._store: Store[Any] | None = store
        self._listener = listener

    @property
    def active(self) -> bool:
        return self._store is not None

    @property
    def listener(self) -> Listener:
        return self._listener

    def unsubscribe(self) -> None:
        store = self._store
        if store is None:
            return
        self._store = None
        store._remove(self)

    def __call__(self) -> None:
        self.unsubscribe()

    def __repr__(self) -> str:
        name = getattr(self._listener, "__name__", repr(self._listener))
        return f"Subscription(listener={name}, active={self.active})"


class Store(Generic[S]):
    """Holds one piece of state and applies a reducer on dispatch.

    Usage::

        with create_store() as store:
            unsubscribe = store.subscribe(lambda: print(store.get_state()))
            store.dispatch(Action.add())
            unsubscribe()
    """

    def __init__(self, reducer: Callable[[S | None, Action], S]) -> None:
        self._reducer = reducer
        self._subscriptions: list[Subscription] = []
        self._state: S = reducer(None, INIT_ACTION)
        _logger.debug("Store initialised with state=%r", self._state)

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    def __enter__(self) -> Store[S]:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def close(self) -> None:
        """Drop every subscription. The state is kept."""
        subscriptions, self._subscriptions = self._subscriptions, []
        for subscription in subscriptions:
            subscription._store = None
        if subscriptions:
            _logger.debug("Store closed; dropped %d subscription(s)", len(subscriptions))

    # ------------------------------------------------------------------
    # Store operations
    # ------------------------------------------------------------------

    def get_state(self) -> S:
        """Return the current state snapshot."""
        return self._state

    def dispatch(self, action: Action | Mapping[str, Any]) -> Action:
        """Apply *action* and notify subscribers in registration order.

        A plain mapping such as ``{"type": "ADD"}`` is parsed into an
        :class:`Action` first. Subscribers registered or removed while
        notifications are running take effect from the next dispatch. An
        exception raised by a subscriber propagates after the state has
        been replaced.
        """
        if isinstance(action, Mapping):
            action = Action.model_validate(dict(action))
        elif not isinstance(action, Action):
            raise TypeError(f"action must be an Action or a mapping, got {type(action).__name__}")

        previous = self._state
        self._state = self._reducer(previous, action)
        _logger.debug("Dispatched %s: %r -> %r", action.type, previous, self._state)

        for subscription in list(self._subscriptions):
            subscription.listener()
        return action

    def subscribe(self, listener: Listener) -> Subscription:
        """Register *listener*; returns a handle that unsubscribes it."""
        if not callable(listener):
            raise TypeError(f"listener must be callable, got {type(listener).__name__}")
        subscription = Subscription(self, listener)
        self._subscriptions.append(subscription)
        _logger.debug("Subscribed %r (%d active)", subscription, len(self._subscriptions))
        return subscription

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def _remove(self, subscription: Subscription) -> None:
        # Identity comparison: equal listeners registered twice are distinct handles.
        self._subscriptions = [s for s in self._subscriptions if s is not subscription]
        _logger.debug("Unsubscribed %r (%d active)", subscription, len(self._subscriptions))


def create_store(
    reducer: Callable[[TallyState | None, Action], TallyState] | None = None,
    *,
    config: TallyConfig | None = None,
) -> Store[TallyState]:
    """Create a tally store.

    Parameters
    ----------
    reducer : callable, optional
        Transition function. Defaults to the tally reducer built from *config*.
    config : TallyConfig, optional
        Bounds and step for the default reducer. Ignored when *reducer* is given.
    """
    if reducer is None:
        reducer = make_reducer(config)
    return Store(reducer)
