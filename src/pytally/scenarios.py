"""Scripted walk-through of a tally store.

Each :class:`Scenario` dispatches a few actions against a shared store
and checks the resulting count. The printed lines are informational.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, TextIO

from pytally._constants import MIN_COUNT
from pytally.config import TallyConfig
from pytally.state.actions import Action
from pytally.state.reducer import TallyState
from pytally.state.store import Store, create_store

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Scenario:
    title: str
    actions: tuple[Action, ...]
    expect: Callable[[TallyConfig], int]


@dataclass(frozen=True, slots=True)
class ScenarioResult:
    title: str
    expected: int
    actual: int

    @property
    def passed(self) -> bool:
        return self.expected == self.actual

    def as_dict(self) -> dict[str, Any]:
        return {
            "scenario": self.title,
            "expected": self.expected,
            "actual": self.actual,
            "passed": self.passed,
        }


def _two_steps_up(cfg: TallyConfig) -> int:
    return min(MIN_COUNT + 2 * cfg.step, cfg.max_count)


DEFAULT_SCENARIOS: tuple[Scenario, ...] = (
    Scenario("Initial state", (), lambda cfg: MIN_COUNT),
    Scenario("Increment the counter twice", (Action.add(), Action.add()), _two_steps_up),
    Scenario(
        "Decrement the counter",
        (Action.subtract(),),
        lambda cfg: max(_two_steps_up(cfg) - cfg.step, MIN_COUNT),
    ),
    Scenario("Resetting the Tally Counter", (Action.reset(),), lambda cfg: MIN_COUNT),
)


def _state_text(state: TallyState) -> str:
    return repr(state.model_dump())


def run_scenarios(
    store: Store[TallyState] | None = None,
    *,
    config: TallyConfig | None = None,
    scenarios: Sequence[Scenario] = DEFAULT_SCENARIOS,
    out: TextIO | None = None,
    as_json: bool = False,
    echo_state: bool = True,
) -> list[ScenarioResult]:
    """Run *scenarios* in order against one store and print the transitions.

    Scenarios are cumulative: each starts from the state the previous one
    left behind. With *echo_state* (text output only) a subscriber prints
    the state after every dispatch; it is removed before returning.
    """
    cfg = config or TallyConfig()
    if store is None:
        store = create_store(config=cfg)

    def _echo() -> None:
        print(f"Current state: {_state_text(store.get_state())}", file=out)

    unsubscribe = store.subscribe(_echo) if echo_state and not as_json else None

    results: list[ScenarioResult] = []
    try:
        for scenario in scenarios:
            if not as_json:
                print(f"SCENARIO: {scenario.title}", file=out)
            for action in scenario.actions:
                store.dispatch(action)
            state = store.get_state()
            result = ScenarioResult(scenario.title, scenario.expect(cfg), state.count)
            results.append(result)
            if as_json:
                print(json.dumps(result.as_dict()), file=out)
            else:
                print(f"State should be {result.expected}: {_state_text(state)}", file=out)
            if not result.passed:
                _logger.warning(
                    "Scenario %r expected count=%d, got %d", scenario.title, result.expected, result.actual
                )
    finally:
        if unsubscribe is not None:
            unsubscribe()

    return results
