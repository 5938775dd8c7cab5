"""Pure tally transition function.

This module intentionally contains *no* state holding or notification.
A reducer maps ``(state, action)`` to the next state and never mutates
its input; the store is responsible for keeping the result.
"""

from __future__ import annotations

from collections.abc import Callable

from pydantic import BaseModel, ConfigDict, Field

from pytally._constants import MAX_COUNT, MIN_COUNT, clamp
from pytally.config import TallyConfig
from pytally.state.actions import Action, ActionType


class TallyState(BaseModel):
    """Current count of the tally, always within ``[0, 15]``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    count: int = Field(default=MIN_COUNT, ge=MIN_COUNT, le=MAX_COUNT)


Reducer = Callable[[TallyState | None, Action], TallyState]


def make_reducer(config: TallyConfig | None = None) -> Reducer:
    """Build a reducer bounded by *config* (defaults to ``[0, 15]``, step 5).

    ``None`` as the state stands for "not initialised yet" and yields a
    tally at ``0``. Unhandled action types return the input state object
    unchanged.
    """
    cfg = config or TallyConfig()

    def reducer(state: TallyState | None, action: Action) -> TallyState:
        if state is None:
            state = TallyState(count=MIN_COUNT)

        if action.type == ActionType.ADD:
            return TallyState(count=clamp(state.count + cfg.step, MIN_COUNT, cfg.max_count))
        if action.type == ActionType.SUBTRACT:
            return TallyState(count=clamp(state.count - cfg.step, MIN_COUNT, cfg.max_count))
        if action.type == ActionType.RESET:
            return TallyState(count=MIN_COUNT)
        return state

    return reducer


tally_reducer: Reducer = make_reducer()
