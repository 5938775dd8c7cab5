"""Tally actions.

Every change to a store is described by an :class:`Action`. Tags the
reducer does not know are coerced to :attr:`ActionType.UNKNOWN` rather
than rejected, so dispatching them is always a no-op.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class ActionType(StrEnum):
    ADD = "ADD"
    SUBTRACT = "SUBTRACT"
    RESET = "RESET"
    INIT = "@@INIT"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def _missing_(cls, value: object) -> ActionType:
        if isinstance(value, str):
            normalized = value.strip().upper()
            for member in cls:
                if member.value == normalized:
                    return member
        return cls.UNKNOWN


class Action(BaseModel):
    """A tagged instruction describing an intended state change."""

    model_config = ConfigDict(frozen=True)

    type: ActionType

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> ActionType:
        if isinstance(value, ActionType):
            return value
        return ActionType(value)

    @classmethod
    def add(cls) -> Action:
        return cls(type=ActionType.ADD)

    @classmethod
    def subtract(cls) -> Action:
        return cls(type=ActionType.SUBTRACT)

    @classmethod
    def reset(cls) -> Action:
        return cls(type=ActionType.RESET)


INIT_ACTION = Action(type=ActionType.INIT)
