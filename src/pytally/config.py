"""Counter configuration for pytally."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pytally._constants import MAX_COUNT, MIN_COUNT, STEP_AMOUNT
from pytally.exceptions import TallyConfigError


def _env_int(env_key: str, value: str, field_name: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        raise TallyConfigError(f"{env_key} must be an integer, got {value!r}", field=field_name) from None


@dataclasses.dataclass(frozen=True)
class TallyConfig:
    """Counter configuration.

    The count always starts at, resets to, and never drops below ``0``.

    Parameters
    ----------
    max_count : int
        Upper bound of the count. Must lie in ``1..15``.
    step : int
        Amount added by ``ADD`` and removed by ``SUBTRACT``.
    """

    max_count: int = MAX_COUNT
    step: int = STEP_AMOUNT

    def __post_init__(self) -> None:
        if not MIN_COUNT < self.max_count <= MAX_COUNT:
            raise TallyConfigError(
                f"max_count must be between {MIN_COUNT + 1} and {MAX_COUNT}, got {self.max_count}",
                field="max_count",
            )
        if self.step <= 0:
            raise TallyConfigError(f"step must be positive, got {self.step}", field="step")

    @classmethod
    def from_env(cls, **overrides: Any) -> TallyConfig:
        """Create configuration from environment variables.

        Reads ``TALLY_MAX_COUNT`` and ``TALLY_STEP``. Explicit keyword
        arguments override environment values.

        Raises
        ------
        TallyConfigError
            If a variable is not an integer or the resulting values are invalid.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "TALLY_MAX_COUNT": "max_count",
            "TALLY_STEP": "step",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_int(env_key, val, field_name)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
