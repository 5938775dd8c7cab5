"""Internal constants shared across the library."""

# ------------------------------------------------------------------
# Tally bounds  (count is always within [MIN_COUNT, MAX_COUNT])
# ------------------------------------------------------------------

MIN_COUNT = 0
MAX_COUNT = 15
STEP_AMOUNT = 5


def clamp(value: int, minimum: int = MIN_COUNT, maximum: int = MAX_COUNT) -> int:
    """Bound *value* to the closed interval ``[minimum, maximum]``."""
    return max(minimum, min(maximum, int(value)))
