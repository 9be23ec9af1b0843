"""Time-step units used to size bars on a time axis."""

from __future__ import annotations

from enum import StrEnum
from typing import Final


class TimeStep(StrEnum):
    """Supported `timeStep` values."""

    second = "second"
    minute = "minute"
    hour = "hour"
    day = "day"
    month = "month"
    year = "year"


MILLISECONDS_FOR_SECOND: Final = 1000
MILLISECONDS_FOR_MINUTE: Final = 60 * MILLISECONDS_FOR_SECOND
MILLISECONDS_FOR_HOUR: Final = 60 * MILLISECONDS_FOR_MINUTE
MILLISECONDS_FOR_DAY: Final = 24 * MILLISECONDS_FOR_HOUR
# Gregorian averages (365.2425 days per year).
MILLISECONDS_FOR_MONTH: Final = 2_629_746_000
MILLISECONDS_FOR_YEAR: Final = 31_556_952_000

_STEP_MILLISECONDS: Final[dict[TimeStep, int]] = {
    TimeStep.second: MILLISECONDS_FOR_SECOND,
    TimeStep.minute: MILLISECONDS_FOR_MINUTE,
    TimeStep.hour: MILLISECONDS_FOR_HOUR,
    TimeStep.day: MILLISECONDS_FOR_DAY,
    TimeStep.month: MILLISECONDS_FOR_MONTH,
    TimeStep.year: MILLISECONDS_FOR_YEAR,
}


def parse_time_step(value: str | None) -> TimeStep | None:
    """Parse a case-insensitive time-step name.

    Args:
        value: Raw `timeStep` config value.

    Returns:
        The TimeStep, or None when the value is missing or unsupported.
    """

    if not value:
        return None
    try:
        return TimeStep(value.strip().lower())
    except ValueError:
        return None


def time_step_millis(value: str | None) -> int | None:
    """Return the millisecond length of a `timeStep` value, or None."""

    step = parse_time_step(value)
    if step is None:
        return None
    return _STEP_MILLISECONDS[step]
