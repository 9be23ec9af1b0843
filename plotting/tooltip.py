"""Tooltip and axis tick label formatting."""

from __future__ import annotations

import logging
from numbers import Real

from .dto import Point, XValue
from .schema import ChartConfig, ChartSpec, FieldType
from .timeformat import format_time

logger = logging.getLogger(__name__)


def has_two_decimal_precision(value: float) -> bool:
    """Return True when `value` survives rounding to two decimals unchanged."""

    return float(f"{value:.2f}") == value


def format_number(value: float) -> str:
    """Render a number for display.

    Values that already fit in two decimals are shown in their shortest plain
    form (``3``, ``2.5``); anything finer is rounded to exactly two decimals.
    """

    number = float(value)
    if not has_two_decimal_precision(number):
        return f"{number:.2f}"
    if number.is_integer():
        return str(int(number))
    return repr(number)


def format_x(value: XValue, *, x_type: FieldType, time_pattern: str | None) -> str:
    if isinstance(value, str) or not isinstance(value, Real):
        return str(value)
    if x_type == FieldType.time and time_pattern:
        try:
            return format_time(float(value), time_pattern)
        except (OverflowError, ValueError):
            logger.debug("Time value %r is outside the datetime range; shown as a number.", value)
    return format_number(float(value))


def format_tooltip(point: Point, spec: ChartSpec, *, config: ChartConfig, x_type: FieldType) -> str:
    """Return the two-line tooltip for a point.

    Args:
        point: The point under the cursor.
        spec: Chart spec the point belongs to (for the y field name).
        config: Chart configuration (x field name, `tipTimeFormat`).
        x_type: Scale type of the x field.

    Returns:
        ``"{x field} : {x}\\n{y field} : {y}"``.
    """

    x_text = format_x(point.x, x_type=x_type, time_pattern=config.tip_time_format)
    return f"{config.x} : {x_text}\n{spec.y} : {format_number(point.y)}"


def format_tick(value: XValue, *, config: ChartConfig, x_type: FieldType) -> str:
    """Return an x-axis tick label, using `timeFormat` on time axes."""

    return format_x(value, x_type=x_type, time_pattern=config.time_format)
