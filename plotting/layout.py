"""Bar geometry for grouped, stacked and mixed compositions.

All widths are in pixels. Every bar group of a composition shares one
`BarGeometry`, so bars from different chart specs line up on the same slots.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Final

from .dto import BarGeometry, Classification
from .legend import is_ignored
from .schema import ChartConfig, ChartType, FieldType
from .units import time_step_millis

HORIZONTAL_EXTENT_RESERVE: Final = 120
VERTICAL_EXTENT_RESERVE: Final = 280
WIDE_SLOT_THRESHOLD: Final = 100
WIDE_SLOT_SCALE: Final = 0.8


@dataclass(frozen=True, slots=True)
class AxisStep:
    """How x positions are spaced on the axis.

    Attributes:
        ordinal: Categorical axis; slots are sized by point count only.
        interval: Explicit axis units per slot (time step in ms, or linear step).
        axis_range: Numeric span of the x axis, when known.
        step: Divisor for the fallback continuous formula.
    """

    ordinal: bool
    interval: float | None = None
    axis_range: float | None = None
    step: float = 1.0


def resolve_axis_step(config: ChartConfig, *, x_type: FieldType, axis_range: float | None) -> AxisStep:
    """Derive the AxisStep for a config and its x field type."""

    if x_type == FieldType.ordinal:
        return AxisStep(ordinal=True)

    interval: float | None = None
    if x_type == FieldType.time:
        millis = time_step_millis(config.time_step)
        interval = float(millis) if millis is not None else None
    elif config.linear_series_step and config.linear_series_step > 0:
        interval = float(config.linear_series_step)

    step = float(config.linear_series_step) if config.linear_series_step and config.linear_series_step > 0 else 1.0
    return AxisStep(ordinal=False, interval=interval, axis_range=axis_range, step=step)


def available_extent(*, horizontal: bool, height: int, width: int) -> int:
    """Pixels available for bars after reserving axis and legend chrome."""

    extent = height - HORIZONTAL_EXTENT_RESERVE if horizontal else width - VERTICAL_EXTENT_RESERVE
    return max(1, int(extent))


def compute_geometry(
    *,
    horizontal: bool,
    height: int,
    width: int,
    series_count: int,
    max_points: int,
    step: AxisStep,
) -> BarGeometry:
    """Compute bar width and group offset.

    Args:
        horizontal: Whether bars grow from the left axis.
        height: Chart height in pixels.
        width: Chart width in pixels.
        series_count: Bars overlaid side by side in one slot.
        max_points: Longest series length across the composition.
        step: Axis spacing.

    Returns:
        BarGeometry where `bar_width` is at least 1 and at most the extent.
    """

    extent = available_extent(horizontal=horizontal, height=height, width=width)
    points = max(1, max_points)
    series_count = max(1, series_count)

    if step.ordinal:
        slot = extent / points
    elif step.interval and step.interval > 0 and step.axis_range is not None and step.axis_range >= 0:
        slot = extent / ((step.axis_range / step.interval) + 1)
    else:
        size = step.step if step.step > 0 else 1.0
        slot = extent / ((points + (2 * size)) / size)

    if slot > WIDE_SLOT_THRESHOLD:
        slot *= WIDE_SLOT_SCALE

    bar_width = min(extent, max(1, math.floor(slot / series_count)))
    return BarGeometry(
        bar_width=bar_width,
        group_offset=bar_width,
        full_bar_width=slot,
        data_set_length=points,
        extent=extent,
    )


def effective_point_count(classification: Classification, *, horizontal: bool) -> int:
    """Longest series length, plus one when a vertical chart starts at x == 0.

    The extra slot compensates for axis padding at the origin.
    """

    count = classification.max_points
    if horizontal:
        return count
    for series in classification.iter_series():
        if series.points and _is_zero(series.points[0].x):
            return count + 1
    return count


def overlaid_bar_count(config: ChartConfig, classification: Classification, ignored: frozenset[str]) -> int:
    """Number of bars sharing one slot: one per stack, one per grouped series."""

    count = 0
    for chart_index, spec in enumerate(config.charts):
        if spec.chart_type != ChartType.bar:
            continue
        if spec.is_stacked:
            count += 1
            continue
        chart = classification.charts.get(chart_index)
        if chart is None:
            continue
        count += sum(1 for name in chart.series if not is_ignored(name, ignored))
    return max(1, count)


def _is_zero(value: object) -> bool:
    return not isinstance(value, (str, bool)) and value == 0
