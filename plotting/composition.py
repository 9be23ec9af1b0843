"""Arrange classified series into renderable groups.

Each chart spec becomes one `RenderGroup`. Stacked specs accumulate their
series per x value; grouped bar series sit side by side, each shifted by a
slot offset derived from the shared bar geometry. Line and area groups share
the axis but not the bar geometry.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import Final

from .dto import BarGeometry, Classification, RenderGroup, RenderPoint, RenderSeries, XValue
from .renderers import renderer_for
from .schema import ChartConfig, ChartMode, ChartType

logger = logging.getLogger(__name__)

ENTER_ANIMATION: Final[Mapping[str, object]] = {"onEnter": {"duration": 100}}


def compose(
    config: ChartConfig,
    classification: Classification,
    ignored: frozenset[str],
    *,
    geometry: BarGeometry | None,
) -> tuple[tuple[RenderGroup, ...], tuple[str, ...]]:
    """Compose render groups for every chart spec.

    Args:
        config: Chart configuration.
        classification: Classified series.
        ignored: Truncated names hidden by the legend.
        geometry: Shared bar geometry, or None when there are no bar specs.

    Returns:
        Render groups in chart order, and warnings for skipped specs.
    """

    horizontal = config.horizontal
    groups: list[RenderGroup] = []
    warnings: list[str] = []
    for chart_index, spec in enumerate(config.charts):
        chart_type = spec.chart_type
        if chart_type is None:
            message = f"charts[{chart_index}] has unsupported type {spec.type!r}; skipped."
            logger.warning("Skipping chart spec: %s", message)
            warnings.append(message)
            continue

        renderer = renderer_for(chart_type)
        chart = classification.charts.get(chart_index)
        visible = renderer.classify_series(chart, ignored=ignored)
        rendered = [
            renderer.render_series(series, spec=spec, config=config, x_type=classification.x_type)
            for series in visible
        ]
        if spec.is_stacked:
            rendered = stack_series(rendered)

        bar_width, group_offset = renderer.layout_geometry(geometry)
        groups.append(
            RenderGroup(
                chart_index=chart_index,
                chart_type=chart_type,
                mode=ChartMode.stacked if spec.is_stacked else ChartMode.grouped,
                horizontal=horizontal,
                series=tuple(rendered),
                bar_width=bar_width,
                group_offset=group_offset,
                tooltip_orientation="left" if horizontal else "top",
                animate=ENTER_ANIMATION if config.animate else None,
            )
        )

    return assign_slot_offsets(groups), tuple(warnings)


def stack_series(series: Sequence[RenderSeries]) -> list[RenderSeries]:
    """Accumulate series bottom-to-top per x value.

    Positive and negative values stack away from zero independently, so a
    negative value never eats into the positive stack.
    """

    positive: dict[XValue, float] = {}
    negative: dict[XValue, float] = {}
    stacked: list[RenderSeries] = []
    for item in series:
        points: list[RenderPoint] = []
        for point in item.points:
            totals = positive if point.y >= 0 else negative
            base = totals.get(point.x, 0.0)
            top = base + point.y
            totals[point.x] = top
            points.append(replace(point, y0=base, y1=top))
        stacked.append(replace(item, points=tuple(points)))
    return stacked


def assign_slot_offsets(groups: Sequence[RenderGroup]) -> tuple[RenderGroup, ...]:
    """Spread grouped bars around the slot center.

    A whole stack is one member; each grouped bar series is one member. Member
    i of n is shifted by ``(i - (n - 1) / 2) * group_offset``.
    """

    members: list[tuple[int, int | None]] = []
    for group_index, group in enumerate(groups):
        if group.chart_type != ChartType.bar or not group.series:
            continue
        if group.mode == ChartMode.stacked:
            members.append((group_index, None))
        else:
            members.extend((group_index, series_index) for series_index in range(len(group.series)))

    center = (len(members) - 1) / 2
    offsets: dict[tuple[int, int | None], float] = {}
    for position, member in enumerate(members):
        offset = groups[member[0]].group_offset or 0
        offsets[member] = (position - center) * offset

    out: list[RenderGroup] = []
    for group_index, group in enumerate(groups):
        if (group_index, None) in offsets:
            shift = offsets[(group_index, None)]
            series = tuple(replace(s, slot_offset=shift) for s in group.series)
        else:
            series = tuple(
                replace(s, slot_offset=offsets.get((group_index, series_index), 0.0))
                for series_index, s in enumerate(group.series)
            )
        out.append(replace(group, series=series))
    return tuple(out)
