"""End-to-end chart rendering.

`render_chart` runs classification, legend, layout and composition in order.
The only inputs that survive between calls are the IgnoreSet and the retained
buffer, both passed in explicitly and returned on the `RenderedChart`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from .classifier import classify
from .composition import compose
from .dto import BarGeometry, Classification, RenderedChart, RetainedSeries
from .layout import compute_geometry, effective_point_count, overlaid_bar_count, resolve_axis_step
from .legend import build_entries, legend_offset, prune_ignored
from .schema import ChartConfig, ChartType, Metadata

logger = logging.getLogger(__name__)


def render_chart(
    *,
    rows: Iterable[Sequence[object]],
    metadata: Metadata,
    config: ChartConfig,
    width: int,
    height: int,
    ignored: frozenset[str] = frozenset(),
    retained: RetainedSeries | None = None,
) -> RenderedChart:
    """Classify rows and compose a chart.

    Args:
        rows: Newly pushed rows.
        metadata: Field names and types.
        config: Chart configuration.
        width: Chart width in pixels.
        height: Chart height in pixels.
        ignored: Current IgnoreSet.
        retained: Buffer returned by the previous render, for append mode.

    Returns:
        RenderedChart with groups, legend, pruned IgnoreSet and the new buffer.
    """

    classification = classify(rows, metadata, config, retained=retained)
    return render_classification(classification, config=config, width=width, height=height, ignored=ignored)


def render_classification(
    classification: Classification,
    *,
    config: ChartConfig,
    width: int,
    height: int,
    ignored: frozenset[str] = frozenset(),
) -> RenderedChart:
    """Compose an already classified chart (e.g. after a legend toggle)."""

    entries = build_entries(classification, ignored, config=config)
    ignored = prune_ignored(ignored, entries)
    horizontal = config.horizontal

    geometry: BarGeometry | None = None
    if any(spec.chart_type == ChartType.bar for spec in config.charts):
        step = resolve_axis_step(config, x_type=classification.x_type, axis_range=classification.axis_range)
        geometry = compute_geometry(
            horizontal=horizontal,
            height=height,
            width=width,
            series_count=overlaid_bar_count(config, classification, ignored),
            max_points=effective_point_count(classification, horizontal=horizontal),
            step=step,
        )

    groups, warnings = compose(config, classification, ignored, geometry=geometry)
    logger.debug(
        "Rendered %d groups, %d legend entries (%d ignored), bar width %s.",
        len(groups),
        len(entries),
        len(ignored),
        geometry.bar_width if geometry is not None else None,
    )
    return RenderedChart(
        groups=groups,
        legend=entries,
        ignored=ignored,
        geometry=geometry,
        legend_offset=legend_offset(len(entries), width=width, height=height, enabled=config.legend),
        horizontal=horizontal,
        x_type=classification.x_type,
        style=config.style,
        classification=classification,
        warnings=warnings,
    )
