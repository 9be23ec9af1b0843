"""Legend entries and legend-driven series visibility.

The IgnoreSet is a `frozenset` of truncated legend labels. It is never mutated
in place: `toggle` returns a new set, and the host decides where to keep it.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Final

from .dto import Classification, LegendEntry
from .schema import ChartConfig

LEGEND_LABEL_WIDTH: Final = 16
IGNORED_SYMBOL_FILL: Final = "#d3d3d3"

LEGEND_COLUMN_WIDTH: Final = 160
LEGEND_LEFT_LINE_HEIGHT: Final = 25
LEGEND_BOTTOM_LINE_HEIGHT: Final = 30
LEGEND_VERTICAL_RESERVE: Final = 100
X_AXIS_LABEL_OFFSET: Final = 50


def truncate_label(text: str, width: int = LEGEND_LABEL_WIDTH) -> str:
    """Fit a series name to the legend column.

    Names longer than `width` keep their first 6 and last `width - 7`
    characters around an ellipsis; shorter names are padded with trailing
    spaces. Applying the function to its own output returns it unchanged.
    """

    if len(text) > width:
        return text[:6] + "..." + text[-(width - 7):]
    return text.ljust(width)


def build_entries(
    classification: Classification,
    ignored: frozenset[str],
    *,
    config: ChartConfig,
) -> tuple[LegendEntry, ...]:
    """Build legend entries for every classified series.

    Ignored series are listed with a grey symbol. Specs with an unsupported
    chart type produce no entries since they never render.

    Args:
        classification: Classified series.
        ignored: Truncated names currently hidden.
        config: Chart configuration (for chart types).

    Returns:
        Entries in chart order, then series order.
    """

    entries: list[LegendEntry] = []
    for chart_index in sorted(classification.charts):
        if config.charts[chart_index].chart_type is None:
            continue
        for series in classification.charts[chart_index].series.values():
            name = truncate_label(series.name)
            entries.append(
                LegendEntry(
                    name=name,
                    full_name=series.name,
                    color=series.color,
                    symbol_fill=IGNORED_SYMBOL_FILL if name in ignored else series.color,
                    chart_index=chart_index,
                )
            )
    return tuple(entries)


def is_ignored(name: str, ignored: frozenset[str]) -> bool:
    return truncate_label(name) in ignored


def toggle(name: str, ignored: frozenset[str]) -> frozenset[str]:
    """Flip the visibility of a series.

    Args:
        name: Full or truncated series name.
        ignored: Current IgnoreSet.

    Returns:
        A new IgnoreSet with the truncated name added or removed.
    """

    key = truncate_label(name)
    if key in ignored:
        return ignored - {key}
    return ignored | {key}


def prune_ignored(ignored: frozenset[str], entries: Iterable[LegendEntry]) -> frozenset[str]:
    """Drop IgnoreSet names that no longer belong to any legend entry."""

    present = {entry.name for entry in entries}
    return frozenset(name for name in ignored if name in present)


def legend_offset(entry_count: int, *, width: int, height: int, enabled: bool) -> int:
    """Return the vertical space reserved for a legend moved below the plot.

    The legend sits beside the plot until it holds more entries than fit in
    the chart height; it then wraps into columns under the x axis.
    """

    if not enabled:
        return 0
    columns = max(1, width // LEGEND_COLUMN_WIDTH)
    capacity = (height - LEGEND_VERTICAL_RESERVE) // LEGEND_LEFT_LINE_HEIGHT
    if entry_count <= capacity:
        return 0
    return math.ceil(entry_count / columns) * LEGEND_BOTTOM_LINE_HEIGHT + X_AXIS_LABEL_OFFSET
