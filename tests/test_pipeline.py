"""End-to-end tests for render_chart and legend-driven re-rendering."""

from __future__ import annotations

import pytest

from plotting import classify_retained, render_chart, render_classification, toggle, truncate_label
from plotting.legend import IGNORED_SYMBOL_FILL
from plotting.schema import ChartConfig, ChartSpec, Metadata, Orientation

pytestmark = pytest.mark.unit


def test_render_chart_grouped_bars(sales_rows, sales_metadata, grouped_bar_config) -> None:
    """Two regions over three months on an 800x450 chart."""

    rendered = render_chart(
        rows=sales_rows,
        metadata=sales_metadata,
        config=grouped_bar_config,
        width=800,
        height=450,
    )

    assert rendered.geometry is not None
    # 520px over 3 categories: 173px slots scaled to 138.67, split between 2 bars
    assert rendered.geometry.bar_width == 69
    assert [entry.full_name for entry in rendered.legend] == ["north", "south"]
    assert rendered.legend_offset == 0
    assert rendered.ignored == frozenset()
    assert rendered.warnings == ()


def test_toggling_a_series_twice_restores_the_chart(sales_rows, sales_metadata, grouped_bar_config) -> None:
    base = render_chart(rows=sales_rows, metadata=sales_metadata, config=grouped_bar_config, width=800, height=450)
    classification = base.classification

    hidden = render_classification(
        classification,
        config=grouped_bar_config,
        width=800,
        height=450,
        ignored=toggle("south", base.ignored),
    )
    shown = render_classification(
        classification,
        config=grouped_bar_config,
        width=800,
        height=450,
        ignored=toggle("south", hidden.ignored),
    )

    assert [s.name for s in hidden.groups[0].series] == ["north"]
    assert hidden.legend[1].symbol_fill == IGNORED_SYMBOL_FILL
    assert hidden.geometry is not None and hidden.geometry.bar_width == 138
    assert shown.groups == base.groups
    assert shown.legend == base.legend
    assert shown.ignored == frozenset()


def test_horizontal_chart_sizes_bars_from_height(sales_rows, sales_metadata) -> None:
    config = ChartConfig(x="month", charts=(ChartSpec(type="bar", y="sales", orientation=Orientation.left),))

    rendered = render_chart(rows=sales_rows, metadata=sales_metadata, config=config, width=800, height=450)

    assert rendered.horizontal is True
    assert rendered.geometry is not None
    assert rendered.geometry.extent == 330
    assert rendered.geometry.bar_width == 88


def test_ignored_names_for_vanished_series_are_pruned(sales_metadata, grouped_bar_config) -> None:
    config = ChartConfig(x="month", charts=grouped_bar_config.charts, append=False)
    first = render_chart(
        rows=[["Jan", "north", 1, 0], ["Jan", "south", 2, 0]],
        metadata=sales_metadata,
        config=config,
        width=800,
        height=450,
        ignored=toggle("south", frozenset()),
    )
    second = render_chart(
        rows=[["Feb", "north", 3, 0]],
        metadata=sales_metadata,
        config=config,
        width=800,
        height=450,
        ignored=first.ignored,
        retained=first.classification.retained,
    )

    assert first.ignored == frozenset({truncate_label("south")})
    assert second.ignored == frozenset()


def test_line_only_chart_has_no_bar_geometry(sales_rows, sales_metadata) -> None:
    config = ChartConfig(x="month", charts=(ChartSpec(type="line", y="sales", color="region"),))

    rendered = render_chart(rows=sales_rows, metadata=sales_metadata, config=config, width=800, height=450)

    assert rendered.geometry is None
    assert rendered.groups[0].bar_width is None


def test_time_axis_append_keeps_window_and_pads_singletons() -> None:
    metadata = Metadata.from_lists(["t", "v", "host"], ["time", "linear", "ordinal"])
    config = ChartConfig(
        x="t",
        charts=(ChartSpec(type="bar", y="v", color="host"),),
        time_step="second",
        max_length=2,
    )

    first = render_chart(
        rows=[[1000, 1, "a"], [2000, 2, "a"], [2000, 7, "b"]],
        metadata=metadata,
        config=config,
        width=800,
        height=450,
    )
    second = render_chart(
        rows=[[3000, 3, "a"]],
        metadata=metadata,
        config=config,
        width=800,
        height=450,
        retained=first.classification.retained,
    )

    series = second.classification.charts[0].series
    assert [p.x for p in series["a"].points] == [2000.0, 3000.0]
    assert [p.x for p in series["b"].points] == [2000.0, 12000.0, -8000.0]


def test_reclassifying_retained_buffer_matches_render(sales_rows, sales_metadata, grouped_bar_config) -> None:
    rendered = render_chart(rows=sales_rows, metadata=sales_metadata, config=grouped_bar_config, width=800, height=450)

    again = render_classification(
        classify_retained(rendered.classification.retained, sales_metadata, grouped_bar_config),
        config=grouped_bar_config,
        width=800,
        height=450,
    )

    assert again.groups == rendered.groups


def test_many_series_push_legend_below_plot(sales_metadata) -> None:
    config = ChartConfig(x="month", charts=(ChartSpec(type="bar", y="sales", color="region"),), legend=True)
    rows = [["Jan", f"region-{i}", i, 0] for i in range(20)]

    rendered = render_chart(rows=rows, metadata=sales_metadata, config=config, width=800, height=450)

    assert len(rendered.legend) == 20
    assert rendered.legend_offset == 4 * 30 + 50
