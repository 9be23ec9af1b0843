"""Per-chart-type rendering capabilities.

Bar, line and area charts differ only in how they consume bar geometry and
how their points are positioned. Each type is a small object implementing
`ChartRenderer`; `renderer_for` picks one with an exhaustive branch over
`ChartType`, so adding a type is a change type checkers will flag.
"""

from __future__ import annotations

from typing import Protocol, assert_never

from .dto import BarGeometry, ClassifiedChart, RenderPoint, RenderSeries, Series
from .legend import is_ignored
from .schema import ChartConfig, ChartSpec, ChartType, FieldType
from .tooltip import format_tooltip


class ChartRenderer(Protocol):
    """Capabilities a chart type provides to the composition engine."""

    chart_type: ChartType

    def classify_series(self, chart: ClassifiedChart | None, *, ignored: frozenset[str]) -> list[Series]:
        """Return the series this type draws, IgnoreSet members removed."""

    def layout_geometry(self, geometry: BarGeometry | None) -> tuple[int | None, int | None]:
        """Return the (bar width, group offset) this type draws with."""

    def render_series(
        self,
        series: Series,
        *,
        spec: ChartSpec,
        config: ChartConfig,
        x_type: FieldType,
    ) -> RenderSeries:
        """Position a classified series, labelling every point."""


def _visible_series(chart: ClassifiedChart | None, *, ignored: frozenset[str]) -> list[Series]:
    if chart is None:
        return []
    return [series for series in chart.series.values() if not is_ignored(series.name, ignored)]


def _render_points(series: Series, *, spec: ChartSpec, config: ChartConfig, x_type: FieldType) -> RenderSeries:
    points = tuple(
        RenderPoint(
            x=point.x,
            y=point.y,
            y0=0.0,
            y1=point.y,
            label=format_tooltip(point, spec, config=config, x_type=x_type),
        )
        for point in series.points
    )
    return RenderSeries(name=series.name, color=series.color, points=points)


class BarRenderer:
    chart_type = ChartType.bar

    def classify_series(self, chart: ClassifiedChart | None, *, ignored: frozenset[str]) -> list[Series]:
        return _visible_series(chart, ignored=ignored)

    def layout_geometry(self, geometry: BarGeometry | None) -> tuple[int | None, int | None]:
        if geometry is None:
            return None, None
        return geometry.bar_width, geometry.group_offset

    def render_series(
        self,
        series: Series,
        *,
        spec: ChartSpec,
        config: ChartConfig,
        x_type: FieldType,
    ) -> RenderSeries:
        return _render_points(series, spec=spec, config=config, x_type=x_type)


class LineRenderer:
    """Lines share the axis scale but ignore bar width."""

    chart_type = ChartType.line

    def classify_series(self, chart: ClassifiedChart | None, *, ignored: frozenset[str]) -> list[Series]:
        return _visible_series(chart, ignored=ignored)

    def layout_geometry(self, geometry: BarGeometry | None) -> tuple[int | None, int | None]:
        return None, None

    def render_series(
        self,
        series: Series,
        *,
        spec: ChartSpec,
        config: ChartConfig,
        x_type: FieldType,
    ) -> RenderSeries:
        return _render_points(series, spec=spec, config=config, x_type=x_type)


class AreaRenderer:
    """Areas fill down to their baseline; like lines they ignore bar width."""

    chart_type = ChartType.area

    def classify_series(self, chart: ClassifiedChart | None, *, ignored: frozenset[str]) -> list[Series]:
        return _visible_series(chart, ignored=ignored)

    def layout_geometry(self, geometry: BarGeometry | None) -> tuple[int | None, int | None]:
        return None, None

    def render_series(
        self,
        series: Series,
        *,
        spec: ChartSpec,
        config: ChartConfig,
        x_type: FieldType,
    ) -> RenderSeries:
        return _render_points(series, spec=spec, config=config, x_type=x_type)


_BAR = BarRenderer()
_LINE = LineRenderer()
_AREA = AreaRenderer()


def renderer_for(chart_type: ChartType) -> ChartRenderer:
    """Return the renderer for a chart type."""

    if chart_type is ChartType.bar:
        return _BAR
    if chart_type is ChartType.line:
        return _LINE
    if chart_type is ChartType.area:
        return _AREA
    assert_never(chart_type)
