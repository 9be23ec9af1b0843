"""DTO types produced by the plotting engine.

DTOs are plain, immutable data containers. Every update produces fresh DTOs;
nothing here is mutated after construction.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from .schema import ChartMode, ChartStyle, ChartType, FieldType

XValue = float | str

RetainedSeries = Mapping[int, Mapping[str, tuple["Point", ...]]]
"""Raw points per chart index per series name, kept between appends."""


@dataclass(frozen=True, slots=True)
class Point:
    """A single (x, y) observation."""

    x: XValue
    y: float


@dataclass(frozen=True, slots=True)
class Series:
    """A named, colored sequence of points.

    Attributes:
        name: Category value (or y field name for single-series specs).
        color: Assigned series color.
        points: Points in classification order.
    """

    name: str
    color: str
    points: tuple[Point, ...]


@dataclass(frozen=True, slots=True)
class ClassifiedChart:
    """Series classified for one chart spec.

    Attributes:
        chart_index: Position of the chart spec in `ChartConfig.charts`.
        series: Series keyed by name, in first-seen order.
        data_set_length: Longest series length (at least 1).
    """

    chart_index: int
    series: Mapping[str, Series]
    data_set_length: int


@dataclass(frozen=True, slots=True)
class Classification:
    """Result of classifying rows for every chart spec in a config.

    Attributes:
        charts: ClassifiedChart per chart index.
        x_type: Scale type of the shared x field.
        retained: Raw points to extend on the next append.
    """

    charts: Mapping[int, ClassifiedChart]
    x_type: FieldType
    retained: RetainedSeries = field(default_factory=dict)

    def iter_series(self) -> Iterator[Series]:
        for chart_index in sorted(self.charts):
            yield from self.charts[chart_index].series.values()

    @property
    def max_points(self) -> int:
        return max((chart.data_set_length for chart in self.charts.values()), default=1)

    @property
    def axis_range(self) -> float | None:
        """Numeric span of x across all series, or None for ordinal/empty data."""

        if self.x_type == FieldType.ordinal:
            return None
        xs = [float(p.x) for series in self.iter_series() for p in series.points]
        if not xs:
            return None
        return max(xs) - min(xs)


@dataclass(frozen=True, slots=True)
class LegendEntry:
    """A legend row.

    Attributes:
        name: Truncated/padded label, also the IgnoreSet key.
        full_name: Untruncated series name.
        color: Series color.
        symbol_fill: Series color, or the grey sentinel when ignored.
        chart_index: Chart spec that produced the series.
    """

    name: str
    full_name: str
    color: str
    symbol_fill: str
    chart_index: int


@dataclass(frozen=True, slots=True)
class BarGeometry:
    """Pixel geometry shared by every bar group of a composition."""

    bar_width: int
    group_offset: int
    full_bar_width: float
    data_set_length: int
    extent: int


@dataclass(frozen=True, slots=True)
class RenderPoint:
    """A positioned point; `y0`/`y1` bound the drawn mark."""

    x: XValue
    y: float
    y0: float
    y1: float
    label: str


@dataclass(frozen=True, slots=True)
class RenderSeries:
    name: str
    color: str
    points: tuple[RenderPoint, ...]
    slot_offset: float = 0.0


@dataclass(frozen=True, slots=True)
class RenderGroup:
    """Renderable series for one chart spec.

    Attributes:
        chart_index: Source chart spec index.
        chart_type: Mark type.
        mode: Grouped or stacked.
        horizontal: Whether bars grow from the left axis.
        series: Visible series, IgnoreSet members removed.
        bar_width: Bar width in pixels; None for line/area groups.
        group_offset: Distance between grouped bars; None for line/area groups.
        tooltip_orientation: "left" for horizontal charts, else "top".
        animate: Enter animation settings, or None.
    """

    chart_index: int
    chart_type: ChartType
    mode: ChartMode
    horizontal: bool
    series: tuple[RenderSeries, ...]
    bar_width: int | None = None
    group_offset: int | None = None
    tooltip_orientation: str = "top"
    animate: Mapping[str, object] | None = None


@dataclass(frozen=True, slots=True)
class RenderedChart:
    """A fully composed chart ready for a rendering surface."""

    groups: tuple[RenderGroup, ...]
    legend: tuple[LegendEntry, ...]
    ignored: frozenset[str]
    geometry: BarGeometry | None
    legend_offset: int
    horizontal: bool
    x_type: FieldType
    style: ChartStyle
    classification: Classification
    warnings: tuple[str, ...] = ()
