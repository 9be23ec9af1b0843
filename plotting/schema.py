"""Schema types for declarative chart configuration.

A chart is described by `Metadata` (the shape of incoming rows) and a
`ChartConfig` (which fields to plot and how). Neither carries data; rows are
passed separately on every update.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum

from .errors import ChartConfigurationError, FieldLookupError


class FieldType(StrEnum):
    """Scale type of a metadata field."""

    linear = "linear"
    ordinal = "ordinal"
    time = "time"


class ChartType(StrEnum):
    """Visual mark used to draw a chart spec."""

    bar = "bar"
    line = "line"
    area = "area"

    @classmethod
    def parse(cls, value: object) -> ChartType | None:
        """Return the matching ChartType, or None for an unsupported value."""

        if isinstance(value, ChartType):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


class ChartMode(StrEnum):
    """How the series of a single chart spec share an x position."""

    grouped = "grouped"
    stacked = "stacked"


class Orientation(StrEnum):
    """Which axis the bars grow from."""

    bottom = "bottom"
    left = "left"


@dataclass(frozen=True, slots=True)
class Metadata:
    """Ordered field names and types that rows are aligned to.

    Args:
        names: Field names, positionally aligned to row cells.
        types: Field scale types, parallel to `names`.

    Raises:
        ChartConfigurationError: When `names` and `types` differ in length.
    """

    names: tuple[str, ...]
    types: tuple[FieldType, ...]

    def __post_init__(self) -> None:
        if len(self.names) != len(self.types):
            raise ChartConfigurationError(
                f"Metadata declares {len(self.names)} names but {len(self.types)} types."
            )

    @classmethod
    def from_lists(cls, names: Sequence[str], types: Sequence[str]) -> Metadata:
        """Build Metadata from parallel name/type lists.

        Args:
            names: Field names.
            types: Field type strings ("linear", "ordinal", "time").

        Returns:
            Metadata instance.

        Raises:
            ChartConfigurationError: On a length mismatch or an unknown type.
        """

        if len(names) != len(types):
            raise ChartConfigurationError(
                f"Metadata declares {len(names)} names but {len(types)} types."
            )
        parsed: list[FieldType] = []
        for name, raw_type in zip(names, types, strict=True):
            try:
                parsed.append(FieldType(str(raw_type).strip().lower()))
            except ValueError as exc:
                raise ChartConfigurationError(
                    f"Metadata field {name!r} has unsupported type {raw_type!r}."
                ) from exc
        return cls(names=tuple(str(n) for n in names), types=tuple(parsed))

    def index_of(self, name: str, *, role: str) -> int:
        """Return the position of `name`, raising FieldLookupError when absent."""

        try:
            return self.names.index(name)
        except ValueError as exc:
            raise FieldLookupError(field=name, role=role, available=self.names) from exc

    def type_of(self, name: str, *, role: str = "x") -> FieldType:
        """Return the scale type of `name`, raising FieldLookupError when absent."""

        return self.types[self.index_of(name, role=role)]


@dataclass(frozen=True, slots=True)
class ChartSpec:
    """One chart definition within a ChartConfig.

    Args:
        type: Chart type. Unknown strings are preserved so composition can
            skip it with a warning instead of failing the whole chart.
        y: Field plotted on the value axis.
        color: Optional category field; one series per distinct value.
        color_domain: Categories pinned to positions of the color scale.
        color_scale: Explicit colors, or the name of a categorical scheme.
        fill: Color of the single series when `color` is not set.
        mode: Grouped (side by side) or stacked.
        orientation: "left" turns the whole chart horizontal.
    """

    type: ChartType | str
    y: str
    color: str | None = None
    color_domain: tuple[str, ...] = ()
    color_scale: tuple[str, ...] | str | None = None
    fill: str | None = None
    mode: ChartMode = ChartMode.grouped
    orientation: Orientation = Orientation.bottom

    @property
    def chart_type(self) -> ChartType | None:
        return ChartType.parse(self.type)

    @property
    def is_stacked(self) -> bool:
        return self.mode == ChartMode.stacked


@dataclass(frozen=True, slots=True)
class ChartStyle:
    """Axis styling passed through to the rendering surface untouched."""

    axis_color: str | None = None
    axis_label_color: str | None = None
    x_axis_tick_angle: float | None = None
    y_axis_tick_angle: float | None = None
    tick_label_color: str | None = None


@dataclass(frozen=True, slots=True)
class ChartConfig:
    """Declarative configuration for a composed chart.

    Args:
        x: Field plotted on the category/x axis, shared by every chart spec.
        charts: Chart specs drawn on the shared axes, in order.
        max_length: Per-series point cap when appending.
        legend: Whether a legend is shown.
        append: Extend retained series with each push instead of replacing them.
        time_format: d3-style pattern for time axis ticks.
        tip_time_format: d3-style pattern for time values in tooltips.
        time_step: Interval unit between time-axis bars ("second" .. "year").
        linear_series_step: Interval between x values on a linear axis.
        animate: Whether bars animate on enter.
        style: Axis styling.
    """

    x: str
    charts: tuple[ChartSpec, ...]
    max_length: int | None = None
    legend: bool = False
    append: bool = True
    time_format: str | None = None
    tip_time_format: str | None = None
    time_step: str | None = None
    linear_series_step: float | None = None
    animate: bool = False
    style: ChartStyle = field(default_factory=ChartStyle)

    @property
    def horizontal(self) -> bool:
        """True when any chart spec asks for left orientation."""

        return any(spec.orientation == Orientation.left for spec in self.charts)
