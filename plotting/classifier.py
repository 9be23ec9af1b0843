"""Group raw rows into named series for every chart spec.

Classification is a pure recomputation: rows (plus the retained buffer in
append mode) go in, a fresh `Classification` comes out. Ordinal axes are
aligned so that every series shares the same ordered categories, and singleton
series on a time axis are bracketed with zero points so they stay visible.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from numbers import Real
from typing import Final

from .dto import Classification, ClassifiedChart, Point, RetainedSeries, Series, XValue
from .errors import ChartDataError
from .palettes import assign_series_colors, single_series_color
from .schema import ChartConfig, ChartSpec, FieldType, Metadata

logger = logging.getLogger(__name__)

SYNTHETIC_POINT_OFFSET: Final = 10000
"""Distance (axis units) of the zero points added around a singleton time series."""

GroupedPoints = dict[int, dict[str, list[Point]]]


@dataclass(frozen=True, slots=True)
class _ResolvedSpec:
    chart_index: int
    spec: ChartSpec
    y_index: int
    color_index: int | None


def classify(
    rows: Iterable[Sequence[object]],
    metadata: Metadata,
    config: ChartConfig,
    *,
    retained: RetainedSeries | None = None,
) -> Classification:
    """Classify rows into series for every chart spec of `config`.

    Args:
        rows: Rows positionally aligned to `metadata.names`.
        metadata: Field names and types.
        config: Chart configuration.
        retained: Raw points kept from previous pushes. Only used when
            `config.append` is set.

    Returns:
        Classification whose `retained` attribute is the buffer to pass back on
        the next push.

    Raises:
        FieldLookupError: When x/y/color reference an undeclared field.
        ChartDataError: When a row cannot be read against the metadata.
    """

    incoming = group_rows(rows, metadata, config)
    if config.append:
        buffer = merge_retained(retained or {}, incoming, max_length=config.max_length)
    else:
        buffer = {idx: {name: tuple(points) for name, points in by_name.items()} for idx, by_name in incoming.items()}
    return classify_retained(buffer, metadata, config)


def classify_retained(retained: RetainedSeries, metadata: Metadata, config: ChartConfig) -> Classification:
    """Build a Classification from raw retained points alone.

    Used directly when only the IgnoreSet changed and no rows were pushed.

    Args:
        retained: Raw points per chart index per series name.
        metadata: Field names and types.
        config: Chart configuration.

    Returns:
        Classification with ordinal alignment and time padding applied.
    """

    x_type = metadata.type_of(config.x, role="x")
    _resolve_specs(metadata, config)

    points: GroupedPoints = {
        idx: {name: list(series_points) for name, series_points in retained.get(idx, {}).items()}
        for idx in range(len(config.charts))
    }
    if x_type == FieldType.ordinal:
        points = align_ordinal(points)
    elif x_type == FieldType.time:
        points = {
            idx: {name: pad_singleton(series_points) for name, series_points in by_name.items()}
            for idx, by_name in points.items()
        }

    charts: dict[int, ClassifiedChart] = {}
    for idx, spec in enumerate(config.charts):
        by_name = points[idx]
        if spec.color:
            colors = assign_series_colors(list(by_name), spec=spec)
        else:
            fallback = single_series_color(spec, chart_index=idx)
            colors = {name: fallback for name in by_name}
        series = {name: Series(name=name, color=colors[name], points=tuple(pts)) for name, pts in by_name.items()}
        longest = max((len(s.points) for s in series.values()), default=0)
        charts[idx] = ClassifiedChart(chart_index=idx, series=series, data_set_length=max(1, longest))

    frozen_retained = {
        idx: {name: tuple(series_points) for name, series_points in retained.get(idx, {}).items()}
        for idx in range(len(config.charts))
    }
    return Classification(charts=charts, x_type=x_type, retained=frozen_retained)


def group_rows(rows: Iterable[Sequence[object]], metadata: Metadata, config: ChartConfig) -> GroupedPoints:
    """Split rows into raw (unaligned, unpadded) points per chart and series.

    Args:
        rows: Rows positionally aligned to `metadata.names`.
        metadata: Field names and types.
        config: Chart configuration.

    Returns:
        Points per chart index per series name, in row order.
    """

    x_index = metadata.index_of(config.x, role="x")
    x_type = metadata.types[x_index]
    resolved = _resolve_specs(metadata, config)
    width = len(metadata.names)

    grouped: GroupedPoints = {r.chart_index: {} for r in resolved}
    for row_index, row in enumerate(rows):
        if isinstance(row, (str, bytes)) or not isinstance(row, Sequence):
            raise ChartDataError(row_index=row_index, reason=f"expected a sequence of cells, got {type(row).__name__}.")
        if len(row) != width:
            raise ChartDataError(
                row_index=row_index,
                reason=f"expected {width} cells to match metadata, got {len(row)}.",
            )

        x = _read_x(row[x_index], x_type=x_type, row_index=row_index, field=config.x)
        for r in resolved:
            raw_y = row[r.y_index]
            if raw_y is None:
                logger.debug("Row %d has no %r value for chart %d; skipped.", row_index, r.spec.y, r.chart_index)
                continue
            y = _read_number(raw_y, row_index=row_index, field=r.spec.y)
            name = str(row[r.color_index]) if r.color_index is not None else r.spec.y
            grouped[r.chart_index].setdefault(name, []).append(Point(x=x, y=y))
    return grouped


def merge_retained(
    retained: RetainedSeries,
    incoming: Mapping[int, Mapping[str, Sequence[Point]]],
    *,
    max_length: int | None,
) -> dict[int, dict[str, tuple[Point, ...]]]:
    """Append incoming points to retained series, keeping the newest `max_length`.

    Args:
        retained: Points kept from previous pushes.
        incoming: Points grouped from the latest rows.
        max_length: Per-series cap; None or a non-positive value disables it.

    Returns:
        The merged buffer. Series keep their first-seen order; new series are
        added after existing ones.
    """

    merged: dict[int, dict[str, tuple[Point, ...]]] = {}
    for idx in sorted(set(retained) | set(incoming)):
        series = {name: tuple(points) for name, points in retained.get(idx, {}).items()}
        for name, points in incoming.get(idx, {}).items():
            series[name] = series.get(name, ()) + tuple(points)
        if max_length is not None and max_length > 0:
            series = {name: points[-max_length:] for name, points in series.items()}
        merged[idx] = series
    return merged


def align_ordinal(points: GroupedPoints) -> GroupedPoints:
    """Reindex every series to the union of x categories across all charts.

    The union keeps first-seen order (chart order, then series order, then
    point order). Categories a series lacks are filled with `y = 0`.

    Args:
        points: Points per chart index per series name.

    Returns:
        New mapping where all series have identical, index-aligned x values.
    """

    categories: dict[XValue, None] = {}
    for by_name in points.values():
        for series_points in by_name.values():
            for point in series_points:
                categories.setdefault(point.x, None)

    aligned: GroupedPoints = {}
    for idx, by_name in points.items():
        aligned[idx] = {}
        for name, series_points in by_name.items():
            by_x: dict[XValue, Point] = {}
            for point in series_points:
                by_x.setdefault(point.x, point)
            aligned[idx][name] = [by_x.get(x, Point(x=x, y=0.0)) for x in categories]
    return aligned


def pad_singleton(points: list[Point]) -> list[Point]:
    """Bracket a single time-axis point with zero points so it stays visible.

    The synthetic points are appended after the original, `x + offset` first,
    and the result is intentionally left unsorted.
    """

    if len(points) != 1:
        return points
    only = points[0]
    x = float(only.x)
    return [
        only,
        Point(x=x + SYNTHETIC_POINT_OFFSET, y=0.0),
        Point(x=x - SYNTHETIC_POINT_OFFSET, y=0.0),
    ]


def _resolve_specs(metadata: Metadata, config: ChartConfig) -> list[_ResolvedSpec]:
    """Resolve field positions for every chart spec, failing on unknown names."""

    metadata.index_of(config.x, role="x")
    resolved: list[_ResolvedSpec] = []
    for idx, spec in enumerate(config.charts):
        y_index = metadata.index_of(spec.y, role="y")
        color_index = metadata.index_of(spec.color, role="color") if spec.color else None
        resolved.append(_ResolvedSpec(chart_index=idx, spec=spec, y_index=y_index, color_index=color_index))
    return resolved


def _read_x(value: object, *, x_type: FieldType, row_index: int, field: str) -> XValue:
    if value is None:
        raise ChartDataError(row_index=row_index, reason=f"x field {field!r} is missing.")
    if x_type == FieldType.ordinal:
        if isinstance(value, Real) and not isinstance(value, bool):
            return value  # type: ignore[return-value]
        return str(value)
    return _read_number(value, row_index=row_index, field=field)


def _read_number(value: object, *, row_index: int, field: str) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ChartDataError(
            row_index=row_index,
            reason=f"field {field!r} must be numeric, got {value!r}.",
        )
    return float(value)
