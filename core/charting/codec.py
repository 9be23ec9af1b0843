"""JSON payload encoding/decoding for the chart API.

Request bodies use the camelCase keys of the rendering surface
(`maxLength`, `colorDomain`, ...). Decoding is strict about structure and
types; semantic checks (known fields, supported steps) belong to the validator.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from plotting.dto import LegendEntry, Point, RenderedChart, RenderGroup, RetainedSeries
from plotting.errors import ChartConfigurationError
from plotting.schema import ChartConfig, ChartMode, ChartSpec, ChartStyle, Metadata, Orientation


def decode_metadata(payload: object) -> Metadata:
    """Decode `{names: [...], types: [...]}` into Metadata.

    Args:
        payload: Decoded JSON object.

    Returns:
        Metadata instance.

    Raises:
        ChartConfigurationError: When the shape is wrong, the lists differ in
            length, or a type is unsupported.
    """

    raw = _require_mapping(payload, "metadata")
    names = raw.get("names")
    types = raw.get("types")
    if not isinstance(names, list) or not isinstance(types, list):
        raise ChartConfigurationError("metadata.names and metadata.types must be lists.")
    return Metadata.from_lists([str(n) for n in names], [str(t) for t in types])


def decode_chart_config(payload: object) -> ChartConfig:
    """Decode a ChartConfig payload.

    Args:
        payload: Decoded JSON object.

    Returns:
        ChartConfig instance. Unknown chart `type` strings are kept as-is.

    Raises:
        ChartConfigurationError: When required keys are missing or mistyped.
    """

    raw = _require_mapping(payload, "config")
    x = raw.get("x")
    if not isinstance(x, str) or not x:
        raise ChartConfigurationError("config.x must be a non-empty string.")
    charts_raw = raw.get("charts")
    if not isinstance(charts_raw, list) or not charts_raw:
        raise ChartConfigurationError("config.charts must be a non-empty list.")

    charts = tuple(_decode_chart_spec(item, index) for index, item in enumerate(charts_raw))
    style_raw = _require_mapping(raw.get("style") or {}, "config.style")
    return ChartConfig(
        x=x,
        charts=charts,
        max_length=_parse_int(raw.get("maxLength"), "config.maxLength"),
        legend=_parse_bool(raw.get("legend")),
        append=_parse_bool(raw.get("append"), default=True),
        time_format=_optional_str(raw.get("timeFormat")),
        tip_time_format=_optional_str(raw.get("tipTimeFormat")),
        time_step=_optional_str(raw.get("timeStep")),
        linear_series_step=_parse_float(raw.get("linearSeriesStep"), "config.linearSeriesStep"),
        animate=_parse_bool(raw.get("animate")),
        style=ChartStyle(
            axis_color=_optional_str(style_raw.get("axisColor")),
            axis_label_color=_optional_str(style_raw.get("axisLabelColor")),
            x_axis_tick_angle=_parse_float(style_raw.get("xAxisTickAngle"), "config.style.xAxisTickAngle"),
            y_axis_tick_angle=_parse_float(style_raw.get("yAxisTickAngle"), "config.style.yAxisTickAngle"),
            tick_label_color=_optional_str(style_raw.get("tickLabelColor")),
        ),
    )


def decode_rows(payload: object) -> list[list[object]]:
    """Decode the `data` list of rows."""

    if payload is None:
        return []
    if not isinstance(payload, list) or any(not isinstance(row, list) for row in payload):
        raise ChartConfigurationError("data must be a list of row lists.")
    return cast(list[list[object]], payload)


def encode_rendered_chart(chart: RenderedChart) -> dict[str, Any]:
    """Encode a RenderedChart for the rendering surface.

    Args:
        chart: Rendered chart.

    Returns:
        JSON-serializable dict.
    """

    geometry = None
    if chart.geometry is not None:
        geometry = {
            "barWidth": chart.geometry.bar_width,
            "groupOffset": chart.geometry.group_offset,
            "fullBarWidth": chart.geometry.full_bar_width,
            "dataSetLength": chart.geometry.data_set_length,
        }
    style = chart.style
    return {
        "xType": chart.x_type.value,
        "horizontal": chart.horizontal,
        "legendOffset": chart.legend_offset,
        "geometry": geometry,
        "groups": [_encode_group(group) for group in chart.groups],
        "legend": [_encode_legend_entry(entry) for entry in chart.legend],
        "ignored": sorted(chart.ignored),
        "style": {
            "axisColor": style.axis_color,
            "axisLabelColor": style.axis_label_color,
            "xAxisTickAngle": style.x_axis_tick_angle,
            "yAxisTickAngle": style.y_axis_tick_angle,
            "tickLabelColor": style.tick_label_color,
        },
        "warnings": list(chart.warnings),
    }


def encode_retained(retained: RetainedSeries) -> list[list[Any]]:
    """Encode the retained buffer as ordered lists (session JSON drops int keys)."""

    return [
        [chart_index, [[name, [[p.x, p.y] for p in points]] for name, points in by_name.items()]]
        for chart_index, by_name in sorted(retained.items())
    ]


def decode_retained(payload: object) -> dict[int, dict[str, tuple[Point, ...]]]:
    """Decode a buffer produced by `encode_retained`; a missing or reshaped buffer decodes as empty."""

    if not isinstance(payload, list):
        return {}
    retained: dict[int, dict[str, tuple[Point, ...]]] = {}
    for item in payload:
        if not isinstance(item, list) or len(item) != 2 or not isinstance(item[1], list):
            return {}
        chart_index = int(item[0])
        retained[chart_index] = {
            str(name): tuple(Point(x=x, y=float(y)) for x, y in points) for name, points in item[1]
        }
    return retained


def _encode_group(group: RenderGroup) -> dict[str, Any]:
    return {
        "chartIndex": group.chart_index,
        "type": group.chart_type.value,
        "mode": group.mode.value,
        "horizontal": group.horizontal,
        "barWidth": group.bar_width,
        "groupOffset": group.group_offset,
        "tooltipOrientation": group.tooltip_orientation,
        "animate": dict(group.animate) if group.animate is not None else None,
        "series": [
            {
                "name": series.name,
                "color": series.color,
                "slotOffset": series.slot_offset,
                "points": [
                    {"x": p.x, "y": p.y, "y0": p.y0, "y1": p.y1, "label": p.label} for p in series.points
                ],
            }
            for series in group.series
        ],
    }


def _encode_legend_entry(entry: LegendEntry) -> dict[str, Any]:
    return {
        "name": entry.name,
        "fullName": entry.full_name,
        "color": entry.color,
        "symbol": {"fill": entry.symbol_fill},
        "chartIndex": entry.chart_index,
    }


def _decode_chart_spec(payload: object, index: int) -> ChartSpec:
    raw = _require_mapping(payload, f"config.charts[{index}]")
    y = raw.get("y")
    if not isinstance(y, str) or not y:
        raise ChartConfigurationError(f"config.charts[{index}].y must be a non-empty string.")

    mode_raw = str(raw.get("mode") or ChartMode.grouped.value).strip().lower()
    orientation_raw = str(raw.get("orientation") or Orientation.bottom.value).strip().lower()
    try:
        mode = ChartMode(mode_raw)
        orientation = Orientation(orientation_raw)
    except ValueError as exc:
        raise ChartConfigurationError(
            f"config.charts[{index}] has unsupported mode/orientation: {mode_raw!r}/{orientation_raw!r}."
        ) from exc

    color_scale_raw = raw.get("colorScale")
    color_scale: tuple[str, ...] | str | None
    if isinstance(color_scale_raw, list):
        color_scale = tuple(str(c) for c in color_scale_raw)
    else:
        color_scale = _optional_str(color_scale_raw)

    domain_raw = raw.get("colorDomain") or []
    if not isinstance(domain_raw, list):
        raise ChartConfigurationError(f"config.charts[{index}].colorDomain must be a list.")

    return ChartSpec(
        type=str(raw.get("type") or ""),
        y=y,
        color=_optional_str(raw.get("color")),
        color_domain=tuple("" if d is None else str(d) for d in domain_raw),
        color_scale=color_scale,
        fill=_optional_str(raw.get("fill")),
        mode=mode,
        orientation=orientation,
    )


def _require_mapping(payload: object, label: str) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ChartConfigurationError(f"{label} must be an object.")
    return cast(Mapping[str, Any], payload)


def _optional_str(value: object) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _parse_int(value: object, label: str) -> int | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ChartConfigurationError(f"{label} must be an integer.")
    try:
        return int(str(value))
    except ValueError as exc:
        raise ChartConfigurationError(f"{label} must be an integer.") from exc


def _parse_float(value: object, label: str) -> float | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ChartConfigurationError(f"{label} must be a number.")
    try:
        return float(str(value))
    except ValueError as exc:
        raise ChartConfigurationError(f"{label} must be a number.") from exc


def _parse_bool(value: object, *, default: bool = False) -> bool:
    """Lenient bool parsing for config flags."""

    if isinstance(value, bool):
        return value
    if value is None:
        return default
    normalized = str(value).strip().casefold()
    return normalized in {"1", "true", "yes", "on"}
