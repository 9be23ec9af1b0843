"""Validation for ChartConfig definitions against row metadata.

Chart configs arrive from a client on every push, so validation is strict and
fails fast: any error rejects the push before classification runs.
"""

from __future__ import annotations

from dataclasses import dataclass

from plotting.palettes import SCHEMES
from plotting.schema import ChartConfig, ChartType, FieldType, Metadata
from plotting.units import TimeStep, parse_time_step


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Result of validating a chart config."""

    is_valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


def validate_chart_config(config: ChartConfig, *, metadata: Metadata) -> ValidationResult:
    """Validate a ChartConfig against the metadata of its rows.

    Args:
        config: ChartConfig to validate.
        metadata: Metadata describing incoming rows.

    Returns:
        ValidationResult containing errors and warnings.
    """

    errors: list[str] = []
    warnings: list[str] = []
    fields = dict(zip(metadata.names, metadata.types, strict=True))

    x_type = fields.get(config.x)
    if x_type is None:
        errors.append(f"ChartConfig.x references unknown field {config.x!r}.")

    if not config.charts:
        errors.append("ChartConfig.charts must contain at least one entry.")

    if config.max_length is not None and config.max_length <= 0:
        errors.append(f"ChartConfig.maxLength must be positive, got {config.max_length}.")

    if config.linear_series_step is not None and config.linear_series_step <= 0:
        errors.append(f"ChartConfig.linearSeriesStep must be positive, got {config.linear_series_step}.")

    if config.time_step is not None:
        if parse_time_step(config.time_step) is None:
            allowed = ", ".join(step.value for step in TimeStep)
            warnings.append(
                f"ChartConfig.timeStep {config.time_step!r} is not supported ({allowed}); bars use the default width."
            )
        elif x_type is not None and x_type != FieldType.time:
            warnings.append("ChartConfig.timeStep is ignored because x is not a time field.")

    if config.tip_time_format and x_type is not None and x_type != FieldType.time:
        warnings.append("ChartConfig.tipTimeFormat is ignored because x is not a time field.")

    for idx, spec in enumerate(config.charts):
        label = f"ChartConfig.charts[{idx}]"
        if spec.chart_type is None:
            allowed = ", ".join(t.value for t in ChartType)
            warnings.append(f"{label}.type {spec.type!r} is not supported ({allowed}); the chart will be skipped.")

        y_type = fields.get(spec.y)
        if y_type is None:
            errors.append(f"{label}.y references unknown field {spec.y!r}.")
        elif y_type != FieldType.linear:
            errors.append(f"{label}.y must reference a linear field; {spec.y!r} is {y_type.value}.")

        if spec.color is not None and spec.color not in fields:
            errors.append(f"{label}.color references unknown field {spec.color!r}.")
        if spec.color is None and spec.color_domain:
            warnings.append(f"{label}.colorDomain is ignored without a color field.")
        if spec.color is not None and spec.fill:
            warnings.append(f"{label}.fill is ignored when a color field is set.")
        if isinstance(spec.color_scale, str) and spec.color_scale.lower() not in SCHEMES:
            warnings.append(
                f"{label}.colorScale {spec.color_scale!r} is not a known scheme; the default scheme is used."
            )

    return ValidationResult(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))
