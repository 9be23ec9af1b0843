"""Tests for ChartConfig validation against row metadata."""

from __future__ import annotations

import pytest

from core.charting.validator import validate_chart_config
from plotting.schema import ChartConfig, ChartSpec, Metadata

pytestmark = pytest.mark.unit

METADATA = Metadata.from_lists(["day", "host", "load", "label"], ["time", "ordinal", "linear", "ordinal"])


def test_valid_config_passes_without_warnings() -> None:
    config = ChartConfig(
        x="day",
        charts=(ChartSpec(type="bar", y="load", color="host", color_scale="category20"),),
        time_step="hour",
        max_length=100,
    )

    result = validate_chart_config(config, metadata=METADATA)

    assert result.is_valid is True
    assert result.errors == ()
    assert result.warnings == ()


def test_unknown_fields_are_errors() -> None:
    config = ChartConfig(x="when", charts=(ChartSpec(type="bar", y="cpu", color="zone"),))

    result = validate_chart_config(config, metadata=METADATA)

    assert result.is_valid is False
    assert any("x references unknown field 'when'" in error for error in result.errors)
    assert any("y references unknown field 'cpu'" in error for error in result.errors)
    assert any("color references unknown field 'zone'" in error for error in result.errors)


def test_y_must_be_linear() -> None:
    config = ChartConfig(x="day", charts=(ChartSpec(type="line", y="label"),))

    result = validate_chart_config(config, metadata=METADATA)

    assert result.is_valid is False
    assert any("must reference a linear field" in error for error in result.errors)


@pytest.mark.parametrize(
    ("overrides", "fragment"),
    [
        ({"max_length": 0}, "maxLength must be positive"),
        ({"linear_series_step": -1.0}, "linearSeriesStep must be positive"),
        ({"charts": ()}, "at least one entry"),
    ],
)
def test_numeric_limits_and_empty_charts_are_errors(overrides: dict[str, object], fragment: str) -> None:
    base: dict[str, object] = {"x": "day", "charts": (ChartSpec(type="bar", y="load"),)}
    base.update(overrides)

    result = validate_chart_config(ChartConfig(**base), metadata=METADATA)  # type: ignore[arg-type]

    assert result.is_valid is False
    assert any(fragment in error for error in result.errors)


def test_soft_problems_are_warnings() -> None:
    config = ChartConfig(
        x="day",
        charts=(
            ChartSpec(type="pie", y="load"),
            ChartSpec(type="bar", y="load", color_domain=("a",)),
            ChartSpec(type="bar", y="load", color="host", fill="#000", color_scale="rainbow"),
        ),
        time_step="fortnight",
    )

    result = validate_chart_config(config, metadata=METADATA)

    assert result.is_valid is True
    joined = "\n".join(result.warnings)
    assert "timeStep 'fortnight' is not supported" in joined
    assert "charts[0].type 'pie' is not supported" in joined
    assert "charts[1].colorDomain is ignored" in joined
    assert "charts[2].fill is ignored" in joined
    assert "charts[2].colorScale 'rainbow' is not a known scheme" in joined


def test_time_options_on_non_time_axis_warn() -> None:
    config = ChartConfig(
        x="host",
        charts=(ChartSpec(type="bar", y="load"),),
        time_step="day",
        tip_time_format="%Y",
    )

    result = validate_chart_config(config, metadata=METADATA)

    assert result.is_valid is True
    assert any("timeStep is ignored" in warning for warning in result.warnings)
    assert any("tipTimeFormat is ignored" in warning for warning in result.warnings)
