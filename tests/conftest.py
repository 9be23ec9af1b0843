"""Pytest fixtures shared across plotting and Django integration tests."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from plotting.schema import ChartConfig, ChartSpec, Metadata


@pytest.fixture
def sales_metadata() -> Metadata:
    """Return metadata for (month, region, sales, returns) rows."""

    return Metadata.from_lists(
        ["month", "region", "sales", "returns"],
        ["ordinal", "ordinal", "linear", "linear"],
    )


@pytest.fixture
def sales_rows() -> list[list[object]]:
    """Return rows covering two regions over three months, with a gap."""

    return [
        ["Jan", "north", 10, 1],
        ["Jan", "south", 5, 2],
        ["Feb", "north", 12, 0],
        ["Mar", "north", 8, 3],
        ["Mar", "south", 7, 1],
    ]


@pytest.fixture
def grouped_bar_config() -> ChartConfig:
    """Return a grouped bar chart keyed by region."""

    return ChartConfig(
        x="month",
        charts=(ChartSpec(type="bar", y="sales", color="region"),),
        legend=True,
    )


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no database access.
    - `integration`: tests touching Django, the session store, or views.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
