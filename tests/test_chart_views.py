"""Integration tests for the chart JSON API views."""

from __future__ import annotations

import json

import pytest
from django.urls import reverse

from core.charting.session_state import SESSION_KEY

pytestmark = [pytest.mark.integration, pytest.mark.django_db]

METADATA = {"names": ["month", "region", "sales"], "types": ["ordinal", "ordinal", "linear"]}
CONFIG = {"x": "month", "charts": [{"type": "bar", "y": "sales", "color": "region"}], "legend": True}


def _post(client, name: str, chart_id: str, payload: dict[str, object] | None = None):
    return client.post(
        reverse(f"core:{name}", args=[chart_id]),
        data=json.dumps(payload or {}),
        content_type="application/json",
    )


def _push(client, rows: list[list[object]], *, chart_id: str = "sales", config: dict[str, object] | None = None):
    return _post(
        client,
        "chart_update",
        chart_id,
        {"metadata": METADATA, "config": config or CONFIG, "data": rows, "width": 800, "height": 450},
    )


def test_chart_update_returns_composed_chart(client) -> None:
    response = _push(client, [["Jan", "north", 10], ["Jan", "south", 5], ["Feb", "north", 12]])

    assert response.status_code == 200
    body = response.json()
    chart = body["chart"]
    assert body["warnings"] == []
    assert chart["xType"] == "ordinal"
    assert [entry["fullName"] for entry in chart["legend"]] == ["north", "south"]
    south = chart["groups"][0]["series"][1]
    assert [p["x"] for p in south["points"]] == ["Jan", "Feb"]
    assert [p["y"] for p in south["points"]] == [5.0, 0.0]
    assert "sales" in client.session[SESSION_KEY]


def test_chart_update_appends_to_retained_rows(client) -> None:
    _push(client, [["Jan", "north", 10]])
    response = _push(client, [["Feb", "north", 12]])

    series = response.json()["chart"]["groups"][0]["series"][0]
    assert [p["x"] for p in series["points"]] == ["Jan", "Feb"]


def test_changed_config_starts_a_fresh_buffer(client) -> None:
    _push(client, [["Jan", "north", 10]])
    response = _push(client, [["Feb", "north", 12]], config={**CONFIG, "animate": True})

    series = response.json()["chart"]["groups"][0]["series"][0]
    assert [p["x"] for p in series["points"]] == ["Feb"]


def test_legend_toggle_hides_and_restores_series(client) -> None:
    _push(client, [["Jan", "north", 10], ["Jan", "south", 5]])

    hidden = _post(client, "legend_toggle", "sales", {"name": "south"})
    assert hidden.status_code == 200
    hidden_chart = hidden.json()["chart"]
    assert [s["name"] for s in hidden_chart["groups"][0]["series"]] == ["north"]
    assert hidden_chart["legend"][1]["symbol"]["fill"] == "#d3d3d3"
    assert hidden_chart["ignored"] == ["south           "]

    # the IgnoreSet survives the next push
    pushed = _push(client, [["Feb", "south", 3]])
    assert [s["name"] for s in pushed.json()["chart"]["groups"][0]["series"]] == ["north"]

    restored = _post(client, "legend_toggle", "sales", {"name": "south"})
    assert [s["name"] for s in restored.json()["chart"]["groups"][0]["series"]] == ["north", "south"]
    assert restored.json()["chart"]["ignored"] == []


def test_legend_toggle_without_data_is_not_found(client) -> None:
    response = _post(client, "legend_toggle", "unknown", {"name": "south"})

    assert response.status_code == 404


def test_legend_toggle_requires_a_name(client) -> None:
    _push(client, [["Jan", "north", 10]])

    response = _post(client, "legend_toggle", "sales", {"name": 3})

    assert response.status_code == 400
    assert response.json()["errors"] == ["name must be a string."]


def test_invalid_config_is_rejected_with_errors(client) -> None:
    config = {"x": "month", "charts": [{"type": "bar", "y": "profit"}]}

    response = _push(client, [["Jan", "north", 10]], config=config)

    assert response.status_code == 400
    assert any("unknown field 'profit'" in error for error in response.json()["errors"])


def test_bad_rows_are_rejected_with_row_index(client) -> None:
    response = _push(client, [["Jan", "north", 10], ["Feb", "north", "lots"]])

    assert response.status_code == 400
    assert response.json()["errors"][0].startswith("Row 1:")


def test_malformed_json_is_rejected(client) -> None:
    response = client.post(
        reverse("core:chart_update", args=["sales"]),
        data="{not json",
        content_type="application/json",
    )

    assert response.status_code == 400


def test_unsupported_chart_type_is_reported_as_warning(client) -> None:
    config = {"x": "month", "charts": [{"type": "pie", "y": "sales"}, {"type": "line", "y": "sales"}]}

    response = _push(client, [["Jan", "north", 10]], config=config)

    assert response.status_code == 200
    body = response.json()
    assert any("'pie' is not supported" in warning for warning in body["warnings"])
    assert body["chart"]["warnings"] == ["charts[0] has unsupported type 'pie'; skipped."]


def test_chart_update_requires_post(client) -> None:
    response = client.get(reverse("core:chart_update", args=["sales"]))

    assert response.status_code == 405


def test_chart_reset_clears_state(client) -> None:
    _push(client, [["Jan", "north", 10]])

    response = _post(client, "chart_reset", "sales")

    assert response.status_code == 204
    assert "sales" not in client.session.get(SESSION_KEY, {})
    assert _post(client, "legend_toggle", "sales", {"name": "north"}).status_code == 404


def test_appending_without_max_length_is_capped_by_setting(client, settings) -> None:
    settings.CHART_DEFAULT_MAX_LENGTH = 5
    config = {"x": "month", "charts": [{"type": "line", "y": "sales"}]}

    for push in range(4):
        _push(client, [[f"m{push}-{i}", "north", i] for i in range(3)], config=config)

    retained = client.session[SESSION_KEY]["sales"]["retained"]
    (chart_index, series) = retained[0]
    (name, points) = series[0]
    assert (chart_index, name) == (0, "sales")
    assert [x for x, _ in points] == ["m2-1", "m2-2", "m3-0", "m3-1", "m3-2"]


def test_explicit_max_length_wins_over_default_cap(client, settings) -> None:
    settings.CHART_DEFAULT_MAX_LENGTH = 2
    config = {"x": "month", "charts": [{"type": "line", "y": "sales"}], "maxLength": 4}

    _push(client, [["Jan", "north", 1], ["Feb", "north", 2], ["Mar", "north", 3]], config=config)
    response = _push(client, [["Apr", "north", 4]], config=config)

    points = response.json()["chart"]["groups"][0]["series"][0]["points"]
    assert [p["x"] for p in points] == ["Jan", "Feb", "Mar", "Apr"]
