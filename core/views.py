"""JSON views hosting the chart composition engine.

The views are the single writer of per-chart session state: a push replaces
or extends the retained buffer, a legend click replaces the IgnoreSet. All
chart computation happens in the pure `plotting` package.
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from typing import Any

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.http import require_POST

from core.charting.codec import decode_chart_config, decode_metadata, decode_rows, encode_rendered_chart
from core.charting.session_state import (
    ChartSessionState,
    clear_state,
    load_state,
    payload_fingerprint,
    save_state,
)
from core.charting.validator import validate_chart_config
from plotting import classify_retained, render_chart, render_classification, toggle
from plotting.errors import ChartConfigurationError, ChartDataError

logger = logging.getLogger(__name__)


@require_POST
def chart_update(request: HttpRequest, chart_id: str) -> JsonResponse:
    """Push rows for a chart and return the composed chart.

    The body carries `metadata`, `config`, `data` and optional `width` /
    `height`. The retained buffer from the previous push is reused only when
    metadata and config are unchanged.
    """

    try:
        body = _json_body(request)
        metadata = decode_metadata(body.get("metadata"))
        config = decode_chart_config(body.get("config"))
        rows = decode_rows(body.get("data"))
        width = _dimension(body.get("width"), default=settings.CHART_DEFAULT_WIDTH, label="width")
        height = _dimension(body.get("height"), default=settings.CHART_DEFAULT_HEIGHT, label="height")
    except ChartConfigurationError as exc:
        return _error_response([str(exc)])

    if len(rows) > settings.CHART_MAX_ROWS_PER_PUSH:
        return _error_response([f"A single push may carry at most {settings.CHART_MAX_ROWS_PER_PUSH} rows."])

    validation = validate_chart_config(config, metadata=metadata)
    if not validation.is_valid:
        logger.warning("Rejected config for chart %s: %s", chart_id, "; ".join(validation.errors))
        return _error_response(list(validation.errors), warnings=list(validation.warnings))

    if config.append and config.max_length is None:
        config = replace(config, max_length=settings.CHART_DEFAULT_MAX_LENGTH)

    fingerprint = payload_fingerprint(metadata=body["metadata"], config=body["config"])
    previous = load_state(request.session, chart_id)
    ignored: frozenset[str] = frozenset()
    retained = None
    if previous is not None:
        ignored = previous.ignored
        if previous.fingerprint == fingerprint:
            retained = previous.retained

    try:
        rendered = render_chart(
            rows=rows,
            metadata=metadata,
            config=config,
            width=width,
            height=height,
            ignored=ignored,
            retained=retained,
        )
    except (ChartConfigurationError, ChartDataError) as exc:
        return _error_response([str(exc)], warnings=list(validation.warnings))

    save_state(
        request.session,
        chart_id,
        ChartSessionState(
            fingerprint=fingerprint,
            metadata=dict(body["metadata"]),
            config=dict(body["config"]),
            width=width,
            height=height,
            ignored=rendered.ignored,
            retained=rendered.classification.retained,
        ),
    )
    logger.info("Chart %s updated with %d rows.", chart_id, len(rows))
    return JsonResponse({"chart": encode_rendered_chart(rendered), "warnings": list(validation.warnings)})


@require_POST
def legend_toggle(request: HttpRequest, chart_id: str) -> JsonResponse:
    """Toggle a legend entry and return the re-composed chart.

    The chart is rebuilt from the retained buffer; no rows are needed.
    """

    state = load_state(request.session, chart_id)
    if state is None:
        return _error_response([f"Chart {chart_id!r} has no data yet."], status=404)

    try:
        body = _json_body(request)
    except ChartConfigurationError as exc:
        return _error_response([str(exc)])
    name = body.get("name")
    if not isinstance(name, str):
        return _error_response(["name must be a string."])

    metadata = decode_metadata(state.metadata)
    config = decode_chart_config(state.config)
    classification = classify_retained(state.retained, metadata, config)
    rendered = render_classification(
        classification,
        config=config,
        width=state.width,
        height=state.height,
        ignored=toggle(name, state.ignored),
    )
    save_state(request.session, chart_id, replace(state, ignored=rendered.ignored))
    return JsonResponse({"chart": encode_rendered_chart(rendered), "warnings": []})


@require_POST
def chart_reset(request: HttpRequest, chart_id: str) -> HttpResponse:
    """Forget a chart's IgnoreSet and retained rows."""

    if clear_state(request.session, chart_id):
        logger.info("Chart %s state cleared.", chart_id)
    return HttpResponse(status=204)


def _json_body(request: HttpRequest) -> dict[str, Any]:
    try:
        body = json.loads(request.body or b"{}")
    except json.JSONDecodeError as exc:
        raise ChartConfigurationError(f"Request body is not valid JSON: {exc.msg}.") from exc
    if not isinstance(body, dict):
        raise ChartConfigurationError("Request body must be a JSON object.")
    return body


def _dimension(value: object, *, default: int, label: str) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ChartConfigurationError(f"{label} must be a positive number.")
    return int(value)


def _error_response(errors: list[str], *, warnings: list[str] | None = None, status: int = 400) -> JsonResponse:
    return JsonResponse({"errors": errors, "warnings": warnings or []}, status=status)
