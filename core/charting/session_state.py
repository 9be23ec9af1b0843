"""Per-chart state kept in the Django session.

Each chart id owns exactly one piece of interactive state (the legend
IgnoreSet) plus the retained row buffer used by append mode. The last decoded
metadata/config payloads are stored too, so a legend toggle can re-render
without the client resending them.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from hashlib import sha256
from typing import Any

from django.contrib.sessions.backends.base import SessionBase

from plotting.dto import RetainedSeries

from .codec import decode_retained, encode_retained

SESSION_KEY = "chart_states"


@dataclass(frozen=True, slots=True)
class ChartSessionState:
    """Session-backed state for one chart id.

    Args:
        fingerprint: Content hash of the metadata + config payloads.
        metadata: Raw metadata payload from the last push.
        config: Raw config payload from the last push.
        width: Last requested chart width.
        height: Last requested chart height.
        ignored: Current IgnoreSet.
        retained: Raw buffer returned by the last render.
    """

    fingerprint: str
    metadata: dict[str, Any]
    config: dict[str, Any]
    width: int
    height: int
    ignored: frozenset[str] = frozenset()
    retained: RetainedSeries = field(default_factory=dict)


def payload_fingerprint(*, metadata: object, config: object) -> str:
    """Return a content-based key for a metadata/config pair.

    Notes:
        Retained buffers are only reused across pushes with the same
        fingerprint, since chart indices and series names depend on both.
    """

    dumped = json.dumps({"metadata": metadata, "config": config}, sort_keys=True, default=str)
    return sha256(dumped.encode("utf-8")).hexdigest()


def load_state(session: SessionBase, chart_id: str) -> ChartSessionState | None:
    """Load a chart's state from the session, or None when absent."""

    raw = (session.get(SESSION_KEY) or {}).get(chart_id)
    if not isinstance(raw, dict):
        return None
    return ChartSessionState(
        fingerprint=str(raw.get("fingerprint") or ""),
        metadata=dict(raw.get("metadata") or {}),
        config=dict(raw.get("config") or {}),
        width=int(raw.get("width") or 0),
        height=int(raw.get("height") or 0),
        ignored=frozenset(str(name) for name in raw.get("ignored") or ()),
        retained=decode_retained(raw.get("retained")),
    )


def save_state(session: SessionBase, chart_id: str, state: ChartSessionState) -> None:
    """Store a chart's state in the session."""

    states = dict(session.get(SESSION_KEY) or {})
    states[chart_id] = {
        "fingerprint": state.fingerprint,
        "metadata": state.metadata,
        "config": state.config,
        "width": state.width,
        "height": state.height,
        "ignored": sorted(state.ignored),
        "retained": encode_retained(state.retained),
    }
    session[SESSION_KEY] = states


def clear_state(session: SessionBase, chart_id: str) -> bool:
    """Drop a chart's state. Returns True when something was removed."""

    states = dict(session.get(SESSION_KEY) or {})
    if chart_id not in states:
        return False
    del states[chart_id]
    session[SESSION_KEY] = states
    return True
