"""Categorical color schemes and series color assignment."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from .schema import ChartSpec

CATEGORY10: Final[tuple[str, ...]] = (
    "#1f77b4",
    "#ff7f0e",
    "#2ca02c",
    "#d62728",
    "#9467bd",
    "#8c564b",
    "#e377c2",
    "#7f7f7f",
    "#bcbd22",
    "#17becf",
)

CATEGORY20: Final[tuple[str, ...]] = (
    "#1f77b4",
    "#aec7e8",
    "#ff7f0e",
    "#ffbb78",
    "#2ca02c",
    "#98df8a",
    "#d62728",
    "#ff9896",
    "#9467bd",
    "#c5b0d5",
    "#8c564b",
    "#c49c94",
    "#e377c2",
    "#f7b6d2",
    "#7f7f7f",
    "#c7c7c7",
    "#bcbd22",
    "#dbdb8d",
    "#17becf",
    "#9edae5",
)

SCHEMES: Final[dict[str, tuple[str, ...]]] = {
    "category10": CATEGORY10,
    "category20": CATEGORY20,
}

DEFAULT_SCHEME: Final = "category10"


def resolve_scheme(color_scale: Sequence[str] | str | None) -> tuple[str, ...]:
    """Return the color list for a chart's `colorScale` setting.

    Args:
        color_scale: Explicit colors, a scheme name, or None for the default.

    Returns:
        A non-empty tuple of colors. Unknown scheme names fall back to the
        default scheme.
    """

    if color_scale is None:
        return SCHEMES[DEFAULT_SCHEME]
    if isinstance(color_scale, str):
        return SCHEMES.get(color_scale.strip().lower(), SCHEMES[DEFAULT_SCHEME])
    colors = tuple(str(c) for c in color_scale if c)
    return colors or SCHEMES[DEFAULT_SCHEME]


def assign_series_colors(names: Sequence[str], *, spec: ChartSpec) -> dict[str, str]:
    """Assign a color to each category of a color-keyed chart spec.

    A category listed at position i of `colorDomain` takes scale color i.
    Remaining categories take the next scale positions not pinned by a
    non-empty domain entry, in first-seen order. Positions wrap around the
    scale when it runs out.

    Args:
        names: Category names in first-seen order.
        spec: Chart spec carrying `color_domain` / `color_scale`.

    Returns:
        Mapping of category name to color, in the order of `names`.
    """

    scheme = resolve_scheme(spec.color_scale)
    pinned = {name: idx for idx, name in enumerate(spec.color_domain) if name}
    reserved = set(pinned.values())

    colors: dict[str, str] = {}
    cursor = 0
    for name in names:
        if name in pinned:
            colors[name] = scheme[pinned[name] % len(scheme)]
            continue
        while cursor in reserved:
            cursor += 1
        colors[name] = scheme[cursor % len(scheme)]
        cursor += 1
    return colors


def single_series_color(spec: ChartSpec, *, chart_index: int) -> str:
    """Return the color of a spec without a color field."""

    if spec.fill:
        return spec.fill
    scheme = resolve_scheme(spec.color_scale)
    return scheme[chart_index % len(scheme)]
