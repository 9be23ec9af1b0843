"""Pure chart composition engine.

This package turns rows, metadata and a declarative ChartConfig into
positioned render groups. It must not import Django or keep state between
calls; the host owns the IgnoreSet and the retained row buffer.
"""

from .classifier import classify, classify_retained
from .legend import toggle, truncate_label
from .pipeline import render_chart, render_classification

__all__ = [
    "classify",
    "classify_retained",
    "render_chart",
    "render_classification",
    "toggle",
    "truncate_label",
]
