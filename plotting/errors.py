"""Exceptions raised by the plotting engine.

Configuration problems (metadata shape, unknown field references) fail fast
before any classification happens. Data problems carry the offending row index
so the host can report them back to whoever pushed the rows.
"""

from __future__ import annotations


class ChartConfigurationError(ValueError):
    """Raised when metadata or a chart configuration cannot be used."""


class FieldLookupError(ChartConfigurationError):
    """Raised when a chart references a field that metadata does not declare."""

    def __init__(self, *, field: str, role: str, available: tuple[str, ...] = ()) -> None:
        """Initialize the error.

        Args:
            field: The missing field name.
            role: Which chart attribute referenced the field ("x", "y", "color").
            available: Field names declared by metadata, for the message.
        """

        super().__init__(
            f"Unknown {role} field {field!r}; metadata declares {list(available)}."
        )
        self.field = field
        self.role = role


class ChartDataError(ValueError):
    """Raised when a row cannot be classified against its metadata."""

    def __init__(self, *, row_index: int, reason: str) -> None:
        super().__init__(f"Row {row_index}: {reason}")
        self.row_index = row_index
        self.reason = reason
