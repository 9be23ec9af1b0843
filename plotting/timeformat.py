"""d3-style time format patterns.

Chart configs carry `timeFormat` / `tipTimeFormat` patterns written for d3's
`timeFormat` (e.g. ``"%Y-%m-%d %H:%M"``). Most directives match `strftime`,
but d3 adds milliseconds (``%L``), epoch values (``%Q``, ``%s``), quarters
(``%q``) and the ``-``/``_``/``0`` padding modifiers, so patterns are expanded
here rather than handed to `strftime`. Times are rendered in UTC.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Final

_EPOCH: Final = datetime(1970, 1, 1, tzinfo=timezone.utc)

_DIRECTIVE = re.compile(r"%([-_0])?([a-zA-Z%])")

_WEEKDAYS: Final = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTHS: Final = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# directive -> (value, default pad char, width); pad char "" means never padded
_Numeric = Callable[[datetime], int]

_NUMERIC: Final[dict[str, tuple[_Numeric, str, int]]] = {
    "d": (lambda t: t.day, "0", 2),
    "e": (lambda t: t.day, " ", 2),
    "f": (lambda t: t.microsecond, "0", 6),
    "H": (lambda t: t.hour, "0", 2),
    "I": (lambda t: (t.hour % 12) or 12, "0", 2),
    "j": (lambda t: t.timetuple().tm_yday, "0", 3),
    "L": (lambda t: t.microsecond // 1000, "0", 3),
    "m": (lambda t: t.month, "0", 2),
    "M": (lambda t: t.minute, "0", 2),
    "q": (lambda t: (t.month - 1) // 3 + 1, "", 0),
    "Q": (lambda t: (t - _EPOCH) // timedelta(milliseconds=1), "", 0),
    "s": (lambda t: (t - _EPOCH) // timedelta(seconds=1), "", 0),
    "S": (lambda t: t.second, "0", 2),
    "u": (lambda t: t.isoweekday(), "", 0),
    "w": (lambda t: t.isoweekday() % 7, "", 0),
    "U": (lambda t: int(t.strftime("%U")), "0", 2),
    "W": (lambda t: int(t.strftime("%W")), "0", 2),
    "V": (lambda t: t.isocalendar()[1], "0", 2),
    "G": (lambda t: t.isocalendar()[0], "0", 4),
    "g": (lambda t: t.isocalendar()[0] % 100, "0", 2),
    "y": (lambda t: t.year % 100, "0", 2),
    "Y": (lambda t: t.year, "0", 4),
}

_TEXT: Final[dict[str, Callable[[datetime], str]]] = {
    "a": lambda t: _WEEKDAYS[t.weekday()][:3],
    "A": lambda t: _WEEKDAYS[t.weekday()],
    "b": lambda t: _MONTHS[t.month - 1][:3],
    "B": lambda t: _MONTHS[t.month - 1],
    "p": lambda t: "AM" if t.hour < 12 else "PM",
    "Z": lambda t: "+0000",
    "%": lambda t: "%",
}

# locale composites, en-US as in d3's default locale
_COMPOSITE: Final[dict[str, str]] = {
    "c": "%x, %X",
    "x": "%-m/%-d/%Y",
    "X": "%-I:%M:%S %p",
}


def format_time(millis: float, pattern: str) -> str:
    """Format epoch milliseconds with a d3-style pattern.

    Args:
        millis: Milliseconds since the Unix epoch.
        pattern: d3 `timeFormat` pattern.

    Returns:
        The formatted string. Unknown directives are emitted verbatim.
    """

    moment = _EPOCH + timedelta(milliseconds=float(millis))
    return _expand(moment, pattern)


def _expand(moment: datetime, pattern: str) -> str:
    def replace(match: re.Match[str]) -> str:
        modifier, directive = match.group(1), match.group(2)
        if directive in _COMPOSITE:
            return _expand(moment, _COMPOSITE[directive])
        if directive in _TEXT:
            return _TEXT[directive](moment)
        if directive in _NUMERIC:
            value, pad, width = _NUMERIC[directive]
            return _pad(value(moment), pad=pad, width=width, modifier=modifier)
        return match.group(0)

    return _DIRECTIVE.sub(replace, pattern)


def _pad(value: int, *, pad: str, width: int, modifier: str | None) -> str:
    text = str(value)
    if not pad:
        return text
    if modifier == "-":
        return text
    fill = {"_": " ", "0": "0"}.get(modifier or "", pad)
    return text.rjust(width, fill)
