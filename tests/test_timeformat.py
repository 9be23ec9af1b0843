"""Tests for d3-style time pattern expansion."""

from __future__ import annotations

import pytest

from plotting.timeformat import format_time

pytestmark = pytest.mark.unit

# 2021-01-02 03:04:05.006 UTC, a Saturday
MOMENT = 1_609_556_645_006


@pytest.mark.parametrize(
    ("pattern", "expected"),
    [
        ("%Y-%m-%d %H:%M:%S", "2021-01-02 03:04:05"),
        ("%a %A", "Sat Saturday"),
        ("%b %B", "Jan January"),
        ("%I %p", "03 AM"),
        ("%e", " 2"),
        ("%j", "002"),
        ("%L", "006"),
        ("%f", "006000"),
        ("%y", "21"),
        ("%q", "1"),
        ("%Q", "1609556645006"),
        ("%s", "1609556645"),
        ("%u %w", "6 6"),
        ("%Z", "+0000"),
        ("%x", "1/2/2021"),
        ("%X", "3:04:05 AM"),
        ("%c", "1/2/2021, 3:04:05 AM"),
    ],
)
def test_format_time_directives(pattern: str, expected: str) -> None:
    assert format_time(MOMENT, pattern) == expected


@pytest.mark.parametrize(
    ("pattern", "expected"),
    [
        ("%-d/%-m", "2/1"),
        ("%_d", " 2"),
        ("%0e", "02"),
    ],
)
def test_format_time_padding_modifiers(pattern: str, expected: str) -> None:
    assert format_time(MOMENT, pattern) == expected


def test_format_time_keeps_literals_and_unknown_directives() -> None:
    assert format_time(MOMENT, "100%% at %K") == "100% at %K"


def test_format_time_before_epoch() -> None:
    assert format_time(-86_400_000, "%Y-%m-%d") == "1969-12-31"
