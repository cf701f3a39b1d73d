"""
Opening-hours normalization.

The feed ships hours as loosely formatted text attached to a day span:

    {"from": 1, "to": 5, "hours": "9:00-12:00,13:00–18:00"}

parse_hours() turns that into OpeningWindow values:
  - comma separated ranges become one window each, in feed order
  - any dash look-alike between the two clock times counts as "-"
  - single-digit hours are zero padded ("9:00" -> "09:00")
  - minutes must be two digits; anything else is MalformedHours

Two shapes the inclusive range check cannot express are normalized here so
that every emitted window has day_from <= day_to and open_time <= close_time:
  - week wrap (from=6, to=1): split into [6..6] and [0..1]
  - overnight (22:00-02:00): split at midnight into 22:00-23:59 on the
    given days and 00:00-02:00 on the following days
"""

from __future__ import annotations

import unicodedata

from pos_finder.hours.errors import MalformedHours
from pos_finder.hours.time_spec import END_OF_DAY, START_OF_DAY, TimeOfDay
from pos_finder.hours.types import OpeningWindow

CANONICAL_DASH = "-"

# en/em dash decoded as cp1252 instead of UTF-8
MOJIBAKE_DASHES = ("â€“", "â€”")

# dash-like characters outside the Pd category
EXTRA_DASHES = {"\u2212"}  # minus sign


def _is_dash_like(ch: str) -> bool:
    if ch == CANONICAL_DASH:
        return False
    return ch in EXTRA_DASHES or unicodedata.category(ch) == "Pd"


def normalize_separator(token: str) -> str:
    for bad in MOJIBAKE_DASHES:
        token = token.replace(bad, CANONICAL_DASH)
    return "".join(CANONICAL_DASH if _is_dash_like(ch) else ch for ch in token)


def pad_clock(value: str) -> str:
    parts = value.split(":")
    if len(parts) == 2 and len(parts[0]) == 1:
        return "0" + value
    return value


def _parse_clock(value: str, hours: str) -> TimeOfDay:
    try:
        return TimeOfDay.from_hhmm(pad_clock(value.strip()))
    except ValueError:
        raise MalformedHours(hours, f"bad clock time {value.strip()!r}")


def _check_day(day, hours: str) -> int:
    if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6:
        raise MalformedHours(hours, f"day out of range: {day!r}")
    return day


def day_ranges(day_from: int, day_to: int) -> list[tuple[int, int]]:
    if day_from <= day_to:
        return [(day_from, day_to)]
    return [(day_from, 6), (0, day_to)]


def _following_day_ranges(day_from: int, day_to: int) -> list[tuple[int, int]]:
    return day_ranges((day_from + 1) % 7, (day_to + 1) % 7)


def _windows_for(day_from: int, day_to: int, open_time: TimeOfDay, close_time: TimeOfDay) -> list[OpeningWindow]:
    if open_time <= close_time:
        return [OpeningWindow(day_from, day_to, open_time, close_time)]

    out = [OpeningWindow(day_from, day_to, open_time, END_OF_DAY)]
    for nxt_from, nxt_to in _following_day_ranges(day_from, day_to):
        out.append(OpeningWindow(nxt_from, nxt_to, START_OF_DAY, close_time))
    return out


def parse_range(token: str, hours: str) -> tuple[TimeOfDay, TimeOfDay]:
    """One "HH:MM-HH:MM" token -> (open, close)."""
    parts = normalize_separator(token).split(CANONICAL_DASH)
    if len(parts) != 2:
        raise MalformedHours(hours, f"range {token.strip()!r} does not have exactly two times")
    return _parse_clock(parts[0], hours), _parse_clock(parts[1], hours)


def parse_hours(hours: str, day_from: int, day_to: int) -> list[OpeningWindow]:
    if not isinstance(hours, str) or not hours.strip():
        raise MalformedHours(str(hours), "empty hours")

    day_from = _check_day(day_from, hours)
    day_to = _check_day(day_to, hours)

    windows: list[OpeningWindow] = []
    for token in hours.split(","):
        if not token.strip():
            raise MalformedHours(hours, "empty range")
        open_time, close_time = parse_range(token, hours)
        for d_from, d_to in day_ranges(day_from, day_to):
            windows.extend(_windows_for(d_from, d_to, open_time, close_time))

    return windows
