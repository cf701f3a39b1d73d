from __future__ import annotations

from typing import Iterable

from pos_finder.hours.time_spec import TimeOfDay
from pos_finder.hours.types import JoinedRow, OpeningWindow


def matches(window: OpeningWindow, day: int, time: TimeOfDay) -> bool:
    """Inclusive on both bounds; day ranges never wrap across the week."""
    return (
        window.day_from <= day <= window.day_to
        and window.open_time <= time <= window.close_time
    )


def filter_rows(rows: Iterable[JoinedRow], day: int, time: TimeOfDay) -> list[JoinedRow]:
    return [r for r in rows if matches(r.window, day, time)]
