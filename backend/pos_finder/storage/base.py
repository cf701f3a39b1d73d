from __future__ import annotations

from typing import Any, Protocol

from pos_finder.hours.time_spec import TimeOfDay
from pos_finder.hours.types import JoinedRow


class OpenRowsReader(Protocol):
    def fetch_open_rows(self, day: int, time: TimeOfDay) -> list[JoinedRow]:
        """
        Joined (point of sale, opening window) rows whose window covers `day`
        (day_from <= day <= day_to). Storage may also filter on time; callers
        re-check with the matcher either way.
        """
        ...


class TableWriter(Protocol):
    def insert(self, table: str, row: dict[str, Any]) -> None: ...

    def clear(self, table: str) -> None: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
