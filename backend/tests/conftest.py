import dataclasses

import pytest

from pos_finder.core.config import TableNames, load_config
from pos_finder.hours.time_spec import TimeOfDay
from pos_finder.hours.types import JoinedRow
from pos_finder.jobs.ingest.sources.base import BaseSource


class FakeStorage:
    """In-memory storage collaborator: coarse day filter on read, call log on write."""

    def __init__(self, rows=None, fail_with=None):
        self.rows = list(rows or [])
        self.fail_with = fail_with
        self.tables: dict[str, list[dict]] = {}
        self.calls: list[tuple] = []
        self.committed = False
        self.rolled_back = False

    def fetch_open_rows(self, day, time):
        self.calls.append(("fetch", day, time))
        if self.fail_with is not None:
            raise self.fail_with
        return [r for r in self.rows if r.day_from <= day <= r.day_to]

    def insert(self, table, row):
        self.calls.append(("insert", table))
        if self.fail_with is not None:
            raise self.fail_with
        self.tables.setdefault(table, []).append(row)

    def clear(self, table):
        self.calls.append(("clear", table))
        self.tables[table] = []

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True


class StaticSource(BaseSource):
    name = "static"

    def __init__(self, entries=None, error=None):
        self.entries = entries or []
        self.error = error

    def fetch(self):
        if self.error is not None:
            raise self.error
        return self.entries


def make_row(pos_id="A", day_from=1, day_to=5, open_="09:00", close="17:00", **overrides) -> JoinedRow:
    fields = dict(
        id=pos_id,
        type="ticketMachine",
        name=f"Point {pos_id}",
        address=f"Street {pos_id}",
        lat=50.08,
        lon=14.42,
        services=3,
        pay_methods=1,
        link=None,
        day_from=day_from,
        day_to=day_to,
        open_time=TimeOfDay.from_hhmm(open_),
        close_time=TimeOfDay.from_hhmm(close),
    )
    fields.update(overrides)
    return JoinedRow(**fields)


def feed_entry(pos_id="PID-1", opening_hours=None, **overrides) -> dict:
    entry = {
        "id": pos_id,
        "type": "infoCenter",
        "name": "Muzeum",
        "lat": 50.0794,
        "lon": 14.4302,
        "services": 1023,
        "payMethods": 3,
        "openingHours": opening_hours
        if opening_hours is not None
        else [{"from": 1, "to": 5, "hours": "7:00-12:00,12:30–18:00"}],
    }
    entry.update(overrides)
    return entry


@pytest.fixture
def settings():
    return dataclasses.replace(
        load_config(),
        feed_url="https://feed.test/pointsOfSale.json",
        feed_retries=3,
        feed_backoff_base=0.0,
        timezone="Europe/Prague",
        tables=TableNames(),
        on_malformed="skip",
    )


@pytest.fixture
def storage():
    return FakeStorage()
