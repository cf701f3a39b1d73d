from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

import pytz

from pos_finder.hours.aggregate import aggregate_rows
from pos_finder.hours.matcher import filter_rows
from pos_finder.hours.time_spec import validate_day, validate_time
from pos_finder.hours.types import PointOfSaleRecord, QuerySpec
from pos_finder.storage.base import OpenRowsReader

logger = logging.getLogger(__name__)


def now_in(tz_name: str) -> datetime:
    return datetime.now(pytz.timezone(tz_name))


def build_query(day: Optional[int], time: Optional[str]) -> QuerySpec:
    """Validate raw parameters. Raises InvalidDay / InvalidTime."""
    return QuerySpec(day=validate_day(day), time=validate_time(time))


def list_open(
    reader: OpenRowsReader,
    day: Optional[int] = None,
    time: Optional[str] = None,
    *,
    tz_name: str = "Europe/Prague",
    now: Optional[datetime] = None,
) -> dict[str, PointOfSaleRecord]:
    """
    Points of sale open at (day, time), keyed by id in first-seen order.
    Missing day/time default to the current moment in `tz_name`.
    """
    query = build_query(day, time)

    if query.day is None or query.time is None:
        query = query.resolve(now if now is not None else now_in(tz_name))

    rows = reader.fetch_open_rows(query.day, query.time)
    open_rows = filter_rows(rows, query.day, query.time)
    if len(open_rows) != len(rows):
        logger.debug("Matcher dropped %d of %d storage rows", len(rows) - len(open_rows), len(rows))

    records = aggregate_rows(open_rows)
    logger.info("list_open day=%d time=%s points_of_sale=%d windows=%d", query.day, query.time, len(records), len(open_rows))
    return records
