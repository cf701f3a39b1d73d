"""
Aggregation of joined rows: one row per (point of sale, opening window)
-> one PointOfSaleRecord per point of sale.

Rows are consumed in the order storage returned them. The first row seen for
an id supplies the point-of-sale fields; every row (first or repeat) adds its
window. Output order is first-seen id order, window order is row order, and
duplicate windows are kept as-is.

Usage:
  records = aggregate_rows(rows)   # dict[id, PointOfSaleRecord]
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from pos_finder.hours.types import JoinedRow, OpeningWindow, PointOfSaleRecord


def _record_from(row: JoinedRow) -> PointOfSaleRecord:
    return PointOfSaleRecord(
        id=row.id,
        type=row.type,
        name=row.name,
        address=row.address,
        lat=row.lat,
        lon=row.lon,
        services=row.services,
        pay_methods=row.pay_methods,
        remarks=row.remarks,
        link=row.link,
        windows=(),
    )


def aggregate_rows(rows: Iterable[JoinedRow]) -> dict[str, PointOfSaleRecord]:
    heads: dict[str, PointOfSaleRecord] = {}
    windows: dict[str, list[OpeningWindow]] = {}

    for row in rows:
        if row.id not in heads:
            heads[row.id] = _record_from(row)
            windows[row.id] = []
        windows[row.id].append(row.window)

    return {pos_id: replace(head, windows=tuple(windows[pos_id])) for pos_id, head in heads.items()}


def render_records(records: dict[str, PointOfSaleRecord]) -> dict[str, dict]:
    """JSON-ready mapping id -> record payload, order preserved."""
    return {pos_id: rec.to_payload() for pos_id, rec in records.items()}
