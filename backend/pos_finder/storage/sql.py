from __future__ import annotations

import logging
from typing import Any, Mapping

from sqlalchemy import Float, Integer, Text, Time, column, delete, insert, literal, select, table
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pos_finder.core.config import TableNames
from pos_finder.hours.errors import StorageUnavailable
from pos_finder.hours.time_spec import TimeOfDay
from pos_finder.hours.types import JoinedRow

logger = logging.getLogger(__name__)

POS_COLUMNS = {
    "id": Text,
    "type": Text,
    "name": Text,
    "address": Text,
    "lat": Float,
    "lon": Float,
    "services": Integer,
    "pay_methods": Integer,
    "remarks": Text,
    "link": Text,
}
HOURS_COLUMNS = {
    "id": Integer,
    "point_of_sale_id": Text,
    "day_from": Integer,
    "day_to": Integer,
    "open_time": Time,
    "close_time": Time,
}


def row_to_joined(r: Mapping[str, Any]) -> JoinedRow:
    return JoinedRow(
        id=str(r["id"]),
        type=r["type"],
        name=r["name"],
        address=r["address"],
        lat=float(r["lat"]),
        lon=float(r["lon"]),
        services=int(r["services"]),
        pay_methods=int(r["pay_methods"]),
        link=r["link"],
        remarks=r["remarks"],
        day_from=int(r["day_from"]),
        day_to=int(r["day_to"]),
        open_time=TimeOfDay.coerce(r["open_time"]),
        close_time=TimeOfDay.coerce(r["close_time"]),
    )


class SqlStorage:
    """
    Storage collaborator over a SQLAlchemy session. Table identities come in
    explicitly via TableNames; nothing here is bound to the ORM classes.
    """

    def __init__(self, db: Session, tables: TableNames):
        self.db = db
        self.tables = tables
        self._pos = table(tables.points_of_sale, *(column(c, t()) for c, t in POS_COLUMNS.items()))
        self._hours = table(tables.opening_hours, *(column(c, t()) for c, t in HOURS_COLUMNS.items()))

    # --- read path

    def fetch_open_rows(self, day: int, time: TimeOfDay) -> list[JoinedRow]:
        pos, oh = self._pos, self._hours
        stmt = (
            select(
                *(pos.c[c] for c in POS_COLUMNS),
                oh.c.day_from,
                oh.c.day_to,
                oh.c.open_time,
                oh.c.close_time,
            )
            .select_from(pos.join(oh, pos.c.id == oh.c.point_of_sale_id))
            .where(
                oh.c.day_from <= day,
                oh.c.day_to >= day,
                literal(time.to_time(), Time()).between(oh.c.open_time, oh.c.close_time),
            )
            .order_by(oh.c.id)
        )

        try:
            rows = self.db.execute(stmt).mappings().all()
        except SQLAlchemyError as e:
            raise StorageUnavailable(f"Failed to load open points of sale: {e}") from e

        logger.debug("fetch_open_rows day=%d time=%s rows=%d", day, time, len(rows))
        return [row_to_joined(r) for r in rows]

    # --- write path

    def _table(self, name: str):
        if name == self.tables.points_of_sale:
            return self._pos
        if name == self.tables.opening_hours:
            return self._hours
        raise ValueError(f"Unknown table: {name}")

    def insert(self, table_name: str, row: dict[str, Any]) -> None:
        try:
            self.db.execute(insert(self._table(table_name)).values(**row))
        except SQLAlchemyError as e:
            raise StorageUnavailable(f"Failed to insert into {table_name}: {e}") from e

    def clear(self, table_name: str) -> None:
        try:
            res = self.db.execute(delete(self._table(table_name)))
        except SQLAlchemyError as e:
            raise StorageUnavailable(f"Failed to clear {table_name}: {e}") from e
        logger.info("Cleared %s (rows=%s)", table_name, res.rowcount)

    def commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            raise StorageUnavailable(f"Failed to commit: {e}") from e

    def rollback(self) -> None:
        self.db.rollback()
