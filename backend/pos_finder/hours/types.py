from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from pos_finder.hours.time_spec import TimeOfDay, day_of_week


@dataclass(frozen=True)
class OpeningWindow:
    day_from: int                    # 0=Sunday..6=Saturday, inclusive
    day_to: int
    open_time: TimeOfDay
    close_time: TimeOfDay            # inclusive

    @property
    def hours(self) -> str:
        """The "HH:MM-HH:MM" form the transport layer exposes."""
        return f"{self.open_time}-{self.close_time}"

    def to_payload(self) -> dict[str, Any]:
        return {"from": self.day_from, "to": self.day_to, "hours": self.hours}


@dataclass(frozen=True)
class PointOfSaleRecord:
    id: str
    type: str
    name: str
    address: Optional[str]
    lat: float
    lon: float
    services: int
    pay_methods: int
    remarks: Optional[str]
    link: Optional[str]
    windows: tuple[OpeningWindow, ...]

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "name": self.name,
            "address": self.address,
            "lat": self.lat,
            "lon": self.lon,
            "services": self.services,
            "payMethods": self.pay_methods,
            "remarks": self.remarks,
            "link": self.link,
            "openingHours": [w.to_payload() for w in self.windows],
        }


@dataclass(frozen=True)
class QuerySpec:
    day: Optional[int] = None
    time: Optional[TimeOfDay] = None

    def resolve(self, now: datetime) -> "QuerySpec":
        """Fill missing fields from `now` (already in the service timezone)."""
        return QuerySpec(
            day=self.day if self.day is not None else day_of_week(now),
            time=self.time if self.time is not None else TimeOfDay.of(now.hour, now.minute),
        )


@dataclass(frozen=True)
class JoinedRow:
    """One point of sale joined with exactly one of its opening windows."""

    id: str
    type: str
    name: str
    address: Optional[str]
    lat: float
    lon: float
    services: int
    pay_methods: int
    link: Optional[str]
    day_from: int
    day_to: int
    open_time: TimeOfDay
    close_time: TimeOfDay
    remarks: Optional[str] = None

    @property
    def window(self) -> OpeningWindow:
        return OpeningWindow(self.day_from, self.day_to, self.open_time, self.close_time)


@dataclass(frozen=True)
class PointOfSaleRow:
    id: str
    type: str
    name: str
    address: Optional[str]
    lat: float
    lon: float
    services: int
    pay_methods: int
    remarks: Optional[str]
    link: Optional[str]

    def as_values(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "name": self.name,
            "address": self.address,
            "lat": self.lat,
            "lon": self.lon,
            "services": self.services,
            "pay_methods": self.pay_methods,
            "remarks": self.remarks,
            "link": self.link,
        }


@dataclass(frozen=True)
class OpeningHoursRow:
    point_of_sale_id: str
    day_from: int
    day_to: int
    open_time: TimeOfDay
    close_time: TimeOfDay

    def as_values(self) -> dict[str, Any]:
        return {
            "point_of_sale_id": self.point_of_sale_id,
            "day_from": self.day_from,
            "day_to": self.day_to,
            "open_time": self.open_time.to_time(),
            "close_time": self.close_time.to_time(),
        }
