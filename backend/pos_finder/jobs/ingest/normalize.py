from __future__ import annotations

from typing import Any, Mapping

from pydantic import ValidationError as PydanticValidationError

from pos_finder.hours.errors import MalformedEntry, MalformedHours
from pos_finder.hours.parser import parse_hours
from pos_finder.hours.types import OpeningHoursRow, PointOfSaleRow
from pos_finder.jobs.ingest.types import RawFeedEntry


def validate_entry(raw: Mapping[str, Any]) -> RawFeedEntry:
    try:
        return RawFeedEntry.model_validate(raw)
    except PydanticValidationError as e:
        entry_id = raw.get("id") if isinstance(raw, Mapping) else None
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise MalformedEntry(entry_id, f"invalid fields: {fields}") from e


def normalize_entry(entry: RawFeedEntry) -> tuple[PointOfSaleRow, list[OpeningHoursRow]]:
    """
    Feed entry -> storable rows. Raises MalformedHours (tagged with the entry
    id) if any of its hour strings cannot be parsed; no partial result.
    """
    pos_row = PointOfSaleRow(
        id=entry.id,
        type=entry.type,
        name=entry.name,
        address=entry.address or None,
        lat=entry.lat,
        lon=entry.lon,
        services=entry.services,
        pay_methods=entry.pay_methods,
        remarks=entry.remarks or None,
        link=entry.link or None,
    )

    hours_rows: list[OpeningHoursRow] = []
    for spec in entry.opening_hours:
        try:
            windows = parse_hours(spec.hours, spec.day_from, spec.day_to)
        except MalformedHours as e:
            raise e.for_entry(entry.id) from e

        hours_rows.extend(
            OpeningHoursRow(
                point_of_sale_id=entry.id,
                day_from=w.day_from,
                day_to=w.day_to,
                open_time=w.open_time,
                close_time=w.close_time,
            )
            for w in windows
        )

    return pos_row, hours_rows
