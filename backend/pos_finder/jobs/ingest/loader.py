import logging
from typing import Any, Iterable, Mapping

from pos_finder.core.config import TableNames
from pos_finder.hours.errors import MalformedEntry, MalformedHours
from pos_finder.jobs.ingest.normalize import normalize_entry, validate_entry
from pos_finder.storage.base import TableWriter

logger = logging.getLogger(__name__)


def load_entries(
    writer: TableWriter,
    entries: Iterable[Mapping[str, Any]],
    tables: TableNames,
    on_malformed: str = "skip",
) -> dict:
    """
    One ingest batch: clear both tables, then insert every entry's
    point-of-sale row followed by its opening-hours rows, then commit.

    A malformed entry, or one repeating an id already seen in the batch, is
    either skipped (logged, not inserted) or aborts the whole batch (rolled
    back, error re-raised), per `on_malformed`. Skipped entries are listed by
    id, or by 1-based position when they carry no id.
    """
    entries = list(entries)
    inserted = 0
    windows = 0
    skipped_ids: list = []
    seen: set[str] = set()

    try:
        # children first: opening_hours references points_of_sale
        writer.clear(tables.opening_hours)
        writer.clear(tables.points_of_sale)

        for i, raw in enumerate(entries, start=1):
            try:
                entry = validate_entry(raw)
                if entry.id in seen:
                    raise MalformedEntry(entry.id, "duplicate id")
                pos_row, hours_rows = normalize_entry(entry)
            except (MalformedEntry, MalformedHours) as e:
                if on_malformed == "abort":
                    logger.error("Aborting ingest batch at entry %d/%d: %s", i, len(entries), e)
                    raise
                logger.warning("Skipping entry %d/%d: %s", i, len(entries), e)
                skipped_ids.append(e.entry_id if e.entry_id is not None else i)
                continue

            writer.insert(tables.points_of_sale, pos_row.as_values())
            for row in hours_rows:
                writer.insert(tables.opening_hours, row.as_values())

            seen.add(entry.id)
            inserted += 1
            windows += len(hours_rows)

        writer.commit()

    except Exception:
        writer.rollback()
        raise

    return {
        "total": len(entries),
        "inserted": inserted,
        "skipped": len(skipped_ids),
        "windows": windows,
        "skipped_ids": skipped_ids,
    }
