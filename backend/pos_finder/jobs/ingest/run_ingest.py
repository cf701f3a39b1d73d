import argparse
import dataclasses
import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from pos_finder.core.config import ON_MALFORMED_CHOICES, Settings, get_settings
from pos_finder.core.db import SessionLocal
from pos_finder.core.logging import configure_logging_if_needed
from pos_finder.jobs.ingest.loader import load_entries
from pos_finder.jobs.ingest.sources.base import BaseSource
from pos_finder.jobs.ingest.sources.pid.source import PidSource
from pos_finder.models.job_runs import JobRun
from pos_finder.storage.base import TableWriter
from pos_finder.storage.sql import SqlStorage

logger = logging.getLogger(__name__)


def run_ingest(writer: TableWriter, source: BaseSource, cfg: Settings) -> dict:
    """fetch -> normalize -> load. Returns load stats."""
    logger.info("Ingest start source=%s on_malformed=%s", source.name, cfg.on_malformed)

    entries = source.fetch()
    stats = load_entries(writer, entries, cfg.tables, on_malformed=cfg.on_malformed)

    result = {"source": source.name, **stats}
    logger.info(
        "Ingest done source=%s total=%d inserted=%d skipped=%d windows=%d",
        source.name,
        stats["total"],
        stats["inserted"],
        stats["skipped"],
        stats["windows"],
    )
    return result


def run_ingest_job(db: Session, source: BaseSource, cfg: Settings) -> dict:
    """run_ingest wrapped in a job_runs record."""
    run_id = uuid.uuid4()
    job = JobRun(
        run_id=run_id,
        job_name=f"ingest_{source.name}",
        status="running",
        meta={"on_malformed": cfg.on_malformed, "feed_url": cfg.feed_url},
    )
    db.add(job)
    db.commit()

    try:
        result = run_ingest(SqlStorage(db, cfg.tables), source, cfg)

        job = db.get(JobRun, run_id)
        job.status = "success"
        job.ended_at = datetime.now(timezone.utc)
        job.meta = {**(job.meta or {}), **result}
        db.commit()
        return result

    except Exception as e:
        db.rollback()
        job = db.get(JobRun, run_id)
        job.status = "fail"
        job.ended_at = datetime.now(timezone.utc)
        job.meta = {**(job.meta or {}), "error": repr(e)}
        db.commit()
        raise


def main():
    p = argparse.ArgumentParser(description="Reload points_of_sale and opening_hours from the PID feed")
    p.add_argument("--on-malformed", choices=ON_MALFORMED_CHOICES, help="Override POS_ON_MALFORMED")
    p.add_argument("--feed-url", help="Override POS_FEED_URL")
    args = p.parse_args()

    cfg = get_settings()
    overrides = {}
    if args.on_malformed:
        overrides["on_malformed"] = args.on_malformed
    if args.feed_url:
        overrides["feed_url"] = args.feed_url
    if overrides:
        cfg = dataclasses.replace(cfg, **overrides)

    configure_logging_if_needed(cfg.log_level)

    db: Session = SessionLocal()
    try:
        result = run_ingest_job(db, PidSource(cfg), cfg)
        print(result)
    finally:
        db.close()


if __name__ == "__main__":
    main()
