from typing import Iterator

from fastapi import Depends
from sqlalchemy.orm import Session

from pos_finder.core.config import Settings, get_settings
from pos_finder.core.db import SessionLocal
from pos_finder.jobs.ingest.sources.base import BaseSource
from pos_finder.jobs.ingest.sources.pid.source import PidSource
from pos_finder.storage.sql import SqlStorage


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_storage(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)) -> SqlStorage:
    return SqlStorage(db, settings.tables)


def get_source(settings: Settings = Depends(get_settings)) -> BaseSource:
    return PidSource(settings)
