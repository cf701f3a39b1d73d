from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from pos_finder.api.v1.schemas.points_of_sale import (
    ErrorEnvelope,
    PointOfSaleOut,
    PointsOfSaleEnvelope,
    UpdateEnvelope,
)
from pos_finder.core.config import Settings, get_settings
from pos_finder.core.deps import get_source, get_storage
from pos_finder.hours.errors import (
    FeedUnavailable,
    HoursError,
    MalformedEntry,
    MalformedHours,
    StorageUnavailable,
    ValidationError,
)
from pos_finder.hours.time_spec import parse_day_param
from pos_finder.jobs.ingest.run_ingest import run_ingest
from pos_finder.jobs.ingest.sources.base import BaseSource
from pos_finder.services.points_of_sale import list_open
from pos_finder.storage.sql import SqlStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["points-of-sale"])

ERROR_RESPONSES = {400: {"model": ErrorEnvelope}, 500: {"model": ErrorEnvelope}}


def error_response(err: HoursError, prefix: str) -> JSONResponse:
    return JSONResponse(
        status_code=err.http_status,
        content={"code": err.http_status, "message": f"{prefix} - {err.message}"},
    )


@router.get("/points-of-sale", response_model=PointsOfSaleEnvelope, responses=ERROR_RESPONSES)
def get_points_of_sale(
    day: Optional[str] = Query(None, description="Day of week, 0=Sunday..6=Saturday (default: today)"),
    time: Optional[str] = Query(None, description="H:MM or HH:MM (default: now)"),
    storage: SqlStorage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    try:
        records = list_open(storage, parse_day_param(day), time, tz_name=settings.timezone)
    except ValidationError as e:
        return error_response(e, "Invalid parameter provided")
    except StorageUnavailable as e:
        logger.error("Query failed day=%r time=%r: %s", day, time, e)
        return error_response(e, "Failed to load data from the database")

    envelope = PointsOfSaleEnvelope(
        code=200,
        data={pos_id: PointOfSaleOut.model_validate(rec.to_payload()) for pos_id, rec in records.items()},
    )
    return JSONResponse(status_code=200, content=envelope.model_dump(by_alias=True))


@router.post("/points-of-sale/update", response_model=UpdateEnvelope, responses={500: {"model": ErrorEnvelope}})
def update_points_of_sale(
    storage: SqlStorage = Depends(get_storage),
    source: BaseSource = Depends(get_source),
    settings: Settings = Depends(get_settings),
):
    try:
        stats = run_ingest(storage, source, settings)
    except FeedUnavailable as e:
        return error_response(e, "Failed to retrieve data from PID")
    except (MalformedHours, MalformedEntry) as e:
        return error_response(e, "Failed to parse PID data")
    except StorageUnavailable as e:
        return error_response(e, "Failed to save data to the database")

    return UpdateEnvelope(code=200, message="Point of sale data successfully updated", stats=stats)
