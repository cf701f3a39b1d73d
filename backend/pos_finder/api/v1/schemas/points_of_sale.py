from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class OpeningHoursOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    day_from: int = Field(..., alias="from", description="0=Sunday..6=Saturday")
    day_to: int = Field(..., alias="to")
    hours: str = Field(..., description="HH:MM-HH:MM")


class PointOfSaleOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    type: str
    name: str
    address: Optional[str] = None
    lat: float
    lon: float
    services: int
    pay_methods: int = Field(..., alias="payMethods")
    remarks: Optional[str] = None
    link: Optional[str] = None
    opening_hours: list[OpeningHoursOut] = Field(default_factory=list, alias="openingHours")


class PointsOfSaleEnvelope(BaseModel):
    code: Literal[200]
    data: dict[str, PointOfSaleOut]


class UpdateEnvelope(BaseModel):
    code: Literal[200]
    message: str
    stats: dict


class ErrorEnvelope(BaseModel):
    code: int
    message: str
