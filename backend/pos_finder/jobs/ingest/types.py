from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RawOpeningHours(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    day_from: int = Field(..., alias="from")   # 0=Sunday..6=Saturday
    day_to: int = Field(..., alias="to")
    hours: str                                 # e.g. "9:00-12:00,13:00–18:00"


class RawFeedEntry(BaseModel):
    """One point of sale as the PID feed ships it."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

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
    opening_hours: list[RawOpeningHours] = Field(default_factory=list, alias="openingHours")

    @field_validator("id", mode="before")
    @classmethod
    def id_as_text(cls, v):
        return str(v) if isinstance(v, int) else v
