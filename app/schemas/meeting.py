"""Pydantic schemas for the optional meeting proposal attached to a message."""

import datetime as dt
import re
from typing import Any, Optional

from pydantic import Field, field_validator

from app.schemas.common import CamelModel


TIME_OF_DAY_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
DEFAULT_LOCATION_NAME = "Selected Location"


class Coordinates(CamelModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class MeetingLocation(CamelModel):
    name: str = DEFAULT_LOCATION_NAME
    coordinates: Optional[Coordinates] = None

    @field_validator("name", mode="before")
    @classmethod
    def default_blank_name(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_LOCATION_NAME
        return v.strip() if isinstance(v, str) else v

    @field_validator("coordinates", mode="before")
    @classmethod
    def empty_coordinates_to_none(cls, v: Any) -> Any:
        # Clients send {} when no point was picked on the map
        if isinstance(v, dict) and not v:
            return None
        return v


class MeetingProposal(CamelModel):
    """A proposed in-person meeting. Date and location are mandatory."""
    date: dt.date
    time_of_day: Optional[str] = Field(None, description="24h HH:MM")
    location: MeetingLocation

    @field_validator("time_of_day", mode="before")
    @classmethod
    def validate_time_of_day(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        if not isinstance(v, str):
            raise ValueError("Meeting time must be a string in HH:MM format")
        v = v.strip()
        if not v:
            return None
        if not TIME_OF_DAY_PATTERN.match(v):
            raise ValueError("Meeting time must be in HH:MM format")
        return v
