import math
import re
from datetime import datetime
from typing import Any, Optional

from pydantic import field_validator
from pydantic_core import PydanticCustomError

from app.schemas.base import MAX_STORAGE_INT, CamelModel

ACTIVITY_TYPES = ("flight", "accommodation", "activity", "restaurant", "transport", "attraction")

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _invalid(message: str) -> PydanticCustomError:
    return PydanticCustomError("invalid_argument", message)


def _optional_text(value: Any, field: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise _invalid(f"{field} must be a string")
    value = value.strip()
    return value or None


class ItineraryItemBase(CamelModel):
    day_number: int
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    activity_type: str
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    cost: Optional[int] = None
    booking_url: Optional[str] = None
    weather_dependent: bool = False


class ItineraryItemCreate(ItineraryItemBase):
    """Creation request for one itinerary item.

    Validation produces the normalized record that is written to storage:
    strings trimmed, blank optionals nulled, cost floored to an integer.
    Malformed start/end times are rejected rather than dropped.
    """

    @field_validator("day_number", mode="before")
    @classmethod
    def check_day_number(cls, value):
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise _invalid("dayNumber must be a positive integer")
        if value > MAX_STORAGE_INT:
            raise _invalid(f"dayNumber must not exceed {MAX_STORAGE_INT}")
        return value

    @field_validator("activity_type", mode="before")
    @classmethod
    def check_activity_type(cls, value):
        normalized = value.strip() if isinstance(value, str) else None
        if not normalized:
            raise _invalid("activityType is required")
        if normalized not in ACTIVITY_TYPES:
            raise _invalid(f"activityType must be one of: {', '.join(ACTIVITY_TYPES)}")
        return normalized

    @field_validator("title", mode="before")
    @classmethod
    def check_title(cls, value):
        normalized = value.strip() if isinstance(value, str) else None
        if not normalized:
            raise _invalid("title is required")
        return normalized

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def check_time(cls, value, info):
        field = "startTime" if info.field_name == "start_time" else "endTime"
        value = _optional_text(value, field)
        if value is not None and not TIME_PATTERN.match(value):
            raise _invalid(f"{field} must be in HH:MM 24-hour format")
        return value

    @field_validator("cost", mode="before")
    @classmethod
    def check_cost(cls, value):
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise _invalid("cost must be a non-negative number")
        if not math.isfinite(value) or value < 0:
            raise _invalid("cost must be a non-negative number")
        if value > MAX_STORAGE_INT:
            raise _invalid(f"cost must not exceed {MAX_STORAGE_INT}")
        return math.floor(value)

    @field_validator("description", "location", "booking_url", mode="before")
    @classmethod
    def trim_text(cls, value, info):
        field = {"booking_url": "bookingUrl"}.get(info.field_name, info.field_name)
        return _optional_text(value, field)

    @field_validator("weather_dependent", mode="before")
    @classmethod
    def check_weather_dependent(cls, value):
        if value is None:
            return False
        if not isinstance(value, bool):
            raise _invalid("weatherDependent must be a boolean")
        return value


class ItineraryItemResponse(ItineraryItemBase):
    id: int
    trip_id: int
    created_at: Optional[datetime] = None


class GeneratedItineraryItem(ItineraryItemCreate):
    """A suggested item; same rules as a creation request, not yet stored."""
