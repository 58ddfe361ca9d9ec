from pydantic import Field, field_validator, model_serializer
from pydantic_core import PydanticCustomError
from typing import List, Literal, Optional
from datetime import date, datetime
from app.schemas.base import MAX_STORAGE_INT, CamelModel
from app.schemas.itineraries.itinerary_item import ItineraryItemResponse

TripStatus = Literal["draft", "planned", "booked", "completed"]


def _required_text(value, field: str):
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise PydanticCustomError("invalid_argument", f"{field} is required")
    return value.strip()


class TripPreferences(CamelModel):
    interests: List[str] = Field(default_factory=list)
    travel_style: Literal["budget", "mid-range", "luxury"] = "mid-range"
    accommodation: Literal["hostel", "hotel", "apartment", "resort"] = "hotel"
    pace: Literal["relaxed", "moderate", "packed"] = "moderate"
    group_size: int = Field(default=2, ge=1)
    accessibility: Optional[List[str]] = None

    # unset optional preferences are left out, matching what is stored
    @model_serializer(mode="wrap")
    def drop_unset(self, handler):
        return {key: value for key, value in handler(self).items() if value is not None}

class TripBase(CamelModel):
    title: str
    destination: str
    start_date: date
    end_date: date
    budget_min: Optional[int] = Field(None, ge=0, le=MAX_STORAGE_INT)
    budget_max: Optional[int] = Field(None, ge=0, le=MAX_STORAGE_INT)
    preferences: TripPreferences

class TripCreate(TripBase):
    @field_validator("title", "destination", mode="before")
    @classmethod
    def trim_text(cls, value, info):
        if value is None:
            raise PydanticCustomError("invalid_argument", f"{info.field_name} is required")
        return _required_text(value, info.field_name)

class TripUpdate(CamelModel):
    title: Optional[str] = None
    destination: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    budget_min: Optional[int] = Field(None, ge=0, le=MAX_STORAGE_INT)
    budget_max: Optional[int] = Field(None, ge=0, le=MAX_STORAGE_INT)
    preferences: Optional[TripPreferences] = None
    status: Optional[TripStatus] = None

    # an explicit null still reaches storage and is refused by the NOT NULL column
    @field_validator("title", "destination", mode="before")
    @classmethod
    def trim_text(cls, value, info):
        return _required_text(value, info.field_name)

class TripResponse(TripBase):
    id: int
    user_id: str
    status: TripStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class TripListResponse(CamelModel):
    trips: List[TripResponse]

class TripWithItinerary(TripResponse):
    itinerary: List[ItineraryItemResponse] = Field(default_factory=list)
