from pydantic import Field
from typing import List, Optional
from datetime import date
from app.schemas.base import CamelModel
from app.schemas.trip.trip_schema import TripPreferences
from app.schemas.itineraries.itinerary_item import GeneratedItineraryItem

class GenerateItineraryRequest(CamelModel):
    destination: str = Field(..., min_length=1)
    start_date: date
    end_date: date
    budget: Optional[float] = Field(None, ge=0)
    preferences: TripPreferences = Field(default_factory=TripPreferences)

    @property
    def days(self) -> int:
        """Inclusive number of calendar days in the trip."""
        return (self.end_date - self.start_date).days + 1

class GenerateItineraryResponse(CamelModel):
    itinerary: List[GeneratedItineraryItem]
    # "ai" or "rule-based"
    source: str
