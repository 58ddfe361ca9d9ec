from pydantic import Field
from typing import List, Optional
from datetime import datetime
from app.schemas.base import CamelModel

class Coordinates(CamelModel):
    lat: float
    lng: float

class DestinationResponse(CamelModel):
    id: int
    name: str
    country: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    average_cost_per_day: Optional[int] = None
    best_months: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    coordinates: Optional[Coordinates] = None
    created_at: Optional[datetime] = None

class DestinationListResponse(CamelModel):
    destinations: List[DestinationResponse]
