from fastapi import APIRouter, Body, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any
from app.core.database import get_db
from app.dependencies.auth import get_current_principal
from app.schemas.itineraries.itinerary_item import ItineraryItemResponse
from app.schemas.itineraries.generation import GenerateItineraryRequest, GenerateItineraryResponse
from app.services.itineraries.itinerary_service import ItineraryService
from app.services.itineraries.planner_service import generate_itinerary


router = APIRouter(tags=["itinerary"])


async def get_itinerary_service() -> ItineraryService:
    return ItineraryService()

# The body is taken raw so that a missing trip is reported before any field errors
@router.post(
    "/trips/{trip_id}/itinerary",
    response_model=ItineraryItemResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_itinerary_item_route(
    trip_id: int = Path(..., description="ID of the trip"),
    payload: Any = Body(None),
    db: AsyncSession = Depends(get_db),
    principal: str = Depends(get_current_principal),
    itinerary_service: ItineraryService = Depends(get_itinerary_service)
):
    return await itinerary_service.add_itinerary_item(
        db=db,
        user_id=principal,
        trip_id=trip_id,
        payload=payload
    )

@router.post("/generate-itinerary", response_model=GenerateItineraryResponse)
async def generate_itinerary_route(request: GenerateItineraryRequest):
    """Suggest itinerary items for a trip; nothing is stored."""
    return await generate_itinerary(request)
