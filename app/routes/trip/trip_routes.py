from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.schemas.trip.trip_schema import TripCreate, TripUpdate, TripResponse, TripListResponse, TripWithItinerary
from app.core.database import get_db
from app.dependencies.auth import get_current_principal
from app.services.trips.trip_service import TripService

router = APIRouter(prefix="/trips", tags=['Trips'])

async def get_trip_service() -> TripService:
    return TripService()

@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip_route(
    trip: TripCreate,
    db: AsyncSession = Depends(get_db),
    principal: str = Depends(get_current_principal),
    trip_service: TripService = Depends(get_trip_service)
):
    """Create a new trip; it starts as a draft with no itinerary."""
    return await trip_service.create_trip(db, trip, principal)

@router.get("", response_model=TripListResponse)
async def list_trips_route(
    session: AsyncSession = Depends(get_db),
    principal: str = Depends(get_current_principal),
    trip_service: TripService = Depends(get_trip_service)
):
    trips = await trip_service.list_trips(session, principal)
    return TripListResponse(trips=trips)

@router.get("/{trip_id}", response_model=TripWithItinerary)
async def get_trip_route(
    trip_id: int = Path(...),
    session: AsyncSession = Depends(get_db),
    principal: str = Depends(get_current_principal),
    trip_service: TripService = Depends(get_trip_service)
):
    """Trip details together with its itinerary ordered by day and start time."""
    return await trip_service.get_trip(session, principal, trip_id)

@router.put("/{trip_id}", response_model=TripResponse)
async def update_trip_route(
    trip_update: TripUpdate,
    trip_id: int = Path(...),
    session: AsyncSession = Depends(get_db),
    principal: str = Depends(get_current_principal),
    trip_service: TripService = Depends(get_trip_service)
):
    return await trip_service.update_trip(session, trip_id, trip_update, principal)

@router.delete("/{trip_id}")
async def delete_trip_route(
    trip_id: int = Path(...),
    session: AsyncSession = Depends(get_db),
    principal: str = Depends(get_current_principal),
    trip_service: TripService = Depends(get_trip_service)
):
    return await trip_service.delete_trip(session, trip_id, principal)
