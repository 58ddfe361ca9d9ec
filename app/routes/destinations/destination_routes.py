from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.schemas.destination.destination_schema import DestinationListResponse
from app.services.destinations.destination_service import list_destinations

router = APIRouter(prefix="/destinations", tags=["Destinations"])

@router.get("", response_model=DestinationListResponse)
async def list_destinations_route(db: AsyncSession = Depends(get_db)):
    destinations = await list_destinations(db)
    return DestinationListResponse(destinations=destinations)
