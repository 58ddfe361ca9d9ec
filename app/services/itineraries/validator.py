from typing import Any
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError

from app.core.db_errors import StorageError, translate_storage_error
from app.core.errors import NotFoundError, invalid_argument_from
from app.core.logger import logger
from app.models.trips.trip_model import Trip
from app.schemas.base import in_storage_range
from app.schemas.itineraries.itinerary_item import ItineraryItemCreate


async def ensure_trip_owned(db: AsyncSession, user_id: str, trip_id: int) -> None:
    """Fail with not-found unless `trip_id` exists and belongs to `user_id`."""
    if not in_storage_range(trip_id):
        raise NotFoundError("trip not found")

    try:
        result = await db.execute(
            select(Trip.id).where(Trip.id == trip_id, Trip.user_id == user_id)
        )
        found = result.scalar_one_or_none()
    except SQLAlchemyError as exc:
        raise translate_storage_error(StorageError.from_exception(exc), action="looking up trip") from exc

    if found is None:
        logger.warning(f"Itinerary item rejected, trip {trip_id} not found for user {user_id}")
        raise NotFoundError("trip not found")


def validate_itinerary_item(payload: Any) -> ItineraryItemCreate:
    """Normalize a raw creation request or raise InvalidArgumentError."""
    try:
        return ItineraryItemCreate.model_validate(payload)
    except ValidationError as exc:
        raise invalid_argument_from(exc) from None
