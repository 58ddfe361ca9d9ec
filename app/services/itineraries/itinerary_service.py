from typing import Any, Dict
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db_errors import StorageError, translate_storage_error
from app.core.logger import logger
from app.schemas.itineraries.itinerary_item import ItineraryItemResponse
from app.services.itineraries.item_store import insert_itinerary_item
from app.services.itineraries.validator import ensure_trip_owned, validate_itinerary_item


class ItineraryService:
    async def add_itinerary_item(
        self,
        db: AsyncSession,
        user_id: str,
        trip_id: int,
        payload: Dict[str, Any],
    ) -> ItineraryItemResponse:
        # existence is checked before the body so a missing trip always reports not-found
        await ensure_trip_owned(db, user_id, trip_id)
        item = validate_itinerary_item(payload)

        try:
            row = await insert_itinerary_item(db, trip_id, item)
        except StorageError as exc:
            logger.warning(f"Failed to insert itinerary item for trip {trip_id}: code={exc.code} detail={exc.message}")
            raise translate_storage_error(exc, action="creating itinerary item") from exc

        logger.info(f"Itinerary item {row.id} added to trip {trip_id} (day {row.day_number})")
        return ItineraryItemResponse.model_validate(row.to_dict())
