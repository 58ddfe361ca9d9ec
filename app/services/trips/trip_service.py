import json
from sqlalchemy import delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError
from typing import List
from app.core.logger import logger
from app.core.errors import InvalidArgumentError, NotFoundError
from app.core.db_errors import StorageError, translate_storage_error
from app.models.trips.trip_model import Trip, TripStatusEnum
from app.schemas.base import in_storage_range
from app.schemas.trip.trip_schema import TripCreate, TripResponse, TripUpdate, TripWithItinerary
from app.services.itineraries.item_store import fetch_items_for_trip


def _serialize_preferences(preferences) -> str:
    return json.dumps(preferences.model_dump(by_alias=True, exclude_none=True))


class TripService:
    async def _get_owned_trip(self, db: AsyncSession, user_id: str, trip_id: int) -> Trip:
        # ids the column cannot hold can never match a row
        if not in_storage_range(trip_id):
            raise NotFoundError("trip not found")
        result = await db.execute(
            select(Trip).where(Trip.id == trip_id, Trip.user_id == user_id)
        )
        trip = result.scalar_one_or_none()
        if not trip:
            logger.warning(f"Trip not found: ID {trip_id} for user {user_id}")
            raise NotFoundError("trip not found")
        return trip

    async def _commit(self, db: AsyncSession, action: str) -> None:
        try:
            await db.commit()
        except SQLAlchemyError as exc:
            await db.rollback()
            raise translate_storage_error(StorageError.from_exception(exc), action=action) from exc

    async def create_trip(self, db: AsyncSession, trip_data: TripCreate, user_id: str) -> TripResponse:
        new_trip = Trip(
            user_id=user_id,
            title=trip_data.title,
            destination=trip_data.destination,
            start_date=trip_data.start_date,
            end_date=trip_data.end_date,
            budget_min=trip_data.budget_min,
            budget_max=trip_data.budget_max,
            preferences=_serialize_preferences(trip_data.preferences),
            status=TripStatusEnum.draft,
        )
        db.add(new_trip)
        await self._commit(db, "creating trip")
        await db.refresh(new_trip)

        logger.info(f"Trip {new_trip.id} created by user {user_id}")
        return TripResponse.model_validate(new_trip.to_dict())

    async def list_trips(self, db: AsyncSession, user_id: str) -> List[TripResponse]:
        result = await db.execute(
            select(Trip)
            .where(Trip.user_id == user_id)
            .order_by(Trip.created_at.desc(), Trip.id.desc())
        )
        trips = result.scalars().all()

        logger.info(f"Retrieved {len(trips)} trips for user {user_id}")
        return [TripResponse.model_validate(trip.to_dict()) for trip in trips]

    async def get_trip(self, db: AsyncSession, user_id: str, trip_id: int) -> TripWithItinerary:
        trip = await self._get_owned_trip(db, user_id, trip_id)
        items = await fetch_items_for_trip(db, trip.id)

        return TripWithItinerary.model_validate({
            **trip.to_dict(),
            "itinerary": [item.to_dict() for item in items],
        })

    async def update_trip(self, db: AsyncSession, trip_id: int, trip_update: TripUpdate, user_id: str) -> TripResponse:
        update_data = trip_update.model_dump(exclude_unset=True)
        if not update_data:
            raise InvalidArgumentError("no updates provided")

        trip = await self._get_owned_trip(db, user_id, trip_id)

        if "preferences" in update_data:
            update_data["preferences"] = (
                _serialize_preferences(trip_update.preferences) if trip_update.preferences else None
            )
        if update_data.get("status"):
            update_data["status"] = TripStatusEnum(update_data["status"])

        for key, value in update_data.items():
            setattr(trip, key, value)
        trip.updated_at = func.now()

        await self._commit(db, "updating trip")
        await db.refresh(trip)

        logger.info(f"Trip ID {trip_id} updated by user {user_id}")
        return TripResponse.model_validate(trip.to_dict())

    async def delete_trip(self, db: AsyncSession, trip_id: int, user_id: str) -> dict:
        if not in_storage_range(trip_id):
            raise NotFoundError("trip not found")

        # itinerary items go with the trip through ON DELETE CASCADE
        result = await db.execute(
            delete(Trip)
            .where(Trip.id == trip_id, Trip.user_id == user_id)
            .returning(Trip.id)
            .execution_options(synchronize_session=False)
        )
        deleted_id = result.scalar_one_or_none()
        if deleted_id is None:
            await db.rollback()
            logger.warning(f"Delete attempt for missing trip: ID {trip_id}, user {user_id}")
            raise NotFoundError("trip not found")

        await self._commit(db, "deleting trip")

        logger.info(f"Trip ID {trip_id} deleted by user {user_id}")
        return {"msg": "Trip deleted successfully"}
