from typing import List
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError

from app.core.db_errors import StorageError
from app.models.itinerary.itinerary_item import ItineraryItem
from app.schemas.itineraries.itinerary_item import ItineraryItemCreate


async def insert_itinerary_item(db: AsyncSession, trip_id: int, item: ItineraryItemCreate) -> ItineraryItem:
    """Insert one normalized item and return the stored row.

    Storage failures are re-raised as `StorageError` without interpretation.
    """
    stmt = (
        insert(ItineraryItem)
        .values(trip_id=trip_id, **item.model_dump())
        .returning(ItineraryItem)
    )
    try:
        result = await db.execute(stmt)
        row = result.scalar_one()
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        raise StorageError.from_exception(exc) from exc
    return row


async def fetch_items_for_trip(db: AsyncSession, trip_id: int) -> List[ItineraryItem]:
    result = await db.execute(
        select(ItineraryItem)
        .where(ItineraryItem.trip_id == trip_id)
        .order_by(
            ItineraryItem.day_number,
            ItineraryItem.start_time.asc().nulls_last(),
            ItineraryItem.id,
        )
    )
    return list(result.scalars().all())
