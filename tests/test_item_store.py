import pytest

from app.core.database import SessionLocal
from app.core.db_errors import StorageError, translate_storage_error
from app.core.errors import InvalidArgumentError, NotFoundError
from app.schemas.itineraries.itinerary_item import ItineraryItemCreate
from app.services.itineraries.item_store import fetch_items_for_trip, insert_itinerary_item


def _unchecked_item(**overrides):
    """Build an item without running the validators, to reach the database constraints."""
    fields = {
        "day_number": 1,
        "start_time": None,
        "end_time": None,
        "activity_type": "attraction",
        "title": "Louvre",
        "description": None,
        "location": None,
        "cost": None,
        "booking_url": None,
        "weather_dependent": False,
    }
    fields.update(overrides)
    return ItineraryItemCreate.model_construct(**fields)


def _insert(trip_id, item):
    async def _run():
        async with SessionLocal() as db:
            try:
                await insert_itinerary_item(db, trip_id, item)
            except StorageError as exc:
                return exc
        return None
    return _run


def test_insert_returns_stored_row(trip, run_async):
    async def _run():
        async with SessionLocal() as db:
            row = await insert_itinerary_item(db, trip["id"], _unchecked_item(cost=12))
            items = await fetch_items_for_trip(db, trip["id"])
            return row, items

    row, items = run_async(_run)

    assert row.id is not None
    assert row.trip_id == trip["id"]
    assert row.cost == 12
    assert row.created_at is not None
    assert [item.id for item in items] == [row.id]


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"day_number": 0}, "dayNumber must be a positive integer"),
        ({"activity_type": "safari"}, "activityType must be one of"),
        ({"cost": -5}, "cost must be a non-negative number"),
        ({"title": None}, "title is required"),
    ],
)
def test_database_constraints_translate_to_invalid_argument(trip, run_async, overrides, message):
    error = run_async(_insert(trip["id"], _unchecked_item(**overrides)))

    assert isinstance(error, StorageError)
    translated = translate_storage_error(error)
    assert isinstance(translated, InvalidArgumentError)
    assert translated.message.startswith(message)


def test_vanished_trip_translates_to_not_found(run_async):
    error = run_async(_insert(555555, _unchecked_item()))

    assert isinstance(error, StorageError)
    assert isinstance(translate_storage_error(error), NotFoundError)
