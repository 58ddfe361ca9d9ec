import pytest
from sqlalchemy import func, select

from app.core.database import SessionLocal
from app.models import ItineraryItem
from app.schemas.itineraries.itinerary_item import ACTIVITY_TYPES


def _count_items(trip_id):
    async def _count():
        async with SessionLocal() as db:
            return await db.scalar(
                select(func.count()).select_from(ItineraryItem).where(ItineraryItem.trip_id == trip_id)
            )
    return _count


def test_add_item_to_paris_trip(client, trip):
    assert trip["status"] == "draft"

    response = client.post(
        f"/trips/{trip['id']}/itinerary",
        json={"dayNumber": 1, "activityType": "attraction", "title": "Louvre", "cost": 20},
    )

    assert response.status_code == 201
    item = response.json()
    assert item["tripId"] == trip["id"]
    assert item["dayNumber"] == 1
    assert item["activityType"] == "attraction"
    assert item["title"] == "Louvre"
    assert item["cost"] == 20
    assert item["weatherDependent"] is False
    assert item["startTime"] is None
    assert item["endTime"] is None
    assert item["description"] is None
    assert isinstance(item["id"], int)
    assert item["createdAt"]


def test_item_fields_are_normalized(client, trip):
    response = client.post(
        f"/trips/{trip['id']}/itinerary",
        json={
            "dayNumber": 2,
            "activityType": " restaurant ",
            "title": "  Dinner at Le Comptoir  ",
            "startTime": "19:30",
            "endTime": "",
            "description": "   ",
            "location": " Saint-Germain ",
            "bookingUrl": "https://example.com/booking",
            "cost": 19.7,
            "weatherDependent": True,
            "unknownField": "ignored",
        },
    )

    assert response.status_code == 201
    item = response.json()
    assert item["activityType"] == "restaurant"
    assert item["title"] == "Dinner at Le Comptoir"
    assert item["startTime"] == "19:30"
    assert item["endTime"] is None
    assert item["description"] is None
    assert item["location"] == "Saint-Germain"
    assert item["bookingUrl"] == "https://example.com/booking"
    assert item["cost"] == 19
    assert item["weatherDependent"] is True
    assert "unknownField" not in item


def test_unknown_activity_type_lists_valid_set(client, trip):
    response = client.post(
        f"/trips/{trip['id']}/itinerary",
        json={"dayNumber": 1, "activityType": "safari", "title": "Lion spotting"},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "invalid_argument"
    for activity_type in ACTIVITY_TYPES:
        assert activity_type in body["detail"]


@pytest.mark.parametrize(
    "payload, fragment",
    [
        ({"dayNumber": 1, "activityType": "activity"}, "title"),
        ({"dayNumber": 1, "activityType": "activity", "title": "   "}, "title"),
        ({"dayNumber": 1, "title": "Walk"}, "activityType"),
        ({"dayNumber": 1, "activityType": "", "title": "Walk"}, "activityType"),
        ({"dayNumber": 0, "activityType": "activity", "title": "Walk"}, "dayNumber"),
        ({"dayNumber": -3, "activityType": "activity", "title": "Walk"}, "dayNumber"),
        ({"dayNumber": 1.5, "activityType": "activity", "title": "Walk"}, "dayNumber"),
        ({"dayNumber": True, "activityType": "activity", "title": "Walk"}, "dayNumber"),
        ({"activityType": "activity", "title": "Walk"}, "dayNumber"),
        ({"dayNumber": 1, "activityType": "activity", "title": "Walk", "cost": -1}, "cost"),
        ({"dayNumber": 1, "activityType": "activity", "title": "Walk", "cost": "12"}, "cost"),
        ({"dayNumber": 1, "activityType": "activity", "title": "Walk", "weatherDependent": "yes"}, "weatherDependent"),
        ({"dayNumber": 1, "activityType": "activity", "title": "Walk", "location": 42}, "location"),
    ],
)
def test_invalid_items_are_rejected_and_not_stored(client, trip, run_async, payload, fragment):
    response = client.post(f"/trips/{trip['id']}/itinerary", json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "invalid_argument"
    assert fragment in body["detail"]
    assert run_async(_count_items(trip["id"])) == 0


@pytest.mark.parametrize("bad_time", ["9:5", "9:05", "24:00", "12:60", "noon", "12:30:00"])
def test_malformed_times_are_rejected(client, trip, run_async, bad_time):
    response = client.post(
        f"/trips/{trip['id']}/itinerary",
        json={"dayNumber": 1, "activityType": "activity", "title": "Walk", "startTime": bad_time},
    )

    assert response.status_code == 400
    assert "startTime" in response.json()["detail"]
    assert run_async(_count_items(trip["id"])) == 0

    response = client.post(
        f"/trips/{trip['id']}/itinerary",
        json={"dayNumber": 1, "activityType": "activity", "title": "Walk", "endTime": bad_time},
    )
    assert response.status_code == 400
    assert "endTime" in response.json()["detail"]


def test_missing_trip_reports_not_found_before_validation(client):
    # the item is invalid too; the missing trip wins
    response = client.post("/trips/987654/itinerary", json={"dayNumber": 0, "activityType": "safari"})

    assert response.status_code == 404
    assert response.json() == {"code": "not_found", "detail": "trip not found"}


def test_body_must_be_an_object(client, trip):
    response = client.post(f"/trips/{trip['id']}/itinerary", json=[{"dayNumber": 1}])

    assert response.status_code == 400
    assert response.json()["detail"] == "request body must be a JSON object"


def test_creation_is_not_idempotent(client, trip):
    payload = {"dayNumber": 1, "activityType": "attraction", "title": "Eiffel Tower"}

    first = client.post(f"/trips/{trip['id']}/itinerary", json=payload)
    second = client.post(f"/trips/{trip['id']}/itinerary", json=payload)

    assert first.status_code == second.status_code == 201
    assert first.json()["id"] != second.json()["id"]


def test_itinerary_is_sorted_by_day_then_start_time(client, trip):
    for payload in [
        {"dayNumber": 2, "activityType": "activity", "title": "Day two morning", "startTime": "10:00"},
        {"dayNumber": 1, "activityType": "restaurant", "title": "Untimed snack"},
        {"dayNumber": 1, "activityType": "attraction", "title": "Afternoon museum", "startTime": "14:00"},
        {"dayNumber": 1, "activityType": "transport", "title": "Early train", "startTime": "08:15"},
    ]:
        assert client.post(f"/trips/{trip['id']}/itinerary", json=payload).status_code == 201

    response = client.get(f"/trips/{trip['id']}")

    assert response.status_code == 200
    titles = [item["title"] for item in response.json()["itinerary"]]
    assert titles == ["Early train", "Afternoon museum", "Untimed snack", "Day two morning"]


def test_stored_item_is_returned_with_trip(client, trip):
    created = client.post(
        f"/trips/{trip['id']}/itinerary",
        json={"dayNumber": 1, "activityType": "attraction", "title": "Louvre", "cost": 20, "startTime": "09:00"},
    ).json()

    itinerary = client.get(f"/trips/{trip['id']}").json()["itinerary"]

    assert itinerary == [created]


def test_deleting_trip_removes_its_items(client, trip, run_async):
    client.post(
        f"/trips/{trip['id']}/itinerary",
        json={"dayNumber": 1, "activityType": "attraction", "title": "Louvre"},
    )
    assert run_async(_count_items(trip["id"])) == 1

    response = client.delete(f"/trips/{trip['id']}")
    assert response.status_code == 200

    assert client.get(f"/trips/{trip['id']}").status_code == 404
    assert run_async(_count_items(trip["id"])) == 0

    response = client.post(
        f"/trips/{trip['id']}/itinerary",
        json={"dayNumber": 1, "activityType": "attraction", "title": "Louvre"},
    )
    assert response.status_code == 404


@pytest.mark.parametrize(
    "overrides, fragment",
    [
        ({"cost": 1e20}, "cost"),
        ({"cost": 2**31}, "cost"),
        ({"dayNumber": 2**63}, "dayNumber"),
    ],
)
def test_values_too_large_for_storage_are_rejected(client, trip, run_async, overrides, fragment):
    payload = {"dayNumber": 1, "activityType": "attraction", "title": "Louvre", **overrides}

    response = client.post(f"/trips/{trip['id']}/itinerary", json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "invalid_argument"
    assert fragment in body["detail"]
    assert run_async(_count_items(trip["id"])) == 0


def test_largest_storable_values_are_accepted(client, trip):
    response = client.post(
        f"/trips/{trip['id']}/itinerary",
        json={"dayNumber": 2**31 - 1, "activityType": "attraction", "title": "Louvre", "cost": 2**31 - 1},
    )

    assert response.status_code == 201
    assert response.json()["cost"] == 2**31 - 1


def test_out_of_range_trip_id_is_not_found(client):
    response = client.post(
        f"/trips/{2**63}/itinerary",
        json={"dayNumber": 1, "activityType": "attraction", "title": "Louvre"},
    )

    assert response.status_code == 404
    assert response.json() == {"code": "not_found", "detail": "trip not found"}
