import copy
import os
import tempfile

import pytest

# Point the app at a throwaway SQLite database before anything imports settings
_db_dir = tempfile.mkdtemp(prefix="tripplanner-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ["OPENROUTER_API_KEY"] = ""
os.environ["AI_FALLBACK_ENABLED"] = "true"
os.environ["DEFAULT_USER_ID"] = "default-user"

from fastapi.testclient import TestClient  # noqa: E402

from app.main import app  # noqa: E402


PARIS_TRIP = {
    "title": "Paris Trip",
    "destination": "Paris",
    "startDate": "2024-06-01",
    "endDate": "2024-06-03",
    "preferences": {
        "interests": ["culture"],
        "travelStyle": "mid-range",
        "accommodation": "hotel",
        "pace": "moderate",
        "groupSize": 2,
    },
}


@pytest.fixture(scope="session")
def client():
    # entering the context runs the startup event, which creates the tables
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def run_async(client):
    """Run a coroutine function on the app's event loop."""
    def _run(fn, *args):
        return client.portal.call(fn, *args)
    return _run


@pytest.fixture
def paris_trip():
    return copy.deepcopy(PARIS_TRIP)


@pytest.fixture
def trip(client, paris_trip):
    response = client.post("/trips", json=paris_trip)
    assert response.status_code == 201
    return response.json()
