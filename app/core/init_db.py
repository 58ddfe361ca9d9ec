import asyncio
from sqlalchemy import func, select
from app.core.database import engine, Base, SessionLocal
from app.core.logger import logger
from app.models import Destination

SEED_DESTINATIONS = [
    {
        "name": "Paris",
        "country": "France",
        "description": "Art, cafes and grand boulevards.",
        "average_cost_per_day": 180,
        "best_months": ["April", "May", "June", "September"],
        "tags": ["culture", "food", "art", "architecture"],
        "latitude": 48.8566,
        "longitude": 2.3522,
    },
    {
        "name": "Kyoto",
        "country": "Japan",
        "description": "Temples, gardens and traditional tea houses.",
        "average_cost_per_day": 150,
        "best_months": ["March", "April", "October", "November"],
        "tags": ["culture", "history", "nature"],
        "latitude": 35.0116,
        "longitude": 135.7681,
    },
    {
        "name": "Lisbon",
        "country": "Portugal",
        "description": "Hilltop viewpoints, trams and seafood.",
        "average_cost_per_day": 110,
        "best_months": ["May", "June", "September"],
        "tags": ["food", "nightlife", "history"],
        "latitude": 38.7223,
        "longitude": -9.1393,
    },
]


async def init_db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_destinations(destinations=None) -> int:
    """Insert reference destinations when the table is empty. Returns the number inserted."""
    destinations = SEED_DESTINATIONS if destinations is None else destinations
    async with SessionLocal() as db:
        existing = await db.scalar(select(func.count()).select_from(Destination))
        if existing:
            logger.info(f"Destinations already seeded ({existing} rows)")
            return 0
        db.add_all([Destination(**dest) for dest in destinations])
        await db.commit()
    logger.info(f"Seeded {len(destinations)} destinations")
    return len(destinations)


async def main():
    await init_db()
    await seed_destinations()


if __name__ == "__main__":
    asyncio.run(main())
