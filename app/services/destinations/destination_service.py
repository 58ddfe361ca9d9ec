from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from app.core.logger import logger
from app.models.destination.destination_model import Destination
from app.schemas.destination.destination_schema import DestinationResponse


async def list_destinations(db: AsyncSession) -> List[DestinationResponse]:
    result = await db.execute(select(Destination).order_by(Destination.name))
    destinations = result.scalars().all()

    logger.info(f"Retrieved {len(destinations)} destinations")
    return [DestinationResponse.model_validate(dest.to_dict()) for dest in destinations]
