from sqlalchemy import Column, Integer, String, Float, DateTime, Text, JSON, func
from app.core.database import Base

class Destination(Base):
    __tablename__ = "destinations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    country = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String, nullable=True)
    average_cost_per_day = Column(Integer, nullable=True)
    best_months = Column(JSON, nullable=False, default=list)
    tags = Column(JSON, nullable=False, default=list)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def to_dict(self):
        coordinates = None
        if self.latitude is not None and self.longitude is not None:
            coordinates = {"lat": self.latitude, "lng": self.longitude}
        return {
            "id": self.id,
            "name": self.name,
            "country": self.country,
            "description": self.description,
            "image_url": self.image_url,
            "average_cost_per_day": self.average_cost_per_day,
            "best_months": list(self.best_months or []),
            "tags": list(self.tags or []),
            "coordinates": coordinates,
            "created_at": self.created_at,
        }
