# app/models/itinerary/itinerary_item.py

from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Text, Boolean, CheckConstraint, func
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.schemas.itineraries.itinerary_item import ACTIVITY_TYPES

class ItineraryItem(Base):
    __tablename__ = "itinerary_items"
    __table_args__ = (
        CheckConstraint("day_number >= 1", name="ck_itinerary_items_day_number_positive"),
        CheckConstraint(
            "activity_type IN ({})".format(", ".join(f"'{t}'" for t in ACTIVITY_TYPES)),
            name="ck_itinerary_items_activity_type",
        ),
        CheckConstraint("cost IS NULL OR cost >= 0", name="ck_itinerary_items_cost_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    day_number = Column(Integer, nullable=False)
    # HH:MM, 24-hour
    start_time = Column(String(5), nullable=True)
    end_time = Column(String(5), nullable=True)
    activity_type = Column(String(32), nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String, nullable=True)
    cost = Column(Integer, nullable=True)
    booking_url = Column(String, nullable=True)
    weather_dependent = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    trip = relationship("Trip", back_populates="items")

    def to_dict(self):
        """Convert ItineraryItem instance to a dictionary for the response schemas"""
        return {
            "id": self.id,
            "trip_id": self.trip_id,
            "day_number": self.day_number,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "activity_type": self.activity_type,
            "title": self.title,
            "description": self.description,
            "location": self.location,
            "cost": self.cost,
            "booking_url": self.booking_url,
            "weather_dependent": self.weather_dependent,
            "created_at": self.created_at,
        }
