from sqlalchemy import Column, Integer, String, Date, Enum, DateTime, Text, CheckConstraint, func
from app.core.database import Base
from sqlalchemy.orm import relationship
import enum
import json
from app.schemas.trip.trip_schema import TripPreferences

class TripStatusEnum(str, enum.Enum):
    draft = "draft"
    planned = "planned"
    booked = "booked"
    completed = "completed"

class Trip(Base):
    __tablename__ = "trips"
    __table_args__ = (
        CheckConstraint("budget_min IS NULL OR budget_min >= 0", name="ck_trips_budget_min_non_negative"),
        CheckConstraint("budget_max IS NULL OR budget_max >= 0", name="ck_trips_budget_max_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    title = Column(String, nullable=False)
    destination = Column(String, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    budget_min = Column(Integer, nullable=True)
    budget_max = Column(Integer, nullable=True)
    # serialized JSON, see load_preferences()
    preferences = Column(Text, nullable=False)
    status = Column(Enum(TripStatusEnum, name="trip_status"), nullable=False, default=TripStatusEnum.draft)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    items = relationship("ItineraryItem", back_populates="trip", passive_deletes=True)

    def load_preferences(self) -> dict:
        """Deserialize stored preferences, substituting defaults when the payload is unreadable."""
        try:
            raw = json.loads(self.preferences) if isinstance(self.preferences, str) else self.preferences
            return TripPreferences.model_validate(raw).model_dump(by_alias=True, exclude_none=True)
        except (TypeError, ValueError):
            return TripPreferences().model_dump(by_alias=True, exclude_none=True)

    def to_dict(self):
        """Convert Trip instance to a dictionary for the response schemas"""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "destination": self.destination,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "budget_min": self.budget_min,
            "budget_max": self.budget_max,
            "preferences": self.load_preferences(),
            "status": self.status.value if isinstance(self.status, TripStatusEnum) else self.status,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
