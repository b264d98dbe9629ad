"""ProductionSchedule model."""
from datetime import datetime

from sqlalchemy import Column, Text, TIMESTAMP

from . import Base, JSONDocument


class ProductionSchedule(Base):
    """Weekly production schedule for the central kitchen.

    ``schedule_data`` holds the planner's document as-is, e.g.::

        {"weekStart": "2026-01-19", "days": [
            {"date": "2026-01-19", "items": [
                {"recipeName": "Brownies 1 KG", "quantity": 2, "adjustedQuantity": 3}
            ]}
        ]}
    """

    __tablename__ = "production_schedules"

    schedule_id = Column(Text, primary_key=True)
    schedule_data = Column(JSONDocument, nullable=False)
    created_at = Column(TIMESTAMP, default=datetime.utcnow)
    updated_at = Column(TIMESTAMP, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def days(self) -> list[dict]:
        return (self.schedule_data or {}).get("days") or []

    def __repr__(self):
        return f"<ProductionSchedule(schedule_id='{self.schedule_id}')>"
