# app/models/itinerary/itinerary_item.py

import json
from sqlalchemy import Column, Integer, String, DateTime, Text, Index
from datetime import datetime
from app.core.database import Base


class ItineraryItemRecord(Base):
    """Relational row for one itinerary item.

    Only ``day`` and ``sort_order`` get their own columns; every other field
    lives in ``payload`` as JSON and is never interpreted by the database.
    """
    __tablename__ = "itinerary_items"

    id = Column(String, primary_key=True, index=True)
    day = Column(Integer, nullable=False)
    # not unique: a batch reorder passes through duplicate values mid-transaction
    sort_order = Column(Integer, nullable=False, default=0)
    payload = Column(Text, nullable=False, default="{}")
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("ix_itinerary_items_day_sort_order", "day", "sort_order"),
    )

    def to_dict(self):
        """Flatten the row back into the item's field mapping"""
        data = json.loads(self.payload or "{}")
        data.update({
            "id": self.id,
            "day": self.day,
            "sort_order": self.sort_order,
        })
        return data
