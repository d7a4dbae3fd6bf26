from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict
from enum import Enum


class ItemType(str, Enum):
    transport = "transport"
    food = "food"
    sight = "sight"
    accommodation = "accommodation"
    activity = "activity"
    shopping = "shopping"


# Fields owned by the ordering core; everything else is payload
POSITION_FIELDS = ("id", "day", "sort_order")


class ItineraryItem(BaseModel):
    # Unknown keys (koreanAddress, ticketInfo, images, ...) ride along untouched
    model_config = ConfigDict(extra="allow")

    id: str
    day: int
    sort_order: int = Field(..., ge=0)
    time: str = ""
    type: ItemType
    title: str
    description: Optional[str] = None

    def payload(self) -> dict:
        """Everything except the position fields, ready to be serialized."""
        return self.model_dump(mode="json", exclude=set(POSITION_FIELDS), exclude_none=True)

    def moved(self, sort_order: int, day: Optional[int] = None) -> "ItineraryItem":
        return self.model_copy(update={
            "sort_order": sort_order,
            "day": self.day if day is None else day,
        })


class ItineraryItemForm(BaseModel):
    """Editor form data. Every field is optional; the editor decides what is required."""
    model_config = ConfigDict(extra="allow")

    time: Optional[str] = None
    type: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    koreanAddress: Optional[str] = None
    naverMapLink: Optional[str] = None
    notes: Optional[str] = None
    images: Optional[List[str]] = None


class DayResponse(BaseModel):
    day: int
    date: Optional[str] = None
    weekday: Optional[str] = None
    items: List[ItineraryItem] = []


class SyncStatus(BaseModel):
    pending: List[str] = []
    failed: Dict[str, str] = {}


class ItineraryDaysResponse(BaseModel):
    days: List[DayResponse]
    stale: bool = False
    sync: SyncStatus = SyncStatus()


class DropRequest(BaseModel):
    active_id: str
    # every droppable under the pointer at release time
    over_ids: List[str] = []
    placement: str = Field("before", pattern="^(before|after)$")


class DropResponse(BaseModel):
    state: str
    day: int
    items: List[ItineraryItem]
