from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from datetime import datetime
from app.models.checklist.checklist_models import ChecklistType


class ChecklistCreate(BaseModel):
    text: str = Field(..., min_length=1, max_length=200)
    category: Optional[str] = None


class ChecklistUpdate(BaseModel):
    text: Optional[str] = Field(None, min_length=1, max_length=200)
    category: Optional[str] = None
    completed: Optional[bool] = None


class ChecklistResponse(BaseModel):
    id: str
    list_type: ChecklistType
    text: str
    category: Optional[str] = None
    completed: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ChecklistGroup(BaseModel):
    category: str
    items: List[ChecklistResponse]


class ChecklistListResponse(BaseModel):
    list_type: ChecklistType
    items: List[ChecklistResponse]
    # packing list only
    groups: List[ChecklistGroup] = []


class ChecklistProgress(BaseModel):
    total: int
    completed: int
    pending: int
    completion_percentage: float


class ChecklistOverview(BaseModel):
    lists: Dict[str, ChecklistProgress]
