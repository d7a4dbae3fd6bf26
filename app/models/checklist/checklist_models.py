from sqlalchemy import Column, String, DateTime, Boolean, Enum, Index
from datetime import datetime
from app.core.database import Base
import enum


class ChecklistType(str, enum.Enum):
    todo = "todo"
    packing = "packing"


PACKING_CATEGORIES = ["文件", "3C產品", "盥洗/化妝品", "衣物", "其他"]
DEFAULT_PACKING_CATEGORY = "其他"


class ChecklistItem(Base):
    __tablename__ = "checklist_items"

    id = Column(String, primary_key=True, index=True)
    list_type = Column(Enum(ChecklistType), nullable=False, default=ChecklistType.todo)
    text = Column(String, nullable=False)
    category = Column(String, nullable=True)
    completed = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("ix_checklist_items_list_type", "list_type"),
        Index("ix_checklist_items_category", "category"),
    )

    @property
    def effective_category(self):
        if self.list_type != ChecklistType.packing:
            return None
        return self.category or DEFAULT_PACKING_CATEGORY
