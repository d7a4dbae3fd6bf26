from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from fastapi import HTTPException
from typing import Dict, List, Optional
from datetime import datetime
import uuid

from app.core.logger import logger
from app.data.default_lists import INITIAL_CHECKLIST
from app.models.checklist.checklist_models import (
    ChecklistItem, ChecklistType, PACKING_CATEGORIES, DEFAULT_PACKING_CATEGORY
)
from app.schemas.checklist.checklist import (
    ChecklistCreate, ChecklistUpdate, ChecklistGroup, ChecklistListResponse,
    ChecklistProgress, ChecklistResponse
)


def _validate_category(list_type: ChecklistType, category: Optional[str]) -> Optional[str]:
    if list_type != ChecklistType.packing:
        return None
    if category is None:
        return DEFAULT_PACKING_CATEGORY
    if category not in PACKING_CATEGORIES:
        raise HTTPException(
            status_code=422,
            detail=f"Unknown packing category {category!r}, expected one of {PACKING_CATEGORIES}"
        )
    return category


async def seed_checklist_if_empty(session: AsyncSession) -> int:
    count = (await session.execute(select(func.count(ChecklistItem.id)))).scalar()
    if count:
        return 0
    seeded = 0
    for list_type, rows in INITIAL_CHECKLIST.items():
        for row in rows:
            session.add(ChecklistItem(list_type=ChecklistType(list_type), completed=False, **row))
            seeded += 1
    await session.commit()
    logger.info(f"Seeded {seeded} checklist items")
    return seeded


# CRUD Operations
async def get_checklist(session: AsyncSession, list_type: ChecklistType) -> List[ChecklistItem]:
    result = await session.execute(
        select(ChecklistItem)
        .where(ChecklistItem.list_type == list_type)
        .order_by(ChecklistItem.created_at.asc(), ChecklistItem.id.asc())
    )
    return result.scalars().all()


async def get_checklist_view(session: AsyncSession, list_type: ChecklistType) -> ChecklistListResponse:
    """The list, plus its items grouped by category when it is the packing list."""
    items = await get_checklist(session, list_type)
    responses = [ChecklistResponse.model_validate(item) for item in items]
    groups = []
    if list_type == ChecklistType.packing:
        for category in PACKING_CATEGORIES:
            members = [r for r, item in zip(responses, items) if item.effective_category == category]
            groups.append(ChecklistGroup(category=category, items=members))
    return ChecklistListResponse(list_type=list_type, items=responses, groups=groups)


async def add_checklist_item(
    session: AsyncSession,
    list_type: ChecklistType,
    data: ChecklistCreate
) -> ChecklistItem:
    text = data.text.strip()
    if not text:
        raise HTTPException(status_code=422, detail="Checklist text cannot be blank")
    item = ChecklistItem(
        id=f"{list_type.value}-{uuid.uuid4().hex[:12]}",
        list_type=list_type,
        text=text,
        category=_validate_category(list_type, data.category),
        completed=False,
    )
    session.add(item)
    await session.commit()
    await session.refresh(item)
    return item


async def update_checklist_item(
    session: AsyncSession,
    item_id: str,
    update_data: ChecklistUpdate
) -> Optional[ChecklistItem]:
    item = await session.get(ChecklistItem, item_id)
    if not item:
        return None

    changes = update_data.model_dump(exclude_unset=True)
    if "text" in changes:
        text = (changes["text"] or "").strip()
        if not text:
            raise HTTPException(status_code=422, detail="Checklist text cannot be blank")
        changes["text"] = text
    if "category" in changes:
        changes["category"] = _validate_category(item.list_type, changes["category"])

    for field, value in changes.items():
        setattr(item, field, value)

    item.updated_at = datetime.utcnow()
    await session.commit()
    await session.refresh(item)
    return item


async def toggle_checklist_item(session: AsyncSession, item_id: str) -> Optional[ChecklistItem]:
    item = await session.get(ChecklistItem, item_id)
    if not item:
        return None
    item.completed = not item.completed
    item.updated_at = datetime.utcnow()
    await session.commit()
    await session.refresh(item)
    return item


async def delete_checklist_item(session: AsyncSession, item_id: str) -> bool:
    item = await session.get(ChecklistItem, item_id)
    if not item:
        return False
    await session.delete(item)
    await session.commit()
    return True


# Progress Tracking
async def get_checklist_progress(session: AsyncSession) -> Dict[str, ChecklistProgress]:
    result = await session.execute(
        select(ChecklistItem.list_type, ChecklistItem.completed, func.count(ChecklistItem.id))
        .group_by(ChecklistItem.list_type, ChecklistItem.completed)
    )

    counts = {t.value: {"completed": 0, "pending": 0} for t in ChecklistType}
    for list_type, completed, count in result:
        counts[list_type.value]["completed" if completed else "pending"] = count

    progress = {}
    for list_type, c in counts.items():
        total = c["completed"] + c["pending"]
        progress[list_type] = ChecklistProgress(
            total=total,
            completed=c["completed"],
            pending=c["pending"],
            completion_percentage=round(c["completed"] / total * 100, 2) if total > 0 else 0,
        )
    return progress
