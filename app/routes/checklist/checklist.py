from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.models.checklist.checklist_models import ChecklistType
from app.schemas.checklist.checklist import (
    ChecklistCreate, ChecklistUpdate, ChecklistResponse, ChecklistListResponse, ChecklistOverview
)
from app.services.checklist.checklist_service import (
    get_checklist_view, add_checklist_item, update_checklist_item, toggle_checklist_item,
    delete_checklist_item, get_checklist_progress
)

router = APIRouter(prefix="/checklist", tags=["Pre-trip Checklist"])


# Progress Tracking
@router.get("/progress", response_model=ChecklistOverview)
async def get_progress(session: AsyncSession = Depends(get_db)):
    """Completion statistics for the todo and packing lists."""
    return ChecklistOverview(lists=await get_checklist_progress(session))


@router.get("/{list_type}", response_model=ChecklistListResponse)
async def get_list(list_type: ChecklistType, session: AsyncSession = Depends(get_db)):
    return await get_checklist_view(session, list_type)


@router.post("/{list_type}", response_model=ChecklistResponse, status_code=status.HTTP_201_CREATED)
async def add_item(list_type: ChecklistType, data: ChecklistCreate, session: AsyncSession = Depends(get_db)):
    return await add_checklist_item(session, list_type, data)


@router.patch("/items/{item_id}", response_model=ChecklistResponse)
async def update_item(item_id: str, data: ChecklistUpdate, session: AsyncSession = Depends(get_db)):
    item = await update_checklist_item(session, item_id, data)
    if not item:
        raise HTTPException(status_code=404, detail="Checklist item not found")
    return item


@router.post("/items/{item_id}/toggle", response_model=ChecklistResponse)
async def toggle_item(item_id: str, session: AsyncSession = Depends(get_db)):
    item = await toggle_checklist_item(session, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Checklist item not found")
    return item


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(item_id: str, session: AsyncSession = Depends(get_db)):
    await delete_checklist_item(session, item_id)
