from fastapi import APIRouter, Depends, HTTPException, Path, status
from typing import List
from app.core.exceptions import ItemNotFound, ItemValidationError, StoreUnavailable, WriteFailed
from app.core.logger import logger
from app.dependencies.itinerary import get_itinerary_service
from app.schemas.itineraries.itinerary import (
    DropRequest, DropResponse, ItineraryDaysResponse, ItineraryItem,
    ItineraryItemForm, SyncStatus
)
from app.services.itineraries.itinerary_service import ItineraryService


router = APIRouter(prefix="/itinerary", tags=["itinerary"])


def _write_failed(e: WriteFailed) -> HTTPException:
    # the optimistic change stays visible until the next full reload
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Change not saved: {e}")


def _invalid(e: ItemValidationError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.to_dict())


def _unavailable(e: StoreUnavailable) -> HTTPException:
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


# 🔹 All days, grouped and ordered
@router.get("/days", response_model=ItineraryDaysResponse)
async def get_days(
    itinerary_service: ItineraryService = Depends(get_itinerary_service)
):
    return await itinerary_service.days_overview()


# 🔹 One day
@router.get("/days/{day}", response_model=List[ItineraryItem])
async def get_day(
    day: int = Path(..., ge=1),
    itinerary_service: ItineraryService = Depends(get_itinerary_service)
):
    items = await itinerary_service.get_day(day)
    if not items:
        raise HTTPException(status_code=404, detail=f"No itinerary for day {day}")
    return items


# 🔹 Add an item to the end of a day
@router.post("/days/{day}/items", response_model=ItineraryItem, status_code=status.HTTP_201_CREATED)
async def create_item(
    form: ItineraryItemForm,
    day: int = Path(..., ge=1),
    itinerary_service: ItineraryService = Depends(get_itinerary_service)
):
    try:
        return await itinerary_service.create_item(day, form.model_dump(exclude_unset=True))
    except ItemValidationError as e:
        raise _invalid(e)
    except StoreUnavailable as e:
        raise _unavailable(e)
    except WriteFailed as e:
        raise _write_failed(e)


# 🔹 Edit an item in place
@router.put("/items/{item_id}", response_model=ItineraryItem)
async def update_item(
    item_id: str,
    form: ItineraryItemForm,
    itinerary_service: ItineraryService = Depends(get_itinerary_service)
):
    try:
        return await itinerary_service.edit_item(item_id, form.model_dump(exclude_unset=True))
    except ItemNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ItemValidationError as e:
        raise _invalid(e)
    except StoreUnavailable as e:
        raise _unavailable(e)
    except WriteFailed as e:
        raise _write_failed(e)


# 🔹 Delete an item, compacting its day
@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    item_id: str,
    itinerary_service: ItineraryService = Depends(get_itinerary_service)
):
    try:
        await itinerary_service.delete_item(item_id)
    except StoreUnavailable as e:
        raise _unavailable(e)
    except WriteFailed as e:
        raise _write_failed(e)


# 🔹 Drag-end outcome
@router.post("/days/{day}/drop", response_model=DropResponse)
async def drop_item(
    drop: DropRequest,
    day: int = Path(..., ge=1),
    itinerary_service: ItineraryService = Depends(get_itinerary_service)
):
    try:
        result = await itinerary_service.handle_drop(day, drop.active_id, drop.over_ids, drop.placement)
    except StoreUnavailable as e:
        raise _unavailable(e)
    except WriteFailed as e:
        logger.error(f"🔥 Drop of {drop.active_id} on day {day} was not saved: {e}")
        raise _write_failed(e)
    return DropResponse(state=result.state.value, day=day, items=result.items)


# 🔹 Which optimistic changes are still unconfirmed
@router.get("/sync", response_model=SyncStatus)
async def sync_status(
    itinerary_service: ItineraryService = Depends(get_itinerary_service)
):
    return itinerary_service.sync_status()
