from typing import Dict, List, Optional, Sequence, Tuple

from app.core.exceptions import ItemNotFound, StoreUnavailable
from app.core.logger import logger
from app.data.default_itinerary import day_metadata
from app.schemas.itineraries.itinerary import (
    DayResponse, ItineraryDaysResponse, ItineraryItem, SyncStatus
)
from app.services.itineraries.day_index import is_dense, project
from app.services.itineraries.item_editor import prepare
from app.services.itineraries.item_store import ItemStore
from app.services.itineraries.reorder_engine import (
    TRASH_TARGET_ID, DragSession, DragState, DropResult, ReorderEngine
)


class ItineraryService:
    """Keeps the last known per-day projection and routes every mutation
    through the editor and the reorder engine.

    Mutations update the projection optimistically, then wait for the store.
    A failed write leaves the projection ahead of the store until the next
    ``load_days`` reads ground truth again.
    """

    def __init__(self, store: ItemStore, engine: Optional[ReorderEngine] = None):
        self.store = store
        self.engine = engine or ReorderEngine(store)
        self.tracker = self.engine.tracker
        self._days: Dict[int, List[ItineraryItem]] = {}
        self._loaded = False

    async def load_days(self) -> Tuple[Dict[int, List[ItineraryItem]], bool]:
        """Re-derive the projection from the store.

        Returns ``(days, stale)``; ``stale`` is True when the store could not
        be read and the last known projection (possibly empty) is served.

        Writes already in flight are waited for first. If another mutation
        starts while the store is being read, its optimistic state is newer
        than the read, so the projection is kept as is.
        """
        await self.tracker.wait_pending()
        generation = self.tracker.generation
        try:
            items = await self.store.get_all()
        except StoreUnavailable as e:
            logger.warning(f"Serving last known itinerary, store unavailable: {e}")
            return self._days, True

        if self.tracker.generation != generation:
            logger.debug("Itinerary changed during reload, keeping the optimistic view")
            return self._days, False

        self._days = project(items)
        self._loaded = True
        self.tracker.clear_settled()
        for day, bucket in self._days.items():
            if not is_dense(bucket):
                logger.warning(f"Day {day} sort order is not dense: {[i.sort_order for i in bucket]}")
        return self._days, False

    async def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        items = await self.store.get_all()
        # a concurrent first mutation may have loaded and changed the view meanwhile
        if not self._loaded:
            self._days = project(items)
            self._loaded = True

    def _find(self, item_id: str) -> Optional[ItineraryItem]:
        for bucket in self._days.values():
            for item in bucket:
                if item.id == item_id:
                    return item
        return None

    def _set_day(self, day: int, items: List[ItineraryItem]) -> None:
        if items:
            self._days[day] = items
        else:
            self._days.pop(day, None)

    def sync_status(self) -> SyncStatus:
        return SyncStatus(pending=self.tracker.pending(), failed=self.tracker.failures())

    async def days_overview(self) -> ItineraryDaysResponse:
        days, stale = await self.load_days()
        meta = day_metadata()
        return ItineraryDaysResponse(
            days=[
                DayResponse(day=day, date=meta.get(day, (None, None))[0],
                            weekday=meta.get(day, (None, None))[1], items=items)
                for day, items in days.items()
            ],
            stale=stale,
            sync=self.sync_status(),
        )

    async def get_day(self, day: int) -> List[ItineraryItem]:
        days, _ = await self.load_days()
        return list(days.get(day, []))

    async def create_item(self, day: int, form_data: dict) -> ItineraryItem:
        await self._ensure_loaded()
        bucket = self._days.get(day, [])
        known_ids = [i.id for items in self._days.values() for i in items]
        item = prepare(form_data, day=day, day_length=len(bucket), existing_ids=known_ids)

        self._set_day(day, bucket + [item])
        logger.info(f"Adding itinerary item {item.id} to day {day} at position {item.sort_order}")
        await self.engine.schedule(day, f"item:{item.id}", self.store.upsert, item)
        return item

    async def edit_item(self, item_id: str, form_data: dict) -> ItineraryItem:
        await self._ensure_loaded()
        existing = self._find(item_id)
        if existing is None:
            raise ItemNotFound(item_id)
        item = prepare(form_data, existing)

        self._set_day(item.day, [item if i.id == item.id else i for i in self._days[item.day]])
        await self.engine.schedule(item.day, f"item:{item.id}", self.store.upsert, item)
        return item

    async def handle_drop(self, day: int, active_id: str, over_ids: Sequence[str],
                          placement: str = "before") -> DropResult:
        """Finish a drag gesture on ``day`` and wait for the store to confirm it."""
        await self._ensure_loaded()
        session = DragSession()
        session.start(active_id)
        session.hover(*over_ids)
        outcome = session.end(placement)

        result = self.engine.apply(day, self._days.get(day, []), outcome)
        if result.state != DragState.cancelled:
            self._set_day(day, result.items)
        await result.confirmed()
        return result

    async def delete_item(self, item_id: str) -> None:
        """Delete and compact the item's day. Unknown ids are a no-op."""
        await self._ensure_loaded()
        existing = self._find(item_id)
        if existing is None:
            await self.store.delete(item_id)
            return
        await self.handle_drop(existing.day, item_id, [TRASH_TARGET_ID])
