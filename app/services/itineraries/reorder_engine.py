import asyncio
from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from typing import Dict, List, Optional, Sequence

from app.core.exceptions import WriteFailed
from app.core.logger import logger
from app.schemas.itineraries.itinerary import ItineraryItem
from app.services.itineraries.day_index import renumber
from app.services.itineraries.item_store import ItemStore

# Droppable id of the trash bin
TRASH_TARGET_ID = "trash-bin"


class DragState(str, Enum):
    idle = "idle"
    dragging = "dragging"
    reordered = "reordered"
    deleted = "deleted"
    cancelled = "cancelled"


@dataclass
class DropOutcome:
    active_id: str
    over_id: Optional[str]
    state: DragState
    placement: str = "before"


def resolve_drop_target(target_ids: Sequence[str]) -> Optional[str]:
    """Pick the drop target among everything under the pointer.

    The trash bin beats any item so that a delete is never ambiguous.
    Otherwise the first target wins, in the collision order the client sent.
    """
    if TRASH_TARGET_ID in target_ids:
        return TRASH_TARGET_ID
    return next((t for t in target_ids if t), None)


class DragSession:
    """One drag gesture: idle -> dragging -> reordered | deleted | cancelled."""

    def __init__(self):
        self.state = DragState.idle
        self.active_id: Optional[str] = None
        self.over_id: Optional[str] = None

    def start(self, active_id: str) -> None:
        if self.state == DragState.dragging:
            raise RuntimeError("A drag gesture is already in progress")
        self.state = DragState.dragging
        self.active_id = active_id
        self.over_id = None

    def hover(self, *target_ids: str) -> Optional[str]:
        if self.state != DragState.dragging:
            raise RuntimeError("hover() called outside of a drag gesture")
        self.over_id = resolve_drop_target(target_ids)
        return self.over_id

    def end(self, placement: str = "before") -> DropOutcome:
        if self.state != DragState.dragging:
            raise RuntimeError("end() called outside of a drag gesture")
        if self.over_id is None or self.over_id == self.active_id:
            self.state = DragState.cancelled
        elif self.over_id == TRASH_TARGET_ID:
            self.state = DragState.deleted
        else:
            self.state = DragState.reordered
        return DropOutcome(self.active_id, self.over_id, self.state, placement)


def move_item(ordered_ids: Sequence[str], active_id: str, over_id: str,
              placement: str = "before") -> List[str]:
    """Take ``active_id`` out and put it right before (or after) ``over_id``."""
    if active_id == over_id:
        raise ValueError("An item cannot be dropped on itself")
    if active_id not in ordered_ids or over_id not in ordered_ids:
        raise ValueError(f"{active_id!r} and {over_id!r} must both belong to the list")
    ids = [i for i in ordered_ids if i != active_id]
    index = ids.index(over_id)
    if placement == "after":
        index += 1
    ids.insert(index, active_id)
    return ids


class WriteStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    failed = "failed"


class PendingWriteTracker:
    """Keeps in-flight store writes by key so callers can ask whether
    optimistic state has been confirmed yet."""

    def __init__(self):
        self._tasks: Dict[str, asyncio.Task] = {}
        self._errors: Dict[str, str] = {}
        # bumped by every track(); lets a reader notice writes that started meanwhile
        self.generation = 0

    def track(self, key: str, coro) -> asyncio.Task:
        task = asyncio.ensure_future(coro)
        self.generation += 1
        self._tasks[key] = task
        self._errors.pop(key, None)
        task.add_done_callback(partial(self._settle, key))
        return task

    def _settle(self, key: str, task: asyncio.Task) -> None:
        if self._tasks.get(key) is not task:
            # a newer write for the same key owns the status now
            return
        if task.cancelled():
            self._errors[key] = "cancelled"
        elif task.exception() is not None:
            self._errors[key] = str(task.exception())

    def status(self, key: str) -> Optional[WriteStatus]:
        task = self._tasks.get(key)
        if task is None:
            return None
        if not task.done():
            return WriteStatus.pending
        return WriteStatus.failed if key in self._errors else WriteStatus.confirmed

    def pending(self) -> List[str]:
        return sorted(key for key, task in self._tasks.items() if not task.done())

    def failures(self) -> Dict[str, str]:
        return dict(self._errors)

    async def wait_pending(self) -> None:
        """Block until every write in flight has settled, successfully or not."""
        tasks = [task for task in self._tasks.values() if not task.done()]
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    def clear_settled(self) -> None:
        """Forget finished writes, e.g. once a full reload has re-derived ground truth."""
        self._tasks = {key: task for key, task in self._tasks.items() if not task.done()}
        self._errors = {key: err for key, err in self._errors.items() if key in self._tasks}


class DayWriteQueue:
    """Runs mutating store calls one at a time per day, in submission order."""

    def __init__(self):
        self._locks: Dict[int, asyncio.Lock] = {}

    def lock(self, day: int) -> asyncio.Lock:
        if day not in self._locks:
            self._locks[day] = asyncio.Lock()
        return self._locks[day]

    async def run(self, day: int, func, *args):
        async with self.lock(day):
            return await func(*args)


@dataclass
class DropResult:
    state: DragState
    day: int
    # optimistic order of the day, already renumbered
    items: List[ItineraryItem] = field(default_factory=list)
    write: Optional[asyncio.Task] = None

    async def confirmed(self) -> None:
        """Wait for the store to confirm; raises WriteFailed if it did not."""
        if self.write is not None:
            await self.write


class ReorderEngine:
    def __init__(self, store: ItemStore, tracker: Optional[PendingWriteTracker] = None,
                 queue: Optional[DayWriteQueue] = None):
        self.store = store
        self.tracker = tracker or PendingWriteTracker()
        self.queue = queue or DayWriteQueue()

    def schedule(self, day: int, key: str, func, *args) -> asyncio.Task:
        """Queue a store call behind earlier writes for ``day`` and track it under ``key``."""
        async def write():
            try:
                return await self.queue.run(day, func, *args)
            except WriteFailed as e:
                logger.error(f"Write {key} for day {day} failed, view may be stale: {e}")
                raise

        return self.tracker.track(key, write())

    def apply(self, day: int, day_items: List[ItineraryItem], outcome: DropOutcome) -> DropResult:
        """Turn a finished drag into the day's new order and start persisting it.

        Must be called from the running event loop. The returned items are
        the optimistic state; ``DropResult.write`` resolves once the store
        has caught up. Nothing is rolled back if that write fails.
        """
        ids = [item.id for item in day_items]
        cancelled = DropResult(DragState.cancelled, day, list(day_items))

        if outcome.state == DragState.cancelled or outcome.active_id not in ids:
            return cancelled

        if outcome.state == DragState.deleted:
            remaining = renumber([item for item in day_items if item.id != outcome.active_id])
            logger.info(f"Deleting itinerary item {outcome.active_id} from day {day}")
            write = self.schedule(
                day, f"day:{day}", self.store.remove_from_day,
                day, outcome.active_id, [item.id for item in remaining],
            )
            return DropResult(DragState.deleted, day, remaining, write)

        if outcome.over_id not in ids:
            # dropped on an item from another day
            return cancelled

        new_ids = move_item(ids, outcome.active_id, outcome.over_id, outcome.placement)
        by_id = {item.id: item for item in day_items}
        reordered = renumber([by_id[item_id] for item_id in new_ids])
        logger.info(f"Reordering day {day}: moved {outcome.active_id} {outcome.placement} {outcome.over_id}")
        write = self.schedule(day, f"day:{day}", self.store.batch_set_sort_order, day, new_ids)
        return DropResult(DragState.reordered, day, reordered, write)
