"""Tests for the drag state machine, the move algorithm and write tracking."""
import asyncio
from unittest.mock import AsyncMock

import pytest

from app.core.exceptions import WriteFailed
from app.services.itineraries.item_store import ItemStore
from app.services.itineraries.reorder_engine import (
    TRASH_TARGET_ID, DayWriteQueue, DragSession, DragState, DropOutcome,
    PendingWriteTracker, ReorderEngine, WriteStatus, move_item, resolve_drop_target
)


def ids_of(items):
    return [i.id for i in items]


@pytest.fixture
def day_items(make_item):
    return [make_item(item_id, day=2, sort_order=i) for i, item_id in enumerate("ABCD")]


@pytest.fixture
def mock_store():
    return AsyncMock(spec=ItemStore)


class TestMoveItem:

    def test_drop_before_target(self):
        assert move_item(list("ABCD"), "A", "C") == list("BACD")

    def test_drop_after_target(self):
        assert move_item(list("ABCD"), "A", "D", placement="after") == list("BCDA")

    def test_move_up(self):
        assert move_item(list("ABCD"), "D", "B") == list("ADBC")

    def test_same_item_rejected(self):
        with pytest.raises(ValueError):
            move_item(list("ABC"), "B", "B")

    def test_unknown_id_rejected(self):
        with pytest.raises(ValueError):
            move_item(list("ABC"), "A", "Z")


class TestDragSession:

    def test_reorder_transition(self):
        session = DragSession()
        assert session.state == DragState.idle

        session.start("A")
        assert session.state == DragState.dragging
        session.hover("C")
        outcome = session.end()

        assert session.state == DragState.reordered
        assert (outcome.active_id, outcome.over_id, outcome.state) == ("A", "C", DragState.reordered)

    def test_trash_wins_over_item_targets(self):
        assert resolve_drop_target(["B", TRASH_TARGET_ID, "C"]) == TRASH_TARGET_ID

        session = DragSession()
        session.start("A")
        session.hover("B", TRASH_TARGET_ID)
        assert session.end().state == DragState.deleted

    def test_no_target_cancels(self):
        session = DragSession()
        session.start("A")
        session.hover()
        assert session.end().state == DragState.cancelled

    def test_dropping_on_itself_cancels(self):
        session = DragSession()
        session.start("A")
        session.hover("A")
        assert session.end().state == DragState.cancelled

    def test_last_hover_wins(self):
        session = DragSession()
        session.start("A")
        session.hover(TRASH_TARGET_ID)
        session.hover("C")
        assert session.end().over_id == "C"

    def test_hover_outside_drag_is_an_error(self):
        with pytest.raises(RuntimeError):
            DragSession().hover("A")

    def test_cannot_start_twice(self):
        session = DragSession()
        session.start("A")
        with pytest.raises(RuntimeError):
            session.start("B")


class TestReorderEngine:

    @pytest.mark.asyncio
    async def test_reorder_persists_whole_day(self, mock_store, day_items):
        engine = ReorderEngine(mock_store)

        result = engine.apply(2, day_items, DropOutcome("A", "C", DragState.reordered))
        await result.confirmed()

        assert result.state == DragState.reordered
        assert ids_of(result.items) == list("BACD")
        assert [i.sort_order for i in result.items] == [0, 1, 2, 3]
        mock_store.batch_set_sort_order.assert_awaited_once_with(2, list("BACD"))
        mock_store.remove_from_day.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_compacts_remaining(self, mock_store, make_item):
        items = [make_item(x, day=1, sort_order=i) for i, x in enumerate("ABC")]
        engine = ReorderEngine(mock_store)

        result = engine.apply(1, items, DropOutcome("B", TRASH_TARGET_ID, DragState.deleted))
        await result.confirmed()

        assert result.state == DragState.deleted
        assert [(i.id, i.sort_order) for i in result.items] == [("A", 0), ("C", 1)]
        mock_store.remove_from_day.assert_awaited_once_with(1, "B", ["A", "C"])

    @pytest.mark.asyncio
    async def test_cancelled_touches_nothing(self, mock_store, day_items):
        engine = ReorderEngine(mock_store)

        result = engine.apply(2, day_items, DropOutcome("A", None, DragState.cancelled))

        assert result.state == DragState.cancelled
        assert result.write is None
        assert ids_of(result.items) == list("ABCD")
        mock_store.batch_set_sort_order.assert_not_called()

    @pytest.mark.asyncio
    async def test_target_from_another_day_cancels(self, mock_store, day_items):
        engine = ReorderEngine(mock_store)

        result = engine.apply(2, day_items, DropOutcome("A", "X-day3", DragState.reordered))

        assert result.state == DragState.cancelled
        mock_store.batch_set_sort_order.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_active_item_cancels(self, mock_store, day_items):
        engine = ReorderEngine(mock_store)

        result = engine.apply(2, day_items, DropOutcome("ghost", TRASH_TARGET_ID, DragState.deleted))

        assert result.state == DragState.cancelled
        mock_store.remove_from_day.assert_not_called()

    @pytest.mark.asyncio
    async def test_failed_write_is_surfaced_and_tracked(self, mock_store, day_items):
        mock_store.batch_set_sort_order.side_effect = WriteFailed("disk on fire")
        engine = ReorderEngine(mock_store)

        result = engine.apply(2, day_items, DropOutcome("D", "A", DragState.reordered))
        # optimistic order is available before the write settles
        assert ids_of(result.items) == list("DABC")

        with pytest.raises(WriteFailed):
            await result.confirmed()
        assert engine.tracker.status("day:2") == WriteStatus.failed
        assert "disk on fire" in engine.tracker.failures()["day:2"]

    @pytest.mark.asyncio
    async def test_writes_for_one_day_are_serialized(self, day_items):
        events = []
        release_first = asyncio.Event()
        store = AsyncMock(spec=ItemStore)

        async def batch(day, ordered_ids):
            events.append(("start", tuple(ordered_ids)))
            if not release_first.is_set() and len(events) == 1:
                await release_first.wait()
            events.append(("end", tuple(ordered_ids)))

        store.batch_set_sort_order.side_effect = batch
        engine = ReorderEngine(store)

        first = engine.apply(2, day_items, DropOutcome("A", "C", DragState.reordered))
        second = engine.apply(2, first.items, DropOutcome("D", "B", DragState.reordered))
        await asyncio.sleep(0)
        await asyncio.sleep(0)

        # second write waits behind the first
        assert events == [("start", tuple("BACD"))]
        assert engine.tracker.pending() == ["day:2"]

        release_first.set()
        await first.confirmed()
        await second.confirmed()

        assert events == [
            ("start", tuple("BACD")), ("end", tuple("BACD")),
            ("start", tuple("DBAC")), ("end", tuple("DBAC")),
        ]
        assert engine.tracker.status("day:2") == WriteStatus.confirmed


class TestPendingWriteTracker:

    @pytest.mark.asyncio
    async def test_status_lifecycle(self):
        tracker = PendingWriteTracker()
        gate = asyncio.Event()

        async def write():
            await gate.wait()

        task = tracker.track("item:1", write())
        assert tracker.status("item:1") == WriteStatus.pending
        assert tracker.pending() == ["item:1"]

        gate.set()
        await task
        assert tracker.status("item:1") == WriteStatus.confirmed
        assert tracker.status("item:unknown") is None

    @pytest.mark.asyncio
    async def test_clear_settled_forgets_failures(self):
        tracker = PendingWriteTracker()

        async def boom():
            raise WriteFailed("nope")

        task = tracker.track("day:1", boom())
        with pytest.raises(WriteFailed):
            await task
        assert tracker.failures() == {"day:1": "nope"}

        tracker.clear_settled()
        assert tracker.failures() == {}
        assert tracker.status("day:1") is None


    @pytest.mark.asyncio
    async def test_wait_pending_settles_failures_too(self):
        tracker = PendingWriteTracker()
        gate = asyncio.Event()

        async def ok():
            await gate.wait()

        async def boom():
            await gate.wait()
            raise WriteFailed("nope")

        tracker.track("item:1", ok())
        tracker.track("day:1", boom())
        assert tracker.generation == 2

        asyncio.get_running_loop().call_soon(gate.set)
        await tracker.wait_pending()

        assert tracker.pending() == []
        assert tracker.status("item:1") == WriteStatus.confirmed
        assert tracker.status("day:1") == WriteStatus.failed


class TestDayWriteQueue:

    @pytest.mark.asyncio
    async def test_days_are_independent(self):
        queue = DayWriteQueue()
        order = []
        gate = asyncio.Event()

        async def slow():
            await gate.wait()
            order.append("day1")

        async def fast():
            order.append("day2")

        slow_task = asyncio.ensure_future(queue.run(1, slow))
        await asyncio.sleep(0)
        await queue.run(2, fast)
        gate.set()
        await slow_task

        assert order == ["day2", "day1"]
