"""End-to-end behaviour of the itinerary service against real stores."""
import asyncio
from unittest.mock import AsyncMock

import pytest

from app.core.exceptions import ItemNotFound, ItemValidationError, StoreUnavailable, WriteFailed
from app.services.itineraries.day_index import is_dense, project
from app.services.itineraries.item_store import ItemStore, SQLItemStore
from app.services.itineraries.itinerary_service import ItineraryService
from app.services.itineraries.reorder_engine import TRASH_TARGET_ID, DragState, WriteStatus


def positions(items):
    return [(i.id, i.sort_order) for i in items]


async def persisted_day(store, day):
    return positions(project(await store.get_all()).get(day, []))


class TestItineraryService:

    @pytest.mark.asyncio
    async def test_load_days_groups_and_orders(self, store, fill_day):
        await fill_day(store, 2, ["C", "A"])
        await fill_day(store, 1, ["B"])
        service = ItineraryService(store)

        days, stale = await service.load_days()

        assert not stale
        assert list(days) == [1, 2]
        assert positions(days[2]) == [("C", 0), ("A", 1)]

    @pytest.mark.asyncio
    async def test_create_appends_to_end_of_day(self, store, fill_day):
        await fill_day(store, 2, ["A", "B", "C", "D"])
        service = ItineraryService(store)

        item = await service.create_item(2, {"title": "Dinner", "type": "food", "time": "19:00"})

        assert item.sort_order == 4
        assert item.day == 2
        assert item.id.startswith("new-")
        assert await persisted_day(store, 2) == [("A", 0), ("B", 1), ("C", 2), ("D", 3), (item.id, 4)]

    @pytest.mark.asyncio
    async def test_create_on_empty_day(self, store):
        service = ItineraryService(store)

        item = await service.create_item(5, {"title": "Free time"})

        assert (item.sort_order, item.time, item.type.value) == (0, "09:00", "sight")
        assert await persisted_day(store, 5) == [(item.id, 0)]

    @pytest.mark.asyncio
    async def test_create_without_title_writes_nothing(self, store):
        service = ItineraryService(store)

        with pytest.raises(ItemValidationError) as exc:
            await service.create_item(1, {"title": "   "})

        assert exc.value.field == "title"
        assert await store.count() == 0

    @pytest.mark.asyncio
    async def test_edit_keeps_position(self, store, fill_day):
        await fill_day(store, 1, ["A", "B"])
        service = ItineraryService(store)

        item = await service.edit_item("B", {"title": "Renamed", "sort_order": 0, "day": 9,
                                             "koreanAddress": "서울 중구"})

        assert (item.day, item.sort_order) == (1, 1)
        [stored] = [i for i in await store.get_all() if i.id == "B"]
        assert stored.title == "Renamed"
        assert stored.koreanAddress == "서울 중구"

    @pytest.mark.asyncio
    async def test_edit_unknown_item(self, store):
        service = ItineraryService(store)
        with pytest.raises(ItemNotFound):
            await service.edit_item("ghost", {"title": "x"})

    @pytest.mark.asyncio
    async def test_drop_reorders_and_persists(self, store, fill_day):
        await fill_day(store, 2, ["A", "B", "C", "D"])
        service = ItineraryService(store)

        result = await service.handle_drop(2, "A", ["C"])

        assert result.state == DragState.reordered
        assert positions(result.items) == [("B", 0), ("A", 1), ("C", 2), ("D", 3)]
        assert await persisted_day(store, 2) == positions(result.items)

    @pytest.mark.asyncio
    async def test_sequential_drops_compose(self, store, fill_day):
        await fill_day(store, 1, ["A", "B", "C", "D"])
        service = ItineraryService(store)

        await service.handle_drop(1, "A", ["C"])
        await service.handle_drop(1, "D", ["B"])

        assert [i for i, _ in await persisted_day(store, 1)] == ["D", "B", "A", "C"]

    @pytest.mark.asyncio
    async def test_drop_on_trash_deletes_and_compacts(self, store, fill_day):
        await fill_day(store, 1, ["A", "B", "C"])
        service = ItineraryService(store)

        result = await service.handle_drop(1, "B", ["C", TRASH_TARGET_ID])

        assert result.state == DragState.deleted
        assert await persisted_day(store, 1) == [("A", 0), ("C", 1)]

    @pytest.mark.asyncio
    async def test_drop_without_target_changes_nothing(self, store, fill_day):
        await fill_day(store, 1, ["A", "B"])
        service = ItineraryService(store)

        result = await service.handle_drop(1, "A", [])

        assert result.state == DragState.cancelled
        assert await persisted_day(store, 1) == [("A", 0), ("B", 1)]

    @pytest.mark.asyncio
    async def test_delete_leaves_other_days_alone(self, store, fill_day):
        await fill_day(store, 1, ["A", "B", "C"])
        await fill_day(store, 2, ["X", "Y"])
        service = ItineraryService(store)

        await service.delete_item("A")
        await service.delete_item("A")

        assert await persisted_day(store, 1) == [("B", 0), ("C", 1)]
        assert await persisted_day(store, 2) == [("X", 0), ("Y", 1)]

    @pytest.mark.asyncio
    async def test_delete_last_item_removes_day(self, store, fill_day):
        await fill_day(store, 3, ["only"])
        service = ItineraryService(store)

        await service.delete_item("only")

        days, _ = await service.load_days()
        assert 3 not in days


class TestItineraryServiceFailures:

    @pytest.mark.asyncio
    async def test_unavailable_store_serves_last_known_days(self, make_item):
        store = AsyncMock(spec=ItemStore)
        store.get_all.return_value = [make_item("A", day=1)]
        service = ItineraryService(store)
        await service.load_days()

        store.get_all.side_effect = StoreUnavailable("get_all timed out")
        days, stale = await service.load_days()

        assert stale
        assert positions(days[1]) == [("A", 0)]

    @pytest.mark.asyncio
    async def test_unavailable_store_on_first_load(self):
        store = AsyncMock(spec=ItemStore)
        store.get_all.side_effect = StoreUnavailable("get_all failed")
        service = ItineraryService(store)

        overview = await service.days_overview()

        assert overview.stale
        assert overview.days == []

    @pytest.mark.asyncio
    async def test_failed_write_keeps_optimistic_state(self, make_item):
        store = AsyncMock(spec=ItemStore)
        store.get_all.return_value = [make_item(x, day=1, sort_order=i) for i, x in enumerate("ABC")]
        store.batch_set_sort_order.side_effect = WriteFailed("batch_set_sort_order timed out")
        service = ItineraryService(store)

        with pytest.raises(WriteFailed):
            await service.handle_drop(1, "C", ["A"])

        assert [i.id for i in service._days[1]] == ["C", "A", "B"]
        assert service.tracker.status("day:1") == WriteStatus.failed
        assert "day:1" in service.sync_status().failed

        # the next successful load re-derives ground truth and forgets the failure
        days, stale = await service.load_days()
        assert not stale
        assert [i.id for i in days[1]] == ["A", "B", "C"]
        assert service.sync_status().failed == {}


class _SlowUpsertStore(SQLItemStore):
    async def _upsert(self, item):
        await asyncio.sleep(0.05)
        await super()._upsert(item)


class TestReloadDuringWrites:

    @pytest.mark.asyncio
    async def test_reload_while_create_is_in_flight(self, session_factory, fill_day):
        store = _SlowUpsertStore(session_factory, timeout=5)
        await fill_day(store, 1, ["A", "B"])
        service = ItineraryService(store)
        await service.load_days()

        first = asyncio.ensure_future(service.create_item(1, {"title": "X"}))
        await service.get_day(1)
        second = await service.create_item(1, {"title": "Y"})
        await first

        assert second.sort_order == 3
        bucket = project(await store.get_all())[1]
        assert [(i.title, i.sort_order) for i in bucket] == [
            ("Item A", 0), ("Item B", 1), ("X", 2), ("Y", 3)
        ]
        assert is_dense(bucket)

    @pytest.mark.asyncio
    async def test_reload_waits_for_pending_write(self, session_factory, fill_day):
        store = _SlowUpsertStore(session_factory, timeout=5)
        await fill_day(store, 1, ["A", "B"])
        service = ItineraryService(store)
        await service.load_days()

        create = asyncio.ensure_future(service.create_item(1, {"title": "X"}))
        await asyncio.sleep(0)
        assert service.tracker.pending()

        days, stale = await service.load_days()

        assert not stale
        assert service.tracker.pending() == []
        assert [i.sort_order for i in days[1]] == [0, 1, 2]
        await create

    @pytest.mark.asyncio
    async def test_mixed_edits_keep_day_dense(self, store, fill_day):
        await fill_day(store, 1, ["A", "B", "C"])
        service = ItineraryService(store)

        x = await service.create_item(1, {"title": "X"})
        await service.handle_drop(1, x.id, ["A"])
        await service.delete_item("B")
        y = await service.create_item(1, {"title": "Y"})
        await service.handle_drop(1, "C", [y.id], placement="after")
        await service.delete_item("A")
        await service.get_day(1)
        await service.create_item(1, {"title": "Z"})

        bucket = project(await store.get_all())[1]
        assert is_dense(bucket)
        assert [i.title for i in bucket] == ["X", "Y", "Item C", "Z"]
        assert [i.id for i in bucket] == [i.id for i in (await service.get_day(1))]
