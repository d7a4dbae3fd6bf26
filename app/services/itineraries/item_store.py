import asyncio
import json
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

import redis.asyncio as redis
from sqlalchemy import select, update, delete, func
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.database import SessionLocal
from app.core.exceptions import StoreUnavailable, WriteFailed
from app.core.logger import logger
from app.models.itinerary.itinerary_item import ItineraryItemRecord
from app.schemas.itineraries.itinerary import ItineraryItem


class ItemStore(ABC):
    """Durable persistence of itinerary items.

    Backends implement the underscored coroutines. The public methods bound
    every call with ``timeout`` and turn transport errors into
    ``StoreUnavailable`` (reads) or ``WriteFailed`` (writes), so callers never
    see a backend's native exceptions.
    """

    # exception types of the backend's client library
    transport_errors: tuple = ()

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = settings.STORE_TIMEOUT_SECONDS if timeout is None else timeout

    async def _call(self, operation: str, coro, error_cls):
        try:
            return await asyncio.wait_for(coro, self.timeout)
        except asyncio.TimeoutError:
            logger.error(f"Item store {operation} timed out after {self.timeout}s")
            raise error_cls(f"{operation} timed out") from None
        except self.transport_errors as e:
            logger.error(f"Item store {operation} failed: {e}")
            raise error_cls(f"{operation} failed: {e}") from e

    # --- public interface ---

    async def get_all(self) -> List[ItineraryItem]:
        return await self._call("get_all", self._get_all(), StoreUnavailable)

    async def count(self) -> int:
        return await self._call("count", self._count(), StoreUnavailable)

    async def upsert(self, item: ItineraryItem) -> ItineraryItem:
        await self._call("upsert", self._upsert(item), WriteFailed)
        return item

    async def upsert_many(self, items: Sequence[ItineraryItem]) -> None:
        """Write all ``items`` or none of them."""
        await self._call("upsert_many", self._upsert_many(list(items)), WriteFailed)

    async def delete(self, item_id: str) -> None:
        await self._call("delete", self._delete(item_id), WriteFailed)

    async def batch_set_sort_order(self, day: int, ordered_ids: Sequence[str]) -> None:
        await self._call(
            "batch_set_sort_order", self._batch_set_sort_order(day, list(ordered_ids)), WriteFailed
        )

    async def remove_from_day(self, day: int, item_id: str, remaining_ids: Sequence[str]) -> None:
        """Delete ``item_id`` and renumber the rest of ``day`` as one unit."""
        await self._call(
            "remove_from_day", self._remove_from_day(day, item_id, list(remaining_ids)), WriteFailed
        )

    # --- backend hooks ---

    @abstractmethod
    async def _get_all(self) -> List[ItineraryItem]:
        ...

    @abstractmethod
    async def _upsert(self, item: ItineraryItem) -> None:
        ...

    @abstractmethod
    async def _delete(self, item_id: str) -> None:
        ...

    @abstractmethod
    async def _batch_set_sort_order(self, day: int, ordered_ids: List[str]) -> None:
        ...

    async def _count(self) -> int:
        return len(await self._get_all())

    async def _upsert_many(self, items: List[ItineraryItem]) -> None:
        # Not atomic. Backends that can do better override this.
        for item in items:
            await self._upsert(item)

    async def _remove_from_day(self, day: int, item_id: str, remaining_ids: List[str]) -> None:
        # Not atomic. Backends that can do better override this.
        await self._delete(item_id)
        await self._batch_set_sort_order(day, remaining_ids)


class SQLItemStore(ItemStore):
    """Backend A: one row per item, position columns plus a JSON payload."""

    transport_errors = (SQLAlchemyError,)

    def __init__(self, session_factory=SessionLocal, timeout: Optional[float] = None):
        super().__init__(timeout)
        self.session_factory = session_factory

    async def _get_all(self) -> List[ItineraryItem]:
        async with self.session_factory() as session:
            result = await session.execute(select(ItineraryItemRecord))
            return [ItineraryItem.model_validate(r.to_dict()) for r in result.scalars().all()]

    async def _count(self) -> int:
        async with self.session_factory() as session:
            result = await session.execute(select(func.count(ItineraryItemRecord.id)))
            return result.scalar() or 0

    @staticmethod
    async def _stage_upsert(session, item: ItineraryItem) -> None:
        record = await session.get(ItineraryItemRecord, item.id)
        if record is None:
            record = ItineraryItemRecord(id=item.id)
            session.add(record)
        record.day = item.day
        record.sort_order = item.sort_order
        record.payload = json.dumps(item.payload(), ensure_ascii=False)

    async def _upsert(self, item: ItineraryItem) -> None:
        async with self.session_factory() as session:
            async with session.begin():
                await self._stage_upsert(session, item)

    async def _upsert_many(self, items: List[ItineraryItem]) -> None:
        async with self.session_factory() as session:
            async with session.begin():
                for item in items:
                    await self._stage_upsert(session, item)

    async def _delete(self, item_id: str) -> None:
        async with self.session_factory() as session:
            await session.execute(
                delete(ItineraryItemRecord).where(ItineraryItemRecord.id == item_id)
            )
            await session.commit()

    @staticmethod
    async def _renumber(session, day: int, ordered_ids: List[str]) -> None:
        for index, item_id in enumerate(ordered_ids):
            await session.execute(
                update(ItineraryItemRecord)
                .where(ItineraryItemRecord.id == item_id, ItineraryItemRecord.day == day)
                .values(sort_order=index)
            )

    async def _batch_set_sort_order(self, day: int, ordered_ids: List[str]) -> None:
        async with self.session_factory() as session:
            async with session.begin():
                await self._renumber(session, day, ordered_ids)

    async def _remove_from_day(self, day: int, item_id: str, remaining_ids: List[str]) -> None:
        async with self.session_factory() as session:
            async with session.begin():
                await session.execute(
                    delete(ItineraryItemRecord).where(ItineraryItemRecord.id == item_id)
                )
                await self._renumber(session, day, remaining_ids)


def _text(value) -> str:
    return value.decode("utf-8") if isinstance(value, bytes) else value


class RedisItemStore(ItemStore):
    """Backend B: one flat JSON document per item plus an index set of ids.

    Works with clients built with or without ``decode_responses``; ids read
    back as bytes are decoded before keys are built from them.
    """

    transport_errors = (redis.RedisError,)

    def __init__(self, client: redis.Redis, namespace: Optional[str] = None,
                 timeout: Optional[float] = None):
        super().__init__(timeout)
        self.redis = client
        self.namespace = namespace or settings.REDIS_NAMESPACE

    @property
    def ids_key(self) -> str:
        return f"{self.namespace}:ids"

    def _key(self, item_id: str) -> str:
        return f"{self.namespace}:item:{item_id}"

    @staticmethod
    def _dump(doc: dict) -> str:
        return json.dumps(doc, ensure_ascii=False)

    async def _get_all(self) -> List[ItineraryItem]:
        ids = [_text(item_id) for item_id in await self.redis.smembers(self.ids_key)]
        if not ids:
            return []
        docs = await self.redis.mget([self._key(item_id) for item_id in ids])
        return [ItineraryItem.model_validate(json.loads(doc)) for doc in docs if doc]

    async def _count(self) -> int:
        return await self.redis.scard(self.ids_key)

    def _stage_upsert(self, pipe, item: ItineraryItem) -> None:
        doc = item.model_dump(mode="json", exclude_none=True)
        pipe.set(self._key(item.id), self._dump(doc))
        pipe.sadd(self.ids_key, item.id)

    async def _upsert(self, item: ItineraryItem) -> None:
        await self._upsert_many([item])

    async def _upsert_many(self, items: List[ItineraryItem]) -> None:
        # queued in full before anything is sent, then applied as one MULTI/EXEC
        async with self.redis.pipeline(transaction=True) as pipe:
            for item in items:
                self._stage_upsert(pipe, item)
            await pipe.execute()

    async def _delete(self, item_id: str) -> None:
        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.delete(self._key(item_id))
            pipe.srem(self.ids_key, item_id)
            await pipe.execute()

    def _queue_renumber(self, pipe, day: int, ordered_ids: List[str], raw_docs) -> None:
        for index, (item_id, raw) in enumerate(zip(ordered_ids, raw_docs)):
            if raw is None:
                continue
            doc = json.loads(raw)
            if doc.get("day") != day:
                continue
            doc["sort_order"] = index
            pipe.set(self._key(item_id), self._dump(doc))

    async def _batch_set_sort_order(self, day: int, ordered_ids: List[str]) -> None:
        keys = [self._key(item_id) for item_id in ordered_ids]
        if not keys:
            return

        async def apply(pipe):
            raw_docs = await pipe.mget(keys)
            pipe.multi()
            self._queue_renumber(pipe, day, ordered_ids, raw_docs)

        # WATCH retries the whole batch if another client touches these documents
        await self.redis.transaction(apply, *keys)

    async def _remove_from_day(self, day: int, item_id: str, remaining_ids: List[str]) -> None:
        keys = [self._key(i) for i in remaining_ids]

        async def apply(pipe):
            raw_docs = await pipe.mget(keys) if keys else []
            pipe.multi()
            pipe.delete(self._key(item_id))
            pipe.srem(self.ids_key, item_id)
            self._queue_renumber(pipe, day, remaining_ids, raw_docs)

        await self.redis.transaction(apply, self._key(item_id), *keys)
