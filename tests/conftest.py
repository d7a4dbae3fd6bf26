"""Shared fixtures: throwaway SQLite databases and a fake Redis."""
import pytest
import pytest_asyncio
from fakeredis import aioredis as fake_aioredis
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from app.core.init_db import init_db
from app.schemas.itineraries.itinerary import ItineraryItem
from app.services.itineraries.item_store import RedisItemStore, SQLItemStore


@pytest.fixture
def make_item():
    """Factory for itinerary items with sensible defaults."""
    def _make(item_id, day=1, sort_order=0, **fields):
        data = {"time": "10:00", "type": "sight", "title": f"Item {item_id}"}
        data.update(fields)
        return ItineraryItem(id=item_id, day=day, sort_order=sort_order, **data)
    return _make


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'trip-test.db'}")
    await init_db(engine)
    yield sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)
    await engine.dispose()


@pytest_asyncio.fixture
async def sql_store(session_factory):
    return SQLItemStore(session_factory, timeout=5)


@pytest_asyncio.fixture
async def redis_store():
    client = fake_aioredis.FakeRedis(decode_responses=True)
    yield RedisItemStore(client, namespace="test", timeout=5)
    await client.flushall()


@pytest_asyncio.fixture(params=["sql", "redis"])
async def store(request, tmp_path):
    """Runs a test once against each item store backend."""
    if request.param == "sql":
        engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'store-test.db'}")
        await init_db(engine)
        factory = sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)
        yield SQLItemStore(factory, timeout=5)
        await engine.dispose()
    else:
        client = fake_aioredis.FakeRedis(decode_responses=True)
        yield RedisItemStore(client, namespace="test", timeout=5)
        await client.flushall()


@pytest.fixture
def fill_day(make_item):
    """Persist ``ids`` as the ordered contents of ``day``."""
    async def _fill(store, day, ids):
        items = [make_item(item_id, day=day, sort_order=index) for index, item_id in enumerate(ids)]
        for item in items:
            await store.upsert(item)
        return items
    return _fill
