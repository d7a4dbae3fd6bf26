from typing import Optional

from app.core.config import settings
from app.core.database import SessionLocal
from app.core.redis_lifecyle import init_redis_client
from app.services.itineraries.item_store import ItemStore, RedisItemStore, SQLItemStore
from app.services.itineraries.itinerary_service import ItineraryService

_item_store: Optional[ItemStore] = None
_itinerary_service: Optional[ItineraryService] = None


async def build_item_store(backend: Optional[str] = None) -> ItemStore:
    backend = (backend or settings.ITEM_STORE_BACKEND).lower()
    if backend == "sql":
        return SQLItemStore(SessionLocal)
    if backend == "redis":
        client = await init_redis_client()
        return RedisItemStore(client)
    raise ValueError(f"Unknown ITEM_STORE_BACKEND {backend!r}, expected 'sql' or 'redis'")


async def get_item_store() -> ItemStore:
    """FastAPI dependency for the configured item store."""
    global _item_store
    if _item_store is None:
        _item_store = await build_item_store()
    return _item_store


async def get_itinerary_service() -> ItineraryService:
    """FastAPI dependency. One service per process so the pending-write
    tracker and the per-day write queue are shared across requests."""
    global _itinerary_service
    if _itinerary_service is None:
        _itinerary_service = ItineraryService(await get_item_store())
    return _itinerary_service


def reset_itinerary_dependencies() -> None:
    global _item_store, _itinerary_service
    _item_store = None
    _itinerary_service = None
