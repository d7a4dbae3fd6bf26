from typing import List, Optional

from app.core.logger import logger
from app.data.default_itinerary import DATASET_VERSION, TRIP_DAYS
from app.schemas.itineraries.itinerary import ItineraryItem
from app.services.itineraries.item_store import ItemStore


def build_seed_items(dataset: Optional[List[dict]] = None) -> List[ItineraryItem]:
    """Flatten the day -> items dataset, numbering each day from 0 in listed order."""
    items = []
    for day in TRIP_DAYS if dataset is None else dataset:
        for index, raw in enumerate(day["items"]):
            items.append(ItineraryItem.model_validate({**raw, "day": day["day"], "sort_order": index}))
    return items


async def seed_itinerary_if_empty(store: ItemStore, dataset: Optional[List[dict]] = None) -> int:
    """Populate an empty store with the default itinerary. Never runs twice.

    Returns the number of items written (0 when the store already had data).
    """
    existing = await store.count()
    if existing:
        logger.info(f"Item store already holds {existing} items, skipping itinerary seed")
        return 0

    items = build_seed_items(dataset)
    # all or nothing
    await store.upsert_many(items)
    logger.info(f"Seeded {len(items)} itinerary items (dataset v{DATASET_VERSION})")
    return len(items)
