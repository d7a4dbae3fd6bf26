from collections import defaultdict
from typing import Dict, Iterable, List

from app.schemas.itineraries.itinerary import ItineraryItem


def _position(item: ItineraryItem):
    # id breaks ties left behind by a bad write, so the order stays deterministic
    return (item.sort_order, item.id)


def project(items: Iterable[ItineraryItem]) -> Dict[int, List[ItineraryItem]]:
    """Group items into per-day buckets, days ascending, each ordered by sort_order."""
    buckets: Dict[int, List[ItineraryItem]] = defaultdict(list)
    for item in items:
        buckets[item.day].append(item)
    return {day: sorted(buckets[day], key=_position) for day in sorted(buckets)}


def is_dense(bucket: List[ItineraryItem]) -> bool:
    """True when the bucket's sort_order values are exactly 0..N-1."""
    return sorted(item.sort_order for item in bucket) == list(range(len(bucket)))


def renumber(bucket: List[ItineraryItem]) -> List[ItineraryItem]:
    """Copies of ``bucket`` with sort_order reassigned to their list positions."""
    return [
        item if item.sort_order == index else item.moved(index)
        for index, item in enumerate(bucket)
    ]
