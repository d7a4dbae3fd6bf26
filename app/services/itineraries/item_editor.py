import time
import uuid
from typing import Any, Dict, Iterable, Optional

from pydantic import ValidationError

from app.core.exceptions import ItemValidationError
from app.schemas.itineraries.itinerary import ItemType, ItineraryItem, POSITION_FIELDS

# Defaults of a blank "new item" form
DEFAULT_TIME = "09:00"
DEFAULT_TYPE = ItemType.sight


def generate_item_id(existing_ids: Iterable[str] = ()) -> str:
    taken = set(existing_ids)
    while True:
        candidate = f"new-{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}"
        if candidate not in taken:
            return candidate


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def prepare(
    form_data: Optional[Dict[str, Any]],
    existing: Optional[ItineraryItem] = None,
    *,
    day: Optional[int] = None,
    day_length: int = 0,
    existing_ids: Iterable[str] = (),
) -> ItineraryItem:
    """Validate editor input and build the item to hand to the store.

    Edit mode (``existing`` given): form values overwrite the existing
    payload, a blank value clears that field, and ``id``/``day``/``sort_order``
    always come from ``existing``.

    Create mode: starts from a blank form, appends to the end of ``day``
    (``sort_order = day_length``) under a fresh id.

    Raises ItemValidationError naming the offending field.
    """
    form = {k: v for k, v in (form_data or {}).items() if k not in POSITION_FIELDS}

    if existing is not None:
        data = existing.model_dump(exclude_none=True)
    else:
        if day is None or day < 1:
            raise ItemValidationError("day", "day must be a positive trip day number")
        data = {"time": DEFAULT_TIME, "type": DEFAULT_TYPE.value}

    for key, value in form.items():
        if _is_blank(value) and key != "title":
            data.pop(key, None)
        else:
            data[key] = value

    title = data.get("title")
    if not isinstance(title, str) or not title.strip():
        raise ItemValidationError("title", "title is required")
    data["title"] = title.strip()

    try:
        data["type"] = ItemType(data.get("type")).value
    except ValueError:
        raise ItemValidationError("type", f"unknown item type {data.get('type')!r}") from None

    # older items carry a single image
    if "images" not in data and data.get("image"):
        data["images"] = [data["image"]]

    if existing is not None:
        data.update(id=existing.id, day=existing.day, sort_order=existing.sort_order)
    else:
        data.update(id=generate_item_id(existing_ids), day=day, sort_order=day_length)

    try:
        return ItineraryItem.model_validate(data)
    except ValidationError as e:
        error = e.errors()[0]
        field = str(error["loc"][0]) if error.get("loc") else "item"
        raise ItemValidationError(field, error["msg"]) from None
