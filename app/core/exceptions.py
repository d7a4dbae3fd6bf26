class TripPlannerError(Exception):
    """Base class for errors raised by the planner core."""


class ItemValidationError(TripPlannerError):
    """User input rejected by the item editor. The form stays open."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message

    def to_dict(self):
        return {"field": self.field, "message": self.message}


class StoreUnavailable(TripPlannerError):
    """The item store could not be read."""


class WriteFailed(TripPlannerError):
    """A mutation was not persisted. Local state may diverge until the next full read."""


class ItemNotFound(TripPlannerError):
    def __init__(self, item_id: str):
        super().__init__(f"Itinerary item {item_id} not found")
        self.item_id = item_id
