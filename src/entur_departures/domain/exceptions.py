"""Domain exceptions."""


class FetchError(Exception):
    """A stop query failed: transport error or non-success response."""

    def __init__(self, stop_id: str, reason: str, status_code: int | None = None) -> None:
        self.stop_id = stop_id
        self.reason = reason
        self.status_code = status_code
        status = f" (status: {status_code})" if status_code is not None else ""
        super().__init__(f"Fetching stop {stop_id} failed: {reason}{status}")


class SlotLimitExceededError(ValueError):
    """Adding a slot would exceed the configured maximum."""

    def __init__(self, max_slots: int) -> None:
        self.max_slots = max_slots
        super().__init__(f"At most {max_slots} slots can be configured")


class UnknownSlotError(KeyError):
    """No slot with the given id is configured."""

    def __init__(self, slot_id: str) -> None:
        self.slot_id = slot_id
        super().__init__(slot_id)
