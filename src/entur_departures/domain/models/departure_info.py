"""Per-slot departure domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DepartureInfo:
    """A departure as shown in a slot, relative to a reference instant."""

    minutes_until_departure: int
    line_code: str
    destination: str
    is_realtime: bool
