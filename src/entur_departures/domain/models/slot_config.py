"""Slot configuration domain model."""

import uuid
from dataclasses import dataclass

from entur_departures.domain.models.schedule import Schedule

DEFAULT_TEXT_COLOR = "#FFFF00"


def new_slot_id() -> str:
    """Generate a fresh opaque slot id."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class SlotConfig:
    """Configuration for one independently displayed departure slot."""

    id: str
    stop_id: str | None
    quay_id: str | None = None  # Only calls from this quay when set
    line_filter: str | None = None  # Exact match on the line's public code
    destination_filter: str | None = None  # Case-insensitive substring of the destination
    display_name: str = ""
    text_color: str = DEFAULT_TEXT_COLOR
    schedule: Schedule | None = None  # None = always shown
