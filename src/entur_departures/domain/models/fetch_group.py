"""Fetch group domain model."""

from dataclasses import dataclass

from entur_departures.domain.models.slot_config import SlotConfig


@dataclass(frozen=True)
class FetchGroup:
    """Slots sharing one stop id; they are served by a single query."""

    stop_id: str
    slots: tuple[SlotConfig, ...]
