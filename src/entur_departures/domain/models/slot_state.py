"""Slot state domain models."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from types import MappingProxyType

from entur_departures.domain.models.departure_info import DepartureInfo


class SlotStatus(StrEnum):
    """Why a slot holds the data it holds."""

    OK = "ok"
    NETWORK_FAILURE = "network_failure"
    EMPTY_RESULT = "empty_result"
    MISSING_CONFIGURATION = "missing_configuration"
    PENDING = "pending"  # Seeded after a reset, before the first cycle lands


@dataclass(frozen=True)
class SlotResult:
    """Outcome of one fetch cycle for one slot.

    ``reference_time`` is the instant the minute counts were computed against.
    """

    departures: tuple[DepartureInfo, ...] | None
    status: SlotStatus
    reference_time: datetime | None = None

    @classmethod
    def from_departures(
        cls, departures: list[DepartureInfo], reference_time: datetime
    ) -> "SlotResult":
        """Wrap a filtered list; an empty list becomes the no-data marker."""
        if not departures:
            return cls(None, SlotStatus.EMPTY_RESULT, reference_time)
        return cls(tuple(departures), SlotStatus.OK, reference_time)

    @classmethod
    def failed(cls, status: SlotStatus) -> "SlotResult":
        return cls(departures=None, status=status)


@dataclass(frozen=True)
class SlotState:
    """Cached result for one slot plus the instant it was fetched."""

    slot_id: str
    departures: tuple[DepartureInfo, ...] | None
    fetched_at: datetime | None
    status: SlotStatus = SlotStatus.PENDING


def _empty_states() -> Mapping[str, SlotState]:
    return MappingProxyType({})


@dataclass(frozen=True)
class SlotStoreSnapshot:
    """Immutable, fully published view of every slot's state."""

    generation: int = 0
    published_at: datetime | None = None
    states: Mapping[str, SlotState] = field(default_factory=_empty_states)

    def get(self, slot_id: str) -> SlotState | None:
        return self.states.get(slot_id)
