"""Domain models for Entur departure slots."""

from entur_departures.domain.models.departure_call import DepartureCall, StopSnapshot
from entur_departures.domain.models.departure_info import DepartureInfo
from entur_departures.domain.models.fetch_group import FetchGroup
from entur_departures.domain.models.schedule import ALL_WEEKDAYS, WEEKDAY_NAMES, Schedule
from entur_departures.domain.models.slot_config import DEFAULT_TEXT_COLOR, SlotConfig, new_slot_id
from entur_departures.domain.models.slot_display import DisplayFrame, SlotDisplay
from entur_departures.domain.models.slot_state import (
    SlotResult,
    SlotState,
    SlotStatus,
    SlotStoreSnapshot,
)
from entur_departures.domain.models.stop_lookup import LineDestinationInfo, QuayInfo, StopInfo

__all__ = [
    "ALL_WEEKDAYS",
    "DEFAULT_TEXT_COLOR",
    "WEEKDAY_NAMES",
    "DepartureCall",
    "DepartureInfo",
    "DisplayFrame",
    "FetchGroup",
    "LineDestinationInfo",
    "QuayInfo",
    "Schedule",
    "SlotConfig",
    "SlotDisplay",
    "SlotResult",
    "SlotState",
    "SlotStatus",
    "SlotStoreSnapshot",
    "StopInfo",
    "StopSnapshot",
    "new_slot_id",
]
