"""Contracts (protocols) between application services and adapters."""

from entur_departures.domain.contracts.fetch_pipeline import FetchPipelineProtocol
from entur_departures.domain.contracts.refresh_coordinator import RefreshCoordinatorProtocol
from entur_departures.domain.contracts.slot_display_formatter import (
    SlotDisplayFormatterProtocol,
)
from entur_departures.domain.contracts.slot_state_store import SlotStateStoreProtocol

__all__ = [
    "FetchPipelineProtocol",
    "RefreshCoordinatorProtocol",
    "SlotDisplayFormatterProtocol",
    "SlotStateStoreProtocol",
]
