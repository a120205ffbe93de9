"""Adapters layer - external system integrations."""

from entur_departures.adapters.config import AppConfig
from entur_departures.adapters.display import ConsoleDisplayAdapter
from entur_departures.adapters.entur_api import (
    EnturGraphQLClient,
    EnturQueryClient,
    EnturStopRepository,
)
from entur_departures.adapters.formatters import SlotDisplayFormatter
from entur_departures.adapters.state import SlotStateStore

__all__ = [
    "AppConfig",
    "ConsoleDisplayAdapter",
    "EnturGraphQLClient",
    "EnturQueryClient",
    "EnturStopRepository",
    "SlotDisplayFormatter",
    "SlotStateStore",
]
