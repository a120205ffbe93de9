"""Ports (interfaces) for the ports-and-adapters architecture."""

from entur_departures.domain.ports.display_adapter import DisplayAdapter
from entur_departures.domain.ports.stop_repository import StopRepository
from entur_departures.domain.ports.transit_query_client import TransitQueryClient

__all__ = [
    "DisplayAdapter",
    "StopRepository",
    "TransitQueryClient",
]
