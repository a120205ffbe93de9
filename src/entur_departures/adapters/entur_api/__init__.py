"""Entur API adapters."""

from entur_departures.adapters.entur_api.entur_query_client import EnturQueryClient
from entur_departures.adapters.entur_api.entur_stop_repository import EnturStopRepository
from entur_departures.adapters.entur_api.graphql_client import EnturGraphQLClient

__all__ = ["EnturGraphQLClient", "EnturQueryClient", "EnturStopRepository"]
