"""Entur stop repository adapter for stop, quay and line lookups."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import aiohttp

from entur_departures.adapters.api_request_logger import log_api_request
from entur_departures.adapters.entur_api.constants import (
    ENTUR_GEOCODER_URL,
    LOOKUP_NUMBER_OF_DEPARTURES,
    LOOKUP_TIME_RANGE_SECONDS,
    SEARCH_RESULT_SIZE,
    STOP_PLACE_ID_PREFIX,
    STOP_SNAPSHOT_QUERY,
)
from entur_departures.adapters.entur_api.entur_query_client import parse_stop_snapshot
from entur_departures.domain.exceptions import FetchError
from entur_departures.domain.models.stop_lookup import LineDestinationInfo, QuayInfo, StopInfo
from entur_departures.domain.ports.stop_repository import StopRepository

if TYPE_CHECKING:
    from aiohttp import ClientSession

    from entur_departures.adapters.entur_api.graphql_client import EnturGraphQLClient

logger = logging.getLogger(__name__)


def parse_geocoder_features(body: dict[str, Any]) -> list[StopInfo]:
    """Extract distinct stop places from a geocoder autocomplete response."""
    stops: list[StopInfo] = []
    seen: set[str] = set()
    for feature in body.get("features") or []:
        properties = feature.get("properties") or {}
        stop_id = properties.get("id")
        if not stop_id or not stop_id.startswith(STOP_PLACE_ID_PREFIX) or stop_id in seen:
            continue
        seen.add(stop_id)
        stops.append(
            StopInfo(
                id=stop_id,
                name=properties.get("name") or "Unknown",
                locality=properties.get("locality"),
            )
        )
    return stops


class EnturStopRepository(StopRepository):
    """Lookups used when configuring slots.

    Failures are logged and yield empty results; lookups are advisory.
    """

    def __init__(self, session: ClientSession, graphql_client: EnturGraphQLClient) -> None:
        self._session = session
        self._graphql = graphql_client

    async def search_stops(self, query: str) -> list[StopInfo]:
        params: dict[str, str | int] = {
            "text": query,
            "layers": "venue",
            "size": SEARCH_RESULT_SIZE,
        }
        headers = self._graphql.headers
        log_api_request("GET", ENTUR_GEOCODER_URL, params=params, headers=headers)
        try:
            async with self._session.get(
                ENTUR_GEOCODER_URL, params=params, headers=headers
            ) as response:
                if response.status != 200:
                    logger.warning(f"Entur geocoder returned status {response.status}")
                    return []
                body = await response.json()
        except (aiohttp.ClientError, TimeoutError, ValueError) as e:
            logger.warning(f"Error searching Entur stops for {query!r}: {e}")
            return []

        if not isinstance(body, dict):
            return []
        return parse_geocoder_features(body)

    async def _fetch_quays(self, stop_id: str) -> list[dict[str, Any]]:
        try:
            data = await self._graphql.execute(
                STOP_SNAPSHOT_QUERY,
                {
                    "id": stop_id,
                    "numberOfDepartures": LOOKUP_NUMBER_OF_DEPARTURES,
                    "timeRange": LOOKUP_TIME_RANGE_SECONDS,
                },
                subject=stop_id,
            )
        except FetchError as e:
            logger.warning(f"Error looking up quays of {stop_id}: {e}")
            return []
        stop_place = data.get("stopPlace")
        if not isinstance(stop_place, dict):
            return []
        return stop_place.get("quays") or []

    async def get_quays(self, stop_id: str) -> list[QuayInfo]:
        quays = await self._fetch_quays(stop_id)
        result = []
        for quay in quays:
            snapshot = parse_stop_snapshot(stop_id, {"stopPlace": {"quays": [quay]}})
            lines = sorted({call.line_code for call in snapshot.calls if call.line_code})
            quay_id = quay.get("id", "")
            result.append(QuayInfo(id=quay_id, name=quay.get("name") or quay_id, lines=lines))
        return result

    async def get_lines_and_destinations(
        self, stop_id: str, quay_id: str | None = None
    ) -> LineDestinationInfo:
        quays = await self._fetch_quays(stop_id)
        if quay_id:
            quays = [quay for quay in quays if quay.get("id") == quay_id]
        snapshot = parse_stop_snapshot(stop_id, {"stopPlace": {"quays": quays}})
        return LineDestinationInfo(
            lines=sorted({call.line_code for call in snapshot.calls if call.line_code}),
            destinations=sorted({call.destination for call in snapshot.calls if call.destination}),
        )
