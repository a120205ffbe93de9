"""Entur Journey Planner transit query client."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from entur_departures.adapters.entur_api.constants import STOP_SNAPSHOT_QUERY
from entur_departures.domain.exceptions import FetchError
from entur_departures.domain.models.departure_call import DepartureCall, StopSnapshot
from entur_departures.domain.ports.transit_query_client import TransitQueryClient

if TYPE_CHECKING:
    from entur_departures.adapters.entur_api.graphql_client import EnturGraphQLClient

logger = logging.getLogger(__name__)


def parse_departure_time(value: str) -> datetime:
    """Parse an Entur timestamp; naive values are taken as UTC."""
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _parse_call(quay_id: str, call: dict[str, Any]) -> DepartureCall | None:
    timestamp = call.get("expectedDepartureTime") or call.get("aimedDepartureTime")
    if not timestamp:
        return None
    try:
        departure_time = parse_departure_time(timestamp)
    except ValueError:
        logger.warning(f"Skipping call at {quay_id} with unparseable time {timestamp!r}")
        return None

    line = (call.get("serviceJourney") or {}).get("line") or {}
    destination_display = call.get("destinationDisplay") or {}
    return DepartureCall(
        quay_id=quay_id,
        line_code=line.get("publicCode") or "",
        destination=destination_display.get("frontText") or "",
        departure_time=departure_time,
        is_realtime=bool(call.get("realtime", False)),
    )


def parse_stop_snapshot(stop_id: str, data: dict[str, Any]) -> StopSnapshot:
    """Convert the ``data`` of a stop snapshot query into a StopSnapshot.

    Calls keep the order of the response: quay by quay, each quay's calls in
    departure order.

    Raises:
        FetchError: If the stop place is unknown.
    """
    stop_place = data.get("stopPlace")
    if not isinstance(stop_place, dict):
        raise FetchError(stop_id, "Stop place not found")

    calls: list[DepartureCall] = []
    for quay in stop_place.get("quays") or []:
        quay_id = quay.get("id", "")
        for call in quay.get("estimatedCalls") or []:
            parsed = _parse_call(quay_id, call)
            if parsed is not None:
                calls.append(parsed)

    return StopSnapshot(
        stop_id=stop_place.get("id") or stop_id,
        stop_name=stop_place.get("name") or stop_id,
        calls=tuple(calls),
    )


class EnturQueryClient(TransitQueryClient):
    """Adapter fetching stop snapshots from the Entur Journey Planner."""

    def __init__(
        self,
        graphql_client: EnturGraphQLClient,
        number_of_departures: int = 10,
        time_range_seconds: int = 7200,
    ) -> None:
        """Initialize the client.

        Args:
            graphql_client: Client used to post queries.
            number_of_departures: Maximum calls per quay.
            time_range_seconds: Look-ahead window for calls.
        """
        self._graphql = graphql_client
        self._number_of_departures = number_of_departures
        self._time_range_seconds = time_range_seconds

    async def fetch_stop_snapshot(self, stop_id: str) -> StopSnapshot:
        """Fetch the upcoming calls of every quay of a stop place."""
        data = await self._graphql.execute(
            STOP_SNAPSHOT_QUERY,
            {
                "id": stop_id,
                "numberOfDepartures": self._number_of_departures,
                "timeRange": self._time_range_seconds,
            },
            subject=stop_id,
        )
        snapshot = parse_stop_snapshot(stop_id, data)
        logger.debug(f"Fetched {len(snapshot.calls)} call(s) for {snapshot.stop_name} ({stop_id})")
        return snapshot
