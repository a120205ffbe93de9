"""Stop repository port."""

from typing import Protocol

from entur_departures.domain.models.stop_lookup import LineDestinationInfo, QuayInfo, StopInfo


class StopRepository(Protocol):
    """Port for discovering stops, quays and the lines serving them."""

    async def search_stops(self, query: str) -> list[StopInfo]:
        """Search stop places by name."""
        ...

    async def get_quays(self, stop_id: str) -> list[QuayInfo]:
        """Get the quays of a stop place."""
        ...

    async def get_lines_and_destinations(
        self, stop_id: str, quay_id: str | None = None
    ) -> LineDestinationInfo:
        """Get distinct lines and destinations at a stop, optionally one quay only."""
        ...
