"""Transit query client port."""

from typing import Protocol

from entur_departures.domain.models.departure_call import StopSnapshot


class TransitQueryClient(Protocol):
    """Port for fetching the upcoming calls of one stop."""

    async def fetch_stop_snapshot(self, stop_id: str) -> StopSnapshot:
        """Fetch a snapshot of upcoming calls for a stop.

        Raises:
            FetchError: On transport errors or non-success responses.
        """
        ...
