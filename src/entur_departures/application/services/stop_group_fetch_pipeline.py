"""Stop-grouped fetch pipeline.

Slots are grouped by stop id so that one query serves every slot on the same
stop. Each group is resolved independently: a failing or slow stop only
nulls its own slots.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from entur_departures.application.services.departure_filter import filter_departures
from entur_departures.domain.contracts.fetch_pipeline import FetchPipelineProtocol
from entur_departures.domain.exceptions import FetchError
from entur_departures.domain.models.fetch_group import FetchGroup
from entur_departures.domain.models.slot_state import SlotResult, SlotStatus

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from entur_departures.domain.models.departure_call import StopSnapshot
    from entur_departures.domain.models.departure_info import DepartureInfo
    from entur_departures.domain.models.slot_config import SlotConfig
    from entur_departures.domain.ports import TransitQueryClient

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


def group_slots_by_stop(
    slots: Sequence[SlotConfig],
) -> tuple[list[FetchGroup], list[SlotConfig]]:
    """Group slots by stop id.

    Returns:
        Tuple of (groups in first-seen stop order, slots without a stop id).
    """
    by_stop: dict[str, list[SlotConfig]] = {}
    unconfigured: list[SlotConfig] = []
    for slot in slots:
        stop_id = (slot.stop_id or "").strip()
        if not stop_id:
            unconfigured.append(slot)
            continue
        by_stop.setdefault(stop_id, []).append(slot)

    groups = [
        FetchGroup(stop_id=stop_id, slots=tuple(members)) for stop_id, members in by_stop.items()
    ]
    return groups, unconfigured


class StopGroupFetchPipeline(FetchPipelineProtocol):
    """Fetches one snapshot per distinct stop and fans it out to its slots."""

    def __init__(
        self,
        query_client: TransitQueryClient,
        stop_query_timeout_seconds: float = 10.0,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            query_client: Client used for the per-stop queries.
            stop_query_timeout_seconds: Upper bound for a single stop query.
            clock: Source of the reference instant; defaults to UTC now.
        """
        self.query_client = query_client
        self.stop_query_timeout_seconds = stop_query_timeout_seconds
        self._clock = clock or _utc_now

    async def run_cycle(self, slots: Sequence[SlotConfig]) -> dict[str, SlotResult]:
        """Resolve every slot for one fetch cycle.

        Distinct stops are queried concurrently. The returned mapping is only
        built once every group has resolved, so callers can publish it as a
        whole.
        """
        groups, unconfigured = group_slots_by_stop(slots)
        results: dict[str, SlotResult] = {}

        for slot in unconfigured:
            logger.debug(f"Slot {slot.id} has no stop id, skipping query")
            results[slot.id] = SlotResult.failed(SlotStatus.MISSING_CONFIGURATION)

        group_results = await asyncio.gather(*(self._resolve_group(group) for group in groups))
        for group_result in group_results:
            results.update(group_result)

        failed_groups = sum(
            1
            for group in groups
            if results[group.slots[0].id].status == SlotStatus.NETWORK_FAILURE
        )
        logger.debug(
            f"Fetch cycle resolved {len(results)} slot(s) with {len(groups)} "
            f"stop query(ies), {failed_groups} failed"
        )
        return results

    async def fetch_all(self, slots: Sequence[SlotConfig]) -> dict[str, list[DepartureInfo] | None]:
        """Resolve every slot to its ordered departures, or None for no data."""
        results = await self.run_cycle(slots)
        return {
            slot_id: list(result.departures) if result.departures is not None else None
            for slot_id, result in results.items()
        }

    async def _fetch_snapshot(self, stop_id: str) -> StopSnapshot | None:
        """Fetch one stop, converting every failure into None."""
        try:
            return await asyncio.wait_for(
                self.query_client.fetch_stop_snapshot(stop_id),
                timeout=self.stop_query_timeout_seconds,
            )
        except TimeoutError:
            logger.error(
                f"Query for stop {stop_id} timed out after {self.stop_query_timeout_seconds}s"
            )
        except FetchError as e:
            logger.error(f"Query for stop {stop_id} failed: {e.reason} (status: {e.status_code})")
        except Exception as e:
            logger.error(f"Unexpected error querying stop {stop_id}: {e}", exc_info=True)
        return None

    async def _resolve_group(self, group: FetchGroup) -> dict[str, SlotResult]:
        snapshot = await self._fetch_snapshot(group.stop_id)
        if snapshot is None:
            return {slot.id: SlotResult.failed(SlotStatus.NETWORK_FAILURE) for slot in group.slots}

        reference_time = self._clock()
        results = {
            slot.id: SlotResult.from_departures(
                filter_departures(snapshot, slot, reference_time), reference_time
            )
            for slot in group.slots
        }
        logger.debug(
            f"Stop {group.stop_id}: {len(snapshot.calls)} call(s) fanned out to "
            f"{len(group.slots)} slot(s)"
        )
        return results
