"""In-memory slot state store."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING

from entur_departures.domain.contracts.slot_state_store import SlotStateStoreProtocol
from entur_departures.domain.models.slot_state import SlotState, SlotStatus, SlotStoreSnapshot

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from datetime import datetime

    from entur_departures.domain.models.slot_state import SlotResult

logger = logging.getLogger(__name__)


class SlotStateStore(SlotStateStoreProtocol):
    """Process-wide cache of every slot's last fetch result.

    The whole state lives in one immutable ``SlotStoreSnapshot``. Writers
    build a complete new snapshot and swap the reference, so a reader either
    sees all slots of a cycle or none of them.
    """

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._snapshot = SlotStoreSnapshot()

    @property
    def generation(self) -> int:
        return self._snapshot.generation

    def snapshot(self) -> SlotStoreSnapshot:
        """Get the last fully published state of every slot."""
        return self._snapshot

    def get(self, slot_id: str) -> SlotState | None:
        return self._snapshot.get(slot_id)

    def reset(self, slot_ids: Iterable[str]) -> int:
        """Clear the store and reseed every slot with a pending, no-data state.

        Returns:
            The new generation.
        """
        generation = self._snapshot.generation + 1
        states = {
            slot_id: SlotState(slot_id=slot_id, departures=None, fetched_at=None)
            for slot_id in slot_ids
        }
        self._snapshot = SlotStoreSnapshot(
            generation=generation,
            published_at=None,
            states=MappingProxyType(states),
        )
        logger.debug(f"Slot state store reset to generation {generation} ({len(states)} slot(s))")
        return generation

    def publish(
        self,
        generation: int,
        results: Mapping[str, SlotResult],
        fetched_at: datetime,
    ) -> bool:
        """Replace the state of every slot from one fetch cycle in a single swap.

        Results for slot ids unknown to the current generation are ignored;
        known slots missing from ``results`` keep their previous state.

        Returns:
            False if ``generation`` is stale and nothing was published.
        """
        current = self._snapshot
        if generation != current.generation:
            logger.debug(
                f"Rejected publish for generation {generation} "
                f"(current: {current.generation})"
            )
            return False

        states = dict(current.states)
        for slot_id, result in results.items():
            if slot_id not in states:
                continue
            states[slot_id] = SlotState(
                slot_id=slot_id,
                departures=result.departures,
                fetched_at=result.reference_time or fetched_at,
                status=result.status,
            )

        self._snapshot = SlotStoreSnapshot(
            generation=generation,
            published_at=fetched_at,
            states=MappingProxyType(states),
        )
        failed = sum(1 for state in states.values() if state.status != SlotStatus.OK)
        logger.debug(f"Published {len(states)} slot state(s), {failed} without data")
        return True
