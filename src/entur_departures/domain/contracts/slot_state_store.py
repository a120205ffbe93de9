"""Protocol for the slot state store."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from datetime import datetime

    from entur_departures.domain.models.slot_state import SlotResult, SlotStoreSnapshot


class SlotStateStoreProtocol(Protocol):
    """Protocol for the single-writer, many-reader slot cache."""

    @property
    def generation(self) -> int:
        """Current configuration generation."""
        ...

    def snapshot(self) -> "SlotStoreSnapshot":
        """Get the last fully published state of every slot."""
        ...

    def reset(self, slot_ids: "Iterable[str]") -> int:
        """Clear the store and reseed it for a new slot list.

        Returns:
            The new generation; results from older generations are rejected.
        """
        ...

    def publish(
        self,
        generation: int,
        results: "Mapping[str, SlotResult]",
        fetched_at: "datetime",
    ) -> bool:
        """Atomically replace the state of all slots from one fetch cycle.

        Returns:
            False if the cycle was started under a stale generation and was dropped.
        """
        ...
