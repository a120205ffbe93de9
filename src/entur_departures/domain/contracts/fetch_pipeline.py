"""Protocol for the fetch pipeline."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from entur_departures.domain.models.slot_config import SlotConfig
    from entur_departures.domain.models.slot_state import SlotResult


class FetchPipelineProtocol(Protocol):
    """Protocol for resolving every slot's departures in one fetch cycle."""

    async def run_cycle(self, slots: "Sequence[SlotConfig]") -> "dict[str, SlotResult]":
        """Fetch and filter departures for all slots.

        Returns:
            One result per slot id; failures are results, never exceptions.
        """
        ...
