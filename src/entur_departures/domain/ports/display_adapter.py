"""Display adapter port."""

from abc import ABC, abstractmethod

from entur_departures.domain.models.slot_config import SlotConfig
from entur_departures.domain.models.slot_display import DisplayFrame


class DisplayAdapter(ABC):
    """Port for presenting slot countdowns to users."""

    @abstractmethod
    async def create_slot(self, slot: SlotConfig) -> None:
        """Allocate whatever the display needs for a new slot."""
        ...

    @abstractmethod
    async def dispose_slot(self, slot_id: str) -> None:
        """Release a slot that is no longer configured."""
        ...

    @abstractmethod
    async def render(self, frame: DisplayFrame) -> None:
        """Show one presentation pass."""
        ...
