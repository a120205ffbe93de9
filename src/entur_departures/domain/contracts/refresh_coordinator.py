"""Protocol for display refresh coordination."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from entur_departures.domain.models.slot_config import SlotConfig


class RefreshCoordinatorProtocol(Protocol):
    """Protocol for running the fetch and presentation cadences."""

    async def start(self) -> None:
        """Start both periodic triggers."""
        ...

    async def stop(self) -> None:
        """Stop both periodic triggers."""
        ...

    async def reconfigure(self, slots: "Sequence[SlotConfig]") -> None:
        """Replace the slot list, invalidating cached state."""
        ...

    async def refresh_now(self) -> None:
        """Run a fetch cycle immediately."""
        ...
