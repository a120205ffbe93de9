"""Protocol for formatting slot displays."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from entur_departures.domain.models.departure_info import DepartureInfo
    from entur_departures.domain.models.slot_config import SlotConfig
    from entur_departures.domain.models.slot_display import SlotDisplay


class SlotDisplayFormatterProtocol(Protocol):
    """Protocol for turning a projected countdown into display text."""

    def format_slot(
        self, slot: "SlotConfig", projection: "list[DepartureInfo] | None"
    ) -> "SlotDisplay":
        """Build the label and summary for a visible slot."""
        ...

    def idle_message(self, slot_count: int) -> str:
        """Message shown when no slot is visible."""
        ...
