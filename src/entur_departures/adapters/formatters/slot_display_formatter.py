"""Formatter for slot labels and summaries."""

from entur_departures.adapters.config.app_config import AppConfig
from entur_departures.domain.contracts.slot_display_formatter import (
    SlotDisplayFormatterProtocol,
)
from entur_departures.domain.models.departure_info import DepartureInfo
from entur_departures.domain.models.slot_config import SlotConfig
from entur_departures.domain.models.slot_display import SlotDisplay

NO_DATA_LABEL = "--"


class SlotDisplayFormatter(SlotDisplayFormatterProtocol):
    """Formats projected countdowns for display based on configuration."""

    def __init__(self, config: AppConfig) -> None:
        """Initialize the formatter.

        Args:
            config: Application configuration with label and summary limits.
        """
        self.config = config

    def format_label(self, projection: list[DepartureInfo] | None) -> str:
        """Short badge text: minutes to the next departure, clamped to the label width."""
        if not projection:
            return NO_DATA_LABEL
        minutes = projection[0].minutes_until_departure
        return str(min(self.config.label_max_minutes, minutes))

    def heading(self, slot: SlotConfig) -> str:
        if slot.display_name:
            return slot.display_name
        return slot.destination_filter or "Departures"

    def format_departure(self, departure: DepartureInfo) -> str:
        """Format one summary line, e.g. '31: 4 min (live)'."""
        live = " (live)" if departure.is_realtime else ""
        return f"{departure.line_code}: {departure.minutes_until_departure} min{live}"

    def format_summary(self, slot: SlotConfig, projection: list[DepartureInfo] | None) -> str:
        """Heading plus the next few departures, truncated to the summary length."""
        lines = [self.heading(slot)]
        if projection is None:
            lines.append("No departures")
        elif not projection:
            lines.append("No upcoming departures")
        else:
            lines.extend(
                self.format_departure(departure)
                for departure in projection[: self.config.summary_departures]
            )
        summary = "\n".join(lines)
        return summary[: self.config.summary_max_length]

    def format_slot(
        self, slot: SlotConfig, projection: list[DepartureInfo] | None
    ) -> SlotDisplay:
        return SlotDisplay(
            slot_id=slot.id,
            label=self.format_label(projection),
            summary=self.format_summary(slot, projection),
            text_color=slot.text_color,
            has_data=bool(projection),
        )

    def idle_message(self, slot_count: int) -> str:
        if slot_count == 0:
            return "No slots configured"
        return "No scheduled departures"
