"""Display formatters."""

from entur_departures.adapters.formatters.slot_display_formatter import SlotDisplayFormatter

__all__ = ["SlotDisplayFormatter"]
