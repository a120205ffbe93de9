"""Display adapters."""

from entur_departures.adapters.display.console_display import ConsoleDisplayAdapter

__all__ = ["ConsoleDisplayAdapter"]
