"""State adapters."""

from entur_departures.adapters.state.slot_state_store import SlotStateStore

__all__ = ["SlotStateStore"]
