"""Presentation output domain models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SlotDisplay:
    """What a visible slot shows right now."""

    slot_id: str
    label: str  # Short badge text, e.g. "7" or "--"
    summary: str  # Multi-line text listing the next few departures
    text_color: str
    has_data: bool


@dataclass(frozen=True)
class DisplayFrame:
    """Everything to show after one presentation pass.

    Only visible slots appear in ``slots``. ``idle_message`` is set when no
    slot is visible.
    """

    rendered_at: datetime
    slots: tuple[SlotDisplay, ...] = ()
    idle_message: str | None = None
