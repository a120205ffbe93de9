"""Console display adapter."""

from __future__ import annotations

import logging
import sys
from datetime import tzinfo
from typing import TYPE_CHECKING, TextIO

from entur_departures.domain.ports.display_adapter import DisplayAdapter

if TYPE_CHECKING:
    from entur_departures.domain.models.slot_config import SlotConfig
    from entur_departures.domain.models.slot_display import DisplayFrame, SlotDisplay

logger = logging.getLogger(__name__)


class ConsoleDisplayAdapter(DisplayAdapter):
    """Writes slot countdowns to a text stream whenever they change."""

    def __init__(self, stream: TextIO | None = None, local_timezone: tzinfo | None = None) -> None:
        """Initialize the adapter.

        Args:
            stream: Output stream, defaults to stdout.
            local_timezone: Timezone for printed timestamps, defaults to the system one.
        """
        self._stream = stream or sys.stdout
        self._timezone = local_timezone
        self._shown: dict[str, SlotDisplay] = {}
        self._names: dict[str, str] = {}
        self._idle_message: str | None = None

    async def create_slot(self, slot: SlotConfig) -> None:
        self._names[slot.id] = slot.display_name or slot.id
        logger.info(f"Slot '{self._names[slot.id]}' created")

    async def dispose_slot(self, slot_id: str) -> None:
        name = self._names.pop(slot_id, slot_id)
        self._shown.pop(slot_id, None)
        logger.info(f"Slot '{name}' disposed")

    async def render(self, frame: DisplayFrame) -> None:
        stamp = f"{frame.rendered_at.astimezone(self._timezone):%H:%M:%S}"
        visible_ids = {display.slot_id for display in frame.slots}
        for slot_id in list(self._shown):
            if slot_id not in visible_ids:
                del self._shown[slot_id]

        for display in frame.slots:
            if self._shown.get(display.slot_id) == display:
                continue
            self._shown[display.slot_id] = display
            summary = display.summary.replace("\n", " | ")
            self._write(f"[{stamp}] {display.label:>2}  {summary}")

        if frame.idle_message != self._idle_message:
            self._idle_message = frame.idle_message
            if frame.idle_message:
                self._write(f"[{stamp}] {frame.idle_message}")

    def _write(self, line: str) -> None:
        self._stream.write(line + "\n")
        self._stream.flush()
