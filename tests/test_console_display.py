"""Tests for the console display adapter."""

import io
from datetime import UTC

import pytest

from entur_departures.adapters.display import ConsoleDisplayAdapter
from entur_departures.domain.models import DisplayFrame, SlotDisplay
from tests.fakes import REFERENCE_TIME, make_slot


def _display(label: str, summary: str = "Line 31\n31: 4 min (live)") -> SlotDisplay:
    return SlotDisplay(
        slot_id="a", label=label, summary=summary, text_color="#FFFF00", has_data=True
    )


@pytest.mark.asyncio
async def test_when_slot_changes_then_a_line_is_written() -> None:
    """Given repeated frames, when only some change, then only changes are written."""
    stream = io.StringIO()
    adapter = ConsoleDisplayAdapter(stream=stream, local_timezone=UTC)
    await adapter.create_slot(make_slot("a", display_name="Line 31"))

    await adapter.render(DisplayFrame(rendered_at=REFERENCE_TIME, slots=(_display("4"),)))
    await adapter.render(DisplayFrame(rendered_at=REFERENCE_TIME, slots=(_display("4"),)))
    await adapter.render(DisplayFrame(rendered_at=REFERENCE_TIME, slots=(_display("3"),)))

    lines = stream.getvalue().splitlines()
    assert len(lines) == 2
    assert lines[0] == "[08:00:00]  4  Line 31 | 31: 4 min (live)"


@pytest.mark.asyncio
async def test_when_idle_then_message_written_once() -> None:
    """Given idle frames, when rendering twice, then the idle message is written once."""
    stream = io.StringIO()
    adapter = ConsoleDisplayAdapter(stream=stream, local_timezone=UTC)
    frame = DisplayFrame(rendered_at=REFERENCE_TIME, idle_message="No slots configured")

    await adapter.render(frame)
    await adapter.render(frame)

    assert stream.getvalue() == "[08:00:00] No slots configured\n"
