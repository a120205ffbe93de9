"""Tests for the slot registry."""

import pytest

from entur_departures.application.services import SlotRegistry
from entur_departures.domain.exceptions import SlotLimitExceededError, UnknownSlotError
from entur_departures.domain.models import SlotConfig
from tests.fakes import make_slot


class _Recorder:
    def __init__(self) -> None:
        self.notifications: list[tuple[str, ...]] = []

    async def __call__(self, slots: tuple[SlotConfig, ...]) -> None:
        self.notifications.append(tuple(slot.id for slot in slots))


def _ids(registry: SlotRegistry) -> list[str]:
    return [slot.id for slot in registry.slots]


@pytest.mark.asyncio
async def test_when_slot_added_then_listeners_notified() -> None:
    """Given a listener, when adding a slot, then it receives the new list."""
    registry = SlotRegistry()
    recorder = _Recorder()
    registry.add_listener(recorder)

    await registry.add(make_slot("a"))

    assert _ids(registry) == ["a"]
    assert recorder.notifications == [("a",)]


@pytest.mark.asyncio
async def test_when_registry_full_then_add_rejected() -> None:
    """Given five slots, when adding a sixth, then SlotLimitExceededError is raised."""
    registry = SlotRegistry([make_slot(str(i)) for i in range(5)])

    with pytest.raises(SlotLimitExceededError, match="At most 5 slots"):
        await registry.add(make_slot("extra"))

    assert len(registry.slots) == 5


def test_when_created_over_limit_then_rejected() -> None:
    """Given more slots than allowed, when creating the registry, then it fails."""
    with pytest.raises(SlotLimitExceededError):
        SlotRegistry([make_slot(str(i)) for i in range(3)], max_slots=2)


@pytest.mark.asyncio
async def test_when_duplicate_id_added_then_rejected() -> None:
    """Given a slot, when adding another with the same id, then ValueError is raised."""
    registry = SlotRegistry([make_slot("a")])

    with pytest.raises(ValueError, match="already in use"):
        await registry.add(make_slot("a"))


@pytest.mark.asyncio
async def test_when_slot_edited_then_id_and_position_kept() -> None:
    """Given three slots, when editing the middle one, then only its fields change."""
    registry = SlotRegistry([make_slot("a"), make_slot("b"), make_slot("c")])

    updated = await registry.edit("b", line_filter="37", display_name="Line 37")

    assert _ids(registry) == ["a", "b", "c"]
    assert updated.id == "b"
    assert registry.get("b").line_filter == "37"
    assert registry.get("b").display_name == "Line 37"


@pytest.mark.asyncio
async def test_when_edit_changes_id_then_rejected() -> None:
    """Given a slot, when editing its id, then ValueError is raised."""
    registry = SlotRegistry([make_slot("a")])

    with pytest.raises(ValueError, match="cannot be changed"):
        await registry.edit("a", id="b")


@pytest.mark.asyncio
async def test_when_unknown_slot_removed_then_error() -> None:
    """Given no such slot, when removing it, then UnknownSlotError is raised."""
    registry = SlotRegistry([make_slot("a")])

    with pytest.raises(UnknownSlotError):
        await registry.remove("missing")


@pytest.mark.asyncio
async def test_when_slot_removed_then_others_keep_order() -> None:
    """Given three slots, when removing the first, then the rest keep their order."""
    registry = SlotRegistry([make_slot("a"), make_slot("b"), make_slot("c")])

    await registry.remove("a")

    assert _ids(registry) == ["b", "c"]


@pytest.mark.asyncio
async def test_when_moved_up_and_down_then_order_changes() -> None:
    """Given three slots, when moving slots, then adjacent slots swap."""
    registry = SlotRegistry([make_slot("a"), make_slot("b"), make_slot("c")])

    await registry.move_up("c")
    assert _ids(registry) == ["a", "c", "b"]

    await registry.move_down("a")
    assert _ids(registry) == ["c", "a", "b"]


@pytest.mark.asyncio
async def test_when_moving_past_the_edge_then_nothing_happens() -> None:
    """Given edge slots, when moving them outward, then no change is notified."""
    registry = SlotRegistry([make_slot("a"), make_slot("b")])
    recorder = _Recorder()
    registry.add_listener(recorder)

    await registry.move_up("a")
    await registry.move_down("b")

    assert _ids(registry) == ["a", "b"]
    assert recorder.notifications == []


@pytest.mark.asyncio
async def test_when_reordered_then_order_follows_ids() -> None:
    """Given three slots, when reordering, then the list follows the given ids."""
    registry = SlotRegistry([make_slot("a"), make_slot("b"), make_slot("c")])

    await registry.reorder(["c", "a", "b"])

    assert _ids(registry) == ["c", "a", "b"]


@pytest.mark.asyncio
async def test_when_reorder_misses_a_slot_then_rejected() -> None:
    """Given three slots, when reordering with two ids, then ValueError is raised."""
    registry = SlotRegistry([make_slot("a"), make_slot("b"), make_slot("c")])

    with pytest.raises(ValueError, match="exactly once"):
        await registry.reorder(["c", "a"])


@pytest.mark.asyncio
async def test_when_replaced_with_duplicate_ids_then_rejected() -> None:
    """Given a new list with repeated ids, when replacing all, then ValueError is raised."""
    registry = SlotRegistry()

    with pytest.raises(ValueError, match="unique"):
        await registry.replace_all([make_slot("a"), make_slot("a")])
