"""Ordered, bounded slot list with change notification."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from entur_departures.domain.exceptions import SlotLimitExceededError, UnknownSlotError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable, Sequence

    from entur_departures.domain.models.slot_config import SlotConfig

    SlotsChangedListener = Callable[[tuple[SlotConfig, ...]], Awaitable[None]]

logger = logging.getLogger(__name__)

DEFAULT_MAX_SLOTS = 5


class SlotRegistry:
    """Holds the configured slots and notifies listeners on every change.

    Slot ids are stable: ``edit`` never changes a slot's id, and the order of
    the list is the display order.
    """

    def __init__(
        self, slots: Iterable[SlotConfig] = (), max_slots: int = DEFAULT_MAX_SLOTS
    ) -> None:
        self.max_slots = max_slots
        self._slots: tuple[SlotConfig, ...] = tuple(slots)
        self._listeners: list[SlotsChangedListener] = []
        if len(self._slots) > max_slots:
            raise SlotLimitExceededError(max_slots)

    @property
    def slots(self) -> tuple[SlotConfig, ...]:
        return self._slots

    def add_listener(self, listener: SlotsChangedListener) -> None:
        """Register a coroutine called with the new slot list after each change."""
        self._listeners.append(listener)

    def get(self, slot_id: str) -> SlotConfig:
        return self._slots[self._index_of(slot_id)]

    async def add(self, slot: SlotConfig) -> SlotConfig:
        """Append a slot.

        Raises:
            SlotLimitExceededError: If the registry is already full.
            ValueError: If a slot with the same id exists.
        """
        if len(self._slots) >= self.max_slots:
            raise SlotLimitExceededError(self.max_slots)
        if any(existing.id == slot.id for existing in self._slots):
            raise ValueError(f"Slot id {slot.id} is already in use")
        await self._commit((*self._slots, slot), f"Added slot {slot.id}")
        return slot

    async def edit(self, slot_id: str, **changes: Any) -> SlotConfig:
        """Change fields of a slot, keeping its id and position."""
        if "id" in changes and changes["id"] != slot_id:
            raise ValueError("A slot's id cannot be changed")
        index = self._index_of(slot_id)
        updated = replace(self._slots[index], **changes)
        slots = list(self._slots)
        slots[index] = updated
        await self._commit(tuple(slots), f"Edited slot {slot_id}")
        return updated

    async def replace_all(self, slots: Iterable[SlotConfig]) -> None:
        """Replace the whole slot list, e.g. after the configuration file changed."""
        new_slots = tuple(slots)
        if len(new_slots) > self.max_slots:
            raise SlotLimitExceededError(self.max_slots)
        if len({slot.id for slot in new_slots}) != len(new_slots):
            raise ValueError("Slot ids must be unique")
        await self._commit(new_slots, "Replaced slots")

    async def remove(self, slot_id: str) -> None:
        index = self._index_of(slot_id)
        slots = self._slots[:index] + self._slots[index + 1 :]
        await self._commit(slots, f"Removed slot {slot_id}")

    async def move_up(self, slot_id: str) -> None:
        index = self._index_of(slot_id)
        if index == 0:
            return
        await self._swap(index - 1, index)

    async def move_down(self, slot_id: str) -> None:
        index = self._index_of(slot_id)
        if index == len(self._slots) - 1:
            return
        await self._swap(index, index + 1)

    async def reorder(self, slot_ids: Sequence[str]) -> None:
        """Put the slots in the given order; ``slot_ids`` must name each slot once."""
        if sorted(slot_ids) != sorted(slot.id for slot in self._slots):
            raise ValueError("reorder needs every configured slot id exactly once")
        by_id = {slot.id: slot for slot in self._slots}
        await self._commit(tuple(by_id[slot_id] for slot_id in slot_ids), "Reordered slots")

    async def _swap(self, first: int, second: int) -> None:
        slots = list(self._slots)
        slots[first], slots[second] = slots[second], slots[first]
        await self._commit(tuple(slots), "Reordered slots")

    def _index_of(self, slot_id: str) -> int:
        for index, slot in enumerate(self._slots):
            if slot.id == slot_id:
                return index
        raise UnknownSlotError(slot_id)

    async def _commit(self, slots: tuple[SlotConfig, ...], message: str) -> None:
        self._slots = slots
        logger.info(f"{message} ({len(slots)} slot(s) configured)")
        for listener in self._listeners:
            await listener(slots)
