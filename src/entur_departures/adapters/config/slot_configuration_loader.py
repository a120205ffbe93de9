"""Slot configuration loader."""

import logging
import re
from dataclasses import replace
from datetime import time
from typing import Any

from entur_departures.adapters.config.app_config import AppConfig
from entur_departures.domain.models.schedule import ALL_WEEKDAYS, WEEKDAY_NAMES, Schedule
from entur_departures.domain.models.slot_config import DEFAULT_TEXT_COLOR, SlotConfig, new_slot_id

logger = logging.getLogger(__name__)

STOP_PLACE_ID_PATTERN = re.compile(r"^NSR:StopPlace:\d+$")
QUAY_ID_PATTERN = re.compile(r"^NSR:Quay:\d+$")
HEX_COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")

COLOR_PRESETS = {
    "yellow": "#FFFF00",
    "cyan": "#00FFFF",
    "lime": "#00FF00",
    "orange": "#FFA500",
    "magenta": "#FF00FF",
    "white": "#FFFFFF",
    "red": "#FF4444",
    "sky blue": "#87CEEB",
}


def is_valid_stop_place_id(stop_id: str | None) -> bool:
    """Check an Entur stop place id, e.g. 'NSR:StopPlace:58366'."""
    if not stop_id or not stop_id.strip():
        return False
    return STOP_PLACE_ID_PATTERN.match(stop_id) is not None


def is_valid_quay_id(quay_id: str | None) -> bool:
    """Check an Entur quay id; empty means 'all quays' and is valid."""
    if not quay_id or not quay_id.strip():
        return True
    return QUAY_ID_PATTERN.match(quay_id) is not None


def parse_color(value: Any) -> str:
    """Parse a preset color name or '#RRGGBB', falling back to the default color."""
    if not isinstance(value, str):
        return DEFAULT_TEXT_COLOR
    preset = COLOR_PRESETS.get(value.strip().lower())
    if preset:
        return preset
    if HEX_COLOR_PATTERN.match(value.strip()):
        return value.strip().upper()
    logger.warning(f"Unknown color {value!r}, using {DEFAULT_TEXT_COLOR}")
    return DEFAULT_TEXT_COLOR


def parse_time_of_day(value: Any) -> time:
    """Parse 'HH:MM' (or 'HH:MM:SS') into a time."""
    if isinstance(value, time):
        return value.replace(tzinfo=None)
    if not isinstance(value, str):
        raise ValueError(f"Invalid time of day: {value!r}")
    return time.fromisoformat(value.strip())


def parse_weekdays(value: Any) -> frozenset[int]:
    """Parse a list of weekday names ('mon', 'Monday', ...) into weekday indexes."""
    if value is None:
        return ALL_WEEKDAYS
    if not isinstance(value, list):
        raise ValueError(f"Schedule days must be a list, got {value!r}")
    days: set[int] = set()
    for item in value:
        name = str(item).strip().lower()[:3]
        if name not in WEEKDAY_NAMES:
            raise ValueError(f"Unknown weekday: {item!r}")
        days.add(WEEKDAY_NAMES.index(name))
    return frozenset(days)


def parse_schedule(value: Any) -> Schedule | None:
    """Parse a schedule table; absent means always active."""
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValueError(f"Schedule must be a table, got {value!r}")
    defaults = Schedule()
    schedule = Schedule(
        start=parse_time_of_day(value["start"]) if "start" in value else defaults.start,
        end=parse_time_of_day(value["end"]) if "end" in value else defaults.end,
        days=parse_weekdays(value.get("days")),
    )
    if not schedule.days:
        logger.warning("Schedule has no weekdays; the slot will never be shown")
    return schedule


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class SlotConfigurationLoader:
    """Loads slot configurations from app config."""

    @staticmethod
    def load(config: AppConfig) -> list[SlotConfig]:
        """Load slot configurations from app config.

        Raises:
            ValueError: If a schedule cannot be parsed.
        """
        slots_data = config.get_slots_config()
        slots: list[SlotConfig] = []
        seen_ids: set[str] = set()

        for slot_data in slots_data:
            if not isinstance(slot_data, dict):
                continue

            slot = SlotConfigurationLoader.parse_slot(slot_data)
            if slot.id in seen_ids:
                logger.warning(f"Duplicate slot id {slot.id}, assigning a new one")
                slot = replace(slot, id=new_slot_id())
            seen_ids.add(slot.id)
            slots.append(slot)

        if len(slots) > config.max_slots:
            logger.warning(
                f"{len(slots)} slots configured, only the first {config.max_slots} are used"
            )
            slots = slots[: config.max_slots]

        return slots

    @staticmethod
    def parse_slot(slot_data: dict[str, Any]) -> SlotConfig:
        """Build one slot from its TOML table."""
        slot_id = _optional_str(slot_data.get("id")) or new_slot_id()
        stop_id = _optional_str(slot_data.get("stop_id"))
        quay_id = _optional_str(slot_data.get("quay_id"))

        if stop_id is None:
            logger.warning(f"Slot {slot_id} has no stop_id; it will show no data")
        elif not is_valid_stop_place_id(stop_id):
            logger.warning(f"Slot {slot_id}: stop_id {stop_id!r} is not an NSR:StopPlace id")
        if not is_valid_quay_id(quay_id):
            logger.warning(f"Slot {slot_id}: quay_id {quay_id!r} is not an NSR:Quay id")

        return SlotConfig(
            id=slot_id,
            stop_id=stop_id,
            quay_id=quay_id,
            line_filter=_optional_str(slot_data.get("line_filter")),
            destination_filter=_optional_str(slot_data.get("destination_filter")),
            display_name=_optional_str(slot_data.get("display_name")) or "",
            text_color=parse_color(slot_data.get("text_color", DEFAULT_TEXT_COLOR)),
            schedule=parse_schedule(slot_data.get("schedule")),
        )
