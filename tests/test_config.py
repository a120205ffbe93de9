"""Tests for configuration adapter."""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import time
from pathlib import Path
from tempfile import NamedTemporaryFile

import pytest

from entur_departures.adapters.config import AppConfig, SlotConfigurationLoader
from entur_departures.adapters.config.app_config import build_display_name
from entur_departures.adapters.config.slot_configuration_loader import (
    is_valid_quay_id,
    is_valid_stop_place_id,
    parse_color,
    parse_schedule,
)


@contextmanager
def _toml_file(content: str) -> Iterator[str]:
    with NamedTemporaryFile(mode="w", suffix=".toml", delete=False) as f:
        f.write(content)
        temp_path = f.name
    try:
        yield temp_path
    finally:
        Path(temp_path).unlink()


def test_config_loads_defaults() -> None:
    """Given no environment variables, when loading config, then defaults are used."""
    config = AppConfig.for_testing()

    assert config.refresh_interval_seconds == 30
    assert config.timezone == "Europe/Oslo"
    assert config.max_slots == 5
    assert config.label_max_minutes == 99
    assert config.summary_max_length == 63


def test_config_loads_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given environment variables, when loading config, then they are used."""
    monkeypatch.setenv("REFRESH_INTERVAL_SECONDS", "60")
    monkeypatch.setenv("ENTUR_CLIENT_NAME", "acme-departures")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = AppConfig.for_testing()

    assert config.refresh_interval_seconds == 60
    assert config.entur_client_name == "acme-departures"
    assert config.log_level == "DEBUG"


def test_config_validates_refresh_interval(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given a refresh interval below 10 seconds, when loading config, then validation fails."""
    monkeypatch.setenv("REFRESH_INTERVAL_SECONDS", "5")

    with pytest.raises(ValueError, match="at least 10"):
        AppConfig.for_testing()


def test_config_validates_timezone() -> None:
    """Given an unknown timezone, when loading config, then validation fails."""
    with pytest.raises(ValueError, match="valid IANA timezone"):
        AppConfig.for_testing(timezone="Mars/Olympus")


def test_config_raises_error_when_file_not_found() -> None:
    """Given non-existent config file, when loading slots, then FileNotFoundError is raised."""
    config = AppConfig.for_testing(config_file="nonexistent.toml")

    with pytest.raises(FileNotFoundError, match="Configuration file not found"):
        config.get_slots_config()


def test_config_raises_error_when_config_file_not_set() -> None:
    """Given config_file is None, when loading slots, then ValueError is raised."""
    config = AppConfig.for_testing()

    with pytest.raises(ValueError, match="config_file must be set"):
        config.get_slots_config()


def test_config_parses_slots_and_display_section() -> None:
    """Given a TOML file with slots and a display section, when loading, then both are applied."""
    toml_content = """
[display]
refresh_interval_seconds = 45
timezone = "UTC"

[[slots]]
id = "morning"
stop_id = "NSR:StopPlace:58366"
line_filter = "31"

[slots.schedule]
start = "07:00"
end = "09:00"
days = ["mon", "tue"]

[[slots]]
stop_id = "NSR:StopPlace:58366"
"""
    with _toml_file(toml_content) as path:
        config = AppConfig.for_testing(config_file=path)
        slots = SlotConfigurationLoader.load(config)

    assert config.refresh_interval_seconds == 45
    assert config.timezone == "UTC"
    assert [slot.stop_id for slot in slots] == ["NSR:StopPlace:58366"] * 2
    assert slots[0].id == "morning"
    assert slots[0].line_filter == "31"
    assert slots[0].schedule is not None
    assert slots[0].schedule.start == time(7, 0)
    assert slots[0].schedule.days == frozenset({0, 1})
    assert slots[1].schedule is None
    assert slots[1].id


def test_config_migrates_legacy_single_stop_file() -> None:
    """Given a legacy file without slots, when loading, then one slot is created from it."""
    toml_content = """
stop_id = "NSR:StopPlace:6505"
line_filter = "20"
destination_filter = "Skøyen"
refresh_interval_seconds = 20
"""
    with _toml_file(toml_content) as path:
        config = AppConfig.for_testing(config_file=path)
        slots = SlotConfigurationLoader.load(config)

    assert len(slots) == 1
    assert slots[0].stop_id == "NSR:StopPlace:6505"
    assert slots[0].display_name == "Line 20 - Skøyen"
    assert config.refresh_interval_seconds == 20


def test_loader_truncates_to_max_slots_and_renames_duplicates() -> None:
    """Given seven slots with a repeated id, when loading, then five remain with unique ids."""
    tables = "\n".join(
        f'[[slots]]\nid = "{slot_id}"\nstop_id = "NSR:StopPlace:1"\n'
        for slot_id in ["a", "a", "b", "c", "d", "e", "f"]
    )
    with _toml_file(tables) as path:
        slots = SlotConfigurationLoader.load(AppConfig.for_testing(config_file=path))

    ids = [slot.id for slot in slots]
    assert len(ids) == 5
    assert len(set(ids)) == 5
    assert ids[0] == "a"
    assert ids[2:] == ["b", "c", "d"]


def test_parse_slot_keeps_invalid_stop_id_but_blank_becomes_none() -> None:
    """Given malformed or blank stop ids, when parsing, then the slot is still created."""
    odd = SlotConfigurationLoader.parse_slot({"id": "x", "stop_id": "58366"})
    blank = SlotConfigurationLoader.parse_slot({"id": "y", "stop_id": "  "})

    assert odd.stop_id == "58366"
    assert blank.stop_id is None


def test_parse_schedule_wrapping_window_and_defaults() -> None:
    """Given a partial schedule table, when parsing, then missing fields use defaults."""
    schedule = parse_schedule({"start": "22:00", "end": "06:00"})

    assert schedule is not None
    assert schedule.wraps_midnight is True
    assert schedule.days == frozenset(range(7))
    assert parse_schedule(None) is None


def test_parse_schedule_rejects_unknown_weekday() -> None:
    """Given an unknown weekday, when parsing, then ValueError is raised."""
    with pytest.raises(ValueError, match="Unknown weekday"):
        parse_schedule({"days": ["funday"]})


def test_parse_color_presets_and_hex() -> None:
    """Given preset names and hex colors, when parsing, then they resolve to hex values."""
    assert parse_color("Cyan") == "#00FFFF"
    assert parse_color("#a0b0c0") == "#A0B0C0"
    assert parse_color("not-a-color") == "#FFFF00"


def test_id_validation() -> None:
    """Given stop and quay ids, when validating, then only NSR ids pass."""
    assert is_valid_stop_place_id("NSR:StopPlace:58366")
    assert not is_valid_stop_place_id("NSR:Quay:1")
    assert not is_valid_stop_place_id("")
    assert is_valid_quay_id(None)
    assert is_valid_quay_id("NSR:Quay:11048")
    assert not is_valid_quay_id("11048")


def test_build_display_name() -> None:
    """Given filters, when building a display name, then it combines them."""
    assert build_display_name("31", "Tonsenhagen") == "Line 31 - Tonsenhagen"
    assert build_display_name(None, None) == "Bus Departure"


@pytest.mark.parametrize(
    ("table", "match"),
    [
        ("[display]\nrefresh_interval_seconds = 0\n", "at least 10"),
        ('[display]\ntimezone = "Mars/Olympus"\n', "valid IANA timezone"),
        ("[api]\nstop_query_timeout_seconds = 0\n", "greater than 0"),
        ('stop_id = "NSR:StopPlace:1"\nrefresh_interval_seconds = 3\n', "at least 10"),
    ],
)
def test_config_validates_values_from_toml(table: str, match: str) -> None:
    """Given an invalid value in the TOML file, when loading slots, then ValueError is raised."""
    with _toml_file(table) as path:
        config = AppConfig.for_testing(config_file=path)

        with pytest.raises(ValueError, match=match):
            SlotConfigurationLoader.load(config)

    assert config.refresh_interval_seconds == 30
    assert config.timezone == "Europe/Oslo"
