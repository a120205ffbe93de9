"""12-factor configuration adapter using environment variables and TOML config."""

import logging
import tomllib
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MIN_REFRESH_INTERVAL_SECONDS = 10

# Keys of the legacy single-stop file format (no [[slots]], stop at top level)
LEGACY_SLOT_KEYS = ("stop_id", "quay_id", "line_filter", "destination_filter")


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        # Values merged in from the TOML file go through the same validators
        validate_assignment=True,
    )

    # Entur API configuration
    entur_client_name: str = Field(
        default="entur-departures",
        description="Value of the ET-Client-Name header sent to Entur",
    )
    entur_number_of_departures: int = Field(
        default=10, description="Maximum number of calls fetched per quay"
    )
    entur_time_range_seconds: int = Field(
        default=7200, description="Look-ahead window for fetched calls in seconds"
    )
    stop_query_timeout_seconds: float = Field(
        default=10.0, gt=0, description="Timeout for a single stop query in seconds"
    )

    # Refresh configuration
    refresh_interval_seconds: int = Field(
        default=30, description="Interval between departure fetches in seconds"
    )
    timezone: str = Field(
        default="Europe/Oslo",
        description="Timezone schedules are evaluated in (IANA timezone name)",
    )

    # Slot and display configuration
    max_slots: int = Field(default=5, description="Maximum number of configured slots")
    label_max_minutes: int = Field(
        default=99, description="Largest minute count shown in a slot label"
    )
    summary_departures: int = Field(
        default=3, description="Number of departures listed in a slot summary"
    )
    summary_max_length: int = Field(
        default=63, description="Maximum number of characters of a slot summary"
    )

    log_level: str = Field(default="INFO", description="Root log level")

    # TOML config file path
    config_file: str | None = Field(
        default="config.example.toml",
        description="Path to TOML configuration file with slot definitions",
    )

    @field_validator("refresh_interval_seconds")
    @classmethod
    def validate_refresh_interval(cls, v: int) -> int:
        """Validate refresh interval is at least the minimum."""
        if v < MIN_REFRESH_INTERVAL_SECONDS:
            raise ValueError(
                f"refresh_interval_seconds must be at least {MIN_REFRESH_INTERVAL_SECONDS}"
            )
        return v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate timezone is a known IANA name."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"timezone must be a valid IANA timezone name, got {v!r}") from e
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard logging level name."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"log_level must be a logging level name, got {v!r}")
        return level

    @classmethod
    def for_testing(cls, **overrides: Any) -> "AppConfig":
        """Create a config that ignores .env files and the default TOML file."""
        overrides.setdefault("config_file", None)
        return cls(_env_file=None, **overrides)

    @property
    def local_timezone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def _load_toml_data(self) -> dict[str, Any]:
        """Load and parse the TOML file, updating settings from it."""
        if not self.config_file:
            raise ValueError("config_file must be set to load slot configuration")

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        display = toml_data.get("display", {})
        if isinstance(display, dict):
            for key in (
                "refresh_interval_seconds",
                "timezone",
                "label_max_minutes",
                "summary_departures",
                "summary_max_length",
            ):
                if key in display:
                    setattr(self, key, display[key])

        api = toml_data.get("api", {})
        if isinstance(api, dict):
            for key in (
                "entur_client_name",
                "entur_number_of_departures",
                "entur_time_range_seconds",
                "stop_query_timeout_seconds",
            ):
                if key in api:
                    setattr(self, key, api[key])

        # Legacy files keep the refresh interval at the top level
        if "refresh_interval_seconds" in toml_data and "slots" not in toml_data:
            self.refresh_interval_seconds = toml_data["refresh_interval_seconds"]

        return toml_data

    def get_slots_config(self) -> list[dict[str, Any]]:
        """Parse and return slot definitions as a list of dicts from the TOML file.

        Supports the current ``[[slots]]`` format and the legacy single-stop
        format, which is migrated into a single slot.
        """
        toml_data = self._load_toml_data()

        if "slots" in toml_data:
            slots = toml_data["slots"]
            if not isinstance(slots, list):
                raise ValueError("TOML config 'slots' must be a list")
            return slots

        if "stop_id" in toml_data:
            return [migrate_legacy_slot(toml_data)]

        return []


def build_display_name(line_filter: str | None, destination_filter: str | None) -> str:
    """Build a display name from filters, e.g. 'Line 31 - Tonsenhagen'."""
    parts = []
    if line_filter:
        parts.append(f"Line {line_filter}")
    if destination_filter:
        parts.append(destination_filter)
    return " - ".join(parts) if parts else "Bus Departure"


def migrate_legacy_slot(toml_data: dict[str, Any]) -> dict[str, Any]:
    """Turn a legacy single-stop configuration into one slot definition."""
    slot = {key: toml_data.get(key) for key in LEGACY_SLOT_KEYS}
    slot["display_name"] = build_display_name(slot["line_filter"], slot["destination_filter"])
    return slot
