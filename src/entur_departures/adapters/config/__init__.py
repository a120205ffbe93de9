"""Configuration adapters."""

from entur_departures.adapters.config.app_config import AppConfig
from entur_departures.adapters.config.slot_configuration_loader import SlotConfigurationLoader

__all__ = ["AppConfig", "SlotConfigurationLoader"]
