"""Application services for departure slots."""

from entur_departures.application.services.countdown_projector import (
    elapsed_minutes,
    project_countdown,
)
from entur_departures.application.services.departure_filter import (
    filter_departures,
    minutes_until,
)
from entur_departures.application.services.display_refresh_coordinator import (
    DisplayRefreshCoordinator,
    SlotPresentation,
)
from entur_departures.application.services.schedule_evaluator import is_active
from entur_departures.application.services.slot_registry import SlotRegistry
from entur_departures.application.services.stop_group_fetch_pipeline import (
    StopGroupFetchPipeline,
    group_slots_by_stop,
)

__all__ = [
    "DisplayRefreshCoordinator",
    "SlotPresentation",
    "SlotRegistry",
    "StopGroupFetchPipeline",
    "elapsed_minutes",
    "filter_departures",
    "group_slots_by_stop",
    "is_active",
    "minutes_until",
    "project_countdown",
]
