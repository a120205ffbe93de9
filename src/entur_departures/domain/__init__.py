"""Domain layer - core models, ports and contracts."""

from entur_departures.domain.exceptions import (
    FetchError,
    SlotLimitExceededError,
    UnknownSlotError,
)
from entur_departures.domain.models import (
    DepartureCall,
    DepartureInfo,
    Schedule,
    SlotConfig,
    StopSnapshot,
)
from entur_departures.domain.ports import (
    DisplayAdapter,
    StopRepository,
    TransitQueryClient,
)

__all__ = [
    "DepartureCall",
    "DepartureInfo",
    "DisplayAdapter",
    "FetchError",
    "Schedule",
    "SlotConfig",
    "SlotLimitExceededError",
    "StopRepository",
    "StopSnapshot",
    "TransitQueryClient",
    "UnknownSlotError",
]
