"""Raw departure call and stop snapshot domain models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class DepartureCall:
    """One upcoming call at a quay, as reported by the journey planner."""

    quay_id: str
    line_code: str
    destination: str
    departure_time: datetime  # Expected (or aimed) departure, timezone-aware
    is_realtime: bool


@dataclass(frozen=True)
class StopSnapshot:
    """All upcoming calls returned by one query for one stop."""

    stop_id: str
    stop_name: str
    calls: tuple[DepartureCall, ...] = ()
