"""Schedule domain model."""

from dataclasses import dataclass, field
from datetime import time

# Index matches datetime.weekday(): Monday is 0.
WEEKDAY_NAMES = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")

ALL_WEEKDAYS = frozenset(range(7))


@dataclass(frozen=True)
class Schedule:
    """Recurring weekly time window during which a slot is shown.

    A window whose start is after its end spans midnight (e.g. 22:00-06:00).
    Both ends are inclusive.
    """

    start: time = time(0, 0)
    end: time = time(23, 59)
    days: frozenset[int] = field(default_factory=lambda: ALL_WEEKDAYS)

    @property
    def wraps_midnight(self) -> bool:
        """True when the window crosses midnight."""
        return self.start > self.end
