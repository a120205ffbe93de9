"""Weekly schedule activation."""

from datetime import datetime

from entur_departures.domain.models.schedule import Schedule


def is_active(schedule: Schedule | None, now: datetime) -> bool:
    """Check whether a slot with this schedule should be shown at ``now``.

    ``now`` is interpreted in its own timezone (callers pass local time).
    The weekday is always the weekday of ``now``, also for windows that span
    midnight: a Friday 22:00-06:00 window needs Saturday in its day set to
    stay active after midnight on Saturday.
    """
    if schedule is None:
        return True

    if now.weekday() not in schedule.days:
        return False

    current = now.time()

    if schedule.start <= schedule.end:
        return schedule.start <= current <= schedule.end
    return current >= schedule.start or current <= schedule.end
