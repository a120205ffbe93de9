"""Countdown projection between fetches."""

import math
from dataclasses import replace
from datetime import UTC, datetime

from entur_departures.domain.models.departure_info import DepartureInfo
from entur_departures.domain.models.slot_state import SlotState


def elapsed_minutes(fetched_at: datetime, now: datetime) -> int:
    """Whole minutes since ``fetched_at``, never negative."""
    seconds = (now.astimezone(UTC) - fetched_at.astimezone(UTC)).total_seconds()
    return max(0, math.floor(seconds / 60))


def project_countdown(state: SlotState | None, now: datetime) -> list[DepartureInfo] | None:
    """Derive the currently displayable countdown from a cached slot state.

    Returns None when the slot has no data. Otherwise every cached entry is
    shifted down by the minutes elapsed since the fetch, and entries that
    would go negative are dropped. The cached state is never modified.
    """
    if state is None or state.departures is None:
        return None

    if state.fetched_at is None:
        return list(state.departures)

    elapsed = elapsed_minutes(state.fetched_at, now)
    return [
        replace(departure, minutes_until_departure=departure.minutes_until_departure - elapsed)
        for departure in state.departures
        if departure.minutes_until_departure - elapsed >= 0
    ]
