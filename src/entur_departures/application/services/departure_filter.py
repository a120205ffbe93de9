"""Per-slot filtering of a stop snapshot."""

from datetime import UTC, datetime

from entur_departures.domain.models.departure_call import DepartureCall, StopSnapshot
from entur_departures.domain.models.departure_info import DepartureInfo
from entur_departures.domain.models.slot_config import SlotConfig


def minutes_until(departure_time: datetime, reference: datetime) -> int:
    """Whole minutes from ``reference`` to ``departure_time``, truncated toward zero."""
    delta = departure_time.astimezone(UTC) - reference.astimezone(UTC)
    return int(delta.total_seconds() / 60)


def _matches(call: DepartureCall, slot: SlotConfig) -> bool:
    if slot.quay_id and call.quay_id != slot.quay_id:
        return False
    if slot.line_filter and call.line_code != slot.line_filter:
        return False
    if slot.destination_filter and (
        slot.destination_filter.casefold() not in call.destination.casefold()
    ):
        return False
    return True


def filter_departures(
    snapshot: StopSnapshot, slot: SlotConfig, reference_time: datetime
) -> list[DepartureInfo]:
    """Select the calls of a snapshot that belong to a slot.

    Calls are dropped when they miss the slot's quay, line or destination
    filter, or when they already left. Survivors are sorted by minutes until
    departure; ties keep snapshot order. Nothing is truncated here.
    """
    departures: list[DepartureInfo] = []
    for call in snapshot.calls:
        if not _matches(call, slot):
            continue
        minutes = minutes_until(call.departure_time, reference_time)
        if minutes < 0:
            continue
        departures.append(
            DepartureInfo(
                minutes_until_departure=minutes,
                line_code=call.line_code,
                destination=call.destination,
                is_realtime=call.is_realtime,
            )
        )

    # sorted() is stable, so equal minutes keep their snapshot order
    return sorted(departures, key=lambda d: d.minutes_until_departure)
