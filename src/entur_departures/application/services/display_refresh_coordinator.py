"""Dual-cadence refresh coordination.

Two independent periodic tasks share one published read model:

- the fetch task starts a pipeline cycle every ``refresh_interval_seconds``
  in a task of its own; each cycle publishes its results at once, then does a
  presentation pass. Cycles may overlap; one that finishes after a newer one
  is discarded;
- the presentation task runs every second, evaluates schedules and projects
  countdowns from the last published snapshot without any network I/O.

Everything runs on one event loop, which is the single writer of the store.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass
from datetime import UTC, datetime, tzinfo
from typing import TYPE_CHECKING

from entur_departures.application.services.countdown_projector import project_countdown
from entur_departures.application.services.schedule_evaluator import is_active
from entur_departures.domain.contracts.refresh_coordinator import RefreshCoordinatorProtocol
from entur_departures.domain.models.slot_display import DisplayFrame, SlotDisplay

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from entur_departures.domain.contracts.fetch_pipeline import FetchPipelineProtocol
    from entur_departures.domain.contracts.slot_display_formatter import (
        SlotDisplayFormatterProtocol,
    )
    from entur_departures.domain.contracts.slot_state_store import SlotStateStoreProtocol
    from entur_departures.domain.models.slot_config import SlotConfig
    from entur_departures.domain.ports import DisplayAdapter

logger = logging.getLogger(__name__)

PRESENTATION_INTERVAL_SECONDS = 1.0


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass
class SlotPresentation:
    """Mutable presentation state of one slot, owned by the coordinator."""

    slot: SlotConfig
    visible: bool = False
    last_display: SlotDisplay | None = None


class DisplayRefreshCoordinator(RefreshCoordinatorProtocol):
    """Runs the fetch and presentation cadences against one slot state store."""

    def __init__(
        self,
        pipeline: FetchPipelineProtocol,
        store: SlotStateStoreProtocol,
        display: DisplayAdapter,
        formatter: SlotDisplayFormatterProtocol,
        refresh_interval_seconds: float,
        slots: Sequence[SlotConfig] = (),
        local_timezone: tzinfo = UTC,
        presentation_interval_seconds: float = PRESENTATION_INTERVAL_SECONDS,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the coordinator.

        Args:
            pipeline: Fetch pipeline resolving all slots per cycle.
            store: Store the fetch results are published to.
            display: Presentation sink.
            formatter: Builds labels and summaries from projections.
            refresh_interval_seconds: Fetch cadence, must be positive. No other
                minimum is enforced here.
            slots: Initial slot list.
            local_timezone: Timezone schedules are evaluated in.
            presentation_interval_seconds: Presentation cadence.
            clock: Source of the current instant; defaults to UTC now.
        """
        if refresh_interval_seconds <= 0:
            raise ValueError("refresh_interval_seconds must be positive")
        self.pipeline = pipeline
        self.store = store
        self.display = display
        self.formatter = formatter
        self.refresh_interval_seconds = refresh_interval_seconds
        self.local_timezone = local_timezone
        self.presentation_interval_seconds = presentation_interval_seconds
        self._clock = clock or _utc_now
        self._slots: tuple[SlotConfig, ...] = tuple(slots)
        self._presentations: dict[str, SlotPresentation] = {}
        self._fetch_task: asyncio.Task | None = None
        self._presentation_task: asyncio.Task | None = None
        self._cycle_tasks: set[asyncio.Task] = set()
        self._tick_tasks: set[asyncio.Task] = set()
        self._cycles_started = 0
        self._last_published_cycle = 0

    @property
    def slots(self) -> tuple[SlotConfig, ...]:
        return self._slots

    @property
    def presentations(self) -> dict[str, SlotPresentation]:
        return dict(self._presentations)

    @property
    def is_running(self) -> bool:
        return self._fetch_task is not None and not self._fetch_task.done()

    async def start(self) -> None:
        """Start both periodic triggers; the first fetch cycle runs immediately."""
        if self.is_running:
            logger.warning("Refresh coordinator already running")
            return

        self.store.reset(slot.id for slot in self._slots)
        await self._sync_presentations()

        self._fetch_task = asyncio.create_task(self._fetch_loop())
        self._presentation_task = asyncio.create_task(self._presentation_loop())
        logger.info(
            f"Started refresh coordinator: {len(self._slots)} slot(s), "
            f"fetch every {self.refresh_interval_seconds}s, "
            f"redisplay every {self.presentation_interval_seconds}s"
        )

    async def stop(self) -> None:
        """Stop both periodic triggers and dispose every slot's presentation."""
        tasks = [self._fetch_task, self._presentation_task, *self._tick_tasks, *self._cycle_tasks]
        for task in tasks:
            if task is not None and not task.done():
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
        self._fetch_task = None
        self._presentation_task = None
        self._tick_tasks.clear()
        self._cycle_tasks.clear()

        for slot_id in list(self._presentations):
            await self._dispose(slot_id)
        logger.info("Stopped refresh coordinator")

    async def reconfigure(self, slots: Sequence[SlotConfig]) -> None:
        """Replace the slot list.

        Any in-flight fetch cycle is cancelled and its results can no longer
        be published. The store is reseeded for the new slots and a fetch
        cycle runs immediately.
        """
        in_flight = [task for task in self._cycle_tasks if not task.done()]
        if in_flight:
            logger.info(
                f"Cancelling {len(in_flight)} in-flight fetch cycle(s) after configuration change"
            )
            for task in in_flight:
                task.cancel()

        self._slots = tuple(slots)
        self.store.reset(slot.id for slot in self._slots)
        await self._sync_presentations()
        logger.info(f"Reconfigured refresh coordinator with {len(self._slots)} slot(s)")

        await self.refresh_now()

    async def refresh_now(self) -> None:
        """Run one fetch cycle now, outside the regular cadence."""
        await self._run_fetch_cycle_safely()

    async def run_fetch_cycle(self) -> bool:
        """Run the pipeline, publish its results and redisplay.

        Returns:
            True if the results were published, False if they were discarded.
        """
        generation = self.store.generation
        slots = self._slots
        self._cycles_started += 1
        cycle_number = self._cycles_started

        cycle_task = asyncio.create_task(self.pipeline.run_cycle(slots))
        self._cycle_tasks.add(cycle_task)
        try:
            results = await cycle_task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
            logger.info(f"Fetch cycle {cycle_number} was cancelled, results discarded")
            return False
        finally:
            self._cycle_tasks.discard(cycle_task)

        if cycle_number < self._last_published_cycle:
            logger.debug(f"Fetch cycle {cycle_number} finished after a newer one, discarded")
            return False

        if not self.store.publish(generation, results, self._clock()):
            logger.info(f"Fetch cycle {cycle_number} started under an old configuration, discarded")
            return False
        self._last_published_cycle = cycle_number

        await self.present()
        return True

    async def present(self) -> DisplayFrame:
        """Evaluate schedules and project countdowns for every slot, then render.

        Reads only the last published snapshot; never touches the network.
        """
        now = self._clock()
        local_now = now.astimezone(self.local_timezone)
        snapshot = self.store.snapshot()

        displays: list[SlotDisplay] = []
        for slot in self._slots:
            presentation = self._presentations.get(slot.id)
            if presentation is None:
                continue

            visible = is_active(slot.schedule, local_now)
            if visible != presentation.visible:
                logger.debug(f"Slot {slot.id} is now {'visible' if visible else 'hidden'}")
                presentation.visible = visible
            if not visible:
                continue

            projection = project_countdown(snapshot.get(slot.id), now)
            display = self.formatter.format_slot(slot, projection)
            presentation.last_display = display
            displays.append(display)

        idle_message = None if displays else self.formatter.idle_message(len(self._slots))
        frame = DisplayFrame(rendered_at=now, slots=tuple(displays), idle_message=idle_message)
        await self.display.render(frame)
        return frame

    async def _run_fetch_cycle_safely(self) -> None:
        try:
            await self.run_fetch_cycle()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            # Log and keep going; the next tick retries
            logger.error(f"Error in fetch cycle (will retry): {e}", exc_info=True)

    async def _fetch_loop(self) -> None:
        loop = asyncio.get_running_loop()
        next_tick = loop.time()
        try:
            while True:
                # Each cycle runs in its own task so a slow stop never delays the next tick
                self._start_tick()
                next_tick += self.refresh_interval_seconds
                now = loop.time()
                while next_tick <= now:
                    next_tick += self.refresh_interval_seconds
                await asyncio.sleep(next_tick - now)
        except asyncio.CancelledError:
            logger.info("Fetch loop cancelled")
            raise

    def _start_tick(self) -> None:
        task = asyncio.create_task(self._run_fetch_cycle_safely())
        self._tick_tasks.add(task)
        task.add_done_callback(self._tick_tasks.discard)

    async def _presentation_loop(self) -> None:
        try:
            while True:
                await asyncio.sleep(self.presentation_interval_seconds)
                try:
                    await self.present()
                except Exception as e:
                    logger.error(f"Error in presentation pass: {e}", exc_info=True)
        except asyncio.CancelledError:
            logger.info("Presentation loop cancelled")
            raise

    async def _sync_presentations(self) -> None:
        """Create, replace and dispose per-slot presentation state for the slot list."""
        wanted = {slot.id: slot for slot in self._slots}

        for slot_id in list(self._presentations):
            if slot_id not in wanted:
                await self._dispose(slot_id)

        for slot_id, slot in wanted.items():
            existing = self._presentations.get(slot_id)
            if existing is not None and existing.slot == slot:
                continue
            if existing is not None:
                await self._dispose(slot_id)
            self._presentations[slot_id] = SlotPresentation(slot=slot)
            await self.display.create_slot(slot)
            logger.debug(f"Created presentation for slot {slot_id}")

    async def _dispose(self, slot_id: str) -> None:
        del self._presentations[slot_id]
        await self.display.dispose_slot(slot_id)
        logger.debug(f"Disposed presentation for slot {slot_id}")
