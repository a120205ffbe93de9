"""Main entry point for the Entur departures application."""

import asyncio
import contextlib
import logging
import signal
import sys
from collections.abc import Coroutine
from typing import Any

import aiohttp

from entur_departures.adapters.config import AppConfig, SlotConfigurationLoader
from entur_departures.adapters.display import ConsoleDisplayAdapter
from entur_departures.adapters.entur_api import EnturGraphQLClient, EnturQueryClient
from entur_departures.adapters.formatters import SlotDisplayFormatter
from entur_departures.adapters.state import SlotStateStore
from entur_departures.application.services import (
    DisplayRefreshCoordinator,
    SlotRegistry,
    StopGroupFetchPipeline,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)


async def _reload_slots(config: AppConfig, registry: SlotRegistry) -> None:
    """Re-read the configuration file and apply its slots."""
    try:
        slots = SlotConfigurationLoader.load(config)
        await registry.replace_all(slots)
    except (ValueError, FileNotFoundError) as e:
        logger.error(f"Keeping current slots, configuration reload failed: {e}")


def _spawn_tracked(tasks: set[asyncio.Task], coro: Coroutine[Any, Any, None]) -> asyncio.Task:
    """Run ``coro`` as a task that stays referenced in ``tasks`` until it is done."""
    task = asyncio.get_running_loop().create_task(coro)
    tasks.add(task)
    task.add_done_callback(tasks.discard)
    return task


def _install_signal_handlers(
    config: AppConfig,
    registry: SlotRegistry,
    coordinator: DisplayRefreshCoordinator,
    stop_event: asyncio.Event,
    tasks: set[asyncio.Task],
) -> None:
    """SIGHUP reloads the slots, SIGUSR1 refreshes now, SIGINT/SIGTERM stop.

    Tasks started by a signal are kept in ``tasks`` until they finish.
    """
    loop = asyncio.get_running_loop()
    handlers = {
        signal.SIGINT: stop_event.set,
        signal.SIGTERM: stop_event.set,
        signal.SIGHUP: lambda: _spawn_tracked(tasks, _reload_slots(config, registry)),
        signal.SIGUSR1: lambda: _spawn_tracked(tasks, coordinator.refresh_now()),
    }
    for sig, handler in handlers.items():
        # Not available on every platform (e.g. Windows event loops)
        with contextlib.suppress(NotImplementedError, RuntimeError):
            loop.add_signal_handler(sig, handler)


async def _cancel_tasks(tasks: set[asyncio.Task]) -> None:
    for task in list(tasks):
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task


async def main() -> None:
    """Main application entry point."""
    try:
        config = AppConfig()
        logging.getLogger().setLevel(config.log_level)
        slots = SlotConfigurationLoader.load(config)
    except (ValueError, FileNotFoundError) as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    logger.info(f"Loaded {len(slots)} slot(s):")
    for slot in slots:
        logger.info(f"  - {slot.display_name or slot.id}: stop {slot.stop_id}")
    if not slots:
        logger.warning("No slots configured. Add [[slots]] to your config.toml.")

    async with aiohttp.ClientSession() as session:
        graphql_client = EnturGraphQLClient(
            session,
            client_name=config.entur_client_name,
            timeout_seconds=config.stop_query_timeout_seconds,
        )
        query_client = EnturQueryClient(
            graphql_client,
            number_of_departures=config.entur_number_of_departures,
            time_range_seconds=config.entur_time_range_seconds,
        )
        pipeline = StopGroupFetchPipeline(
            query_client, stop_query_timeout_seconds=config.stop_query_timeout_seconds
        )
        coordinator = DisplayRefreshCoordinator(
            pipeline=pipeline,
            store=SlotStateStore(),
            display=ConsoleDisplayAdapter(local_timezone=config.local_timezone),
            formatter=SlotDisplayFormatter(config),
            refresh_interval_seconds=config.refresh_interval_seconds,
            slots=slots,
            local_timezone=config.local_timezone,
        )
        registry = SlotRegistry(slots, max_slots=config.max_slots)
        registry.add_listener(coordinator.reconfigure)

        stop_event = asyncio.Event()
        signal_tasks: set[asyncio.Task] = set()
        _install_signal_handlers(config, registry, coordinator, stop_event, signal_tasks)

        await coordinator.start()
        try:
            await stop_event.wait()
        finally:
            logger.info("Shutting down...")
            await _cancel_tasks(signal_tasks)
            await coordinator.stop()


def run() -> None:
    """Console script entry point."""
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(main())


if __name__ == "__main__":
    run()
