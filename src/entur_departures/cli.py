"""CLI helpers for configuring Entur departure slots."""

import argparse
import asyncio
import json
import sys
from dataclasses import asdict

import aiohttp

from entur_departures.adapters.config import AppConfig
from entur_departures.adapters.config.app_config import build_display_name
from entur_departures.adapters.entur_api import (
    EnturGraphQLClient,
    EnturQueryClient,
    EnturStopRepository,
)
from entur_departures.application.services import StopGroupFetchPipeline
from entur_departures.domain.models import LineDestinationInfo, SlotConfig, new_slot_id


def generate_slot_snippet(
    stop_id: str,
    quay_id: str | None = None,
    line_filter: str | None = None,
    destination_filter: str | None = None,
    info: LineDestinationInfo | None = None,
) -> str:
    """Generate a TOML [[slots]] snippet for a stop."""
    lines = [
        "[[slots]]",
        f'id = "{new_slot_id()}"',
        f'stop_id = "{stop_id}"',
        f'display_name = "{build_display_name(line_filter, destination_filter)}"',
        'text_color = "yellow"',
    ]
    if quay_id:
        lines.append(f'quay_id = "{quay_id}"')
    if line_filter:
        lines.append(f'line_filter = "{line_filter}"')
    if destination_filter:
        lines.append(f'destination_filter = "{destination_filter}"')
    if info is not None:
        if info.lines:
            lines.append(f"# Lines: {', '.join(info.lines)}")
        if info.destinations:
            lines.append(f"# Destinations: {', '.join(info.destinations)}")
    lines.extend(
        [
            "",
            "# Optional: only show this slot in a weekly window",
            "# [slots.schedule]",
            '# start = "07:00"',
            '# end = "09:00"',
            '# days = ["mon", "tue", "wed", "thu", "fri"]',
        ]
    )
    return "\n".join(lines)


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))


async def _run_command(args: argparse.Namespace, config: AppConfig) -> None:
    async with aiohttp.ClientSession() as session:
        graphql_client = EnturGraphQLClient(
            session,
            client_name=config.entur_client_name,
            timeout_seconds=config.stop_query_timeout_seconds,
        )
        repository = EnturStopRepository(session, graphql_client)

        if args.command == "search":
            stops = await repository.search_stops(args.query)
            if args.json:
                _print_json([stop.model_dump() for stop in stops])
                return
            if not stops:
                print(f"No stops found for '{args.query}'", file=sys.stderr)
                sys.exit(1)
            print(f"\nFound {len(stops)} stop(s):\n")
            for stop in stops:
                print(f"  {stop.name} ({stop.locality or 'Unknown'})")
                print(f"    ID: {stop.id}")

        elif args.command == "quays":
            quays = await repository.get_quays(args.stop_id)
            if args.json:
                _print_json([quay.model_dump() for quay in quays])
                return
            if not quays:
                print(f"No quays found for {args.stop_id}", file=sys.stderr)
                sys.exit(1)
            for quay in quays:
                lines = ", ".join(quay.lines) or "no upcoming lines"
                print(f"  {quay.name} ({quay.id}): {lines}")

        elif args.command == "lines":
            info = await repository.get_lines_and_destinations(args.stop_id, args.quay)
            if args.json:
                _print_json(info.model_dump())
                return
            print(f"Lines: {', '.join(info.lines) or '-'}")
            print(f"Destinations: {', '.join(info.destinations) or '-'}")

        elif args.command == "departures":
            pipeline = StopGroupFetchPipeline(
                EnturQueryClient(
                    graphql_client,
                    number_of_departures=config.entur_number_of_departures,
                    time_range_seconds=config.entur_time_range_seconds,
                ),
                stop_query_timeout_seconds=config.stop_query_timeout_seconds,
            )
            slot = SlotConfig(
                id="preview",
                stop_id=args.stop_id,
                quay_id=args.quay,
                line_filter=args.line,
                destination_filter=args.destination,
            )
            departures = (await pipeline.fetch_all([slot]))["preview"]
            if args.json:
                _print_json([asdict(d) for d in departures] if departures else None)
                return
            if not departures:
                print("No departures", file=sys.stderr)
                sys.exit(1)
            for departure in departures:
                live = " (live)" if departure.is_realtime else ""
                print(
                    f"  {departure.minutes_until_departure:>3} min  "
                    f"{departure.line_code:<5} {departure.destination}{live}"
                )

        elif args.command == "generate":
            info = await repository.get_lines_and_destinations(args.stop_id, args.quay)
            print(
                generate_slot_snippet(
                    args.stop_id,
                    quay_id=args.quay,
                    line_filter=args.line,
                    destination_filter=args.destination,
                    info=info,
                )
            )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Entur Departures Configuration Helper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Search for stops
  entur-departures-cli search "Jernbanetorget"

  # List quays and the lines calling there
  entur-departures-cli quays NSR:StopPlace:58366

  # Show upcoming departures for a filter
  entur-departures-cli departures NSR:StopPlace:58366 --line 31

  # Generate a [[slots]] snippet
  entur-departures-cli generate NSR:StopPlace:58366 --line 31
        """,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    search_parser = subparsers.add_parser("search", help="Search for stops")
    search_parser.add_argument("query", help="Stop name to search for")
    search_parser.add_argument("--json", action="store_true", help="Output as JSON")

    quays_parser = subparsers.add_parser("quays", help="List quays of a stop")
    quays_parser.add_argument("stop_id", help="Stop place ID (e.g., NSR:StopPlace:58366)")
    quays_parser.add_argument("--json", action="store_true", help="Output as JSON")

    lines_parser = subparsers.add_parser("lines", help="List lines and destinations of a stop")
    lines_parser.add_argument("stop_id", help="Stop place ID")
    lines_parser.add_argument("--quay", help="Only this quay (e.g., NSR:Quay:11142)")
    lines_parser.add_argument("--json", action="store_true", help="Output as JSON")

    for name, help_text in (
        ("departures", "Show upcoming departures for a slot filter"),
        ("generate", "Generate a [[slots]] config snippet"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("stop_id", help="Stop place ID")
        sub.add_argument("--quay", help="Quay ID filter")
        sub.add_argument("--line", help="Line public code filter (exact match)")
        sub.add_argument("--destination", help="Destination filter (case-insensitive substring)")
        if name == "departures":
            sub.add_argument("--json", action="store_true", help="Output as JSON")

    return parser


async def main() -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        await _run_command(args, AppConfig(config_file=None))
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_main()
