#!/usr/bin/env python3
"""Command-line interface for the MBTA departure board."""

import argparse
import sys
from typing import List, Optional, Sequence, Tuple

from .boards import build_boards, station_boards
from .config.settings import settings
from .exceptions import ParseError
from .ingestion.base import MbtaService
from .ingestion.file_service import JsonFileService
from .ingestion.v3_rest_service import V3RestService
from .models.board import DepartureBoard
from .processing.extractor import ExtractionOptions
from .utils.logging import get_logger, setup_logging


class DepartureBoardCLI:
    """CLI interface for departure board operations."""

    def __init__(self):
        """Initialize the CLI."""
        self.logger = get_logger(__name__)

    def parse_args(self, argv: Optional[Sequence[str]] = None):
        """Parse command line arguments."""
        parser = argparse.ArgumentParser(
            description="MBTA commuter rail departure board",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Show live boards for North and South Station
  mbta-board board

  # Show one stop, outbound trains only
  mbta-board board --stop place-north --direction Outbound

  # Show a board from a saved API response
  mbta-board board --fixture src/mbta_board/testdata/predictions-delayed.json

  # Run the web dashboard
  mbta-board serve --port 8000
            """
        )
        parser.add_argument(
            "--log-level",
            default=settings.log_level,
            help=f"Log level (default: {settings.log_level})"
        )

        subparsers = parser.add_subparsers(dest="command", help="Available commands")

        board_parser = subparsers.add_parser("board", help="Print departure boards")
        board_parser.add_argument(
            "--stop", "-s",
            action="append",
            dest="stops",
            help="Stop id to show (repeatable, default: North and South Station)"
        )
        board_parser.add_argument(
            "--fixture", "-f",
            help="Read predictions from a JSON file instead of the API"
        )
        board_parser.add_argument(
            "--direction", "-d",
            choices=["Outbound", "Inbound"],
            default=settings.direction_filter,
            help="Only show trains heading this way"
        )
        board_parser.add_argument(
            "--strict",
            action="store_true",
            default=settings.require_status,
            help="Skip predictions without a status"
        )

        serve_parser = subparsers.add_parser("serve", help="Run the web dashboard")
        serve_parser.add_argument("--host", default=settings.dashboard_host)
        serve_parser.add_argument("--port", "-p", type=int, default=settings.dashboard_port)
        serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

        return parser.parse_args(argv)

    def build_service(self, args) -> MbtaService:
        """Service for the board command: a fixture file or the live API."""
        options = ExtractionOptions.from_settings(settings)
        options.direction = args.direction
        options.require_status = args.strict

        if args.fixture:
            return JsonFileService(args.fixture, options=options)
        service = V3RestService.from_settings(settings)
        service.options = options
        return service

    def display_boards(self, boards: List[DepartureBoard]) -> bool:
        """Print boards; returns False if any board failed outright."""
        all_ok = True
        for board in boards:
            print("=" * 60)
            print(board.title.upper())
            print("=" * 60)

            if board.departures:
                print(f"{'TIME':<10}{'DESTINATION':<28}{'TRACK':<8}STATUS")
                print("-" * 60)
                for departure in board.departures:
                    print(
                        f"{departure.time_label:<10}{departure.destination:<28}"
                        f"{departure.track:<8}{departure.status}"
                    )
            elif not board.error:
                print("No upcoming departures.")

            if board.error:
                print(f"Error: {board.error}")
                if not isinstance(board.error, ParseError):
                    all_ok = False
            print()
        return all_ok

    def show_boards(self, args) -> int:
        stations: List[Tuple[str, str]]
        if args.stops:
            stations = [(stop_id, stop_id) for stop_id in args.stops]
        else:
            stations = station_boards(settings)

        service = self.build_service(args)
        try:
            boards = build_boards(service, stations)
        finally:
            if isinstance(service, V3RestService):
                service.close()
        return 0 if self.display_boards(boards) else 1

    def serve(self, args) -> int:
        import uvicorn

        print(f"Dashboard will be available at: http://{args.host}:{args.port}")
        uvicorn.run(
            "mbta_board.dashboard.app:app",
            host=args.host,
            port=args.port,
            reload=args.reload,
            log_level=settings.log_level.lower()
        )
        return 0

    def run(self, argv: Optional[Sequence[str]] = None) -> int:
        """Run the CLI."""
        args = self.parse_args(argv)
        setup_logging(level=args.log_level, enable_json=settings.log_json)

        if not args.command:
            print("No command specified. Use --help for available commands.")
            return 1

        if args.command == "board":
            return self.show_boards(args)
        elif args.command == "serve":
            return self.serve(args)

        print(f"Unknown command: {args.command}")
        return 1


def main():
    """Main entry point for CLI."""
    cli = DepartureBoardCLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
