"""Volunteer Match command-line entry point."""

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape as markup_escape
from rich.table import Table

from volunteer_match.config import LOG_PATH, MatchingConfig, load_config, resolve_db_path, save_config
from volunteer_match.errors import ConfigError, NotFound, StoreUnavailable
from volunteer_match.matching.ranker import MatchResult
from volunteer_match.matching.service import MatchService
from volunteer_match.output.export import EXPORT_EXTENSIONS, export_matches
from volunteer_match.storage.database import create_db_engine
from volunteer_match.storage.sql_store import SqlStore
from volunteer_match.storage.store import EventStore, InMemoryStore

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_STORE_UNAVAILABLE = 2
EXIT_BAD_CONFIG = 3
EXIT_EXPORT_FAILED = 4


def configure_logging(verbose: bool = False, log_path: Path = LOG_PATH) -> None:
    """Configure application logging."""
    log_path.parent.mkdir(parents=True, exist_ok=True)
    level = logging.DEBUG if verbose else logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    resolved = str(log_path.resolve())
    has_file_handler = any(
        isinstance(handler, logging.FileHandler)
        and handler.baseFilename == resolved
        for handler in root_logger.handlers
    )
    if not has_file_handler:
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def non_negative_int(value: str) -> int:
    """argparse type for counts and score thresholds."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {number}")
    return number


def export_path(value: str) -> str:
    """argparse type for --save, checked before any matching runs."""
    if Path(value).suffix.lower() not in EXPORT_EXTENSIONS:
        raise argparse.ArgumentTypeError(
            f"unsupported export format {value!r}, use one of {', '.join(EXPORT_EXTENSIONS)}"
        )
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="volunteer-match",
        description="Rank open volunteer events for a volunteer.",
    )
    parser.add_argument("--config", help="Matching config YAML (default data/matching.yaml)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    match = commands.add_parser("match", help="Show ranked events for a volunteer")
    match.add_argument("volunteer_id")
    match.add_argument("--limit", type=non_negative_int, help="Show only the top N events")
    match.add_argument("--min-score", type=non_negative_int, help="Hide events scoring below this")
    source = match.add_mutually_exclusive_group()
    source.add_argument("--snapshot", help="YAML snapshot of volunteers and events")
    source.add_argument("--db", help="SQLite database (default data/volunteers.db)")
    match.add_argument("--save", type=export_path, help="Export results (.json, .csv, .md)")

    commands.add_parser("init-config", help="Write the default matching config")
    return parser


def build_store(args: argparse.Namespace) -> EventStore:
    """Pick the store named on the command line."""
    if args.snapshot:
        return InMemoryStore.from_snapshot(Path(args.snapshot))
    db_path = Path(args.db) if args.db else resolve_db_path()
    return SqlStore(create_db_engine(db_path))


def render_matches(console: Console, volunteer_id: str, matches: List[MatchResult]) -> None:
    if not matches:
        console.print(f"[yellow]No open events with capacity for {markup_escape(volunteer_id)}.[/yellow]")
        return

    table = Table(title=f"Matches for {markup_escape(volunteer_id)}")
    table.add_column("#", justify="right")
    table.add_column("Event")
    table.add_column("Date")
    table.add_column("Location")
    table.add_column("Slots", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Why")

    for i, match in enumerate(matches, 1):
        if match.score >= 80:
            score_style = "#10b981"  # Emerald
        elif match.score >= 60:
            score_style = "#f59e0b"  # Amber
        else:
            score_style = "#ef4444"  # Ruby Red

        event = match.event
        table.add_row(
            str(i),
            markup_escape(event.title),
            event.date.strftime("%Y-%m-%d"),
            markup_escape(event.location),
            str(event.remaining_slots),
            f"[{score_style}]{match.score}%[/{score_style}]",
            markup_escape("\n".join(match.why)) or "[dim]-[/dim]",
        )

    console.print(table)


def run_match(args: argparse.Namespace, console: Console) -> int:
    try:
        config = load_config(Path(args.config) if args.config else None)
        service = MatchService.from_config(build_store(args), config)
        limit = args.limit if args.limit is not None else config.default_limit
        matches = service.match(args.volunteer_id, limit=limit)
    except ConfigError as e:
        console.print(f"[#ef4444]{markup_escape(str(e))}[/#ef4444]")
        return EXIT_BAD_CONFIG
    except NotFound as e:
        console.print(f"[#ef4444]{markup_escape(str(e))}[/#ef4444]")
        return EXIT_NOT_FOUND
    except StoreUnavailable as e:
        console.print(f"[#ef4444]{markup_escape(str(e))}[/#ef4444]")
        return EXIT_STORE_UNAVAILABLE

    if args.min_score is not None:
        matches = [m for m in matches if m.score >= args.min_score]

    render_matches(console, args.volunteer_id, matches)

    if args.save:
        try:
            export_matches(matches, args.save, volunteer_id=args.volunteer_id)
        except OSError as e:
            console.print(f"[#ef4444]Could not write {markup_escape(args.save)}: {markup_escape(str(e))}[/#ef4444]")
            return EXIT_EXPORT_FAILED
        console.print(f"[green]Saved {len(matches)} matches to {markup_escape(args.save)}[/green]")
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None, console: Optional[Console] = None) -> int:
    """Entry point for the application."""
    load_dotenv()
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    console = console or Console()

    if args.command == "init-config":
        path = save_config(MatchingConfig(), Path(args.config) if args.config else None)
        console.print(f"[green]Wrote default config to {markup_escape(str(path))}[/green]")
        return EXIT_OK

    return run_match(args, console)


if __name__ == "__main__":
    raise SystemExit(main())
