"""Entry point: python -m obsidian_memories <command>

- export RECORDS.json  Turn picked suggestions (JSON) into one note
- manual "text"        Write a manual entry
- places               Show (or prune) recently used places
- list                 List notes in the export folder
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import datetime
from pathlib import Path

from obsidian_memories.config import ExportConfig, load_config


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _deliver(exporter, document, args: argparse.Namespace) -> int:
    from obsidian_memories.vault import ExportError

    if args.stdout:
        sys.stdout.write(document.markdown)
        return 0
    try:
        path = exporter.save(document, overwrite=args.overwrite)
    except ExportError as e:
        print(f"Failed to save markdown file: {e}", file=sys.stderr)
        return 1
    print(f"Saved {path}")
    return 0


def cmd_export(args: argparse.Namespace, config: ExportConfig) -> int:
    from obsidian_memories.exporter import MemoryExporter
    from obsidian_memories.records import RecordFormatError, load_records

    try:
        records = load_records(Path(args.records))
    except (OSError, RecordFormatError) as e:
        print(f"Cannot read records: {e}", file=sys.stderr)
        return 1

    exporter = MemoryExporter(config)
    document = asyncio.run(exporter.export_memories(records, note=args.note))
    return _deliver(exporter, document, args)


def _local_datetime(value: str | None) -> datetime:
    """Parse --date (or take now); values without an offset are local time."""
    if not value:
        return datetime.now().astimezone()
    parsed = datetime.fromisoformat(value)
    return parsed if parsed.tzinfo is not None else parsed.astimezone()


def cmd_manual(args: argparse.Namespace, config: ExportConfig) -> int:
    """Write a manual entry.

    The command line has no weather service: weather comes only from
    --cond/--temp. --lat/--lon just remember the place for later.
    """
    from obsidian_memories.exporter import MemoryExporter
    from obsidian_memories.models import Coordinate, WeatherObservation
    from obsidian_memories.places import RecentPlaces

    try:
        date = _local_datetime(args.date)
    except ValueError as e:
        print(f"Invalid --date: {e}", file=sys.stderr)
        return 1

    if args.place and args.lat is not None and args.lon is not None:
        RecentPlaces(config.places_file).add(args.place, Coordinate(args.lat, args.lon))

    weather = None
    if args.cond is not None and args.temp is not None:
        weather = WeatherObservation(args.temp, args.cond)

    exporter = MemoryExporter(config)
    document = asyncio.run(
        exporter.export_manual(args.note, date, place=args.place, weather=weather)
    )
    return _deliver(exporter, document, args)


def cmd_places(args: argparse.Namespace, config: ExportConfig) -> int:
    from obsidian_memories.places import RecentPlaces

    places = RecentPlaces(config.places_file)
    if args.remove:
        if not places.remove(args.remove):
            print(f"No saved place named {args.remove!r}", file=sys.stderr)
            return 1
        print(f"Removed {args.remove}")
        return 0

    if not places.places:
        print("No saved places.")
        return 0
    for place in places.places:
        print(f"{place.name:<30} {place.latitude:.5f}, {place.longitude:.5f}")
    return 0


def cmd_list(args: argparse.Namespace, config: ExportConfig) -> int:
    from obsidian_memories.vault import ExportFolder

    notes = ExportFolder(config.export_dir).list_notes()
    if not notes:
        print("No notes found.")
        return 0
    for note in notes:
        tags = ", ".join(str(t) for t in note["tags"])
        print(f"{note['name']:<28} {note['date_created']:<26} {tags}")
    print(f"\nTotal: {len(notes)} note(s)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="memories", description="Export journal memories as Obsidian notes."
    )
    parser.add_argument("--config", type=Path, help="Path to memories.toml")
    sub = parser.add_subparsers(dest="command", required=True)

    export = sub.add_parser("export", help="Export suggestion records (JSON)")
    export.add_argument("records", help="JSON file with memory records")
    export.add_argument("--note", default="", help="Text for the ## Notes section")

    manual = sub.add_parser("manual", help="Write a manual entry")
    manual.add_argument("note", help="Entry text")
    manual.add_argument("--date", help="ISO date/time (default: now)")
    manual.add_argument("--place", help="Place name")
    manual.add_argument("--lat", type=float, help="Latitude, saved with --place to recent places")
    manual.add_argument("--lon", type=float, help="Longitude, saved with --place to recent places")
    manual.add_argument("--cond", help="Weather condition, e.g. Clear")
    manual.add_argument("--temp", type=int, help="Temperature in °F")

    for command in (export, manual):
        command.add_argument("--stdout", action="store_true", help="Print instead of saving")
        command.add_argument("--overwrite", action="store_true", help="Replace an existing note")

    places = sub.add_parser("places", help="Show recently used places")
    places.add_argument("--remove", metavar="NAME", help="Forget a saved place")

    sub.add_parser("list", help="List exported notes")
    return parser


COMMANDS = {
    "export": cmd_export,
    "manual": cmd_manual,
    "places": cmd_places,
    "list": cmd_list,
}


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config(args.config)
    _setup_logging(config.log_level)
    return COMMANDS[args.command](args, config)


if __name__ == "__main__":
    sys.exit(main())
