"""Load memory records from the JSON payload the suggestion picker hands over.

Payload shape (a list, or an object with a "records" list):

    [
      {
        "title": "Morning Walk",
        "start": "2025-01-01T08:00:00",
        "end": "2025-01-01T09:00:00",
        "items": [
          {"type": "location", "place": "Golden Gate Park",
           "coordinate": {"latitude": 37.77, "longitude": -122.45}},
          {"type": "workout", "activity_type": "walking", "distance": 2.4,
           "route": [[37.77, -122.45], [37.78, -122.46]]},
          {"type": "photo"}
        ]
      }
    ]

Item types not listed in `ITEM_PARSERS` are skipped, so newer payloads
still load.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

from obsidian_memories.models import (
    Contact,
    Coordinate,
    Location,
    MemoryRecord,
    MotionActivity,
    Photo,
    Podcast,
    Reflection,
    Song,
    StateOfMind,
    Workout,
)

logger = logging.getLogger(__name__)


class RecordFormatError(ValueError):
    """The payload does not describe memory records."""


def parse_coordinate(data: Any) -> Coordinate:
    if isinstance(data, dict):
        return Coordinate(float(data["latitude"]), float(data["longitude"]))
    latitude, longitude = data
    return Coordinate(float(latitude), float(longitude))


def _optional_coordinate(data: Any) -> Coordinate | None:
    return parse_coordinate(data) if data is not None else None


def _optional_float(value: Any) -> float | None:
    return float(value) if value is not None else None


def _text(data: dict, key: str) -> str:
    value = data[key]
    if value is None:
        raise ValueError(f"{key} is null")
    return str(value)


def _parse_datetime(value: Any, field_name: str) -> datetime | None:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        raise RecordFormatError(f"Invalid {field_name}: {value!r}") from None


ITEM_PARSERS: dict[str, Callable[[dict], object]] = {
    "location": lambda d: Location(_text(d, "place"), _optional_coordinate(d.get("coordinate"))),
    "reflection": lambda d: Reflection(_text(d, "prompt")),
    "workout": lambda d: Workout(
        activity_type=str(d.get("activity_type") or "other"),
        distance=_optional_float(d.get("distance")),
        calories=_optional_float(d.get("calories")),
        heart_rate=_optional_float(d.get("heart_rate")),
        route=tuple(parse_coordinate(p) for p in d.get("route") or ()),
    ),
    "contact": lambda d: Contact(_text(d, "name")),
    "photo": lambda d: Photo(),
    "song": lambda d: Song(d.get("title"), d.get("artist"), d.get("album")),
    "motion_activity": lambda d: MotionActivity(),
    "state_of_mind": lambda d: StateOfMind(_text(d, "description")),
    "podcast": lambda d: Podcast(d.get("episode"), d.get("show")),
}


def parse_item(data: dict) -> object | None:
    """Parse one item; None for unknown or unreadable items."""
    kind = str(data.get("type", "")).lower()
    parser = ITEM_PARSERS.get(kind)
    if parser is None:
        logger.debug("Skipping unknown item type %r", kind)
        return None
    try:
        return parser(data)
    except (KeyError, TypeError, ValueError) as e:
        logger.warning("Skipping malformed %s item: %s", kind, e)
        return None


def parse_record(data: dict) -> MemoryRecord:
    if not isinstance(data, dict) or "title" not in data:
        raise RecordFormatError("Each record needs a 'title'")
    items = []
    for raw in data.get("items") or []:
        if not isinstance(raw, dict):
            continue
        item = parse_item(raw)
        if item is not None:
            items.append(item)
    return MemoryRecord(
        title=str(data["title"]),
        start=_parse_datetime(data.get("start"), "start"),
        end=_parse_datetime(data.get("end"), "end"),
        items=tuple(items),
    )


def parse_records(payload: Any) -> list[MemoryRecord]:
    if isinstance(payload, dict):
        payload = payload.get("records")
    if not isinstance(payload, list):
        raise RecordFormatError("Expected a list of records")
    return [parse_record(entry) for entry in payload]


def load_records(path: Path) -> list[MemoryRecord]:
    """Read and parse a JSON records file."""
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise RecordFormatError(f"{path}: {e}") from e
    return parse_records(payload)
