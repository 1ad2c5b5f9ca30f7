"""Recently used places for manual entries, most recent first."""

from __future__ import annotations

import json
import logging
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path

from obsidian_memories.models import Coordinate

logger = logging.getLogger(__name__)

MAX_PLACES = 15
SAME_SPOT_DEGREES = 0.0001


@dataclass
class SavedPlace:
    name: str
    latitude: float
    longitude: float
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    saved_at: str = field(default_factory=lambda: datetime.now().isoformat(timespec="seconds"))


class RecentPlaces:
    """JSON-backed list of places, capped at MAX_PLACES."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._places: list[SavedPlace] = self._load()

    def _load(self) -> list[SavedPlace]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return [SavedPlace(**entry) for entry in data]
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Ignoring unreadable places file %s: %s", self.path, e)
            return []

    def _persist(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps([asdict(p) for p in self._places], ensure_ascii=False, indent=2),
            encoding="utf-8",
        )

    @property
    def places(self) -> list[SavedPlace]:
        return list(self._places)

    def _is_duplicate(self, place: SavedPlace, name: str, coordinate: Coordinate) -> bool:
        return place.name == name or (
            abs(place.latitude - coordinate.latitude) < SAME_SPOT_DEGREES
            and abs(place.longitude - coordinate.longitude) < SAME_SPOT_DEGREES
        )

    def add(self, name: str, coordinate: Coordinate) -> bool:
        """Remember a place. Returns False if it (or the same spot) is already saved."""
        if any(self._is_duplicate(p, name, coordinate) for p in self._places):
            return False
        self._places.insert(0, SavedPlace(name, coordinate.latitude, coordinate.longitude))
        del self._places[MAX_PLACES:]
        self._persist()
        return True

    def remove(self, name: str) -> bool:
        before = len(self._places)
        self._places = [p for p in self._places if p.name != name]
        if len(self._places) == before:
            return False
        self._persist()
        return True
