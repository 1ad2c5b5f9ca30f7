"""Export orchestration — records or a manual note in, named Markdown out.

Responsibilities:
1. Suggestion export — aggregate records, compose the note
2. Manual export — resolve weather for the chosen (or current) spot, compose
3. Filename — apply the configured naming format to the note's date
4. Save — hand the note to the export folder
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from obsidian_memories.aggregator import aggregate
from obsidian_memories.composer import compose, compose_manual
from obsidian_memories.config import ExportConfig
from obsidian_memories.models import Coordinate, MemoryRecord, WeatherObservation
from obsidian_memories.vault import ExportFolder
from obsidian_memories.weather import NoWeather, WeatherLookup, fetch_weather

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportedDocument:
    filename: str
    markdown: str


class MemoryExporter:
    """Turns memory records and manual notes into named Markdown notes.

    Holds no per-export state, so concurrent exports do not interfere.
    """

    def __init__(self, config: ExportConfig, weather: WeatherLookup | None = None) -> None:
        self.config = config
        self.weather = weather or NoWeather()
        self.folder = ExportFolder(config.export_dir)

    # ── Suggestion export ────────────────────────────────────

    async def export_memories(
        self, records: Sequence[MemoryRecord], note: str = ""
    ) -> ExportedDocument:
        logger.info("Exporting %d record(s)", len(records))
        now = datetime.now().astimezone()
        aggregated = await aggregate(
            records,
            self.weather,
            self.config.default_tags,
            weather_timeout=self.config.weather_timeout,
        )
        markdown = compose(aggregated, self.config, note, now=now)

        date = aggregated.date or now
        filename = self.config.naming_format.filename(date)
        logger.info("Composed %s (%d chars)", filename, len(markdown))
        return ExportedDocument(filename, markdown)

    # ── Manual export ────────────────────────────────────────

    async def export_manual(
        self,
        note: str,
        date: datetime,
        place: str | None = None,
        coordinate: Coordinate | None = None,
        current_location: Coordinate | None = None,
        weather: WeatherObservation | None = None,
    ) -> ExportedDocument:
        """Compose a manual entry.

        An explicit `weather` observation is used as given; otherwise the
        weather service is asked about `coordinate`, else `current_location`.
        """
        spot = coordinate or current_location
        if weather is None and spot is not None:
            weather = await fetch_weather(
                self.weather, spot, date, timeout=self.config.weather_timeout
            )

        markdown = compose_manual(note, date, weather, place, self.config)
        filename = self.config.naming_format.filename(date)
        return ExportedDocument(filename, markdown)

    # ── Save ─────────────────────────────────────────────────

    def save(self, document: ExportedDocument, *, overwrite: bool = False) -> Path:
        return self.folder.save(document.filename, document.markdown, overwrite=overwrite)
