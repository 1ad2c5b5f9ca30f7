"""Tests for the export orchestrator."""

import asyncio
from datetime import datetime
from pathlib import Path

import frontmatter
import pytest

from obsidian_memories.config import ExportConfig
from obsidian_memories.exporter import ExportedDocument, MemoryExporter
from obsidian_memories.models import (
    Coordinate,
    Location,
    MemoryRecord,
    Photo,
    WeatherObservation,
)
from obsidian_memories.naming import FileNamingFormat
from obsidian_memories.vault import ExportExistsError

HOME = Coordinate(10.0, 20.0)
HERE = Coordinate(30.0, 40.0)


class MockWeather:
    def __init__(self, observation: WeatherObservation | None = WeatherObservation(70, "Clear")):
        self.observation = observation
        self.calls: list[Coordinate] = []

    async def lookup(self, coordinate, when):
        self.calls.append(coordinate)
        await asyncio.sleep(0)
        return self.observation


@pytest.fixture
def config(tmp_path: Path) -> ExportConfig:
    return ExportConfig(export_dir=tmp_path / "exports")


class TestExportMemories:
    @pytest.mark.asyncio
    async def test_document_and_filename(self, config: ExportConfig):
        exporter = MemoryExporter(config, MockWeather())
        records = [
            MemoryRecord("Beach", datetime(2025, 7, 4, 15, 0), items=(Location("Beach", HOME),)),
            MemoryRecord("Dinner", datetime(2025, 7, 4, 19, 0), items=(Photo(),)),
        ]
        doc = await exporter.export_memories(records, note="Fireworks later")

        assert doc.filename == "202507041500.md"
        post = frontmatter.loads(doc.markdown)
        assert post.metadata["cond"] == "Clear"
        assert post.metadata["tags"] == ["location", "memories", "photo"]
        assert "### Beach" in post.content and "### Dinner" in post.content
        assert doc.markdown.endswith("## Notes\n\nFireworks later\n\n")

    @pytest.mark.asyncio
    async def test_default_no_weather(self, config: ExportConfig):
        exporter = MemoryExporter(config)
        records = [MemoryRecord("Walk", datetime(2025, 1, 1), items=(Location("Park", HOME),))]
        doc = await exporter.export_memories(records)
        assert "cond:" not in doc.markdown

    @pytest.mark.asyncio
    async def test_undated_record_uses_now(self, config: ExportConfig):
        config.naming_format = FileNamingFormat.DATE_ONLY
        exporter = MemoryExporter(config)
        doc = await exporter.export_memories([MemoryRecord("Undated")])
        assert doc.filename == f"{datetime.now():%Y-%m-%d}.md"
        assert "date_created: " in doc.markdown

    @pytest.mark.asyncio
    async def test_concurrent_exports_independent(self, config: ExportConfig):
        weather = MockWeather()
        exporter = MemoryExporter(config, weather)
        records = [MemoryRecord("A", datetime(2025, 1, 1), items=(Location("X", HOME),))]
        first, second = await asyncio.gather(
            exporter.export_memories(records), exporter.export_memories(records)
        )
        assert first == second
        assert len(weather.calls) == 2


class TestExportManual:
    @pytest.mark.asyncio
    async def test_uses_place_coordinate(self, config: ExportConfig):
        weather = MockWeather()
        exporter = MemoryExporter(config, weather)
        doc = await exporter.export_manual(
            "Picnic", datetime(2025, 5, 5, 12, 0), place="Park", coordinate=HOME,
            current_location=HERE,
        )
        assert weather.calls == [HOME]
        meta = frontmatter.loads(doc.markdown).metadata
        assert meta["place"] == "[[Park]]"
        assert meta["temp"] == 70
        assert doc.filename == "202505051200.md"

    @pytest.mark.asyncio
    async def test_falls_back_to_current_location(self, config: ExportConfig):
        weather = MockWeather()
        exporter = MemoryExporter(config, weather)
        await exporter.export_manual("Note", datetime(2025, 5, 5), current_location=HERE)
        assert weather.calls == [HERE]

    @pytest.mark.asyncio
    async def test_no_location_no_lookup(self, config: ExportConfig):
        weather = MockWeather()
        exporter = MemoryExporter(config, weather)
        doc = await exporter.export_manual("Note", datetime(2025, 5, 5))
        assert weather.calls == []
        assert "cond:" not in doc.markdown

    @pytest.mark.asyncio
    async def test_explicit_weather_skips_lookup(self, config: ExportConfig):
        weather = MockWeather()
        exporter = MemoryExporter(config, weather)
        doc = await exporter.export_manual(
            "Note", datetime(2025, 5, 5), coordinate=HOME,
            weather=WeatherObservation(33, "Snow"),
        )
        assert weather.calls == []
        assert "cond: Snow\ntemp: 33\n" in doc.markdown


class TestSave:
    def test_save_and_refuse_overwrite(self, config: ExportConfig):
        exporter = MemoryExporter(config)
        doc = ExportedDocument("a.md", "---\ntags: []\n---\n\n")
        path = exporter.save(doc)
        assert path.exists()
        with pytest.raises(ExportExistsError):
            exporter.save(doc)
        exporter.save(doc, overwrite=True)
