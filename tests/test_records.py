"""Tests for loading records from the picker's JSON payload."""

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from obsidian_memories.aggregator import aggregate
from obsidian_memories.models import (
    Contact,
    Coordinate,
    Location,
    MotionActivity,
    Photo,
    Song,
    Workout,
)
from obsidian_memories.records import (
    RecordFormatError,
    load_records,
    parse_item,
    parse_record,
    parse_records,
)
from obsidian_memories.weather import NoWeather


class TestParseItem:
    def test_location(self):
        item = parse_item(
            {"type": "location", "place": "Park", "coordinate": {"latitude": 1, "longitude": 2}}
        )
        assert item == Location("Park", Coordinate(1.0, 2.0))

    def test_workout_route_pairs(self):
        item = parse_item(
            {"type": "workout", "activity_type": "running", "distance": 3, "route": [[1, 2], [3, 4]]}
        )
        assert item == Workout(
            "running", distance=3.0, route=(Coordinate(1.0, 2.0), Coordinate(3.0, 4.0))
        )

    def test_presence_only_items(self):
        assert parse_item({"type": "photo"}) == Photo()
        assert parse_item({"type": "motion_activity"}) == MotionActivity()

    def test_song_optional_fields(self):
        assert parse_item({"type": "song", "artist": "Nina"}) == Song(artist="Nina")

    def test_unknown_type(self):
        assert parse_item({"type": "hologram"}) is None

    def test_malformed_known_type(self):
        assert parse_item({"type": "contact"}) is None

    def test_null_activity_type_defaults(self):
        assert parse_item({"type": "workout", "activity_type": None}) == Workout("other")

    @pytest.mark.parametrize(
        "item",
        [
            {"type": "reflection", "prompt": None},
            {"type": "contact", "name": None},
            {"type": "state_of_mind", "description": None},
            {"type": "location", "place": None},
        ],
    )
    def test_null_required_text_skipped(self, item):
        assert parse_item(item) is None


class TestExtractParsed:
    @pytest.mark.asyncio
    async def test_null_fields_render_without_errors(self):
        records = parse_records(
            [
                {
                    "title": "Run",
                    "items": [
                        {"type": "workout", "activity_type": None},
                        {"type": "contact", "name": None},
                    ],
                }
            ]
        )
        result = await aggregate(records, NoWeather())
        assert "💪 Workout\n" in result.body
        assert "None" not in result.body
        assert result.contact_names == []


class TestParseRecord:
    def test_full(self):
        record = parse_record(
            {
                "title": "Lunch",
                "start": "2025-04-01T12:00:00Z",
                "items": [{"type": "contact", "name": "Ann"}, {"type": "future"}, "junk"],
            }
        )
        assert record.title == "Lunch"
        assert record.start == datetime(2025, 4, 1, 12, 0, tzinfo=timezone.utc)
        assert record.end is None
        assert record.items == (Contact("Ann"),)

    def test_missing_title(self):
        with pytest.raises(RecordFormatError):
            parse_record({"items": []})

    def test_bad_date(self):
        with pytest.raises(RecordFormatError, match="start"):
            parse_record({"title": "x", "start": "yesterday"})


class TestLoad:
    def test_wrapped_payload(self):
        records = parse_records({"records": [{"title": "A"}, {"title": "B"}]})
        assert [r.title for r in records] == ["A", "B"]

    def test_not_a_list(self):
        with pytest.raises(RecordFormatError):
            parse_records({"title": "A"})

    def test_load_file(self, tmp_path: Path):
        path = tmp_path / "records.json"
        path.write_text(json.dumps([{"title": "Walk", "items": [{"type": "photo"}]}]))
        records = load_records(path)
        assert records[0].items == (Photo(),)

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "records.json"
        path.write_text("{not json")
        with pytest.raises(RecordFormatError):
            load_records(path)
