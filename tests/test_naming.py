"""Tests for note filename formats."""

from datetime import datetime, timezone

import pytest

from obsidian_memories.dates import iso_timestamp
from obsidian_memories.naming import FileNamingFormat

WHEN = datetime(2025, 10, 13, 14, 30)


class TestFilename:
    def test_compact(self):
        assert FileNamingFormat.COMPACT.filename(WHEN) == "202510131430.md"

    def test_readable(self):
        assert FileNamingFormat.READABLE.filename(WHEN) == "2025-10-13 14:30.md"

    def test_date_only(self):
        assert FileNamingFormat.DATE_ONLY.filename(WHEN) == "2025-10-13.md"

    def test_timestamp(self):
        when = datetime(2024, 10, 13, 16, 10, tzinfo=timezone.utc)
        assert FileNamingFormat.TIMESTAMP.filename(when) == "1728835800.md"

    def test_timestamp_naive_matches_date_created(self):
        naive = datetime(2024, 10, 13, 16, 10)
        assert FileNamingFormat.TIMESTAMP.filename(naive) == "1728835800.md"
        assert iso_timestamp(naive) == "2024-10-13T16:10:00.000Z"

    def test_descriptive(self):
        assert FileNamingFormat.DESCRIPTIVE.filename(WHEN) == "Memory - 2025-10-13 14:30.md"


class TestParse:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("compact", FileNamingFormat.COMPACT),
            ("yyyy-MM-dd", FileNamingFormat.DATE_ONLY),
            ("date-only", FileNamingFormat.DATE_ONLY),
            ("TIMESTAMP", FileNamingFormat.TIMESTAMP),
            (FileNamingFormat.READABLE, FileNamingFormat.READABLE),
        ],
    )
    def test_accepted(self, value, expected):
        assert FileNamingFormat.parse(value) is expected

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown naming format"):
            FileNamingFormat.parse("fancy")
