"""Filename formats for exported notes."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from obsidian_memories.dates import as_utc


class FileNamingFormat(str, Enum):
    COMPACT = "yyyyMMddHHmm"
    READABLE = "yyyy-MM-dd HH:mm"
    DATE_ONLY = "yyyy-MM-dd"
    TIMESTAMP = "timestamp"
    DESCRIPTIVE = "Memory - yyyy-MM-dd HH:mm"

    @classmethod
    def parse(cls, value: str | FileNamingFormat) -> FileNamingFormat:
        """Accept either the pattern value or the member name (any case)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            pass
        try:
            return cls[value.strip().upper().replace("-", "_")]
        except KeyError:
            raise ValueError(
                f"Unknown naming format {value!r}. Choose from: "
                + ", ".join(m.name.lower() for m in cls)
            ) from None

    def filename(self, when: datetime) -> str:
        """Filename (with `.md`) for a note dated `when`."""
        if self is FileNamingFormat.COMPACT:
            stem = when.strftime("%Y%m%d%H%M")
        elif self is FileNamingFormat.READABLE:
            stem = when.strftime("%Y-%m-%d %H:%M")
        elif self is FileNamingFormat.DATE_ONLY:
            stem = when.strftime("%Y-%m-%d")
        elif self is FileNamingFormat.TIMESTAMP:
            stem = str(int(as_utc(when).timestamp()))
        else:
            stem = f"Memory - {when.strftime('%Y-%m-%d %H:%M')}"
        return f"{stem}.md"
