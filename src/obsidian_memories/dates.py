"""Date rendering shared by the note body, frontmatter and filenames."""

from __future__ import annotations

from datetime import datetime, timezone


def long_datetime(value: datetime) -> str:
    """Render as `March 5, 2025 at 9:15 AM` (wall-clock, no conversion)."""
    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return (
        f"{value.strftime('%B')} {value.day}, {value.year} "
        f"at {hour}:{value.minute:02d} {meridiem}"
    )


def as_utc(value: datetime) -> datetime:
    """Aware UTC datetime; naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def iso_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with milliseconds, e.g. `2025-01-01T08:00:00.000Z`."""
    value = as_utc(value)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
