"""Markdown rendering: YAML frontmatter + note body.

Frontmatter is written by hand (not through a YAML dumper) so that the
key order and the `"[[wiki-link]]"` quoting Obsidian expects stay fixed.
Free text goes through `_quote`, which emits a JSON string; every JSON
string is also a valid double-quoted YAML scalar.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable
from datetime import datetime, timezone

from obsidian_memories.config import ExportConfig
from obsidian_memories.dates import iso_timestamp, long_datetime
from obsidian_memories.extractor import weather_line
from obsidian_memories.models import (
    AggregatedResult,
    PodcastFact,
    SongFact,
    WeatherObservation,
    WorkoutFact,
)

_PLAIN_SCALAR = re.compile(r"^[A-Za-z][\w .\-/]*$")
_YAML_KEYWORDS = {"true", "false", "yes", "no", "on", "off", "null", "y", "n", "~"}


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def _scalar(value: str) -> str:
    """Plain scalar when it is unambiguous YAML, quoted otherwise."""
    if _PLAIN_SCALAR.match(value) and value.lower() not in _YAML_KEYWORDS and value == value.strip():
        return value
    return _quote(value)


def _wikilink(place: str) -> str:
    return _quote(f"[[{place}]]")


# ── Frontmatter blocks ────────────────────────────────────────


def _place_lines(places: list[str]) -> list[str]:
    if not places:
        return []
    if len(places) == 1:
        return [f"place: {_wikilink(places[0])}"]
    return ["place:"] + [f"  - {_wikilink(p)}" for p in places]


def _weather_lines(weather: WeatherObservation | None) -> list[str]:
    if weather is None:
        return []
    return [f"cond: {_scalar(weather.condition)}", f"temp: {weather.temperature}"]


def _workout_fields(workout: WorkoutFact) -> list[tuple[str, str]]:
    fields: list[tuple[str, str]] = []
    if workout.distance is not None:
        fields.append(("distance", f"{workout.distance:.1f}"))
    if workout.calories is not None:
        fields.append(("calories", str(workout.calories)))
    if workout.heart_rate is not None:
        fields.append(("hr", str(workout.heart_rate)))
    return fields


def _workout_lines(workouts: list[WorkoutFact]) -> list[str]:
    if len(workouts) == 1:
        workout = workouts[0]
        lines = [f"workout: {_scalar(workout.activity)}"]
        lines += [f"{key}: {value}" for key, value in _workout_fields(workout)]
        return lines

    lines = ["workouts:"]
    for workout in workouts:
        lines.append(f"  - type: {_scalar(workout.activity)}")
        lines += [f"    {key}: {value}" for key, value in _workout_fields(workout)]
    return lines


def _map_list(key: str, entries: list[list[tuple[str, str | None]]]) -> list[str]:
    """Block list of maps; None values are left out."""
    lines = [f"{key}:"]
    for entry in entries:
        present = [(k, v) for k, v in entry if v is not None]
        if not present:
            lines.append("  - {}")
            continue
        first, *rest = present
        lines.append(f"  - {first[0]}: {_quote(first[1])}")
        lines += [f"    {k}: {_quote(v)}" for k, v in rest]
    return lines


def _song_lines(songs: list[SongFact]) -> list[str]:
    return _map_list(
        "songs", [[("title", s.title), ("artist", s.artist), ("album", s.album)] for s in songs]
    )


def _podcast_lines(podcasts: list[PodcastFact]) -> list[str]:
    return _map_list("podcasts", [[("episode", p.episode), ("show", p.show)] for p in podcasts])


def _string_list(key: str, values: list[str]) -> list[str]:
    return [f"{key}:"] + [f"  - {_quote(v)}" for v in values]


def _tag_lines(tags: Iterable[str]) -> list[str]:
    ordered = sorted(set(tags))
    if not ordered:
        return ["tags: []"]
    return ["tags:"] + [f"  - {_scalar(tag)}" for tag in ordered]


def _category_lines(aggregated: AggregatedResult, config: ExportConfig) -> list[str]:
    """Optional categories, in fixed order, each gated by config and data."""
    flags = config.frontmatter
    lines: list[str] = []
    if flags.workout and aggregated.workouts:
        lines += _workout_lines(aggregated.workouts)
    if flags.song and aggregated.songs:
        lines += _song_lines(aggregated.songs)
    if flags.podcast and aggregated.podcasts:
        lines += _podcast_lines(aggregated.podcasts)
    if flags.photo and aggregated.photo_count:
        lines.append(f"photos: {aggregated.photo_count}")
    if flags.contact and aggregated.contact_names:
        lines += _string_list("contacts", aggregated.contact_names)
    if flags.reflection and aggregated.reflection_prompts:
        lines += _string_list("reflections", aggregated.reflection_prompts)
    if flags.state_of_mind and aggregated.mood is not None:
        lines.append(f"mood: {_quote(aggregated.mood)}")
    if flags.activity and aggregated.activity_count:
        lines.append(f"activities: {aggregated.activity_count}")
    return lines


# ── Documents ─────────────────────────────────────────────────


def compose(
    aggregated: AggregatedResult,
    config: ExportConfig,
    note: str = "",
    *,
    now: datetime | None = None,
) -> str:
    """Render an aggregated export as a Markdown note."""
    created = aggregated.date or now or datetime.now(timezone.utc)

    lines = ["---", f"date_created: {iso_timestamp(created)}"]
    lines += _place_lines(aggregated.places)
    lines += _weather_lines(aggregated.weather)
    lines += _category_lines(aggregated, config)
    lines += _tag_lines(aggregated.tags)
    lines.append("---")

    markdown = "\n".join(lines) + "\n\n" + aggregated.body
    if note:
        markdown += f"## Notes\n\n{note}\n\n"
    return markdown


def compose_manual(
    note: str,
    date: datetime,
    weather: WeatherObservation | None,
    place: str | None,
    config: ExportConfig,
) -> str:
    """Render a free-text manual entry as a Markdown note."""
    place = place or None
    tags = set(config.manual_entry_tags)
    if place is not None:
        tags.add("location")

    lines = ["---", f"date_created: {iso_timestamp(date)}"]
    if place is not None:
        lines.append(f"place: {_wikilink(place)}")
    lines += _weather_lines(weather)
    lines += _tag_lines(tags)
    lines.append("---")

    markdown = "\n".join(lines) + "\n\n"
    markdown += "# Manual Entry\n"
    markdown += f"Date: {long_datetime(date)}\n"
    if place is not None:
        markdown += f"📍 {place}\n"
    if weather is not None:
        markdown += weather_line(weather.condition, weather.temperature)
    markdown += "\n---\n\n"
    markdown += note + "\n\n"
    return markdown
