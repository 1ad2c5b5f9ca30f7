"""Fold extraction results of several records into one export."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from obsidian_memories.extractor import extract
from obsidian_memories.models import AggregatedResult, MemoryRecord
from obsidian_memories.weather import OnceWeather, WeatherLookup

logger = logging.getLogger(__name__)

SEPARATOR = "---\n\n"


async def aggregate(
    records: Iterable[MemoryRecord],
    weather: WeatherLookup,
    base_tags: Iterable[str] = (),
    *,
    weather_timeout: float | None = None,
) -> AggregatedResult:
    """Extract every record in order and merge the results.

    Records are processed sequentially: the weather service is called at
    most once per call and the first weather and first mood win.
    """
    once = OnceWeather(weather, timeout=weather_timeout)
    merged = AggregatedResult(tags=set(base_tags))
    body: list[str] = []

    for index, record in enumerate(records):
        if index == 0:
            merged.date = record.start
        result = await extract(record, once)
        logger.debug("Record %d (%r): %d chars", index + 1, record.title, len(result.text))

        body.append(result.text)
        body.append(SEPARATOR)
        merged.tags |= result.tags
        merged.places.extend(result.places)
        if merged.weather is None and result.weather is not None:
            merged.weather = result.weather
        merged.workouts.extend(result.workouts)
        merged.songs.extend(result.songs)
        merged.podcasts.extend(result.podcasts)
        merged.photo_count += result.photo_count
        merged.contact_names.extend(result.contact_names)
        merged.reflection_prompts.extend(result.reflection_prompts)
        if merged.mood is None and result.mood is not None:
            merged.mood = result.mood
        merged.activity_count += result.activity_count

    merged.body = "".join(body)
    return merged
