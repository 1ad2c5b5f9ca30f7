"""Per-record extraction: fact items → rendered block + typed facts.

Rendering is append-only in item order, so a record's block reads
exactly like its suggestion: title, date line, then one line per item
(with a weather line right after the item that resolved it).
"""

from __future__ import annotations

import logging

from obsidian_memories.dates import long_datetime
from obsidian_memories.models import (
    Contact,
    Coordinate,
    DeferredItem,
    ExtractionResult,
    Location,
    MemoryRecord,
    MotionActivity,
    Photo,
    Podcast,
    PodcastFact,
    Reflection,
    Song,
    SongFact,
    StateOfMind,
    Workout,
    WorkoutFact,
)
from obsidian_memories.weather import WeatherLookup, fetch_weather

logger = logging.getLogger(__name__)

MIN_DISTANCE_MILES = 0.1

ACTIVITY_LABELS = {
    "running": "Running",
    "walking": "Walking",
    "cycling": "Cycling",
    "hiking": "Hiking",
    "swimming": "Swimming",
    "yoga": "Yoga",
    "functional_strength_training": "Strength Training",
    "traditional_strength_training": "Strength Training",
    "elliptical": "Elliptical",
    "rowing": "Rowing",
    "stair_climbing": "Stair Climbing",
    "cardio_dance": "Dancing",
    "golf": "Golf",
    "tennis": "Tennis",
    "basketball": "Basketball",
    "soccer": "Soccer",
    "baseball": "Baseball",
    "american_football": "Football",
    "hockey": "Hockey",
    "lacrosse": "Lacrosse",
    "volleyball": "Volleyball",
    "boxing": "Boxing",
    "kickboxing": "Kickboxing",
    "martial_arts": "Martial Arts",
    "pilates": "Pilates",
    "core_training": "Core Training",
    "cross_training": "Cross Training",
    "flexibility": "Flexibility",
    "cooldown": "Cooldown",
    "wheelchair_run_pace": "Wheelchair Run",
    "wheelchair_walk_pace": "Wheelchair Walk",
    "hand_cycling": "Hand Cycling",
    "downhill_skiing": "Skiing",
    "snowboarding": "Snowboarding",
    "skating_sports": "Skating",
    "paddle_sports": "Paddle Sports",
    "surfing_sports": "Surfing",
    "swim_bike_run": "Triathlon",
    "archery": "Archery",
    "other": "Workout",
}


def activity_label(activity_type: str | None) -> str:
    """Human label for a workout activity type; unknown or missing types are 'Workout'."""
    if not activity_type:
        return "Workout"
    key = activity_type.strip().lower().replace("-", "_").replace(" ", "_")
    return ACTIVITY_LABELS.get(key, "Workout")


def weather_line(condition: str, temperature: int) -> str:
    return f"🌤️ {condition}, {temperature}°F\n"


async def extract(record: MemoryRecord, weather: WeatherLookup) -> ExtractionResult:
    """Extract facts and the rendered Markdown block for one record.

    Never raises for item content problems: an item that cannot be
    loaded contributes nothing.
    """
    return await _Extraction(record, weather).run()


class _Extraction:
    """Accumulator for a single `extract` call."""

    def __init__(self, record: MemoryRecord, weather: WeatherLookup) -> None:
        self.record = record
        self.weather = weather
        self.result = ExtractionResult()
        self._parts: list[str] = []
        self._weather_tried = False

    async def run(self) -> ExtractionResult:
        record = self.record
        self._parts.append(f"### {record.title}\n\n")

        if record.start is not None:
            line = f"Date: {long_datetime(record.start)}"
            if record.end is not None and record.end != record.start:
                line += f" - {long_datetime(record.end)}"
            self._parts.append(line + "\n\n")

        for index, item in enumerate(record.items):
            content = await self._load(item, index)
            if content is None:
                continue
            handler = self._HANDLERS.get(type(content))
            if handler is None:
                logger.debug("Ignoring unsupported item type %s", type(content).__name__)
                continue
            try:
                await handler(self, content)
            except (AttributeError, TypeError, ValueError) as e:
                logger.warning(
                    "Skipping unreadable %s in %r: %s",
                    type(content).__name__, record.title, e,
                )

        self._parts.append("\n")
        self.result.text = "".join(self._parts)
        return self.result

    async def _load(self, item: object, index: int) -> object | None:
        if not isinstance(item, DeferredItem):
            return item
        try:
            return await item.loader()
        except Exception as e:
            logger.debug("Item %d of %r unavailable: %s", index, self.record.title, e)
            return None

    async def _resolve_weather(self, coordinate: Coordinate | None) -> None:
        """First usable coordinate of the record gets the single lookup."""
        if self._weather_tried or self.result.weather is not None:
            return
        if coordinate is None or self.record.start is None:
            return
        self._weather_tried = True
        observation = await fetch_weather(self.weather, coordinate, self.record.start)
        if observation is None:
            return
        self.result.weather = observation
        self._parts.append(weather_line(observation.condition, observation.temperature))

    # ── Item handlers ─────────────────────────────────────────

    async def _location(self, item: Location) -> None:
        if not item.place:
            return
        self._parts.append(f"📍 {item.place}\n")
        self.result.tags.add("location")
        self.result.places.append(item.place)
        await self._resolve_weather(item.coordinate)

    async def _reflection(self, item: Reflection) -> None:
        self._parts.append(f"💭 {item.prompt}\n")
        self.result.tags.add("reflection")
        self.result.reflection_prompts.append(item.prompt)

    async def _workout(self, item: Workout) -> None:
        label = activity_label(item.activity_type)
        details: list[str] = []

        distance = None
        if item.distance is not None and item.distance >= MIN_DISTANCE_MILES:
            distance = item.distance
            details.append(f"{distance:.1f} mi")

        calories = int(item.calories) if item.calories is not None else None
        if calories is not None:
            details.append(f"{calories} cal")

        heart_rate = int(item.heart_rate) if item.heart_rate is not None else None
        if heart_rate is not None:
            details.append(f"{heart_rate} bpm")

        line = f"💪 {label}"
        if details:
            line += f" ({', '.join(details)})"
        self._parts.append(line + "\n")

        self.result.workouts.append(WorkoutFact(label, distance, calories, heart_rate))
        self.result.tags.add("workout")

        if item.route:
            await self._resolve_weather(item.route[0])

    async def _contact(self, item: Contact) -> None:
        self._parts.append(f"👤 {item.name}\n")
        self.result.tags.add("contact")
        self.result.contact_names.append(item.name)

    async def _photo(self, item: Photo) -> None:
        self._parts.append("📷 Photo\n")
        self.result.tags.add("photo")
        self.result.photo_count += 1

    async def _song(self, item: Song) -> None:
        line = f"🎵 {item.title or 'Song'}"
        if item.artist:
            line += f" by {item.artist}"
        if item.album:
            line += f" ({item.album})"
        self._parts.append(line + "\n")
        self.result.songs.append(SongFact(item.title, item.artist, item.album))
        self.result.tags.add("music")

    async def _motion(self, item: MotionActivity) -> None:
        self._parts.append("🏃 Activity\n")
        self.result.tags.add("activity")
        self.result.activity_count += 1

    async def _state_of_mind(self, item: StateOfMind) -> None:
        self._parts.append(f"🧠 State of Mind: {item.description}\n")
        self.result.tags.add("mental-health")
        if self.result.mood is None:
            self.result.mood = item.description

    async def _podcast(self, item: Podcast) -> None:
        line = f"🎙️ {item.episode or 'Podcast'}"
        if item.show:
            line += f" ({item.show})"
        self._parts.append(line + "\n")
        self.result.podcasts.append(PodcastFact(item.episode, item.show))
        self.result.tags.add("podcast")

    _HANDLERS = {
        Location: _location,
        Reflection: _reflection,
        Workout: _workout,
        Contact: _contact,
        Photo: _photo,
        Song: _song,
        MotionActivity: _motion,
        StateOfMind: _state_of_mind,
        Podcast: _podcast,
    }
