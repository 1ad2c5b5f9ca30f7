"""Memory records, fact items and the derived extraction results."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Union


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class WeatherObservation:
    """Weather at a place and time, as reported by a WeatherLookup."""

    temperature: int  # Fahrenheit
    condition: str
    symbol: str = ""


# ── Fact items (one variant per kind of suggestion content) ──


@dataclass(frozen=True)
class Location:
    place: str
    coordinate: Coordinate | None = None


@dataclass(frozen=True)
class Reflection:
    prompt: str


@dataclass(frozen=True)
class Workout:
    activity_type: str
    distance: float | None = None  # miles
    calories: float | None = None  # kcal
    heart_rate: float | None = None  # average bpm
    route: tuple[Coordinate, ...] = ()


@dataclass(frozen=True)
class Contact:
    name: str


@dataclass(frozen=True)
class Photo:
    pass


@dataclass(frozen=True)
class Song:
    title: str | None = None
    artist: str | None = None
    album: str | None = None


@dataclass(frozen=True)
class MotionActivity:
    pass


@dataclass(frozen=True)
class StateOfMind:
    description: str


@dataclass(frozen=True)
class Podcast:
    episode: str | None = None
    show: str | None = None


FactItem = Union[
    Location, Reflection, Workout, Contact, Photo, Song, MotionActivity, StateOfMind, Podcast
]


@dataclass(frozen=True)
class DeferredItem:
    """Item whose content has to be fetched before it can be rendered.

    The loader may raise; the extractor then skips the item.
    """

    loader: Callable[[], Awaitable[object]]


@dataclass(frozen=True)
class MemoryRecord:
    """One journaling suggestion: a title, a time range and its items."""

    title: str
    start: datetime | None = None
    end: datetime | None = None
    items: tuple[object, ...] = ()


# ── Collected facts ──────────────────────────────────────────


@dataclass(frozen=True)
class WorkoutFact:
    activity: str
    distance: float | None = None
    calories: int | None = None
    heart_rate: int | None = None


@dataclass(frozen=True)
class SongFact:
    title: str | None = None
    artist: str | None = None
    album: str | None = None


@dataclass(frozen=True)
class PodcastFact:
    episode: str | None = None
    show: str | None = None


@dataclass
class ExtractionResult:
    """Facts and rendered text for a single record."""

    text: str = ""
    tags: set[str] = field(default_factory=set)
    places: list[str] = field(default_factory=list)
    weather: WeatherObservation | None = None
    workouts: list[WorkoutFact] = field(default_factory=list)
    songs: list[SongFact] = field(default_factory=list)
    podcasts: list[PodcastFact] = field(default_factory=list)
    photo_count: int = 0
    contact_names: list[str] = field(default_factory=list)
    reflection_prompts: list[str] = field(default_factory=list)
    mood: str | None = None
    activity_count: int = 0


@dataclass
class AggregatedResult:
    """Everything one export needs, merged across records."""

    date: datetime | None = None
    body: str = ""
    tags: set[str] = field(default_factory=set)
    places: list[str] = field(default_factory=list)
    weather: WeatherObservation | None = None
    workouts: list[WorkoutFact] = field(default_factory=list)
    songs: list[SongFact] = field(default_factory=list)
    podcasts: list[PodcastFact] = field(default_factory=list)
    photo_count: int = 0
    contact_names: list[str] = field(default_factory=list)
    reflection_prompts: list[str] = field(default_factory=list)
    mood: str | None = None
    activity_count: int = 0
