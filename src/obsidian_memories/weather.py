"""Weather lookup protocol and the failure-tolerant call wrapper."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Protocol, runtime_checkable

from obsidian_memories.models import Coordinate, WeatherObservation

logger = logging.getLogger(__name__)


class WeatherError(Exception):
    """A weather service failed to answer."""


class WeatherAuthError(WeatherError):
    """The weather service is not authorized or not configured."""


@runtime_checkable
class WeatherLookup(Protocol):
    """Protocol that weather services must implement."""

    async def lookup(self, coordinate: Coordinate, when: datetime) -> WeatherObservation | None:
        """Return the observation at `coordinate` around `when`, or None."""
        ...


class NoWeather:
    """Lookup that never knows the weather."""

    async def lookup(self, coordinate: Coordinate, when: datetime) -> WeatherObservation | None:
        return None


async def fetch_weather(
    service: WeatherLookup,
    coordinate: Coordinate,
    when: datetime,
    timeout: float | None = None,
) -> WeatherObservation | None:
    """Call `service`, turning every failure into None."""
    try:
        if timeout is None:
            return await service.lookup(coordinate, when)
        return await asyncio.wait_for(service.lookup(coordinate, when), timeout)
    except WeatherAuthError as e:
        # Service not configured; exports simply go without weather.
        logger.debug("Weather service unavailable: %s", e)
    except asyncio.TimeoutError:
        logger.warning("Weather lookup timed out after %ss", timeout)
    except Exception as e:
        logger.warning("Weather lookup failed: %s", e)
    return None


class OnceWeather:
    """Wraps a lookup so the underlying service is called at most once.

    Later calls return None, so only the first record that asks gets a
    weather line. One instance belongs to one export call.
    """

    def __init__(self, service: WeatherLookup, timeout: float | None = None) -> None:
        self._service = service
        self._timeout = timeout
        self._called = False

    @property
    def called(self) -> bool:
        return self._called

    async def lookup(self, coordinate: Coordinate, when: datetime) -> WeatherObservation | None:
        if self._called:
            return None
        self._called = True
        return await fetch_weather(self._service, coordinate, when, self._timeout)
