"""
Location repository: network first, cache as fallback.

Each `fetch_locations()` call is one attempt:
- network success: refresh the cache in the background, return Success
- network failure with a cached list (empty counts): SuccessWithFallback
- network failure without a cached list: Failure
The network error is the one reported in both failure outcomes.
"""

from __future__ import annotations

from concurrent.futures import Future

from places.domains.errors import FetchError
from places.domains.models import (
    Failure,
    FetchOutcome,
    Point,
    Success,
    SuccessWithFallback,
    points_from_json,
    points_to_json,
)
from places.infrastructure.data.cache import PersistentCache
from places.infrastructure.data.sources.location_source import LocationSource
from places.utils.logger import get_logger

logger = get_logger()

LOCATIONS_CACHE_KEY = "Locations"


def _log_save_result(future: Future) -> None:
    try:
        written = future.result()
    except Exception as e:
        logger.warning("Background cache save raised: %s", e)
        return
    if not written:
        logger.warning("Background cache save for %s was not performed", LOCATIONS_CACHE_KEY)


class LocationRepository:
    def __init__(self, source: LocationSource, cache: PersistentCache) -> None:
        self._source = source
        self._cache = cache

    def fetch_locations(self) -> FetchOutcome:
        """Fetch locations, falling back to the cached list. Never raises."""
        try:
            locations = self._source.fetch_locations()
        except FetchError as error:
            return self._fallback(error)

        logger.info("Fetched %d locations", len(locations))
        self._cache.save(locations, LOCATIONS_CACHE_KEY, encode=points_to_json).add_done_callback(
            _log_save_result
        )
        return Success(locations)

    def _fallback(self, error: FetchError) -> FetchOutcome:
        cached: list[Point] | None = self._cache.load(LOCATIONS_CACHE_KEY, decode=points_from_json)
        if cached is None:
            logger.warning("Fetching locations failed, nothing cached: %s", error)
            return Failure(error)

        last_updated = self._cache.last_updated(LOCATIONS_CACHE_KEY)
        logger.warning(
            "Fetching locations failed, serving %d cached: %s", len(cached), error
        )
        return SuccessWithFallback(cause=error, cached=cached, last_updated=last_updated)
