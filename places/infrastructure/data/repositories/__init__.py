"""Repositories: network-first location fetching with cache fallback."""

from places.infrastructure.data.repositories.location_repository import (
    LOCATIONS_CACHE_KEY,
    LocationRepository,
)

__all__ = ["LOCATIONS_CACHE_KEY", "LocationRepository"]
