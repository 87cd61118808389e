"""Data sources: the remote locations endpoint."""

from places.infrastructure.data.sources.location_source import LocationSource

__all__ = ["LocationSource"]
