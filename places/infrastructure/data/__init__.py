"""Data access: persistent cache, location source and repository."""

from places.infrastructure.data.cache import DiskCache, MemoryCache, PersistentCache

__all__ = ["DiskCache", "MemoryCache", "PersistentCache"]
