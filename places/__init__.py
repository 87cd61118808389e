"""Places: fetch a remote list of locations, falling back to a local cache when offline."""

__version__ = "0.1.0"
