"""Environment-driven settings for places. Uses python-dotenv.

`.env` at the project root is loaded on every lookup and wins over the
process environment. Unset, empty or invalid values fall back to defaults.
"""

import logging
import os
from pathlib import Path
from typing import Callable, TypeVar

from dotenv import load_dotenv

N = TypeVar("N", int, float)

DEFAULT_LOCATIONS_URL = (
    "https://raw.githubusercontent.com/abnamrocoesd/assignment-ios/main/locations.json"
)


def _project_root() -> Path:
    """Directory holding the `places/` package."""
    return Path(__file__).resolve().parent.parent.parent


def load_config() -> None:
    """Load `.env` from the project root, overriding existing variables."""
    load_dotenv(_project_root() / ".env", override=True)


def get_optional(key: str, default: str = "") -> str:
    """Stripped value of key, or default when it is unset or blank."""
    load_config()
    return os.getenv(key, "").strip() or default


def _get_positive(key: str, default: N, cast: Callable[[str], N]) -> N:
    raw = get_optional(key)
    if not raw:
        return default
    try:
        val = cast(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_optional_int(key: str, default: int) -> int:
    """Positive int value of key, or default."""
    return _get_positive(key, default, int)


def get_optional_float(key: str, default: float) -> float:
    """Positive float value of key, or default."""
    return _get_positive(key, default, float)


# --- Public config accessors ---

def locations_url() -> str:
    """Endpoint serving the `{"locations": [...]}` document."""
    return get_optional("PLACES_LOCATIONS_URL", DEFAULT_LOCATIONS_URL)


def cache_dir() -> Path:
    """
    Directory holding one `<key>.json` file per cache entry.
    Default ~/.local/share/places (application-private, survives restarts).
    """
    raw = get_optional("PLACES_CACHE_DIR")
    if raw:
        return Path(raw).expanduser()
    return Path.home() / ".local" / "share" / "places"


def request_timeout() -> float:
    """HTTP timeout in seconds. Default 30."""
    return get_optional_float("PLACES_REQUEST_TIMEOUT", 30.0)


def connectivity_host() -> str:
    """Host probed by the connectivity monitor. Default 1.1.1.1."""
    return get_optional("PLACES_CONNECTIVITY_HOST", "1.1.1.1")


def connectivity_port() -> int:
    """TCP port probed by the connectivity monitor. Default 53."""
    return get_optional_int("PLACES_CONNECTIVITY_PORT", 53)


def connectivity_interval() -> float:
    """Seconds between connectivity probes. Default 5."""
    return get_optional_float("PLACES_CONNECTIVITY_INTERVAL", 5.0)


def connectivity_timeout() -> float:
    """Seconds before a single probe gives up. Default 3."""
    return get_optional_float("PLACES_CONNECTIVITY_TIMEOUT", 3.0)


def log_level() -> int:
    """Level name for the places logger (DEBUG, INFO, ...). Default INFO."""
    level = logging.getLevelName(get_optional("PLACES_LOG_LEVEL", "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def project_root() -> Path:
    """Project root directory."""
    return _project_root()
