"""
Persistent JSON cache: one `<key>.json` file per key, written atomically.

All file I/O runs on a single background worker, so operations are applied in
submission order. Failures never reach the caller: saves resolve to False and
loads of unreadable entries delete the file and report a miss.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Protocol, TypeVar

from places.utils.config import cache_dir as _default_cache_dir
from places.utils.logger import get_logger

logger = get_logger()

T = TypeVar("T")

CACHE_SUFFIX = ".json"


class PersistentCache(Protocol):
    def save(self, value: Any, key: str, encode: Callable[[Any], Any] | None = None) -> Future:
        ...

    def load(self, key: str, decode: Callable[[Any], T] | None = None) -> T | None:
        ...

    def clear(self) -> None:
        ...

    def last_updated(self, key: str) -> datetime | None:
        ...


def _to_jsonable(value: Any) -> Any:
    """Default encoder: objects with to_dict(), lists/tuples of them, else as is."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    return value


def _check_key(key: str) -> str:
    if not key or key in (".", "..") or "/" in key or "\\" in key or "\0" in key:
        raise ValueError(f"Invalid cache key: {key!r}")
    return key


def _resolved(value: Any) -> Future:
    f: Future = Future()
    f.set_result(value)
    return f


class DiskCache:
    """
    File-backed PersistentCache.

    `save` returns a Future resolving to True when the entry was written and
    False otherwise; callers may ignore it. `load`, `clear` and `last_updated`
    wait for their own turn on the worker and return the result.
    """

    def __init__(self, cache_dir: Path | None = None) -> None:
        self._cache_dir = Path(cache_dir) if cache_dir is not None else _default_cache_dir()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="places-cache")

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    def path_for(self, key: str) -> Path:
        """Location of the entry for key. Same key, same path."""
        return self._cache_dir / f"{_check_key(key)}{CACHE_SUFFIX}"

    # --- worker-side operations ---

    def _write(self, key: str, payload: Any) -> bool:
        path = self.path_for(key)
        try:
            data = json.dumps(payload, ensure_ascii=False)
        except (TypeError, ValueError, RecursionError) as e:
            logger.warning("Cache encode failed for %s: %s", key, e)
            return False
        tmp_name = None
        try:
            self._cache_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._cache_dir,
                prefix=f".{key}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            logger.warning("Cache write failed for %s: %s", key, e)
            return False
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass
        logger.debug("Cache saved: %s", key)
        return True

    def _read(self, key: str, decode: Callable[[Any], T] | None) -> T | None:
        path = self.path_for(key)
        if not path.is_file():
            logger.debug("Cache miss: %s", key)
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            value = decode(data) if decode is not None else data
        except OSError as e:
            logger.warning("Cache read failed for %s: %s", key, e)
            return None
        except (ValueError, TypeError, KeyError, RecursionError) as e:
            logger.warning("Cache entry %s is corrupt, removing it: %s", key, e)
            try:
                path.unlink()
            except OSError as unlink_error:
                logger.warning("Could not remove corrupt cache entry %s: %s", key, unlink_error)
            return None
        logger.debug("Cache hit: %s", key)
        return value

    def _clear(self) -> None:
        if not self._cache_dir.is_dir():
            return
        removed = 0
        for path in self._cache_dir.glob(f"*{CACHE_SUFFIX}"):
            try:
                path.unlink()
                removed += 1
            except OSError as e:
                logger.warning("Cache clear could not remove %s: %s", path.name, e)
        logger.info("Cache cleared (%d entries)", removed)

    def _mtime(self, key: str) -> datetime | None:
        try:
            return datetime.fromtimestamp(self.path_for(key).stat().st_mtime)
        except OSError:
            return None

    def _run(self, fn: Callable[..., T], *args: Any) -> T | None:
        """Run fn on the worker and wait for it. A closed cache behaves as empty."""
        try:
            future = self._executor.submit(fn, *args)
        except RuntimeError as e:
            logger.warning("Cache is closed, %s skipped: %s", fn.__name__, e)
            return None
        return future.result()

    # --- public API ---

    def save(self, value: Any, key: str, encode: Callable[[Any], Any] | None = None) -> Future:
        """
        Serialize value and queue it for writing under key.

        Args:
            value: Payload. Objects exposing to_dict() are converted automatically.
            key: Cache key; becomes `<key>.json`.
            encode: Optional converter to a JSON-compatible structure.

        Returns:
            Future[bool]: True once written, False if encoding or writing failed.
        """
        _check_key(key)
        try:
            payload = encode(value) if encode is not None else _to_jsonable(value)
        except Exception as e:
            logger.warning("Cache encode failed for %s: %s", key, e)
            return _resolved(False)
        try:
            return self._executor.submit(self._write, key, payload)
        except RuntimeError as e:
            # Executor already shut down.
            logger.warning("Cache save dropped for %s: %s", key, e)
            return _resolved(False)

    def load(self, key: str, decode: Callable[[Any], T] | None = None) -> T | None:
        """
        Return the value stored under key, or None if there is none.

        Entries that fail to parse or decode are deleted and reported as None.
        """
        _check_key(key)
        return self._run(self._read, key, decode)

    def clear(self) -> None:
        """Remove every entry in this cache's directory."""
        self._run(self._clear)

    def last_updated(self, key: str) -> datetime | None:
        """Modification time of the entry for key, or None if absent."""
        _check_key(key)
        return self._run(self._mtime, key)

    def close(self) -> None:
        """Finish queued work and stop the worker. Later loads miss and saves are dropped."""
        self._executor.shutdown(wait=True)

    def __enter__(self) -> DiskCache:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


class MemoryCache:
    """
    In-memory PersistentCache. Stores the JSON text so save/load behave like
    DiskCache (values are copies, non-serialisable payloads are rejected).
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[str, tuple[str, datetime]] = {}

    def save(self, value: Any, key: str, encode: Callable[[Any], Any] | None = None) -> Future:
        _check_key(key)
        try:
            payload = encode(value) if encode is not None else _to_jsonable(value)
            data = json.dumps(payload)
        except Exception as e:
            logger.warning("Cache encode failed for %s: %s", key, e)
            return _resolved(False)
        with self._lock:
            self._entries[key] = (data, datetime.now())
        return _resolved(True)

    def load(self, key: str, decode: Callable[[Any], T] | None = None) -> T | None:
        _check_key(key)
        with self._lock:
            entry = self._entries.get(key)
        if entry is None:
            return None
        try:
            data = json.loads(entry[0])
            return decode(data) if decode is not None else data
        except (ValueError, TypeError, KeyError, RecursionError) as e:
            logger.warning("Cache entry %s is corrupt, removing it: %s", key, e)
            with self._lock:
                self._entries.pop(key, None)
            return None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def last_updated(self, key: str) -> datetime | None:
        with self._lock:
            entry = self._entries.get(key)
        return entry[1] if entry else None
