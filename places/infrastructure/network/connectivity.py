"""
Connectivity gate: a background monitor pushes reachability, callers read it.
"""

from __future__ import annotations

import socket
import threading
from typing import Callable, Protocol

from places.utils.config import (
    connectivity_host,
    connectivity_interval,
    connectivity_port,
    connectivity_timeout,
)
from places.utils.logger import get_logger

logger = get_logger()


class ConnectivityGate(Protocol):
    def check_connection(self) -> bool:
        ...


def tcp_probe(host: str, port: int, timeout: float) -> bool:
    """Return True if a TCP connection to host:port can be opened within timeout."""
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError:
        return False


class ConnectivityMonitor:
    """
    Watches network reachability on a daemon thread.

    The thread probes every `interval` seconds and pushes the result through
    `_on_path_update`, the only writer of the state. `check_connection()` never
    probes; it returns the last pushed value, which is True until the first
    probe completes.

    Call `close()` (or use as a context manager) to stop the thread.
    """

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        interval: float | None = None,
        timeout: float | None = None,
        probe: Callable[[], bool] | None = None,
    ) -> None:
        self._host = host or connectivity_host()
        self._port = port if port is not None else connectivity_port()
        self._interval = interval if interval is not None else connectivity_interval()
        self._timeout = timeout if timeout is not None else connectivity_timeout()
        self._probe = probe or (lambda: tcp_probe(self._host, self._port, self._timeout))

        self._lock = threading.Lock()
        self._connected = True
        self._stop = threading.Event()
        self._thread = threading.Thread(
            target=self._run, name="ConnectivityMonitor", daemon=True
        )
        self._thread.start()
        logger.debug("Connectivity monitor started (%s:%s every %ss)", self._host, self._port, self._interval)

    def check_connection(self) -> bool:
        with self._lock:
            return self._connected

    def _on_path_update(self, connected: bool) -> None:
        with self._lock:
            changed = connected != self._connected
            self._connected = connected
        if changed:
            logger.info("Connectivity changed: %s", "online" if connected else "offline")

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                connected = bool(self._probe())
            except Exception as e:
                logger.warning("Connectivity probe raised, treating as offline: %s", e)
                connected = False
            if self._stop.is_set():
                break
            self._on_path_update(connected)
            self._stop.wait(self._interval)

    def close(self) -> None:
        """Stop the monitor thread. Safe to call more than once."""
        if self._stop.is_set():
            return
        self._stop.set()
        if self._thread is not threading.current_thread():
            self._thread.join()
        logger.debug("Connectivity monitor stopped")

    def __enter__(self) -> ConnectivityMonitor:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
