"""
Tests for ConnectivityMonitor: optimistic default, pushed state, lifecycle.
"""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock, patch

from places.infrastructure.network.connectivity import ConnectivityMonitor, tcp_probe


def _wait_for(predicate, timeout: float = 2.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


def test_defaults_to_connected_before_first_signal() -> None:
    """Until the first probe finishes the gate reports connected."""
    release = threading.Event()

    def probe() -> bool:
        release.wait(5)
        return False

    monitor = ConnectivityMonitor(probe=probe, interval=0.01)
    try:
        assert monitor.check_connection() is True
    finally:
        release.set()
        monitor.close()


def test_reflects_pushed_state() -> None:
    state = {"up": False}
    with ConnectivityMonitor(probe=lambda: state["up"], interval=0.01) as monitor:
        assert _wait_for(lambda: monitor.check_connection() is False)
        state["up"] = True
        assert _wait_for(lambda: monitor.check_connection() is True)


def test_query_does_not_probe() -> None:
    calls = []

    def probe() -> bool:
        calls.append(1)
        return True

    with ConnectivityMonitor(probe=probe, interval=60) as monitor:
        assert _wait_for(lambda: len(calls) == 1)
        for _ in range(50):
            monitor.check_connection()
        assert len(calls) == 1


def test_probe_exception_means_offline() -> None:
    def probe() -> bool:
        raise RuntimeError("network stack exploded")

    with ConnectivityMonitor(probe=probe, interval=0.01) as monitor:
        assert _wait_for(lambda: monitor.check_connection() is False)


def test_concurrent_queries() -> None:
    with ConnectivityMonitor(probe=lambda: True, interval=0.01) as monitor:
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: monitor.check_connection(), range(100)))
    assert all(isinstance(r, bool) for r in results)
    assert all(results)


def test_close_stops_thread_and_is_idempotent() -> None:
    monitor = ConnectivityMonitor(probe=lambda: True, interval=0.01)
    monitor.close()
    assert not monitor._thread.is_alive()
    monitor.close()


def test_tcp_probe_success() -> None:
    conn = MagicMock()
    with patch(
        "places.infrastructure.network.connectivity.socket.create_connection", return_value=conn
    ) as create:
        assert tcp_probe("1.1.1.1", 53, 1.0) is True
    create.assert_called_once_with(("1.1.1.1", 53), timeout=1.0)
    conn.__exit__.assert_called_once()


def test_tcp_probe_failure() -> None:
    with patch(
        "places.infrastructure.network.connectivity.socket.create_connection",
        side_effect=OSError("unreachable"),
    ):
        assert tcp_probe("1.1.1.1", 53, 1.0) is False
