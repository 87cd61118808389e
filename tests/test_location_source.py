"""
Tests for LocationSource: endpoint binding, envelope decoding, error propagation.
"""

from __future__ import annotations

import pytest

from places.domains.errors import DecodingFailedError, NoConnectionError, StatusError
from places.domains.models import Point
from places.infrastructure.data.sources.location_source import LocationSource
from places.infrastructure.network.transport import HTTPMethod
from places.utils.config import DEFAULT_LOCATIONS_URL
from tests.fakes import FakeTransport, StaticConnectivity

URL = "https://example.test/locations.json"


def test_fetch_locations() -> None:
    transport = FakeTransport(b'{"locations": [{"name": "Test Place", "lat": 41.2, "long": 29.0}]}')
    source = LocationSource(transport, url=URL)
    locations = source.fetch_locations()
    assert locations == [Point("Test Place", 41.2, 29.0)]
    call = transport.calls[0]
    assert call["url"] == URL
    assert call["method"] is HTTPMethod.GET


def test_optional_name() -> None:
    transport = FakeTransport(
        b'{"locations": [{"name": "Test Place", "lat": 41.2, "long": 29.0}, {"lat": 41.2, "long": 29.0}]}'
    )
    locations = LocationSource(transport, url=URL).fetch_locations()
    assert len(locations) == 2
    assert locations[0].name == "Test Place"
    assert locations[-1].name is None


def test_order_and_duplicates_preserved() -> None:
    transport = FakeTransport(
        b'{"locations": ['
        b'{"name": "Z", "lat": 1, "long": 1},'
        b'{"name": "A", "lat": 2, "long": 2},'
        b'{"name": "Z", "lat": 1, "long": 1}]}'
    )
    locations = LocationSource(transport, url=URL).fetch_locations()
    assert [p.name for p in locations] == ["Z", "A", "Z"]


def test_no_connection_propagates() -> None:
    transport = FakeTransport(None, connectivity=StaticConnectivity(False))
    with pytest.raises(NoConnectionError):
        LocationSource(transport, url=URL).fetch_locations()


@pytest.mark.parametrize("data", [b"{invalid}", b"", b'{"locations": {}}'])
def test_decoding_failure_propagates(data: bytes) -> None:
    with pytest.raises(DecodingFailedError):
        LocationSource(FakeTransport(data), url=URL).fetch_locations()


def test_status_propagates_unchanged() -> None:
    with pytest.raises(StatusError) as exc:
        LocationSource(FakeTransport(b"{}", status_code=404), url=URL).fetch_locations()
    assert exc.value.code == 404


def test_url_defaults_from_config(no_env_file, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PLACES_LOCATIONS_URL", raising=False)
    assert LocationSource(FakeTransport(b"{}")).url == DEFAULT_LOCATIONS_URL
    monkeypatch.setenv("PLACES_LOCATIONS_URL", URL)
    assert LocationSource(FakeTransport(b"{}")).url == URL
