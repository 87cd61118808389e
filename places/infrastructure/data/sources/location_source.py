"""
Locations endpoint client: binds a TransportClient to the locations document.
"""

from __future__ import annotations

from places.domains.models import LocationsResponse, Point
from places.infrastructure.network.transport import HTTPMethod, TransportClient
from places.utils.config import locations_url


class LocationSource:
    def __init__(self, transport: TransportClient, url: str | None = None) -> None:
        self._transport = transport
        self._url = url or locations_url()

    @property
    def url(self) -> str:
        return self._url

    def fetch_locations(self) -> list[Point]:
        """
        Fetch and decode the locations list. Transport errors propagate unchanged.

        Returns:
            Points in payload order, duplicates included.
        """
        response: LocationsResponse = self._transport.fetch(
            self._url,
            HTTPMethod.GET,
            headers={"Accept": "application/json"},
            decode=LocationsResponse.from_dict,
        )
        return response.locations
