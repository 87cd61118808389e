"""Network access: connectivity monitoring and the HTTP transport."""

from places.infrastructure.network.connectivity import ConnectivityGate, ConnectivityMonitor
from places.infrastructure.network.transport import HTTPMethod, HTTPTransport, TransportClient

__all__ = ["ConnectivityGate", "ConnectivityMonitor", "HTTPMethod", "HTTPTransport", "TransportClient"]
