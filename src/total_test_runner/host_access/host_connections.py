"""Host connection registry and host:port parsing."""

from __future__ import annotations

from collections.abc import Iterable

from .access_models import HostConnection


class HostPortError(ValueError):
    """Raised when a ``host:port`` value is malformed."""


def parse_host_port(value: str | None) -> tuple[str, str]:
    """Split a ``host:port`` string into host and numeric port.

    Raises:
      HostPortError: If the value is empty, does not have exactly two
        colon-separated parts, or the port is not numeric.
    """
    trimmed = (value or "").strip()
    if not trimmed:
        raise HostPortError("Host and port must not be empty.")
    parts = trimmed.split(":")
    if len(parts) != 2:
        raise HostPortError(f"Invalid host:port value '{trimmed}'.")
    host, port = (part.strip() for part in parts)
    if not host:
        raise HostPortError(f"Invalid host:port value '{trimmed}': host is missing.")
    if not port:
        raise HostPortError(f"Invalid host:port value '{trimmed}': port is missing.")
    if not (port.isascii() and port.isdigit()):
        raise HostPortError(f"Invalid host:port value '{trimmed}': port must be numeric.")
    return host, port


class HostConnectionRegistry:
    """Known host connections, addressable by id or by host and port."""

    def __init__(self, connections: Iterable[HostConnection] = ()) -> None:
        self._connections = tuple(connections)

    def get(self, connection_id: str | None) -> HostConnection | None:
        if not connection_id:
            return None
        for connection in self._connections:
            if connection.connection_id == connection_id:
                return connection
        return None

    def find_by_host_port(self, host: str, port: str) -> HostConnection | None:
        for connection in self._connections:
            if connection.host.lower() == host.lower() and connection.port == port:
                return connection
        return None

    def __iter__(self):
        return iter(self._connections)

    def __len__(self) -> int:
        return len(self._connections)
