"""Host access entities."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_CODE_PAGE = "1047"
DEFAULT_PROTOCOL = "None"


@dataclass(frozen=True)
class HostConnection:
    """Mainframe host connection known to the registry."""

    connection_id: str
    host: str
    port: str
    description: str = ""
    code_page: str = DEFAULT_CODE_PAGE
    protocol: str = DEFAULT_PROTOCOL

    @property
    def host_port(self) -> str:
        return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class StoredCredential:
    """Username/password pair stored under an opaque id."""

    credentials_id: str
    username: str
    password: str = field(repr=False)
