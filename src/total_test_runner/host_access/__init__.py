"""Host connection and credential lookup exports."""

from .access_models import DEFAULT_CODE_PAGE, DEFAULT_PROTOCOL, HostConnection, StoredCredential
from .credential_store import CredentialStore
from .host_connections import HostConnectionRegistry, HostPortError, parse_host_port

__all__ = [
    "DEFAULT_CODE_PAGE",
    "DEFAULT_PROTOCOL",
    "HostConnection",
    "StoredCredential",
    "CredentialStore",
    "HostConnectionRegistry",
    "HostPortError",
    "parse_host_port",
]
