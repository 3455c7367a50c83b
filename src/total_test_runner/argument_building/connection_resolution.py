"""Resolution of connection and credential references against the collaborators."""

from __future__ import annotations

import logging

from total_test_runner.configuration import ByEnvironmentId, ByHostPort, ById, ConnectionRef
from total_test_runner.host_access import (
    CredentialStore,
    HostConnection,
    HostConnectionRegistry,
    StoredCredential,
)

from .build_context import ArgumentBuildError

_LOGGER = logging.getLogger("total_test_runner.argument_building")


def resolve_credential(store: CredentialStore, credentials_id: str | None) -> StoredCredential:
    """Look up the credential for ``credentials_id`` or fail the build."""
    credential = store.lookup(credentials_id)
    if credential is None:
        raise ArgumentBuildError(
            f"Credentials id '{credentials_id}' does not resolve to stored credentials."
        )
    return credential


def resolve_host_connection(
    connection: ConnectionRef, registry: HostConnectionRegistry
) -> HostConnection:
    """Turn a host-style connection reference into concrete host connection fields.

    A ``ByHostPort`` reference prefers a registered connection with the same
    host and port and otherwise falls back to the default code page and
    protocol.
    """
    match connection:
        case ById(connection_id=connection_id):
            resolved = registry.get(connection_id)
            if resolved is None:
                raise ArgumentBuildError(f"Host connection id '{connection_id}' is not defined.")
            return resolved
        case ByHostPort(host=host, port=port):
            resolved = registry.find_by_host_port(host, port)
            if resolved is not None:
                return resolved
            _LOGGER.info("No registered host connection for %s:%s; using defaults.", host, port)
            return HostConnection(connection_id=f"{host}:{port}", host=host, port=port)
        case ByEnvironmentId(environment_id=environment_id):
            raise ArgumentBuildError(
                f"Environment id '{environment_id}' cannot be used"
                " where a host connection is required."
            )
    raise ArgumentBuildError(f"Unsupported connection reference: {connection!r}")
