"""In-memory credential store keyed by credential id."""

from __future__ import annotations

from collections.abc import Iterable

from .access_models import StoredCredential


class CredentialStore:
    """Lookup of stored username/password credentials."""

    def __init__(self, credentials: Iterable[StoredCredential] = ()) -> None:
        self._by_id = {credential.credentials_id: credential for credential in credentials}

    def lookup(self, credentials_id: str | None) -> StoredCredential | None:
        """Return the credential stored under ``credentials_id`` or None."""
        if not credentials_id:
            return None
        return self._by_id.get(credentials_id.strip())

    def __len__(self) -> int:
        return len(self._by_id)
