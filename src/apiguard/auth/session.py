"""The single active bearer credential.

:class:`CredentialSession` owns the credential for a client: it is loaded
from storage when the session is created, replaced on login, registration
or refresh, and cleared on logout or when the server answers 401.  Each
change is a single assignment, so a request building its headers sees
either the old credential or the new one, never a partial state.
"""

from __future__ import annotations

from typing import Optional

from apiguard.auth.credential_store import CredentialStorage
from apiguard.models import DEFAULT_CREDENTIAL_KEY


class CredentialSession:
    """Holds the current credential in memory and mirrors it to *storage*.

    Args:
        storage: Persistence backend.
        key: Storage key the credential lives under.
    """

    def __init__(self, storage: CredentialStorage, key: str = DEFAULT_CREDENTIAL_KEY) -> None:
        self._storage = storage
        self._key = key
        self._token: Optional[str] = storage.load(key)

    @property
    def token(self) -> Optional[str]:
        return self._token

    def is_authenticated(self) -> bool:
        """True iff a non-empty credential is held.  Never contacts the server."""
        return bool(self._token)

    def replace(self, token: str) -> None:
        """Persist *token* and make it the active credential."""
        if not token:
            raise ValueError("token must be a non-empty string")
        self._storage.save(self._key, token)
        self._token = token

    def clear(self) -> None:
        """Forget the credential in memory and in storage."""
        self._token = None
        self._storage.remove(self._key)

    def auth_headers(self) -> dict[str, str]:
        """``Authorization`` header for the current credential, or an empty dict."""
        token = self._token
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}
