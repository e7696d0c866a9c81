"""Credential persistence and the in-memory credential session.

- :class:`CredentialStorage` -- the ``load``/``save``/``remove`` protocol
  every persistence backend implements.
- :class:`FileCredentialStore` -- JSON file under the XDG data directory,
  written atomically with ``0o600`` permissions.
- :class:`MemoryCredentialStore` -- dict-backed store for tests and
  embedding.
- :class:`CredentialSession` -- holds the single active bearer credential
  and keeps memory and storage in step.
"""

from apiguard.auth.credential_store import (
    CredentialStorage,
    FileCredentialStore,
    MemoryCredentialStore,
)
from apiguard.auth.session import CredentialSession

__all__ = [
    "CredentialSession",
    "CredentialStorage",
    "FileCredentialStore",
    "MemoryCredentialStore",
]
