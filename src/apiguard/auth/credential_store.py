"""Persistent key/value storage for credentials.

:class:`FileCredentialStore` keeps every key in one JSON document,
``~/.local/share/apiguard/credentials.json`` (XDG) or the platform
equivalent.  Writes go through :func:`~apiguard.config.atomic_write` with
``0o600`` permissions so secrets are never world-readable, even
momentarily.

See Also:
    :class:`~apiguard.auth.session.CredentialSession` -- the only writer
    in normal operation.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, Protocol

from apiguard.config import atomic_write, get_data_dir

_CREDENTIALS_FILENAME = "credentials.json"


class CredentialStorage(Protocol):
    """Persistence primitive consumed by :class:`~apiguard.auth.session.CredentialSession`."""

    def load(self, key: str) -> Optional[str]: ...

    def save(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class FileCredentialStore:
    """Read/write credentials in a single JSON file.

    Args:
        path: Explicit file location.  Defaults to
            ``get_data_dir() / "credentials.json"``.

    Example::

        store = FileCredentialStore()
        store.save("auth_token", "tok123")
        assert store.load("auth_token") == "tok123"
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path if path is not None else get_data_dir() / _CREDENTIALS_FILENAME

    @property
    def path(self) -> Path:
        """The filesystem path of the credentials file."""
        return self._path

    def load(self, key: str) -> Optional[str]:
        """Return the value stored under *key*, or ``None`` when absent or unreadable."""
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def save(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value.

        Raises:
            OSError: If the file cannot be written.
        """
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        """Delete *key*.  A no-op when the key or the file does not exist."""
        data = self._read()
        if key not in data:
            return
        del data[key]
        if data:
            self._write(data)
        else:
            self._path.unlink(missing_ok=True)

    def _read(self) -> dict[str, object]:
        if not self._path.is_file():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, ValueError, OSError):
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, object]) -> None:
        atomic_write(self._path, json.dumps(data, indent=2) + "\n", mode=0o600)


class MemoryCredentialStore:
    """Dict-backed :class:`CredentialStorage` that never touches disk."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def save(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)
