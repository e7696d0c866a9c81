"""Canonical Pydantic models shared across all apiguard modules.

The models fall into two groups:

**Configuration** -- :class:`ClientConfig`, loaded from the user's config
directory and environment by :func:`~apiguard.config.resolve_config`.

**Classification output** -- :class:`ErrorKind`,
:class:`NotificationSeverity`, and :class:`ClassifiedError`, produced by
:class:`~apiguard.classifier.FailureClassifier`.
"""

from __future__ import annotations

import enum
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_BASE_URL = "http://localhost:8000/api"
DEFAULT_CREDENTIAL_KEY = "auth_token"


# --- Configuration ---


class ClientConfig(BaseModel):
    """Connection settings for :class:`~apiguard.client.SyncClient` and
    :class:`~apiguard.client.AsyncClient`.

    Example::

        ClientConfig(base_url="https://api.example.com/v1", timeout=10)
    """

    base_url: str = Field(
        default=DEFAULT_BASE_URL, description="Base address every request path is joined to"
    )
    timeout: float = Field(default=30.0, gt=0, description="Transport timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    credential_key: str = Field(
        default=DEFAULT_CREDENTIAL_KEY,
        description="Key under which the bearer credential is persisted",
    )
    debug: bool = Field(default=False, description="Enable debug logging")

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        parts = urlsplit(value)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"base_url must be an absolute http(s) URL, got {value!r}")
        return value


# --- Classification ---


class ErrorKind(str, enum.Enum):
    """Closed taxonomy every failure is mapped into."""

    NETWORK = "NETWORK"
    VALIDATION = "VALIDATION"
    AUTHENTICATION = "AUTHENTICATION"
    AUTHORIZATION = "AUTHORIZATION"
    NOT_FOUND = "NOT_FOUND"
    SERVER = "SERVER"
    CLIENT = "CLIENT"
    UNKNOWN = "UNKNOWN"


class NotificationSeverity(str, enum.Enum):
    """Severity passed to the user-notification callback."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


RETRYABLE_KINDS = frozenset({ErrorKind.NETWORK, ErrorKind.SERVER})


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ClassifiedError(BaseModel):
    """A failure normalised into the :class:`ErrorKind` taxonomy.

    Instances are frozen: a classified error is produced exactly once per
    raw failure and handed to logging, notification, and recovery hooks
    unchanged.

    Attributes:
        kind: The taxonomy entry.
        message: The raw failure message (server text, exception text, ...).
        user_message: Display-safe text suitable for a toast or CLI error line.
        details: Arbitrary context -- status/code for HTTP failures,
            exception name and stack for exceptions, the raw value otherwise.
            Read-only; nested values are not copied.
        timestamp: UTC time of classification.
    """

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str
    user_message: str
    details: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)
    timestamp: datetime = Field(default_factory=_utcnow)

    @field_validator("details")
    @classmethod
    def _freeze_details(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    @property
    def retryable(self) -> bool:
        """Whether repeating the failed operation may succeed (network and server failures)."""
        return self.kind in RETRYABLE_KINDS

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly representation for telemetry and CLI output."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "user_message": self.user_message,
            "details": {key: _jsonable(value) for key, value in self.details.items()},
            "timestamp": self.timestamp.isoformat(),
        }


def _jsonable(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _jsonable(item) for key, item in value.items()}
    return repr(value)
