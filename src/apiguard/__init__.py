"""apiguard -- credential-aware HTTP client with failure classification.

This package wraps outbound JSON-over-HTTP calls, keeps track of a single
bearer credential, and turns every failure into one entry of a closed
error taxonomy so that callers can log it, show it to the user, and
decide whether to re-authenticate or retry.

Typical usage::

    from apiguard import (
        ClientConfig,
        CredentialSession,
        FailureClassifier,
        MemoryCredentialStore,
        SyncClient,
    )

    session = CredentialSession(MemoryCredentialStore())
    classifier = FailureClassifier()

    with SyncClient(ClientConfig(), session) as client:
        try:
            users = client.get("/users")
        except Exception as exc:
            classified = classifier.classify(exc, "list users")

Modules:
    app: Typer application and the ``apiguard`` console entry point.
    models: Pydantic models shared across the package.
    config: XDG-aware configuration loading and precedence resolution.
    events: Process-wide event bus (``auth:unauthorized`` and friends).
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes used by the CLI.
    output: stdout/stderr formatting system with Rich support.
    retry: Opt-in, caller-side retry helpers driven by classification.
"""

__version__ = "0.1.0"

from apiguard.auth import (
    CredentialSession,
    CredentialStorage,
    FileCredentialStore,
    MemoryCredentialStore,
)
from apiguard.classifier import ClassifierOptions, FailureClassifier, classify_errors
from apiguard.client import AsyncClient, SyncClient
from apiguard.events import UNAUTHORIZED_EVENT, EventBus, get_event_bus
from apiguard.exceptions import ApiguardError, ConfigError, StructuredFailure
from apiguard.models import ClassifiedError, ClientConfig, ErrorKind, NotificationSeverity
from apiguard.retry import async_retry_call, retry_call

__all__ = [
    "__version__",
    "ApiguardError",
    "AsyncClient",
    "ClassifiedError",
    "ClassifierOptions",
    "ClientConfig",
    "ConfigError",
    "CredentialSession",
    "CredentialStorage",
    "ErrorKind",
    "EventBus",
    "FailureClassifier",
    "FileCredentialStore",
    "MemoryCredentialStore",
    "NotificationSeverity",
    "StructuredFailure",
    "SyncClient",
    "UNAUTHORIZED_EVENT",
    "async_retry_call",
    "classify_errors",
    "get_event_bus",
    "retry_call",
]
