"""Exception hierarchy for apiguard.

All exceptions inherit from :class:`ApiguardError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`apiguard.exit_codes`.
The CLI entry point in :func:`apiguard.app.main` catches ``ApiguardError``
and exits with the appropriate code.

Subclass hierarchy::

    ApiguardError (exit 1)
    +-- InvalidUsageError    (exit 2)
    +-- ConfigError          (exit 1)
    +-- ResponseFormatError  (exit 1)
    +-- StructuredFailure    (exit 1; the CLI maps it through classification)
"""

from __future__ import annotations

from typing import Optional

from apiguard.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INVALID_USAGE


class ApiguardError(Exception):
    """Base exception for all apiguard errors.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(ApiguardError):
    """Raised for invalid CLI arguments (malformed ``key=value`` pairs, bad JSON bodies)."""

    exit_code = EXIT_INVALID_USAGE


class ConfigError(ApiguardError):
    """Raised for configuration problems (invalid JSON, bad base URL, bad timeout)."""


class ResponseFormatError(ApiguardError):
    """Raised when a successful response lacks data the client relies on (e.g. a login token)."""


class StructuredFailure(ApiguardError):
    """A non-2xx HTTP response, normalised into ``message``/``status``/``code``.

    Raised by :class:`~apiguard.client.SyncClient` and
    :class:`~apiguard.client.AsyncClient` whenever the server answers
    outside the success range.  The attributes are read-only so that a
    failure observed by several handlers cannot be altered in between.

    Args:
        message: The server-supplied ``message`` field, or
            ``"HTTP error! status: <status>"`` when none is available.
        status: The numeric HTTP status code.
        code: Optional machine-readable error code from the response body.
    """

    def __init__(self, message: str, status: int, code: Optional[str] = None) -> None:
        super().__init__(message)
        self._message = message
        self._status = status
        self._code = code

    @property
    def message(self) -> str:
        return self._message

    @property
    def status(self) -> int:
        return self._status

    @property
    def code(self) -> Optional[str]:
        return self._code

    def __repr__(self) -> str:
        return (
            f"StructuredFailure(message={self._message!r}, "
            f"status={self._status!r}, code={self._code!r})"
        )

    def __reduce__(self):
        return (type(self), (self._message, self._status, self._code))
