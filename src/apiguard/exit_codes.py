"""Numeric process exit codes used by the ``apiguard`` CLI.

Each classified failure kind maps to one exit code so that shell scripts
can branch on the failure class without parsing stderr.

Example::

    $ apiguard request GET /projects
    $ echo $?
    3   # EXIT_AUTH_FAILURE -- the credential was rejected
"""

from __future__ import annotations

from apiguard.models import ErrorKind

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_AUTH_FAILURE = 3
"""Authentication or authorisation failed (HTTP 401 / 403)."""

EXIT_NOT_FOUND = 4
"""The requested resource was not found (HTTP 404)."""

EXIT_SERVER_ERROR = 5
"""The remote API returned a server error."""

EXIT_NETWORK_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_CLIENT_ERROR = 7
"""The request was rejected as invalid (HTTP 400, 429, other 4xx)."""


_EXIT_CODES_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.NETWORK: EXIT_NETWORK_ERROR,
    ErrorKind.VALIDATION: EXIT_CLIENT_ERROR,
    ErrorKind.AUTHENTICATION: EXIT_AUTH_FAILURE,
    ErrorKind.AUTHORIZATION: EXIT_AUTH_FAILURE,
    ErrorKind.NOT_FOUND: EXIT_NOT_FOUND,
    ErrorKind.SERVER: EXIT_SERVER_ERROR,
    ErrorKind.CLIENT: EXIT_CLIENT_ERROR,
    ErrorKind.UNKNOWN: EXIT_GENERIC_FAILURE,
}


def exit_code_for_kind(kind: ErrorKind) -> int:
    """Return the process exit code for a classified failure kind."""
    return _EXIT_CODES_BY_KIND[kind]
