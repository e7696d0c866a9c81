"""Request construction and response handling shared by both clients.

:class:`BaseClient` holds everything that does not depend on whether the
transport is blocking: URL joining, header and body construction,
credential bookkeeping, and the 401 side effect.  The concrete clients
only add the transport calls.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import IO, Any, Optional, Union

import httpx

from apiguard.auth.session import CredentialSession
from apiguard.client.response import build_failure, extract_response_data, join_url
from apiguard.events import UNAUTHORIZED_EVENT, EventBus, get_event_bus
from apiguard.exceptions import ResponseFormatError
from apiguard.models import ClientConfig

logger = logging.getLogger(__name__)

LOGIN_PATH = "/auth/login"
LOGOUT_PATH = "/auth/logout"
REGISTER_PATH = "/auth/register"
REFRESH_PATH = "/auth/refresh"
CURRENT_USER_PATH = "/auth/me"

FileInput = Union[str, os.PathLike, bytes, IO[bytes], tuple]


def _file_field(file: FileInput) -> Any:
    """Normalise *file* into something ``httpx`` accepts under ``files=``."""
    if isinstance(file, (str, os.PathLike)):
        path = Path(file)
        return (path.name, path.read_bytes())
    return file


class BaseClient:
    """Shared state and helpers for :class:`~apiguard.client.SyncClient`
    and :class:`~apiguard.client.AsyncClient`.

    Args:
        config: Base URL, timeout, and SSL settings.
        session: Holder of the bearer credential.
        events: Bus the ``auth:unauthorized`` signal is emitted on.
            Defaults to the global bus from :func:`~apiguard.events.get_event_bus`.
    """

    def __init__(
        self,
        config: ClientConfig,
        session: CredentialSession,
        events: Optional[EventBus] = None,
    ) -> None:
        self._config = config
        self._session = session
        self._events = events if events is not None else get_event_bus()

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def session(self) -> CredentialSession:
        return self._session

    def is_authenticated(self) -> bool:
        """True iff a non-empty credential is held.  Purely local."""
        return self._session.is_authenticated()

    # ------------------------------------------------------------------ #
    # Request construction
    # ------------------------------------------------------------------ #

    def _json_request_kwargs(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        # The credential is read once here; it is not re-read mid-flight.
        headers = {"Content-Type": "application/json", **self._session.auth_headers()}
        kwargs: dict[str, Any] = {
            "method": method.upper(),
            "url": join_url(self._config.base_url, path),
            "headers": headers,
        }
        query = {key: value for key, value in (params or {}).items() if value is not None}
        if query:
            kwargs["params"] = query
        if body is not None:
            kwargs["json"] = body
        return kwargs

    def _upload_kwargs(
        self,
        path: str,
        file: FileInput,
        extra_fields: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        # No Content-Type: httpx writes the multipart boundary header itself.
        return {
            "method": "POST",
            "url": join_url(self._config.base_url, path),
            "headers": self._session.auth_headers(),
            "files": {"file": _file_field(file)},
            "data": {key: str(value) for key, value in (extra_fields or {}).items()},
        }

    # ------------------------------------------------------------------ #
    # Response handling
    # ------------------------------------------------------------------ #

    def _handle_response(self, response: httpx.Response) -> Any:
        """Return the decoded payload, or raise a ``StructuredFailure``.

        On 401 the credential is cleared and ``auth:unauthorized`` is
        emitted before the failure is raised.
        """
        if response.is_success:
            return extract_response_data(response)

        failure = build_failure(response)
        logger.debug(
            "%s %s failed with status %s: %s",
            response.request.method,
            response.request.url,
            failure.status,
            failure.message,
        )
        if failure.status == 401:
            self._session.clear()
            self._events.emit(UNAUTHORIZED_EVENT, failure)
        raise failure

    def _store_token(self, payload: Any) -> None:
        token = payload.get("token") if isinstance(payload, dict) else None
        if not isinstance(token, str) or not token:
            raise ResponseFormatError("Authentication response did not include a token")
        self._session.replace(token)
