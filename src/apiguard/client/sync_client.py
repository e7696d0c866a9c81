"""Synchronous credentialed HTTP client.

This module provides :class:`SyncClient`, the blocking client used by the
``apiguard`` CLI.  It wraps :class:`httpx.Client` and layers on:

- **Credential injection** -- ``Authorization: Bearer <token>`` when the
  session holds a credential, nothing otherwise.
- **Response normalisation** -- 2xx bodies are decoded, anything else is
  raised as :class:`~apiguard.exceptions.StructuredFailure`.
- **401 hygiene** -- the credential is cleared and ``auth:unauthorized``
  is emitted before the failure propagates.
- **Auth endpoints** -- login, register, refresh, and logout keep the
  session's credential in step with the server.

See Also:
    :class:`~apiguard.client.async_client.AsyncClient` for the
    equivalent non-blocking implementation.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from apiguard.auth.session import CredentialSession
from apiguard.client.base import (
    CURRENT_USER_PATH,
    LOGIN_PATH,
    LOGOUT_PATH,
    REFRESH_PATH,
    REGISTER_PATH,
    BaseClient,
    FileInput,
)
from apiguard.events import EventBus
from apiguard.models import ClientConfig


class SyncClient(BaseClient):
    """Synchronous HTTP client for API calls.

    Must be used as a context manager so that the underlying transport is
    opened and closed properly.

    Args:
        config: Base URL, timeout, and SSL settings.
        session: Holder of the bearer credential.
        events: Bus for the ``auth:unauthorized`` signal.
        transport: Optional :mod:`httpx` transport, e.g.
            :class:`httpx.MockTransport` in tests.

    Example::

        with SyncClient(config, session) as client:
            projects = client.get("/projects")
    """

    def __init__(
        self,
        config: ClientConfig,
        session: CredentialSession,
        events: Optional[EventBus] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        super().__init__(config, session, events)
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> SyncClient:
        self._client = httpx.Client(
            timeout=self._config.timeout,
            verify=self._config.verify_ssl,
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        """Send a JSON request and return the decoded payload.

        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE).
            path: Path joined onto ``config.base_url``; one leading slash
                is dropped.
            body: JSON-serialisable body, sent when not ``None``.
            params: Query parameters; ``None`` values are omitted.

        Returns:
            The decoded JSON body, the raw text for non-JSON responses, or
            ``None`` for an empty body.

        Raises:
            StructuredFailure: For any non-2xx status.
            httpx.TransportError: On network failures and timeouts.
        """
        return self._send(self._json_request_kwargs(method, path, body, params))

    def get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, body: Any = None) -> Any:
        return self.request("POST", path, body=body)

    def put(self, path: str, body: Any = None) -> Any:
        return self.request("PUT", path, body=body)

    def patch(self, path: str, body: Any = None) -> Any:
        return self.request("PATCH", path, body=body)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def upload_file(
        self,
        path: str,
        file: FileInput,
        extra_fields: Optional[dict[str, Any]] = None,
    ) -> Any:
        """POST *file* as multipart form data.

        Args:
            path: Upload endpoint path.
            file: A filesystem path, raw bytes, an open binary file, or an
                ``(filename, content[, content_type])`` tuple.  Sent under
                the form field ``file``.
            extra_fields: Additional form fields; values are coerced with
                :func:`str`.

        Raises:
            StructuredFailure: For any non-2xx status.
        """
        return self._send(self._upload_kwargs(path, file, extra_fields))

    # ------------------------------------------------------------------ #
    # Auth endpoints
    # ------------------------------------------------------------------ #

    def login(self, email: str, password: str) -> Any:
        """Log in and store the returned credential."""
        payload = self.post(LOGIN_PATH, {"email": email, "password": password})
        self._store_token(payload)
        return payload

    def register(self, user_data: dict[str, Any]) -> Any:
        """Create an account and store the returned credential."""
        payload = self.post(REGISTER_PATH, user_data)
        self._store_token(payload)
        return payload

    def refresh_credential(self) -> Any:
        """Exchange the current credential for a fresh one."""
        payload = self.post(REFRESH_PATH)
        self._store_token(payload)
        return payload

    def logout(self) -> None:
        """Log out server-side; the local credential is cleared even if that fails."""
        try:
            self.post(LOGOUT_PATH)
        finally:
            self._session.clear()

    def current_user(self) -> Any:
        """Return the profile of the authenticated user."""
        return self.get(CURRENT_USER_PATH)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _send(self, kwargs: dict[str, Any]) -> Any:
        assert self._client is not None, "Client not initialised -- use as context manager"
        response = self._client.request(**kwargs)
        return self._handle_response(response)
