"""Asynchronous credentialed HTTP client -- mirrors :class:`~apiguard.client.sync_client.SyncClient`.

Each call is an independent coroutine that suspends only while awaiting
the network round trip; concurrent calls complete and fail independently.
The credential is read once when a request's headers are built, so a
login or 401 that lands while another request is in flight affects only
requests built afterwards.

See Also:
    :class:`~apiguard.client.sync_client.SyncClient` for the blocking
    equivalent.
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


class AsyncClient(BaseClient):
    """Asynchronous HTTP client for API calls.

    Must be used as an async context manager.

    Args:
        config: Base URL, timeout, and SSL settings.
        session: Holder of the bearer credential.
        events: Bus for the ``auth:unauthorized`` signal.
        transport: Optional async :mod:`httpx` transport.

    Example::

        async with AsyncClient(config, session) as client:
            projects = await client.get("/projects")
    """

    def __init__(
        self,
        config: ClientConfig,
        session: CredentialSession,
        events: Optional[EventBus] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(config, session, events)
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> AsyncClient:
        self._client = httpx.AsyncClient(
            timeout=self._config.timeout,
            verify=self._config.verify_ssl,
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        """Send a JSON request and return the decoded payload.

        Behaves identically to
        :meth:`~apiguard.client.sync_client.SyncClient.request` but is
        non-blocking.

        Raises:
            StructuredFailure: For any non-2xx status.
            httpx.TransportError: On network failures and timeouts.
        """
        return await self._send(self._json_request_kwargs(method, path, body, params))

    async def get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, body: Any = None) -> Any:
        return await self.request("POST", path, body=body)

    async def put(self, path: str, body: Any = None) -> Any:
        return await self.request("PUT", path, body=body)

    async def patch(self, path: str, body: Any = None) -> Any:
        return await self.request("PATCH", path, body=body)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    async def upload_file(
        self,
        path: str,
        file: FileInput,
        extra_fields: Optional[dict[str, Any]] = None,
    ) -> Any:
        """POST *file* as multipart form data.  See :meth:`SyncClient.upload_file`."""
        return await self._send(self._upload_kwargs(path, file, extra_fields))

    # ------------------------------------------------------------------ #
    # Auth endpoints
    # ------------------------------------------------------------------ #

    async def login(self, email: str, password: str) -> Any:
        payload = await self.post(LOGIN_PATH, {"email": email, "password": password})
        self._store_token(payload)
        return payload

    async def register(self, user_data: dict[str, Any]) -> Any:
        payload = await self.post(REGISTER_PATH, user_data)
        self._store_token(payload)
        return payload

    async def refresh_credential(self) -> Any:
        payload = await self.post(REFRESH_PATH)
        self._store_token(payload)
        return payload

    async def logout(self) -> None:
        try:
            await self.post(LOGOUT_PATH)
        finally:
            self._session.clear()

    async def current_user(self) -> Any:
        return await self.get(CURRENT_USER_PATH)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    async def _send(self, kwargs: dict[str, Any]) -> Any:
        assert self._client is not None, "Client not initialised -- use as async context manager"
        response = await self._client.request(**kwargs)
        return self._handle_response(response)
