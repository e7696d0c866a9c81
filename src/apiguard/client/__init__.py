"""Credentialed HTTP clients for apiguard.

Provides synchronous and asynchronous clients that wrap :mod:`httpx`
with bearer-credential injection and response normalisation: every 2xx
response is decoded into a payload, every other status is raised as a
:class:`~apiguard.exceptions.StructuredFailure`.

Classes:
    :class:`SyncClient` -- blocking client backed by :class:`httpx.Client`.
    :class:`AsyncClient` -- non-blocking client backed by :class:`httpx.AsyncClient`.

Neither client retries.  Retry policy belongs to the caller, see
:mod:`apiguard.retry`.

Example::

    from apiguard.client import SyncClient

    with SyncClient(config, session) as client:
        users = client.get("/users", params={"page": 2})
"""

from apiguard.client.async_client import AsyncClient
from apiguard.client.sync_client import SyncClient

__all__ = ["SyncClient", "AsyncClient"]
