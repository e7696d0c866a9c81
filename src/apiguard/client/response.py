"""Response normalisation shared by both clients.

:func:`extract_response_data` decodes a successful response and
:func:`build_failure` turns an unsuccessful one into a
:class:`~apiguard.exceptions.StructuredFailure`.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from apiguard.exceptions import StructuredFailure


def join_url(base_url: str, path: str) -> str:
    """Join *path* onto *base_url* with exactly one slash between them.

    >>> join_url("http://localhost:8000/api", "/users")
    'http://localhost:8000/api/users'
    """
    clean = path[1:] if path.startswith("/") else path
    return f"{base_url.rstrip('/')}/{clean}"


def is_json_response(response: httpx.Response) -> bool:
    content_type = response.headers.get("content-type", "")
    return "application/json" in content_type.lower()


def extract_response_data(response: httpx.Response) -> Any:
    """Decode the body of a successful response.

    Returns:
        The JSON-decoded body when the response declares a JSON content
        type, the raw text otherwise, or ``None`` for an empty body.  A
        body that claims to be JSON but does not parse is returned as text.
    """
    if not response.content:
        return None
    if is_json_response(response):
        try:
            return response.json()
        except ValueError:
            pass
    return response.text


def build_failure(response: httpx.Response) -> StructuredFailure:
    """Build the :class:`~apiguard.exceptions.StructuredFailure` for a non-2xx response.

    The message comes from the body's ``message`` field when the body is a
    JSON object carrying one; otherwise it is
    ``"HTTP error! status: <status>"``.  A string ``code`` field is kept.
    """
    status = response.status_code
    message = f"HTTP error! status: {status}"
    code: Optional[str] = None

    try:
        detail = response.json()
    except ValueError:
        detail = None

    if isinstance(detail, dict):
        if detail.get("message"):
            message = str(detail["message"])
        if isinstance(detail.get("code"), str):
            code = detail["code"]

    return StructuredFailure(message, status, code)
