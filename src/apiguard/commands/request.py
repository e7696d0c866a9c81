"""Request commands -- send arbitrary calls through the credentialed client.

``apiguard request`` sends a JSON request, ``apiguard upload`` a multipart
file upload, and ``apiguard classify`` shows how a status code would be
classified without sending anything::

    apiguard request GET /projects -p page=2
    apiguard request POST /projects -d '{"name": "Depot"}'
    apiguard upload /files plan.pdf -f project_id=7
    apiguard classify 503
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer

from apiguard.classifier import FailureClassifier
from apiguard.commands.runtime import build_runtime, fail
from apiguard.exceptions import InvalidUsageError
from apiguard.output import error, format_response

_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")


def _parse_pairs(values: Optional[list[str]], option: str) -> dict[str, str]:
    """Turn ``["a=1", "b=2"]`` into ``{"a": "1", "b": "2"}``."""
    pairs: dict[str, str] = {}
    for item in values or []:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise InvalidUsageError(f"{option} expects key=value, got {item!r}")
        pairs[key] = value
    return pairs


def _parse_body(body: Optional[str]) -> Any:
    if body is None:
        return None
    try:
        return json.loads(body)
    except json.JSONDecodeError as exc:
        raise InvalidUsageError(f"--body is not valid JSON: {exc}") from exc


def request_command(
    ctx: typer.Context,
    method: str = typer.Argument(help="HTTP method: GET, POST, PUT, PATCH, DELETE."),
    path: str = typer.Argument(help="Path relative to the API base URL."),
    param: Optional[list[str]] = typer.Option(
        None, "--param", "-p", help="Query parameter as key=value (repeatable)."
    ),
    body: Optional[str] = typer.Option(None, "--body", "-d", help="JSON request body."),
) -> None:
    """Send a JSON request and print the response payload."""
    verb = method.upper()
    if verb not in _METHODS:
        error(f"Unsupported method {method!r}; use one of {', '.join(_METHODS)}.")
        raise typer.Exit(code=InvalidUsageError.exit_code)
    try:
        params = _parse_pairs(param, "--param")
        json_body = _parse_body(body)
    except InvalidUsageError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    runtime = build_runtime(ctx)
    try:
        with runtime.client() as client:
            payload = client.request(verb, path, body=json_body, params=params or None)
    except Exception as exc:
        fail(runtime, exc, f"{verb} {path}")
    if payload is not None:
        format_response(payload)


def upload_command(
    ctx: typer.Context,
    path: str = typer.Argument(help="Upload endpoint path."),
    file: Path = typer.Argument(help="File to upload.", exists=True, dir_okay=False, readable=True),
    field: Optional[list[str]] = typer.Option(
        None, "--field", "-f", help="Extra form field as key=value (repeatable)."
    ),
) -> None:
    """Upload a file as multipart form data."""
    try:
        extra = _parse_pairs(field, "--field")
    except InvalidUsageError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    runtime = build_runtime(ctx)
    try:
        with runtime.client() as client:
            payload = client.upload_file(path, file, extra)
    except Exception as exc:
        fail(runtime, exc, f"upload {path}")
    if payload is not None:
        format_response(payload)


def classify_command(
    status: int = typer.Argument(help="HTTP status code."),
    message: str = typer.Argument("", help="Server message to classify alongside the status."),
) -> None:
    """Print the classification of a status code.  No request is sent."""
    classified = FailureClassifier().build({"status": status, "message": message})
    format_response(classified.to_dict())
