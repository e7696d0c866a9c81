"""Mapping tables from failure facts to :class:`~apiguard.models.ErrorKind`.

Everything here is a pure lookup: HTTP status to kind and user message,
exception type and text to kind and user message, and kind to log level
and notification severity.
"""

from __future__ import annotations

import logging

import httpx

from apiguard.models import ErrorKind, NotificationSeverity

MSG_VALIDATION = "Please check your input and try again."
MSG_AUTHENTICATION = "Please log in to continue."
MSG_AUTHORIZATION = "You don't have permission to perform this action."
MSG_NOT_FOUND = "The requested resource was not found."
MSG_RATE_LIMITED = "Too many requests. Please try again later."
MSG_SERVER = "Server error. Please try again later."
MSG_CLIENT = "There was a problem with your request."
MSG_FALLBACK = "Something went wrong. Please try again."

MSG_CLIENT_FAULT = "Something went wrong. Please refresh and try again."
MSG_NETWORK = "Network error. Please check your connection and try again."
MSG_UNEXPECTED = "An unexpected error occurred. Please try again."
MSG_UNKNOWN_RAW = "Unknown error occurred"

_STATUS_TABLE: dict[int, tuple[ErrorKind, str]] = {
    400: (ErrorKind.VALIDATION, MSG_VALIDATION),
    401: (ErrorKind.AUTHENTICATION, MSG_AUTHENTICATION),
    403: (ErrorKind.AUTHORIZATION, MSG_AUTHORIZATION),
    404: (ErrorKind.NOT_FOUND, MSG_NOT_FOUND),
    429: (ErrorKind.CLIENT, MSG_RATE_LIMITED),
    500: (ErrorKind.SERVER, MSG_SERVER),
    502: (ErrorKind.SERVER, MSG_SERVER),
    503: (ErrorKind.SERVER, MSG_SERVER),
    504: (ErrorKind.SERVER, MSG_SERVER),
}

# Type-mismatch and undefined-reference errors point at a bug on our side.
_CLIENT_FAULT_TYPES: tuple[type[BaseException], ...] = (TypeError, NameError, AttributeError)
_NETWORK_TYPES: tuple[type[BaseException], ...] = (
    httpx.TransportError,
    ConnectionError,
    TimeoutError,
)
_NETWORK_TERMS = ("network", "fetch")


def classify_status(status: float) -> tuple[ErrorKind, str]:
    """Return ``(kind, user_message)`` for an HTTP status code."""
    if status in _STATUS_TABLE:
        return _STATUS_TABLE[status]
    if 400 <= status < 500:
        return ErrorKind.CLIENT, MSG_CLIENT
    return ErrorKind.SERVER, MSG_FALLBACK


def classify_exception(error: BaseException) -> tuple[ErrorKind, str]:
    """Return ``(kind, user_message)`` for a generic exception."""
    if isinstance(error, _CLIENT_FAULT_TYPES):
        return ErrorKind.CLIENT, MSG_CLIENT_FAULT
    text = str(error).lower()
    if isinstance(error, _NETWORK_TYPES) or any(term in text for term in _NETWORK_TERMS):
        return ErrorKind.NETWORK, MSG_NETWORK
    return ErrorKind.UNKNOWN, MSG_UNEXPECTED


def log_level_for(kind: ErrorKind) -> int:
    if kind in (ErrorKind.SERVER, ErrorKind.UNKNOWN):
        return logging.ERROR
    if kind in (ErrorKind.AUTHENTICATION, ErrorKind.AUTHORIZATION, ErrorKind.NOT_FOUND):
        return logging.WARNING
    return logging.INFO


def notification_severity_for(kind: ErrorKind) -> NotificationSeverity:
    if kind in (ErrorKind.SERVER, ErrorKind.UNKNOWN):
        return NotificationSeverity.ERROR
    if kind in (ErrorKind.AUTHENTICATION, ErrorKind.AUTHORIZATION, ErrorKind.VALIDATION):
        return NotificationSeverity.WARNING
    return NotificationSeverity.INFO
