"""Tests for the exception hierarchy and kind-to-exit-code mapping."""

from __future__ import annotations

import pickle

import pytest

from apiguard.exceptions import (
    ApiguardError,
    ConfigError,
    InvalidUsageError,
    ResponseFormatError,
    StructuredFailure,
)
from apiguard.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CLIENT_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NETWORK_ERROR,
    EXIT_NOT_FOUND,
    EXIT_SERVER_ERROR,
    exit_code_for_kind,
)
from apiguard.models import ErrorKind


class TestHierarchy:
    @pytest.mark.parametrize(
        ("cls", "code"),
        [
            (ApiguardError, EXIT_GENERIC_FAILURE),
            (InvalidUsageError, EXIT_INVALID_USAGE),
            (ConfigError, EXIT_GENERIC_FAILURE),
            (ResponseFormatError, EXIT_GENERIC_FAILURE),
        ],
    )
    def test_default_exit_codes(self, cls: type[ApiguardError], code: int) -> None:
        assert cls("x").exit_code == code

    def test_exit_code_override(self) -> None:
        assert ConfigError("x", exit_code=9).exit_code == 9


class TestStructuredFailure:
    def test_fields(self) -> None:
        failure = StructuredFailure("missing", 404, "E_GONE")
        assert (failure.message, failure.status, failure.code) == ("missing", 404, "E_GONE")
        assert str(failure) == "missing"
        assert isinstance(failure, ApiguardError)

    def test_read_only(self) -> None:
        failure = StructuredFailure("missing", 404)
        with pytest.raises(AttributeError):
            failure.status = 500  # type: ignore[misc]

    def test_repr(self) -> None:
        assert repr(StructuredFailure("x", 500)) == (
            "StructuredFailure(message='x', status=500, code=None)"
        )

    def test_pickle(self) -> None:
        restored = pickle.loads(pickle.dumps(StructuredFailure("down", 503, "E_DOWN")))
        assert (restored.message, restored.status, restored.code) == ("down", 503, "E_DOWN")


class TestExitCodeForKind:
    @pytest.mark.parametrize(
        ("kind", "code"),
        [
            (ErrorKind.NETWORK, EXIT_NETWORK_ERROR),
            (ErrorKind.VALIDATION, EXIT_CLIENT_ERROR),
            (ErrorKind.AUTHENTICATION, EXIT_AUTH_FAILURE),
            (ErrorKind.AUTHORIZATION, EXIT_AUTH_FAILURE),
            (ErrorKind.NOT_FOUND, EXIT_NOT_FOUND),
            (ErrorKind.SERVER, EXIT_SERVER_ERROR),
            (ErrorKind.CLIENT, EXIT_CLIENT_ERROR),
            (ErrorKind.UNKNOWN, EXIT_GENERIC_FAILURE),
        ],
    )
    def test_mapping(self, kind: ErrorKind, code: int) -> None:
        assert exit_code_for_kind(kind) == code
