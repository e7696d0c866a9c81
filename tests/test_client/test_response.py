"""Tests for response normalisation helpers."""

from __future__ import annotations

import httpx
import pytest

from apiguard.client.response import build_failure, extract_response_data, join_url
from apiguard.exceptions import StructuredFailure


def _make_response(
    status_code: int = 200,
    content: bytes = b"",
    content_type: str | None = None,
) -> httpx.Response:
    headers = {"content-type": content_type} if content_type else {}
    return httpx.Response(
        status_code=status_code,
        content=content,
        headers=headers,
        request=httpx.Request("GET", "https://api.example.com/test"),
    )


class TestJoinUrl:
    @pytest.mark.parametrize(
        ("base", "path", "expected"),
        [
            ("http://localhost:8000/api", "/users", "http://localhost:8000/api/users"),
            ("http://localhost:8000/api", "users", "http://localhost:8000/api/users"),
            ("http://localhost:8000/api/", "/users", "http://localhost:8000/api/users"),
            ("http://localhost:8000/api", "/users/7/tasks", "http://localhost:8000/api/users/7/tasks"),
        ],
    )
    def test_join(self, base: str, path: str, expected: str) -> None:
        assert join_url(base, path) == expected

    def test_only_one_leading_slash_stripped(self) -> None:
        assert join_url("http://h/api", "//x") == "http://h/api//x"


class TestExtractResponseData:
    def test_json_body(self) -> None:
        response = _make_response(content=b'{"a": 1}', content_type="application/json")
        assert extract_response_data(response) == {"a": 1}

    def test_json_with_charset(self) -> None:
        response = _make_response(
            content=b"[1, 2]", content_type="application/json; charset=utf-8"
        )
        assert extract_response_data(response) == [1, 2]

    def test_non_json_content_type_returns_text(self) -> None:
        response = _make_response(content=b'{"a": 1}', content_type="text/plain")
        assert extract_response_data(response) == '{"a": 1}'

    def test_missing_content_type_returns_text(self) -> None:
        response = _make_response(content=b"hello")
        assert extract_response_data(response) == "hello"

    def test_empty_body_returns_none(self) -> None:
        response = _make_response(status_code=204, content_type="application/json")
        assert extract_response_data(response) is None

    def test_malformed_json_falls_back_to_text(self) -> None:
        response = _make_response(content=b'{"broken": json', content_type="application/json")
        assert extract_response_data(response) == '{"broken": json'


class TestBuildFailure:
    def test_message_from_json_body(self) -> None:
        response = _make_response(
            status_code=422,
            content=b'{"message": "Name is required", "code": "E_NAME"}',
            content_type="application/json",
        )
        failure = build_failure(response)
        assert isinstance(failure, StructuredFailure)
        assert failure.status == 422
        assert failure.message == "Name is required"
        assert failure.code == "E_NAME"

    def test_generic_message_for_plain_text(self) -> None:
        response = _make_response(status_code=502, content=b"Bad gateway", content_type="text/html")
        failure = build_failure(response)
        assert failure.message == "HTTP error! status: 502"
        assert failure.code is None

    def test_generic_message_when_field_missing(self) -> None:
        response = _make_response(
            status_code=500, content=b'{"error": "x"}', content_type="application/json"
        )
        assert build_failure(response).message == "HTTP error! status: 500"

    def test_generic_message_when_body_is_list(self) -> None:
        response = _make_response(status_code=400, content=b'["x"]', content_type="application/json")
        assert build_failure(response).message == "HTTP error! status: 400"

    def test_empty_body(self) -> None:
        failure = build_failure(_make_response(status_code=404))
        assert failure.message == "HTTP error! status: 404"
        assert failure.status == 404
