"""Unit tests for response checking and JSON parsing."""

import httpx
import pytest

from simple_web_service import (
    ErrorKind,
    RequestResult,
    ResponseParseError,
    WebConnectionError,
    WebProtocolError,
)
from simple_web_service.response import check_status, parse_json_body


class TestCheckStatus:
    """Tests for check_status()."""

    @pytest.mark.parametrize("status_code", [200, 201, 204])
    def test_success_statuses_pass(self, status_code: int) -> None:
        check_status(httpx.Response(status_code))

    def test_not_found_raises_protocol_error(self) -> None:
        """Non-2xx statuses raise without exposing the body by default."""
        response = httpx.Response(404, json={"error": "not found"})

        with pytest.raises(WebProtocolError) as exc_info:
            check_status(response)

        error = exc_info.value
        assert error.status_code == 404
        assert error.reason == "Not Found"
        assert error.body is None
        assert error.kind is ErrorKind.PROTOCOL
        assert "404" in str(error)

    def test_body_attached_when_requested(self) -> None:
        response = httpx.Response(500, text="boom")

        with pytest.raises(WebProtocolError) as exc_info:
            check_status(response, include_body=True)

        assert exc_info.value.body == "boom"


class TestParseJsonBody:
    """Tests for parse_json_body()."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ('{"id":1,"name":"a"}', {"id": 1, "name": "a"}),
            ("[1, 2, 3]", [1, 2, 3]),
            ('"hello"', "hello"),
            ("3.5", 3.5),
            ("true", True),
            ("null", None),
        ],
    )
    def test_parses_any_json_value(self, text: str, expected: object) -> None:
        assert parse_json_body(httpx.Response(200, text=text)) == expected

    @pytest.mark.parametrize("text", ["", "   ", "<html>", '{"id": 1'])
    def test_invalid_body_raises_by_default(self, text: str) -> None:
        with pytest.raises(ResponseParseError) as exc_info:
            parse_json_body(httpx.Response(200, text=text))

        assert exc_info.value.kind is ErrorKind.PARSE
        assert exc_info.value.text == text

    def test_empty_body_message(self) -> None:
        with pytest.raises(ResponseParseError, match="empty response body"):
            parse_json_body(httpx.Response(204))

    def test_invalid_body_null_policy(self) -> None:
        """invalid_json='null' turns unparseable bodies into None."""
        response = httpx.Response(200, text="not json")
        assert parse_json_body(response, invalid_json="null") is None


class TestRequestResult:
    """Tests for RequestResult."""

    def test_success_result(self) -> None:
        result = RequestResult("GET", "https://a.example", 200, value={"id": 1})
        assert result.ok
        assert result.error_kind is None

    def test_failure_result(self) -> None:
        result = RequestResult(
            "GET", "https://a.example", error=WebConnectionError("refused")
        )
        assert not result.ok
        assert result.error_kind is ErrorKind.CONNECTION
        assert result.status_code is None
