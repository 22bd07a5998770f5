"""Response checking and JSON parsing.

A completed request is described by a ``RequestResult``: either the parsed
JSON value or the error that ended the request.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Literal

import httpx

from simple_web_service.exceptions import (
    ErrorKind,
    ResponseParseError,
    WebProtocolError,
    WebServiceError,
)

JSONValue = dict[str, Any] | list[Any] | str | int | float | bool | None


@dataclass(frozen=True)
class RequestResult:
    """Outcome of a single dispatched request.

    Attributes:
        method: HTTP method that was sent.
        url: Request URL.
        status_code: Final status code, or None if no response arrived.
        value: Parsed JSON body (only meaningful when ok).
        error: Error that ended the request, or None on success.
    """

    method: str
    url: str
    status_code: int | None = None
    value: JSONValue = None
    error: WebServiceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_kind(self) -> ErrorKind | None:
        return self.error.kind if self.error is not None else None


def check_status(response: httpx.Response, include_body: bool = False) -> None:
    """Raise WebProtocolError unless the response has a 2xx status.

    Args:
        response: Response read from the transport.
        include_body: Attach the response text to the error.
    """
    if response.is_success:
        return
    body = response.text if include_body else None
    raise WebProtocolError(
        f"HTTP {response.status_code} {response.reason_phrase}".rstrip(),
        status_code=response.status_code,
        reason=response.reason_phrase,
        body=body,
    )


def parse_json_body(
    response: httpx.Response,
    invalid_json: Literal["error", "null"] = "error",
) -> JSONValue:
    """Parse a response body into a JSON value.

    An empty or malformed body either raises ResponseParseError or yields
    None, depending on ``invalid_json``.
    """
    text = response.text
    try:
        return json.loads(text)
    except ValueError as e:
        if invalid_json == "null":
            return None
        detail = "empty response body" if not text.strip() else str(e)
        raise ResponseParseError(f"Invalid JSON response: {detail}", text=text) from e
