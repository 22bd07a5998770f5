"""Request construction for each supported HTTP method.

Every builder returns a fresh ``httpx.Request``. Validation of the method and
URL happens here, before anything is handed to the transport.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote_plus

import httpx

from simple_web_service.config import WebServiceConfig
from simple_web_service.exceptions import (
    InvalidBodyError,
    InvalidMethodError,
    InvalidURLError,
)
from simple_web_service.methods import HttpMethod

JSONBody = str | bytes | dict[str, Any] | list[Any] | int | float | bool | None


def validate_url(url: str) -> httpx.URL:
    """Check that a URL is a non-empty absolute http(s) URL.

    Raises:
        InvalidURLError: If the URL is empty, relative or malformed.
    """
    if not isinstance(url, str) or not url.strip():
        raise InvalidURLError("Request URL must be a non-empty string")
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise InvalidURLError(f"Malformed request URL {url!r}: {e}") from e
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise InvalidURLError(f"Request URL must be absolute: {url!r}")
    return parsed


def encode_json_body(body: JSONBody) -> str:
    """Return the JSON text for a request body.

    Strings and bytes are taken as already-serialized JSON text and passed
    through untouched. Any other value is serialized with json.dumps.

    Raises:
        InvalidBodyError: If bytes are not UTF-8 or the value is not
            JSON-serializable.
    """
    if body is None:
        return ""
    if isinstance(body, bytes):
        try:
            return body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidBodyError(f"Request body is not UTF-8 JSON text: {e}") from e
    if isinstance(body, str):
        return body
    try:
        return json.dumps(body)
    except (TypeError, ValueError) as e:
        raise InvalidBodyError(f"Request body is not JSON-serializable: {e}") from e


def _extra_headers(config: WebServiceConfig) -> dict[str, str]:
    return {
        name: value
        for name, value in config.headers.items()
        if name.lower() != "content-type"
    }


def _base_headers(config: WebServiceConfig) -> dict[str, str]:
    headers = _extra_headers(config)
    headers["Content-Type"] = config.content_type
    return headers


def build_request(
    method: HttpMethod | str,
    url: str,
    json_body: JSONBody = None,
    config: WebServiceConfig | None = None,
) -> httpx.Request:
    """Build a request for one of the supported HTTP methods.

    GET and DELETE carry no body. POST and PUT send the JSON text through
    httpx's regular content handling. PATCH is assembled by hand with the
    UTF-8 bytes of the JSON text as a raw upload. The configured
    Content-Type header is set on every request, bodiless ones included.

    Args:
        method: HTTP method member or name.
        url: Absolute request URL.
        json_body: JSON text or a JSON-serializable value.
        config: Settings for headers and POST encoding.

    Returns:
        A new, unsent httpx.Request.

    Raises:
        InvalidMethodError: If the method is not supported.
        InvalidURLError: If the URL is not a non-empty absolute URL.
        InvalidBodyError: If the body cannot be encoded as JSON text.
    """
    config = config or WebServiceConfig()
    http_method = HttpMethod.parse(method)
    target = validate_url(url)
    headers = _base_headers(config)

    if http_method in (HttpMethod.GET, HttpMethod.DELETE):
        request = httpx.Request(http_method.value, target, headers=headers)
    elif http_method is HttpMethod.POST:
        text = encode_json_body(json_body)
        if config.post_encoding == "form":
            text = quote_plus(text)
        request = httpx.Request("POST", target, content=text, headers=headers)
    elif http_method is HttpMethod.PUT:
        request = httpx.Request(
            "PUT", target, content=encode_json_body(json_body), headers=headers
        )
    elif http_method is HttpMethod.PATCH:
        payload = encode_json_body(json_body).encode("utf-8")
        request = httpx.Request("PATCH", target, content=payload, headers=headers)
    else:
        raise InvalidMethodError(f"Invalid HTTP method: {http_method!r}")

    return request


def build_form_request(
    url: str,
    fields: Mapping[str, str],
    config: WebServiceConfig | None = None,
) -> httpx.Request:
    """Build a form POST from a mapping of field names to string values.

    The body is URL-encoded or multipart depending on
    ``config.form_encoding``; the form encoder sets the Content-Type.

    Raises:
        InvalidURLError: If the URL is not a non-empty absolute URL.
    """
    config = config or WebServiceConfig()
    target = validate_url(url)
    headers = _extra_headers(config)
    form = {str(name): str(value) for name, value in fields.items()}

    if config.form_encoding == "multipart":
        parts = {name: (None, value) for name, value in form.items()}
        return httpx.Request("POST", target, files=parts, headers=headers)
    return httpx.Request("POST", target, data=form, headers=headers)
