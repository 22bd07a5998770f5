"""Async HTTP convenience wrapper for JSON REST APIs.

Usage:
    from simple_web_service import RequestDispatcher

    async with RequestDispatcher() as service:
        service.get("https://api.example.com/scores", on_scores)
        service.patch("https://api.example.com/players/7", '{"level": 3}', on_player)
"""

from simple_web_service.builder import (
    build_form_request,
    build_request,
    encode_json_body,
    validate_url,
)
from simple_web_service.config import WebServiceConfig, configure_logging
from simple_web_service.dispatcher import CompletionHandler, RequestDispatcher
from simple_web_service.exceptions import (
    ErrorKind,
    InvalidBodyError,
    InvalidMethodError,
    InvalidURLError,
    ResponseParseError,
    WebConnectionError,
    WebProtocolError,
    WebServiceError,
)
from simple_web_service.methods import HttpMethod
from simple_web_service.response import JSONValue, RequestResult

__all__ = [
    "RequestDispatcher",
    "CompletionHandler",
    "RequestResult",
    "JSONValue",
    "HttpMethod",
    "WebServiceConfig",
    "configure_logging",
    "build_request",
    "build_form_request",
    "encode_json_body",
    "validate_url",
    "WebServiceError",
    "InvalidMethodError",
    "InvalidBodyError",
    "InvalidURLError",
    "WebConnectionError",
    "WebProtocolError",
    "ResponseParseError",
    "ErrorKind",
]
