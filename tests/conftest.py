"""Shared fixtures and utilities for simple_web_service tests.

This module provides:
- A recording mock transport that stands in for a REST server
- A factory for dispatchers wired to that transport
- A helper to pick error records out of the log
"""

import logging
from collections.abc import Awaitable, Callable

import httpx
import pytest

from simple_web_service import RequestDispatcher, WebServiceConfig

BASE_URL = "https://api.example.com"

Responder = Callable[[httpx.Request], httpx.Response | Awaitable[httpx.Response]]


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it receives."""

    def __init__(self, responder: Responder):
        self.requests: list[httpx.Request] = []

        def handler(request: httpx.Request):
            self.requests.append(request)
            return responder(request)

        super().__init__(handler)


def json_responder(
    payload: object, status_code: int = 200
) -> Callable[[httpx.Request], httpx.Response]:
    """Build a responder that always answers with the given JSON payload."""

    def respond(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=payload)

    return respond


def make_dispatcher(
    responder: Responder,
    config: WebServiceConfig | None = None,
) -> tuple[RequestDispatcher, RecordingTransport]:
    """Create a dispatcher whose own client talks to a RecordingTransport."""
    transport = RecordingTransport(responder)
    return RequestDispatcher(config=config, transport=transport), transport


def error_records(caplog: pytest.LogCaptureFixture) -> list[logging.LogRecord]:
    """Return the ERROR-or-worse records emitted by the package."""
    return [
        record
        for record in caplog.records
        if record.levelno >= logging.ERROR
        and record.name.startswith("simple_web_service")
    ]
