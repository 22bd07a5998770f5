"""Async request dispatcher for JSON REST APIs.

This module wraps httpx with one entry point per HTTP verb. Each call builds
its request up front, then runs the exchange as an independent asyncio task
that parses the JSON response and hands it to an optional completion
handler. Failures are logged once and returned as a typed RequestResult.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable, Mapping
from typing import Any

import httpx

from simple_web_service.builder import JSONBody, build_form_request, build_request
from simple_web_service.config import WebServiceConfig
from simple_web_service.exceptions import (
    ResponseParseError,
    WebConnectionError,
    WebProtocolError,
    WebServiceError,
)
from simple_web_service.methods import HttpMethod
from simple_web_service.response import (
    JSONValue,
    RequestResult,
    check_status,
    parse_json_body,
)

logger = logging.getLogger(__name__)

CompletionHandler = Callable[[JSONValue], Any]


class RequestDispatcher:
    """Issues JSON REST requests and delivers parsed responses.

    The verb methods (get, post, post_form, put, patch, delete) validate and
    build the request synchronously, then schedule the exchange on the
    running event loop and return the task. The handler is called exactly
    once with the parsed JSON value when the request succeeds; otherwise the
    failure is logged and the handler is not called.

    Example:
        async with RequestDispatcher() as service:
            service.get("https://api.example.com/items/1", print)
            result = await service.fetch("DELETE", "https://api.example.com/items/1")
            if not result.ok:
                print(result.error_kind)
    """

    def __init__(
        self,
        config: WebServiceConfig | None = None,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the dispatcher.

        Args:
            config: Request and response settings (default: WebServiceConfig()).
            client: Existing httpx.AsyncClient to send through. It is not
                closed by close(). When omitted the dispatcher creates and
                owns one.
            transport: Transport for the client the dispatcher creates
                (ignored when ``client`` is given).
        """
        self.config = config or WebServiceConfig()
        self._client = client
        self._transport = transport
        self._owns_client = client is None
        self._tasks: set[asyncio.Task[RequestResult]] = set()

    async def __aenter__(self) -> RequestDispatcher:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        await self.close()

    @property
    def pending(self) -> int:
        """Number of dispatched requests that have not finished yet."""
        return len(self._tasks)

    async def connect(self) -> None:
        """Create the underlying httpx.AsyncClient if there is none."""
        if self._client is None:
            kwargs: dict[str, Any] = {"follow_redirects": self.config.follow_redirects}
            if self.config.timeout is not None:
                kwargs["timeout"] = self.config.timeout
            if self._transport is not None:
                kwargs["transport"] = self._transport
            self._client = httpx.AsyncClient(**kwargs)
            self._owns_client = True
            logger.debug("HTTP client created")

    async def wait_all(self) -> None:
        """Wait for every in-flight request task to finish.

        The calling task is skipped, so a handler may close the dispatcher.
        """
        current = asyncio.current_task()
        while True:
            pending = [task for task in self._tasks if task is not current]
            if not pending:
                break
            await asyncio.gather(*pending, return_exceptions=True)

    async def close(self) -> None:
        """Wait for in-flight requests, then release an owned client."""
        await self.wait_all()
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            logger.debug("HTTP client closed")
            self._client = None

    # =========================================================================
    # Verb entry points
    # =========================================================================

    def get(
        self, url: str, handler: CompletionHandler | None = None
    ) -> asyncio.Task[RequestResult]:
        """Send a GET request."""
        return self.request(HttpMethod.GET, url, handler=handler)

    def post(
        self,
        url: str,
        json_body: JSONBody,
        handler: CompletionHandler | None = None,
    ) -> asyncio.Task[RequestResult]:
        """Send a POST request with a JSON body.

        The body is sent as raw JSON or as form-escaped JSON text depending
        on ``config.post_encoding``.
        """
        return self.request(HttpMethod.POST, url, json_body, handler)

    def post_form(
        self,
        url: str,
        fields: Mapping[str, str],
        handler: CompletionHandler | None = None,
    ) -> asyncio.Task[RequestResult]:
        """Send a form POST built from field names and string values."""
        request = build_form_request(url, fields, self.config)
        return self._schedule(request, handler)

    def put(
        self,
        url: str,
        json_body: JSONBody,
        handler: CompletionHandler | None = None,
    ) -> asyncio.Task[RequestResult]:
        """Send a PUT request with a JSON body."""
        return self.request(HttpMethod.PUT, url, json_body, handler)

    def patch(
        self,
        url: str,
        json_body: JSONBody,
        handler: CompletionHandler | None = None,
    ) -> asyncio.Task[RequestResult]:
        """Send a PATCH request with the JSON body as a raw UTF-8 upload."""
        return self.request(HttpMethod.PATCH, url, json_body, handler)

    def delete(
        self, url: str, handler: CompletionHandler | None = None
    ) -> asyncio.Task[RequestResult]:
        """Send a DELETE request."""
        return self.request(HttpMethod.DELETE, url, handler=handler)

    def request(
        self,
        method: HttpMethod | str,
        url: str,
        json_body: JSONBody = None,
        handler: CompletionHandler | None = None,
    ) -> asyncio.Task[RequestResult]:
        """Build a request for any supported verb and schedule it.

        Args:
            method: HTTP method member or name.
            url: Absolute request URL.
            json_body: JSON text or value; ignored for GET and DELETE.
            handler: Called with the parsed JSON value on success.

        Returns:
            The task running the exchange.

        Raises:
            InvalidMethodError: If the method is not supported.
            InvalidURLError: If the URL is not a non-empty absolute URL.
            RuntimeError: If called outside a running event loop.
        """
        request = build_request(method, url, json_body, self.config)
        return self._schedule(request, handler)

    async def fetch(
        self,
        method: HttpMethod | str,
        url: str,
        json_body: JSONBody = None,
    ) -> RequestResult:
        """Send a request and await its typed result."""
        request = build_request(method, url, json_body, self.config)
        return await self.send(request)

    # =========================================================================
    # Submission
    # =========================================================================

    def _schedule(
        self, request: httpx.Request, handler: CompletionHandler | None
    ) -> asyncio.Task[RequestResult]:
        loop = asyncio.get_running_loop()
        task = loop.create_task(
            self.send(request, handler), name=f"{request.method} {request.url}"
        )
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task[RequestResult]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(
                "Request task %s raised",
                task.get_name(),
                exc_info=error,
            )

    async def send(
        self,
        request: httpx.Request,
        handler: CompletionHandler | None = None,
    ) -> RequestResult:
        """Send a built request and run the completion contract.

        Args:
            request: Request produced by the builders.
            handler: Called with the parsed JSON value on success.

        Returns:
            RequestResult holding either the parsed value or the error.
        """
        await self.connect()
        assert self._client is not None
        method = request.method
        url = str(request.url)

        if "timeout" not in request.extensions:
            request.extensions["timeout"] = self._client.timeout.as_dict()

        logger.debug("Request %s %s", method, url)
        try:
            response = await self._client.send(
                request, follow_redirects=self.config.follow_redirects
            )
        except httpx.RequestError as e:
            error = WebConnectionError(f"{type(e).__name__}: {e}")
            error.__cause__ = e
            return self._fail(method, url, None, error)

        try:
            check_status(response, include_body=self.config.include_error_body)
            value = parse_json_body(response, self.config.invalid_json)
        except (WebProtocolError, ResponseParseError) as e:
            return self._fail(method, url, response.status_code, e)

        logger.debug("Response %s %s -> %d", method, url, response.status_code)
        if handler is not None:
            outcome = handler(value)
            if inspect.isawaitable(outcome):
                await outcome

        return RequestResult(
            method=method,
            url=url,
            status_code=response.status_code,
            value=value,
        )

    def _fail(
        self,
        method: str,
        url: str,
        status_code: int | None,
        error: WebServiceError,
    ) -> RequestResult:
        logger.error("Request %s %s failed: %s", method, url, error)
        return RequestResult(
            method=method,
            url=url,
            status_code=status_code,
            error=error,
        )
