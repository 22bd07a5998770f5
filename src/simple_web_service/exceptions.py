"""Exception hierarchy for the web service client.

Request failures are reported as instances of these classes, both on the
``RequestResult`` returned by the dispatcher and in the error log.
"""

from enum import Enum


class ErrorKind(Enum):
    """Category of a failed request."""

    CONNECTION = "connection"
    PROTOCOL = "protocol"
    PARSE = "parse"


class WebServiceError(Exception):
    """Base exception for web service errors."""

    kind: ErrorKind | None = None


class InvalidMethodError(WebServiceError, ValueError):
    """Raised when a request is made with an unsupported HTTP method."""

    pass


class InvalidURLError(WebServiceError, ValueError):
    """Raised when a request URL is empty or not absolute."""

    pass


class InvalidBodyError(WebServiceError, ValueError):
    """Raised when a request body cannot be encoded as JSON text."""

    pass


class WebConnectionError(WebServiceError):
    """Raised when the transport could not complete the exchange."""

    kind = ErrorKind.CONNECTION


class WebProtocolError(WebServiceError):
    """Raised when the server answers with a non-success status code."""

    kind = ErrorKind.PROTOCOL

    def __init__(
        self,
        message: str,
        status_code: int,
        reason: str = "",
        body: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.body = body


class ResponseParseError(WebServiceError):
    """Raised when a successful response body is not valid JSON."""

    kind = ErrorKind.PARSE

    def __init__(self, message: str, text: str = ""):
        super().__init__(message)
        self.text = text
