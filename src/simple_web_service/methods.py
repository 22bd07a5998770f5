"""HTTP verbs supported by the request dispatcher."""

from enum import Enum

from simple_web_service.exceptions import InvalidMethodError


class HttpMethod(Enum):
    """HTTP methods the dispatcher knows how to build requests for."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"

    @property
    def has_body(self) -> bool:
        """Whether requests with this method carry a body."""
        return self in (HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH)

    @classmethod
    def parse(cls, value: "HttpMethod | str") -> "HttpMethod":
        """Resolve a method name (case-insensitive) to an HttpMethod.

        Args:
            value: An HttpMethod member or a method name such as "get".

        Returns:
            The matching HttpMethod.

        Raises:
            InvalidMethodError: If the value does not name a supported method.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise InvalidMethodError(f"Invalid HTTP method: {value!r}")
