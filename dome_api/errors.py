"""
Dome API error taxonomy

Every failure from a synchronous endpoint is raised as one of these; nothing
is retried. Streaming noise (bad frames, socket errors) never reaches here.
"""
from typing import Optional


class DomeAPIError(Exception):
    """Base class for every error raised by the client"""


class InvalidArgumentError(DomeAPIError, ValueError):
    """A call argument violated its precondition; raised before any I/O"""


class APIResponseError(DomeAPIError):
    """The server answered with a non-2xx status"""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class UnauthorizedError(APIResponseError):
    """HTTP 401: missing or invalid API key"""

    def __init__(self, message: str = "Unauthorized: Invalid API key"):
        super().__init__(message, 401)


class RateLimitError(APIResponseError):
    """HTTP 429: the caller decides whether to back off"""

    def __init__(self, message: str = "Rate limit exceeded"):
        super().__init__(message, 429)


class BadRequestError(APIResponseError):
    """HTTP 400; keeps the raw body for diagnostics"""

    def __init__(self, body: str):
        super().__init__(f"Bad request: {body}", 400)
        self.body = body


class HTTPStatusError(APIResponseError):
    """Any other non-2xx status"""

    def __init__(self, status_code: int, reason: Optional[str]):
        message = f"HTTP error: {status_code} - {reason}" if reason else f"HTTP error: {status_code}"
        super().__init__(message, status_code)
        self.reason = reason


class ResponseDecodeError(DomeAPIError):
    """A 2xx response whose body is not valid JSON or does not fit the entity schema"""


class TransportError(DomeAPIError):
    """The request never produced a response (DNS, connect, read timeout, ...)"""


class WebSocketConfigError(DomeAPIError):
    """The streaming client cannot start, e.g. the API key is blank"""
