"""
Dome API transport

Issues exactly one GET per call and maps the status code onto the error
taxonomy in errors.py. No retries and no rate limiting; callers decide.
"""
import time
import httpx
from typing import Optional, Dict, Any

from ._secure_key import SecureKey, secure_key_or_none
from .config import Config
from .errors import (
    BadRequestError,
    HTTPStatusError,
    RateLimitError,
    ResponseDecodeError,
    TransportError,
    UnauthorizedError,
)
from .utils.logger import get_logger, log_api_call

logger = get_logger(__name__)


class DomeHTTPClient:
    """
    Thin wrapper around httpx.Client bound to the Dome API base URL.

    Usage:
        with DomeHTTPClient(api_key="...") as http:
            data = http.get("/polymarket/orders", {"limit": 10})
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Args:
            api_key: Dome API key; the Authorization header is omitted when absent
            base_url: Override for Config.BASE_URL
            timeout: Override for Config.REQUEST_TIMEOUT (seconds)
            transport: Custom httpx transport (tests pass httpx.MockTransport)
        """
        self._api_key: Optional[SecureKey] = secure_key_or_none(api_key)
        self.base_url = (base_url or Config.BASE_URL).rstrip("/")

        headers = {
            "Accept": "application/json",
            "User-Agent": Config.USER_AGENT,
        }
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key.get()}"

        self._client = httpx.Client(
            base_url=self.base_url,
            headers=headers,
            timeout=Config.REQUEST_TIMEOUT if timeout is None else timeout,
            transport=transport,
        )

    @property
    def api_key(self) -> Optional[SecureKey]:
        return self._api_key

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GET an endpoint and return the decoded JSON body.

        Args:
            endpoint: Path below the base URL (e.g. '/polymarket/orders')
            params: Query parameters; list values are sent as repeated keys

        Raises:
            UnauthorizedError, RateLimitError, BadRequestError, HTTPStatusError
            for non-2xx statuses, TransportError when no response arrived,
            ResponseDecodeError when the body is not JSON.
        """
        started = time.perf_counter()

        try:
            response = self._client.get(endpoint, params=params)
        except httpx.RequestError as e:
            logger.warning(f"Request to {endpoint} failed: {e}")
            raise TransportError(f"Request failed: {e}") from e

        duration_ms = (time.perf_counter() - started) * 1000
        log_api_call(logger, "GET", str(response.request.url), response.status_code, duration_ms)

        raise_for_status(response)

        try:
            return response.json()
        except ValueError as e:
            raise ResponseDecodeError(f"Invalid JSON in response from {endpoint}: {e}") from e

    def close(self):
        """Close the underlying connection pool"""
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


def raise_for_status(response: httpx.Response) -> None:
    """Map a non-2xx response onto the client's error taxonomy"""
    if response.is_success:
        return

    status = response.status_code
    if status == 401:
        raise UnauthorizedError()
    if status == 429:
        raise RateLimitError()
    if status == 400:
        raise BadRequestError(response.text)
    raise HTTPStatusError(status, response.reason_phrase)
