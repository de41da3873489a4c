"""
Polymarket Prices - Current/Historical Price and Candlesticks
"""
from typing import Any, Dict, Optional, Tuple

from ..errors import ResponseDecodeError
from ..models import CandlestickResponse, MarketPrice, decode
from ..utils.logger import get_logger
from ..validation import (
    validate_interval,
    validate_non_blank,
    validate_positive_timestamp,
    validate_time_range,
)
from ._common import venue_path

logger = get_logger(__name__)

DEFAULT_INTERVAL = 1


def build_market_price_request(
    venue: str,
    token_id: str,
    at_time: Optional[int] = None,
) -> Tuple[str, Dict[str, Any]]:
    """Endpoint path and query for GET /{venue}/market-price/{token_id}"""
    params: Dict[str, Any] = {}
    if at_time is not None:
        params["at_time"] = at_time
    return venue_path(venue, "market-price", token_id), params


def parse_market_price_response(data: Any) -> MarketPrice:
    return decode(MarketPrice, data, "market price")


def get_market_price(
    http,
    venue: str,
    token_id: str,
    at_time: Optional[int] = None,
) -> MarketPrice:
    """
    Get the current or historical price of one outcome token.

    Args:
        http: DomeHTTPClient used for the request
        venue: Venue path segment (e.g. 'polymarket')
        token_id: Token ID for the market outcome
        at_time: Optional Unix timestamp (seconds) for a historical price

    Returns:
        MarketPrice; is_current() tells whether it is at most 5 minutes old
    """
    validate_non_blank(token_id, "token_id")
    if at_time is not None:
        validate_positive_timestamp(at_time, "at_time")

    endpoint, params = build_market_price_request(venue, token_id, at_time)
    return parse_market_price_response(http.get(endpoint, params))


def build_candlesticks_request(
    venue: str,
    condition_id: str,
    start_time: int,
    end_time: int,
    interval: int = DEFAULT_INTERVAL,
) -> Tuple[str, Dict[str, Any]]:
    """Endpoint path and query for GET /{venue}/candlesticks/{condition_id}"""
    params = {
        "start_time": start_time,
        "end_time": end_time,
        "interval": interval,
    }
    return venue_path(venue, "candlesticks", condition_id), params


def parse_candlesticks_response(data: Any) -> CandlestickResponse:
    """
    Flatten the wire format into one candlestick sequence.

    The payload's 'candlesticks' is a list of [candlestick_array,
    token_metadata] pairs. All arrays are concatenated in order. The token
    id comes from the first pair's metadata; a request covers one token, so
    metadata on later pairs is ignored. Entries that are not a pair are
    skipped.
    """
    if not isinstance(data, dict):
        raise ResponseDecodeError(
            f"Expected a JSON object for candlesticks, got {type(data).__name__}"
        )

    records = []
    token_id = None
    seen_metadata = False

    for entry in data.get("candlesticks") or []:
        if not isinstance(entry, (list, tuple)) or len(entry) < 2:
            logger.debug(f"Skipping malformed candlestick entry: {entry!r}")
            continue

        candlestick_array, token_metadata = entry[0], entry[1]

        if not seen_metadata and isinstance(token_metadata, dict):
            token_id = token_metadata.get("token_id")
            seen_metadata = True

        if isinstance(candlestick_array, list):
            records.extend(candlestick_array)

    return decode(
        CandlestickResponse,
        {"candlesticks": records, "token_id": token_id},
        "candlesticks",
    )


def get_candlesticks(
    http,
    venue: str,
    condition_id: str,
    start_time: int,
    end_time: int,
    interval: int = DEFAULT_INTERVAL,
) -> CandlestickResponse:
    """
    Get historical candlestick (OHLC) data for a market.

    Args:
        http: DomeHTTPClient used for the request
        venue: Venue path segment (e.g. 'polymarket')
        condition_id: Market condition ID
        start_time: Unix timestamp (seconds) for start of range
        end_time: Unix timestamp (seconds) for end of range
        interval: Candle interval in minutes:
            - 1 = 1 minute (max range: 1 week)
            - 60 = 1 hour (max range: 1 month)
            - 1440 = 1 day (max range: 1 year)

    Returns:
        CandlestickResponse; price_trend(), price_range() and friends are
        methods on the response

    Raises:
        InvalidArgumentError: blank condition_id, bad time range or interval
    """
    validate_non_blank(condition_id, "condition_id")
    validate_time_range(start_time, end_time)
    validate_interval(interval)

    endpoint, params = build_candlesticks_request(venue, condition_id, start_time, end_time, interval)
    return parse_candlesticks_response(http.get(endpoint, params))
