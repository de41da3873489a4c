"""
Polymarket Trading - Order History via Dome API

Executed orders from Dome's /polymarket/orders endpoint, decoded into
Order records.
"""
from typing import Any, Dict, Optional, Tuple

from ..models import OrderHistoryResponse, decode
from ..validation import MAX_ORDERS_LIMIT, validate_limit, validate_offset
from ._common import add_optional, add_pagination, venue_path

DEFAULT_LIMIT = 100


def build_order_history_request(
    venue: str,
    market_slug: Optional[str] = None,
    condition_id: Optional[str] = None,
    token_id: Optional[str] = None,
    start_time: Optional[int] = None,
    end_time: Optional[int] = None,
    user: Optional[str] = None,
    limit: int = DEFAULT_LIMIT,
    offset: int = 0,
    pagination_key: Optional[str] = None,
) -> Tuple[str, Dict[str, Any]]:
    """Endpoint path and query for GET /{venue}/orders"""
    params = add_optional(
        {},
        market_slug=market_slug,
        condition_id=condition_id,
        token_id=token_id,
        start_time=start_time,
        end_time=end_time,
        user=user,
    )
    params["limit"] = limit
    add_pagination(params, offset, pagination_key)
    return venue_path(venue, "orders"), params


def parse_order_history_response(data: Any) -> OrderHistoryResponse:
    return decode(OrderHistoryResponse, data, "order history")


def get_order_history(
    http,
    venue: str,
    market_slug: Optional[str] = None,
    condition_id: Optional[str] = None,
    token_id: Optional[str] = None,
    start_time: Optional[int] = None,
    end_time: Optional[int] = None,
    user: Optional[str] = None,
    limit: int = DEFAULT_LIMIT,
    offset: int = 0,
    pagination_key: Optional[str] = None,
) -> OrderHistoryResponse:
    """
    Get executed orders with optional filtering.

    Args:
        http: DomeHTTPClient used for the request
        venue: Venue path segment (e.g. 'polymarket')
        market_slug: Filter by market slug
        condition_id: Filter by condition ID
        token_id: Filter by token ID (one outcome)
        start_time: Unix timestamp (seconds) filter from (inclusive)
        end_time: Unix timestamp (seconds) filter until (inclusive)
        user: Filter by wallet address
        limit: Number of orders to return (1-1000, default 100)
        offset: Orders to skip (default 0); ignored when pagination_key is given
        pagination_key: Cursor from a previous response

    Returns:
        OrderHistoryResponse with orders and pagination (total in 'total')

    Raises:
        InvalidArgumentError: limit or offset out of range
    """
    validate_limit(limit, MAX_ORDERS_LIMIT)
    if not pagination_key:
        validate_offset(offset)

    endpoint, params = build_order_history_request(
        venue,
        market_slug=market_slug,
        condition_id=condition_id,
        token_id=token_id,
        start_time=start_time,
        end_time=end_time,
        user=user,
        limit=limit,
        offset=offset,
        pagination_key=pagination_key,
    )
    return parse_order_history_response(http.get(endpoint, params))
