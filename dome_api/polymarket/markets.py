"""
Polymarket Markets - Search and Discovery
"""
from typing import Any, Dict, List, Optional, Tuple

from ..models import MarketsResponse, decode
from ..validation import (
    MAX_MARKETS_LIMIT,
    validate_limit,
    validate_list_filter,
    validate_offset,
    validate_optional_time_range,
)
from ._common import add_optional, add_pagination, venue_path

DEFAULT_LIMIT = 10

LIST_FILTERS = ("market_slug", "event_slug", "condition_id", "token_id", "tags")


def build_markets_request(
    venue: str,
    market_slug: Optional[List[str]] = None,
    event_slug: Optional[List[str]] = None,
    condition_id: Optional[List[str]] = None,
    token_id: Optional[List[str]] = None,
    tags: Optional[List[str]] = None,
    search: Optional[str] = None,
    status: Optional[str] = None,
    min_volume: Optional[float] = None,
    start_time: Optional[int] = None,
    end_time: Optional[int] = None,
    limit: int = DEFAULT_LIMIT,
    offset: int = 0,
    pagination_key: Optional[str] = None,
) -> Tuple[str, Dict[str, Any]]:
    """
    Endpoint path and query for GET /{venue}/markets.

    List filters become repeated query keys (tags=a&tags=b); empty lists
    are left out.
    """
    params = add_optional(
        {},
        market_slug=list(market_slug) if market_slug else None,
        event_slug=list(event_slug) if event_slug else None,
        condition_id=list(condition_id) if condition_id else None,
        token_id=list(token_id) if token_id else None,
        tags=list(tags) if tags else None,
        search=search,
        status=status,
        min_volume=min_volume,
        start_time=start_time,
        end_time=end_time,
    )
    params["limit"] = limit
    add_pagination(params, offset, pagination_key)
    return venue_path(venue, "markets"), params


def parse_markets_response(data: Any) -> MarketsResponse:
    return decode(MarketsResponse, data, "markets")


def get_markets(
    http,
    venue: str,
    market_slug: Optional[List[str]] = None,
    event_slug: Optional[List[str]] = None,
    condition_id: Optional[List[str]] = None,
    token_id: Optional[List[str]] = None,
    tags: Optional[List[str]] = None,
    search: Optional[str] = None,
    status: Optional[str] = None,
    min_volume: Optional[float] = None,
    start_time: Optional[int] = None,
    end_time: Optional[int] = None,
    limit: int = DEFAULT_LIMIT,
    offset: int = 0,
    pagination_key: Optional[str] = None,
) -> MarketsResponse:
    """
    Search prediction markets.

    Args:
        http: DomeHTTPClient used for the request
        venue: Venue path segment (e.g. 'polymarket')
        market_slug: Filter by market slug(s)
        event_slug: Filter by event slug(s)
        condition_id: Filter by condition ID(s)
        token_id: Filter by token ID(s)
        tags: Filter by tags, e.g. ['politics', 'crypto']
        search: Keywords matched against title/description
        status: Filter by status as understood by the server
        min_volume: Minimum total trading volume in USD
        start_time: Filter markets from Unix timestamp (seconds, inclusive)
        end_time: Filter markets until Unix timestamp (seconds, inclusive)
        limit: Number of markets to return (1-100, default 10)
        offset: Markets to skip (default 0); ignored when pagination_key is given
        pagination_key: Cursor from a previous response

    Returns:
        MarketsResponse with markets and pagination (total in 'total')

    Raises:
        InvalidArgumentError: a list filter is not a list, or limit/offset out of range
    """
    filters = {
        "market_slug": market_slug,
        "event_slug": event_slug,
        "condition_id": condition_id,
        "token_id": token_id,
        "tags": tags,
    }
    for name in LIST_FILTERS:
        validate_list_filter(filters[name], name)
    validate_limit(limit, MAX_MARKETS_LIMIT)
    if not pagination_key:
        validate_offset(offset)
    validate_optional_time_range(start_time, end_time)

    endpoint, params = build_markets_request(
        venue,
        search=search,
        status=status,
        min_volume=min_volume,
        start_time=start_time,
        end_time=end_time,
        limit=limit,
        offset=offset,
        pagination_key=pagination_key,
        **filters,
    )
    return parse_markets_response(http.get(endpoint, params))
