"""
Polymarket Wallet - Activity and P&L Tracking

On-chain activity (splits, merges, redeems) and the realized PnL-to-date
series for one wallet.
"""
from typing import Any, Dict, Optional, Tuple

from ..models import ActivityResponse, WalletPnLResponse, decode
from ..validation import (
    MAX_ORDERS_LIMIT,
    validate_granularity,
    validate_limit,
    validate_offset,
    validate_optional_time_range,
    validate_wallet_address,
)
from ._common import add_optional, add_pagination, venue_path

DEFAULT_LIMIT = 100


def build_activity_request(
    venue: str,
    user: str,
    start_time: Optional[int] = None,
    end_time: Optional[int] = None,
    market_slug: Optional[str] = None,
    condition_id: Optional[str] = None,
    limit: int = DEFAULT_LIMIT,
    offset: int = 0,
    pagination_key: Optional[str] = None,
) -> Tuple[str, Dict[str, Any]]:
    """Endpoint path and query for GET /{venue}/activity"""
    params: Dict[str, Any] = {"user": user}
    add_optional(
        params,
        start_time=start_time,
        end_time=end_time,
        market_slug=market_slug,
        condition_id=condition_id,
    )
    params["limit"] = limit
    add_pagination(params, offset, pagination_key)
    return venue_path(venue, "activity"), params


def parse_activity_response(data: Any) -> ActivityResponse:
    return decode(ActivityResponse, data, "activity")


def get_activity(
    http,
    venue: str,
    user: str,
    start_time: Optional[int] = None,
    end_time: Optional[int] = None,
    market_slug: Optional[str] = None,
    condition_id: Optional[str] = None,
    limit: int = DEFAULT_LIMIT,
    offset: int = 0,
    pagination_key: Optional[str] = None,
) -> ActivityResponse:
    """
    Get on-chain activity (SPLITS, MERGES, REDEEMS) for a wallet.

    Args:
        http: DomeHTTPClient used for the request
        venue: Venue path segment (e.g. 'polymarket')
        user: Wallet address (0x + 40 hex characters)
        start_time: Unix timestamp (seconds) filter from (inclusive)
        end_time: Unix timestamp (seconds) filter until (inclusive)
        market_slug: Filter by market slug
        condition_id: Filter by condition ID
        limit: Number of activities to return (1-1000, default 100)
        offset: Activities to skip (default 0); ignored when pagination_key is given
        pagination_key: Cursor from a previous response

    Returns:
        ActivityResponse with activities and pagination (total in 'count')
    """
    validate_wallet_address(user, "user")
    validate_limit(limit, MAX_ORDERS_LIMIT)
    if not pagination_key:
        validate_offset(offset)
    validate_optional_time_range(start_time, end_time)

    endpoint, params = build_activity_request(
        venue,
        user,
        start_time=start_time,
        end_time=end_time,
        market_slug=market_slug,
        condition_id=condition_id,
        limit=limit,
        offset=offset,
        pagination_key=pagination_key,
    )
    return parse_activity_response(http.get(endpoint, params))


def build_wallet_pnl_request(
    venue: str,
    wallet_address: str,
    granularity: str,
    start_time: Optional[int] = None,
    end_time: Optional[int] = None,
) -> Tuple[str, Dict[str, Any]]:
    """Endpoint path and query for GET /{venue}/wallet/pnl/{wallet_address}"""
    params = add_optional({"granularity": granularity}, start_time=start_time, end_time=end_time)
    return venue_path(venue, "wallet", "pnl", wallet_address), params


def parse_wallet_pnl_response(data: Any) -> WalletPnLResponse:
    return decode(WalletPnLResponse, data, "wallet PnL")


def get_wallet_pnl(
    http,
    venue: str,
    wallet_address: str,
    granularity: str,
    start_time: Optional[int] = None,
    end_time: Optional[int] = None,
) -> WalletPnLResponse:
    """
    Get the realized PnL-to-date series for a wallet.

    Args:
        http: DomeHTTPClient used for the request
        venue: Venue path segment (e.g. 'polymarket')
        wallet_address: Wallet address (0x + 40 hex characters)
        granularity: 'day', 'week', 'month', 'year' or 'all'
        start_time: Unix timestamp (seconds) for start (defaults to first trade)
        end_time: Unix timestamp (seconds) for end (defaults to now)

    Returns:
        WalletPnLResponse; analytics such as max_drawdown() and win_rate()
        are methods on the response
    """
    validate_wallet_address(wallet_address)
    validate_granularity(granularity)
    validate_optional_time_range(start_time, end_time)

    endpoint, params = build_wallet_pnl_request(
        venue, wallet_address, granularity, start_time=start_time, end_time=end_time
    )
    return parse_wallet_pnl_response(http.get(endpoint, params))
