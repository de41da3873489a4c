"""
Polymarket endpoints via Dome API

Each endpoint is split into build_*_request (path + query), parse_*_response
(JSON -> models) and get_* (validate -> build -> GET -> parse):
- trading: executed order history
- wallet: on-chain activity and PnL-to-date series
- markets: market search
- prices: point-in-time price and candlesticks

Most callers want dome_api.DomeClient, which binds these to one HTTP client.
"""
from .markets import get_markets
from .prices import get_candlesticks, get_market_price
from .trading import get_order_history
from .wallet import get_activity, get_wallet_pnl

__all__ = [
    'get_order_history',
    'get_activity',
    'get_markets',
    'get_market_price',
    'get_candlesticks',
    'get_wallet_pnl',
]
