"""
Dome API - Prediction Market Data Client

CAPABILITIES:
- Order history and wallet activity (splits, merges, redeems)
- Market search with tag/slug/condition filters
- Point-in-time prices and candlestick series with trend/volume analytics
- Wallet PnL-to-date series with drawdown, win rate and daily changes
- Live order events over a websocket subscription

USAGE:
  from dome_api import DomeClient

  with DomeClient(api_key="...") as client:
      pnl = client.get_wallet_pnl("0x742d35Cc6634C0532925a3b844Bc9e7595f0bEb0", granularity="day")
      perf = pnl.performance()
      print(f"Win rate {perf.win_rate:.1f}%, max drawdown ${perf.max_drawdown_dollars:,.2f}")

NOTES:
- Read-only data client: no order signing or trading
- Errors are raised, never retried; see dome_api.errors
- Silent by default; call configure_logging() to print request and stream logs
"""
from .analytics import CandlestickSummary, DailyChange, PnLPerformance, PriceTrend
from .client import DomeClient
from .config import Config
from .errors import (
    APIResponseError,
    BadRequestError,
    DomeAPIError,
    HTTPStatusError,
    InvalidArgumentError,
    RateLimitError,
    ResponseDecodeError,
    TransportError,
    UnauthorizedError,
    WebSocketConfigError,
)
from .models import (
    ActivityResponse,
    BidAskData,
    Candlestick,
    CandlestickResponse,
    Market,
    MarketPrice,
    MarketsResponse,
    MarketStatus,
    Order,
    OrderHistoryResponse,
    OrderSide,
    Outcome,
    Pagination,
    PnLData,
    PriceData,
    WalletPnLResponse,
)
from .streaming import ConnectionState, DomeWebSocket
from .utils.logger import configure_logging
from .version import __version__

__all__ = [
    'DomeClient',
    'DomeWebSocket',
    'ConnectionState',
    'Config',
    # Errors
    'DomeAPIError',
    'InvalidArgumentError',
    'APIResponseError',
    'UnauthorizedError',
    'RateLimitError',
    'BadRequestError',
    'HTTPStatusError',
    'ResponseDecodeError',
    'TransportError',
    'WebSocketConfigError',
    # Entities
    'Order',
    'OrderSide',
    'Market',
    'MarketStatus',
    'Outcome',
    'MarketPrice',
    'Candlestick',
    'PriceData',
    'BidAskData',
    'PnLData',
    'Pagination',
    # Responses
    'OrderHistoryResponse',
    'ActivityResponse',
    'MarketsResponse',
    'CandlestickResponse',
    'WalletPnLResponse',
    # Analytics
    'PnLPerformance',
    'DailyChange',
    'CandlestickSummary',
    'PriceTrend',
    'configure_logging',
    '__version__',
]
