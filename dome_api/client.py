"""
Dome API client

Public entry point: every call validates its arguments, builds one GET,
executes it and decodes the body into the models in dome_api.models.
"""
from typing import List, Optional

import httpx

from ._client import DomeHTTPClient
from .config import Config
from .models import (
    ActivityResponse,
    CandlestickResponse,
    MarketPrice,
    MarketsResponse,
    OrderHistoryResponse,
    WalletPnLResponse,
)
from .polymarket import markets, prices, trading, wallet
from .streaming import DomeWebSocket
from .utils.logger import get_logger

logger = get_logger(__name__)


class DomeClient:
    """
    Dome API client for one venue (Polymarket by default).

    Usage:
        with DomeClient(api_key="...") as client:
            orders = client.get_order_history(market_slug="bitcoin-above-100000", limit=50)
            for order in orders.orders:
                print(f"{order.side} {order.shares_normalized} @ {order.price}")

    Calls are independent and hold no state between them, so one client can
    be shared across threads.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        venue: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Args:
            api_key: Dome API key (falls back to Config.DOME_API_KEY); sent as a
                     bearer token, omitted entirely when absent
            base_url: Override for Config.BASE_URL
            venue: Venue path segment, defaults to Config.VENUE ('polymarket')
            timeout: Transport timeout in seconds (Config.REQUEST_TIMEOUT)
            transport: Custom httpx transport
        """
        self._api_key = Config.get_api_key(api_key)
        self.venue = venue or Config.VENUE
        self._http = DomeHTTPClient(
            api_key=self._api_key,
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )
        if not self._http.api_key:
            logger.debug("No Dome API key configured; requests are sent without Authorization")

    def close(self):
        """Close the underlying HTTP connection pool"""
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    # ─────────────────────────────────────────────────────────────────────────
    # Orders & Activity
    # ─────────────────────────────────────────────────────────────────────────

    def get_order_history(
        self,
        market_slug: Optional[str] = None,
        condition_id: Optional[str] = None,
        token_id: Optional[str] = None,
        start_time: Optional[int] = None,
        end_time: Optional[int] = None,
        user: Optional[str] = None,
        limit: int = trading.DEFAULT_LIMIT,
        offset: int = 0,
        pagination_key: Optional[str] = None,
    ) -> OrderHistoryResponse:
        """Executed orders; see dome_api.polymarket.trading.get_order_history"""
        return trading.get_order_history(
            self._http,
            self.venue,
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

    def get_activity(
        self,
        user: str,
        start_time: Optional[int] = None,
        end_time: Optional[int] = None,
        market_slug: Optional[str] = None,
        condition_id: Optional[str] = None,
        limit: int = wallet.DEFAULT_LIMIT,
        offset: int = 0,
        pagination_key: Optional[str] = None,
    ) -> ActivityResponse:
        """Wallet activity; see dome_api.polymarket.wallet.get_activity"""
        return wallet.get_activity(
            self._http,
            self.venue,
            user,
            start_time=start_time,
            end_time=end_time,
            market_slug=market_slug,
            condition_id=condition_id,
            limit=limit,
            offset=offset,
            pagination_key=pagination_key,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Markets & Prices
    # ─────────────────────────────────────────────────────────────────────────

    def get_markets(
        self,
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
        limit: int = markets.DEFAULT_LIMIT,
        offset: int = 0,
        pagination_key: Optional[str] = None,
    ) -> MarketsResponse:
        """Market search; see dome_api.polymarket.markets.get_markets"""
        return markets.get_markets(
            self._http,
            self.venue,
            market_slug=market_slug,
            event_slug=event_slug,
            condition_id=condition_id,
            token_id=token_id,
            tags=tags,
            search=search,
            status=status,
            min_volume=min_volume,
            start_time=start_time,
            end_time=end_time,
            limit=limit,
            offset=offset,
            pagination_key=pagination_key,
        )

    def get_market_price(self, token_id: str, at_time: Optional[int] = None) -> MarketPrice:
        """Token price; see dome_api.polymarket.prices.get_market_price"""
        return prices.get_market_price(self._http, self.venue, token_id, at_time=at_time)

    def get_candlesticks(
        self,
        condition_id: str,
        start_time: int,
        end_time: int,
        interval: int = prices.DEFAULT_INTERVAL,
    ) -> CandlestickResponse:
        """Candlesticks; see dome_api.polymarket.prices.get_candlesticks"""
        return prices.get_candlesticks(
            self._http,
            self.venue,
            condition_id,
            start_time=start_time,
            end_time=end_time,
            interval=interval,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Wallet PnL
    # ─────────────────────────────────────────────────────────────────────────

    def get_wallet_pnl(
        self,
        wallet_address: str,
        granularity: str,
        start_time: Optional[int] = None,
        end_time: Optional[int] = None,
    ) -> WalletPnLResponse:
        """PnL-to-date series; see dome_api.polymarket.wallet.get_wallet_pnl"""
        return wallet.get_wallet_pnl(
            self._http,
            self.venue,
            wallet_address,
            granularity=granularity,
            start_time=start_time,
            end_time=end_time,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Streaming
    # ─────────────────────────────────────────────────────────────────────────

    def websocket(self, url: Optional[str] = None) -> DomeWebSocket:
        """New streaming client bound to this client's API key"""
        return DomeWebSocket(api_key=self._api_key, url=url)
