"""
Pydantic models for Dome API responses (Polymarket venue).

Every entity is frozen once decoded and every sequence is a tuple, so a
response object can be shared freely between threads. Unknown fields sent
by the server are ignored; missing required fields fail decoding.

Example usage:
    from dome_api import DomeClient

    with DomeClient(api_key="...") as client:
        pnl = client.get_wallet_pnl("0x742d...", granularity="day")
        print(f"Current PnL: ${pnl.current_pnl_dollars():,.2f}")
        print(f"Max drawdown: {pnl.max_drawdown_percent():.1f}%")
"""
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from . import analytics
from .analytics import CandlestickSummary, DailyChange, PnLPerformance, PriceTrend
from .errors import ResponseDecodeError
from .utils.timeutils import format_datetime, to_datetime

CURRENT_PRICE_WINDOW_SECONDS = 300


class DomeModel(BaseModel):
    """Base for every decoded entity"""
    model_config = ConfigDict(frozen=True, extra="ignore")


def _none_to_empty(value: Any) -> Any:
    return () if value is None else value


class OrderSide(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    REDEEM = "REDEEM"
    MERGE = "MERGE"
    SPLIT = "SPLIT"


class MarketStatus(str, Enum):
    ACTIVE = "ACTIVE"
    CLOSED = "CLOSED"
    RESOLVED = "RESOLVED"


# ============================================================================
# ORDERS / ACTIVITY
# ============================================================================

class Order(DomeModel):
    """Single order or on-chain activity record"""
    token_id: Optional[str] = Field(default=None, description="Token ID")
    token_label: Optional[str] = Field(default=None, description="'Yes' or 'No'")
    side: Optional[str] = Field(default=None, description="BUY, SELL, REDEEM, MERGE or SPLIT")
    market_slug: Optional[str] = Field(default=None, description="Market identifier")
    condition_id: Optional[str] = Field(default=None, description="Condition ID")
    shares: Optional[int] = Field(default=None, description="Raw shares (upstream fixed-point units)")
    shares_normalized: Optional[float] = Field(default=None, description="Shares after upstream scaling")
    price: Optional[float] = Field(default=None, description="Execution price (0-1)")
    block_number: Optional[int] = Field(default=None, description="Blockchain block number")
    tx_hash: Optional[str] = Field(default=None, description="Transaction hash")
    title: Optional[str] = Field(default=None, description="Market title")
    timestamp: Optional[int] = Field(default=None, description="Unix timestamp (seconds)")
    order_hash: Optional[str] = Field(default=None, description="Order identifier")
    user: Optional[str] = Field(default=None, description="Maker wallet address")
    taker: Optional[str] = Field(default=None, description="Taker wallet address")

    @property
    def is_buy(self) -> bool:
        return self.side == OrderSide.BUY

    @property
    def is_sell(self) -> bool:
        return self.side == OrderSide.SELL

    @property
    def is_redeem(self) -> bool:
        return self.side == OrderSide.REDEEM

    @property
    def is_merge(self) -> bool:
        return self.side == OrderSide.MERGE

    @property
    def time(self) -> Optional[datetime]:
        return to_datetime(self.timestamp)

    def formatted_time(self, fmt: str = "readable") -> Optional[str]:
        return format_datetime(self.time, fmt)


# ============================================================================
# MARKETS
# ============================================================================

class Outcome(DomeModel):
    """One tradable outcome of a market"""
    outcome: Optional[str] = Field(default=None, description="Outcome label, e.g. 'Yes' or 'No'")
    token_id: Optional[str] = Field(default=None, description="Token ID for this outcome")

    @property
    def is_yes(self) -> bool:
        return self.outcome == "Yes"

    @property
    def is_no(self) -> bool:
        return self.outcome == "No"


class Market(DomeModel):
    """Single prediction market"""
    market_slug: Optional[str] = Field(default=None, description="Market identifier (URL-safe)")
    condition_id: Optional[str] = Field(default=None, description="Market condition ID (0x...)")
    title: Optional[str] = Field(default=None, description="Market question")
    description: Optional[str] = Field(default=None, description="Full description")
    outcomes: Tuple[Outcome, ...] = Field(default=(), description="Tradable outcomes")
    start_time: Optional[int] = Field(default=None, description="Unix timestamp")
    end_time: Optional[int] = Field(default=None, description="Unix timestamp")
    volume: Optional[float] = Field(default=None, description="Trading volume (USD)")
    liquidity: Optional[float] = Field(default=None, description="Liquidity (USD)")
    tags: Tuple[str, ...] = Field(default=(), description="Market tags")
    status: Optional[str] = Field(default=None, description="ACTIVE, CLOSED or RESOLVED")

    @field_validator("outcomes", "tags", mode="before")
    @classmethod
    def null_sequences_to_empty(cls, value: Any) -> Any:
        return _none_to_empty(value)

    @field_validator("outcomes")
    @classmethod
    def single_yes_and_no(cls, outcomes: Tuple[Outcome, ...]) -> Tuple[Outcome, ...]:
        if sum(1 for o in outcomes if o.is_yes) > 1:
            raise ValueError("market has more than one 'Yes' outcome")
        if sum(1 for o in outcomes if o.is_no) > 1:
            raise ValueError("market has more than one 'No' outcome")
        return outcomes

    @property
    def is_active(self) -> bool:
        return self.status == MarketStatus.ACTIVE

    @property
    def is_closed(self) -> bool:
        return self.status == MarketStatus.CLOSED

    @property
    def is_resolved(self) -> bool:
        return self.status == MarketStatus.RESOLVED

    @property
    def yes_outcome(self) -> Optional[Outcome]:
        return next((o for o in self.outcomes if o.is_yes), None)

    @property
    def no_outcome(self) -> Optional[Outcome]:
        return next((o for o in self.outcomes if o.is_no), None)

    @property
    def yes_token_id(self) -> Optional[str]:
        return self.yes_outcome.token_id if self.yes_outcome else None

    @property
    def no_token_id(self) -> Optional[str]:
        return self.no_outcome.token_id if self.no_outcome else None

    @property
    def start_date(self) -> Optional[datetime]:
        return to_datetime(self.start_time)

    @property
    def end_date(self) -> Optional[datetime]:
        return to_datetime(self.end_time)

    def formatted_start_date(self, fmt: str = "readable") -> Optional[str]:
        return format_datetime(self.start_date, fmt)

    def formatted_end_date(self, fmt: str = "readable") -> Optional[str]:
        return format_datetime(self.end_date, fmt)

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    @property
    def is_crypto_market(self) -> bool:
        return self.has_tag("crypto") or self.has_tag("bitcoin")

    @property
    def is_politics_market(self) -> bool:
        return self.has_tag("politics") or self.has_tag("election")


# ============================================================================
# PRICES
# ============================================================================

class MarketPrice(DomeModel):
    """Price of one token at a point in time"""
    price: Optional[float] = Field(default=None, description="Price between 0 and 1")
    at_time: Optional[int] = Field(default=None, description="Unix timestamp of the price")

    def is_current(self, now: Optional[float] = None) -> bool:
        """
        True when the price is at most five minutes old.
        A price without at_time is never current.
        """
        if self.at_time is None:
            return False
        if now is None:
            now = datetime.now().timestamp()
        return now - self.at_time <= CURRENT_PRICE_WINDOW_SECONDS

    def is_historical(self, now: Optional[float] = None) -> bool:
        return not self.is_current(now)

    @property
    def timestamp(self) -> Optional[datetime]:
        return to_datetime(self.at_time)

    def formatted_time(self, fmt: str = "readable") -> Optional[str]:
        return format_datetime(self.timestamp, fmt)


class PriceData(DomeModel):
    """OHLC price block of a candlestick"""
    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    close: Optional[float] = None
    mean: Optional[float] = None
    previous: Optional[float] = None
    open_dollars: Optional[str] = None
    high_dollars: Optional[str] = None
    low_dollars: Optional[str] = None
    close_dollars: Optional[str] = None
    mean_dollars: Optional[str] = None
    previous_dollars: Optional[str] = None


class BidAskData(DomeModel):
    """Yes-side bid or ask block of a candlestick"""
    open: Optional[float] = None
    close: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    open_dollars: Optional[str] = None
    close_dollars: Optional[str] = None
    high_dollars: Optional[str] = None
    low_dollars: Optional[str] = None

    @property
    def spread(self) -> float:
        if self.open is None or self.close is None:
            return 0.0
        return self.open - self.close


class Candlestick(DomeModel):
    """Single candlestick period for one token"""
    end_period_ts: int = Field(description="Unix timestamp of the end of the period")
    open_interest: Optional[float] = Field(default=None, description="Open interest")
    volume: Optional[float] = Field(default=None, description="Trading volume")
    price: Optional[PriceData] = Field(default=None, description="OHLC prices")
    yes_ask: Optional[BidAskData] = Field(default=None, description="Yes-side ask prices")
    yes_bid: Optional[BidAskData] = Field(default=None, description="Yes-side bid prices")

    @property
    def end_time(self) -> datetime:
        return to_datetime(self.end_period_ts)

    def formatted_end_time(self, fmt: str = "readable") -> str:
        return format_datetime(self.end_time, fmt)

    @property
    def price_range(self) -> float:
        if self.price is None or self.price.high is None or self.price.low is None:
            return 0.0
        return self.price.high - self.price.low

    @property
    def price_change(self) -> float:
        if self.price is None or self.price.open is None or self.price.close is None:
            return 0.0
        return self.price.close - self.price.open

    @property
    def price_change_percent(self) -> float:
        if self.price is None or not self.price.open:
            return 0.0
        return self.price_change / self.price.open * 100


# ============================================================================
# WALLET PNL
# ============================================================================

class PnLData(DomeModel):
    """Cumulative PnL-to-date at the end of one period"""
    timestamp: int = Field(description="Unix timestamp (seconds)")
    pnl_to_date: int = Field(description="Cumulative PnL in cents")

    @property
    def time(self) -> datetime:
        return to_datetime(self.timestamp)

    def formatted_time(self, fmt: str = "readable") -> str:
        return format_datetime(self.time, fmt)

    @property
    def pnl_dollars(self) -> float:
        return self.pnl_to_date / 100.0

    @property
    def is_profit(self) -> bool:
        return self.pnl_to_date > 0

    @property
    def is_loss(self) -> bool:
        return self.pnl_to_date < 0

    @property
    def is_break_even(self) -> bool:
        return self.pnl_to_date == 0


# ============================================================================
# RESPONSES
# ============================================================================

class Pagination(DomeModel):
    """
    Pagination envelope.

    The orders and markets endpoints report their grand total as 'total',
    the activity endpoint as 'count'. Both are kept as sent.
    """
    limit: Optional[int] = Field(default=None, description="Max items per page")
    offset: Optional[int] = Field(default=None, description="Items skipped; None for cursor pages")
    total: Optional[int] = Field(default=None, description="Total matching items (orders, markets)")
    count: Optional[int] = Field(default=None, description="Total matching items (activity)")
    has_more: bool = Field(default=False, description="Whether more results exist")
    pagination_key: Optional[str] = Field(default=None, description="Cursor for the next page")

    @field_validator("has_more", mode="before")
    @classmethod
    def null_has_more_to_false(cls, value: Any) -> Any:
        return False if value is None else value


class _SequenceResponse(DomeModel):
    """Accessors shared by every response wrapping an ordered sequence"""

    # Name of the field holding the wrapped sequence
    records_field: ClassVar[str] = ""

    @property
    def records(self) -> Tuple[Any, ...]:
        return getattr(self, self.records_field, ())

    @property
    def size(self) -> int:
        return len(self.records)

    @property
    def is_empty(self) -> bool:
        return not self.records

    @property
    def first(self) -> Optional[Any]:
        return self.records[0] if self.records else None

    @property
    def last(self) -> Optional[Any]:
        return self.records[-1] if self.records else None


class _PaginatedResponse(_SequenceResponse):
    pagination: Pagination = Field(default_factory=Pagination, description="Pagination info")

    @field_validator("pagination", mode="before")
    @classmethod
    def null_pagination_to_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def limit(self) -> int:
        return self.pagination.limit or 0

    @property
    def offset(self) -> int:
        return self.pagination.offset or 0

    @property
    def has_more(self) -> bool:
        return self.pagination.has_more

    @property
    def pagination_key(self) -> Optional[str]:
        return self.pagination.pagination_key


class OrderHistoryResponse(_PaginatedResponse):
    records_field: ClassVar[str] = "orders"
    orders: Tuple[Order, ...] = Field(default=(), description="Orders in server order")

    @field_validator("orders", mode="before")
    @classmethod
    def null_orders_to_empty(cls, value: Any) -> Any:
        return _none_to_empty(value)

    @property
    def total_orders(self) -> int:
        return self.pagination.total or 0


class ActivityResponse(_PaginatedResponse):
    records_field: ClassVar[str] = "activities"
    activities: Tuple[Order, ...] = Field(default=(), description="Activity records in server order")

    @field_validator("activities", mode="before")
    @classmethod
    def null_activities_to_empty(cls, value: Any) -> Any:
        return _none_to_empty(value)

    @property
    def total_activities(self) -> int:
        return self.pagination.count or 0


class MarketsResponse(_PaginatedResponse):
    records_field: ClassVar[str] = "markets"
    markets: Tuple[Market, ...] = Field(default=(), description="Markets in server order")

    @field_validator("markets", mode="before")
    @classmethod
    def null_markets_to_empty(cls, value: Any) -> Any:
        return _none_to_empty(value)

    @property
    def total_markets(self) -> int:
        return self.pagination.total or 0

    def total_volume(self) -> float:
        return sum(m.volume or 0 for m in self.markets)

    def average_volume(self) -> float:
        if not self.markets:
            return 0.0
        return self.total_volume() / len(self.markets)

    def top_by_volume(self, n: int = 10) -> List[Market]:
        """Highest-volume markets first; ties keep server order"""
        ranked = sorted(self.markets, key=lambda m: m.volume or 0, reverse=True)
        return ranked[:n]

    def with_tag(self, tag: str) -> List[Market]:
        return [m for m in self.markets if m.has_tag(tag)]


class CandlestickResponse(_SequenceResponse):
    """
    Candlesticks for one token, flattened from the wire's
    [candlestick_array, token_metadata] tuples.
    """
    records_field: ClassVar[str] = "candlesticks"
    candlesticks: Tuple[Candlestick, ...] = Field(default=(), description="Candlesticks in server order")
    token_id: Optional[str] = Field(default=None, description="Token the candlesticks belong to")

    @property
    def price_data(self) -> List[Optional[PriceData]]:
        return [c.price for c in self.candlesticks]

    @property
    def volume_data(self) -> List[Optional[float]]:
        return [c.volume for c in self.candlesticks]

    @property
    def open_interest_data(self) -> List[Optional[float]]:
        return [c.open_interest for c in self.candlesticks]

    def total_volume(self) -> float:
        return analytics.total_volume(self.candlesticks)

    def average_volume(self) -> float:
        return analytics.average_volume(self.candlesticks)

    def price_range(self) -> float:
        return analytics.price_range(self.candlesticks)

    def price_trend(self) -> PriceTrend:
        return analytics.price_trend(self.candlesticks)

    def time_series(self) -> List[Tuple[datetime, float]]:
        return analytics.time_series(self.candlesticks)

    def summary(self) -> CandlestickSummary:
        return analytics.candlestick_summary(self.candlesticks)


class WalletPnLResponse(_SequenceResponse):
    """PnL-to-date series for one wallet, ascending by timestamp"""
    records_field: ClassVar[str] = "pnl_over_time"
    granularity: Optional[str] = Field(default=None, description="day, week, month, year or all")
    start_time: Optional[int] = Field(default=None, description="Start timestamp")
    end_time: Optional[int] = Field(default=None, description="End timestamp")
    wallet_address: Optional[str] = Field(default=None, description="Wallet address")
    pnl_over_time: Tuple[PnLData, ...] = Field(default=(), description="PnL history")

    @field_validator("pnl_over_time", mode="before")
    @classmethod
    def null_points_to_empty(cls, value: Any) -> Any:
        return _none_to_empty(value)

    @property
    def start_date(self) -> Optional[datetime]:
        return to_datetime(self.start_time)

    @property
    def end_date(self) -> Optional[datetime]:
        return to_datetime(self.end_time)

    def formatted_start_date(self, fmt: str = "date_only") -> Optional[str]:
        return format_datetime(self.start_date, fmt)

    def formatted_end_date(self, fmt: str = "date_only") -> Optional[str]:
        return format_datetime(self.end_date, fmt)

    def pnl_series(self) -> List[Tuple[datetime, int]]:
        return [(p.time, p.pnl_to_date) for p in self.pnl_over_time]

    def current_pnl(self) -> Optional[int]:
        return analytics.current_pnl(self.pnl_over_time)

    def current_pnl_dollars(self) -> Optional[float]:
        return analytics.cents_to_dollars(self.current_pnl())

    def total_pnl(self) -> int:
        return analytics.total_pnl(self.pnl_over_time)

    def total_pnl_dollars(self) -> float:
        return self.total_pnl() / 100.0

    def peak_pnl(self) -> int:
        return analytics.peak_pnl(self.pnl_over_time)

    def peak_pnl_dollars(self) -> float:
        return self.peak_pnl() / 100.0

    def trough_pnl(self) -> int:
        return analytics.trough_pnl(self.pnl_over_time)

    def trough_pnl_dollars(self) -> float:
        return self.trough_pnl() / 100.0

    def max_drawdown(self) -> int:
        return analytics.max_drawdown(self.pnl_over_time)

    def max_drawdown_dollars(self) -> float:
        return self.max_drawdown() / 100.0

    def max_drawdown_percent(self) -> float:
        return analytics.max_drawdown_percent(self.pnl_over_time)

    def profit_days(self) -> int:
        return analytics.profit_days(self.pnl_over_time)

    def loss_days(self) -> int:
        return analytics.loss_days(self.pnl_over_time)

    def break_even_days(self) -> int:
        return analytics.break_even_days(self.pnl_over_time)

    def win_rate(self) -> float:
        return analytics.win_rate(self.pnl_over_time)

    def daily_changes(self) -> List[DailyChange]:
        return analytics.daily_changes(self.pnl_over_time)

    def best_day(self) -> Optional[DailyChange]:
        return analytics.best_day(self.pnl_over_time)

    def worst_day(self) -> Optional[DailyChange]:
        return analytics.worst_day(self.pnl_over_time)

    def average_daily_pnl(self) -> float:
        return analytics.average_daily_pnl(self.pnl_over_time)

    def average_daily_pnl_dollars(self) -> float:
        return self.average_daily_pnl() / 100.0

    def performance(self) -> PnLPerformance:
        return analytics.pnl_performance(self.pnl_over_time)


# ============================================================================
# DECODING
# ============================================================================

M = TypeVar("M", bound=BaseModel)


def decode(model: Type[M], payload: Any, context: str) -> M:
    """
    Build a model from a decoded JSON payload.

    Raises:
        ResponseDecodeError: payload is not an object or does not fit the model
    """
    if not isinstance(payload, dict):
        raise ResponseDecodeError(
            f"Expected a JSON object for {context}, got {type(payload).__name__}"
        )
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise ResponseDecodeError(f"Unexpected {context} payload: {e}") from e
