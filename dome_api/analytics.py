"""
Derived analytics over Dome API time series

Two engines, both pure functions over already-decoded entities:

- PnL performance: drawdown, win rate and daily changes over a wallet's
  cumulative PnL-to-date series (integer cents).
- Candlestick analytics: volume, price range, trend and close-price series
  for one token's candlesticks.

Monetary values are kept in integer cents; every *_dollars value is derived
from the cents value at read time so comparisons never see float drift.

Usage:
    from dome_api.analytics import pnl_performance, price_trend

    perf = pnl_performance(response.pnl_over_time)
    print(f"Win rate: {perf.win_rate:.1f}%  drawdown: {perf.max_drawdown_percent:.1f}%")
"""
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .utils.timeutils import to_datetime

if TYPE_CHECKING:
    from .models import Candlestick, PnLData


def cents_to_dollars(cents: Optional[float]) -> Optional[float]:
    if cents is None:
        return None
    return cents / 100.0


# ============================================================================
# PNL PERFORMANCE ENGINE
# ============================================================================

class DailyChange(BaseModel):
    """Change in cumulative PnL between two consecutive points"""
    model_config = ConfigDict(frozen=True)

    timestamp: int = Field(description="Timestamp of the later of the two points")
    change: int = Field(description="pnl_to_date delta in cents")

    @computed_field
    @property
    def change_dollars(self) -> float:
        return self.change / 100.0

    @property
    def date(self) -> datetime:
        return to_datetime(self.timestamp)


class PnLPerformance(BaseModel):
    """Summary of every PnL metric for one series"""
    model_config = ConfigDict(frozen=True)

    points: int = Field(description="Number of PnL points in the series")
    current_pnl: Optional[int] = Field(default=None, description="Last pnl_to_date; None for an empty series")
    total_pnl: int = Field(default=0, description="Last pnl_to_date; 0 for an empty series")
    peak_pnl: int = 0
    trough_pnl: int = 0
    max_drawdown: int = 0
    max_drawdown_percent: float = 0.0
    profit_days: int = 0
    loss_days: int = 0
    break_even_days: int = 0
    win_rate: float = 0.0
    best_day: Optional[DailyChange] = None
    worst_day: Optional[DailyChange] = None
    average_daily_pnl: float = 0.0

    @computed_field
    @property
    def current_pnl_dollars(self) -> Optional[float]:
        return cents_to_dollars(self.current_pnl)

    @computed_field
    @property
    def total_pnl_dollars(self) -> float:
        return self.total_pnl / 100.0

    @computed_field
    @property
    def peak_pnl_dollars(self) -> float:
        return self.peak_pnl / 100.0

    @computed_field
    @property
    def trough_pnl_dollars(self) -> float:
        return self.trough_pnl / 100.0

    @computed_field
    @property
    def max_drawdown_dollars(self) -> float:
        return self.max_drawdown / 100.0

    @computed_field
    @property
    def average_daily_pnl_dollars(self) -> float:
        return self.average_daily_pnl / 100.0


def _pnl_values(points: Iterable["PnLData"]) -> List[int]:
    return [point.pnl_to_date for point in points]


def peak_pnl(points: Iterable["PnLData"]) -> int:
    values = _pnl_values(points)
    return max(values) if values else 0


def trough_pnl(points: Iterable["PnLData"]) -> int:
    values = _pnl_values(points)
    return min(values) if values else 0


def current_pnl(points: Iterable["PnLData"]) -> Optional[int]:
    """Last cumulative value, or None when there are no points"""
    values = _pnl_values(points)
    return values[-1] if values else None


def total_pnl(points: Iterable["PnLData"]) -> int:
    """Last cumulative value, or 0 when there are no points"""
    values = _pnl_values(points)
    return values[-1] if values else 0


def max_drawdown(points: Iterable["PnLData"]) -> int:
    """
    |peak - trough| over the whole series.

    A series whose peak never rises above zero has no drawdown, whatever
    the trough is.
    """
    values = _pnl_values(points)
    if not values:
        return 0

    peak = max(values)
    if peak <= 0:
        return 0
    return abs(peak - min(values))


def max_drawdown_percent(points: Iterable["PnLData"]) -> float:
    points = list(points)
    peak = peak_pnl(points)
    if peak <= 0:
        return 0.0
    return max_drawdown(points) / peak * 100


def daily_changes(points: Iterable["PnLData"]) -> List[DailyChange]:
    """First differences of the series; n points give n-1 changes"""
    points = list(points)
    return [
        DailyChange(
            timestamp=later.timestamp,
            change=later.pnl_to_date - earlier.pnl_to_date,
        )
        for earlier, later in zip(points, points[1:])
    ]


# Day classification looks at the cumulative value of each point, not at
# that period's change.
def profit_days(points: Iterable["PnLData"]) -> int:
    return sum(1 for value in _pnl_values(points) if value > 0)


def loss_days(points: Iterable["PnLData"]) -> int:
    return sum(1 for value in _pnl_values(points) if value < 0)


def break_even_days(points: Iterable["PnLData"]) -> int:
    return sum(1 for value in _pnl_values(points) if value == 0)


def win_rate(points: Iterable["PnLData"]) -> float:
    points = list(points)
    if not points:
        return 0.0
    return profit_days(points) / len(points) * 100


def best_day(points: Iterable["PnLData"]) -> Optional[DailyChange]:
    changes = daily_changes(points)
    if not changes:
        return None
    return max(changes, key=lambda c: c.change)


def worst_day(points: Iterable["PnLData"]) -> Optional[DailyChange]:
    changes = daily_changes(points)
    if not changes:
        return None
    return min(changes, key=lambda c: c.change)


def average_daily_pnl(points: Iterable["PnLData"]) -> float:
    changes = daily_changes(points)
    if not changes:
        return 0.0
    return sum(c.change for c in changes) / len(changes)


def pnl_performance(points: Iterable["PnLData"]) -> PnLPerformance:
    """Compute every PnL metric in one pass over a materialized series"""
    points = list(points)
    changes = daily_changes(points)

    return PnLPerformance(
        points=len(points),
        current_pnl=current_pnl(points),
        total_pnl=total_pnl(points),
        peak_pnl=peak_pnl(points),
        trough_pnl=trough_pnl(points),
        max_drawdown=max_drawdown(points),
        max_drawdown_percent=max_drawdown_percent(points),
        profit_days=profit_days(points),
        loss_days=loss_days(points),
        break_even_days=break_even_days(points),
        win_rate=win_rate(points),
        best_day=max(changes, key=lambda c: c.change) if changes else None,
        worst_day=min(changes, key=lambda c: c.change) if changes else None,
        average_daily_pnl=sum(c.change for c in changes) / len(changes) if changes else 0.0,
    )


# ============================================================================
# CANDLESTICK ANALYTICS ENGINE
# ============================================================================

class PriceTrend(str, Enum):
    """Direction of the close price from the first to the last candlestick"""
    UP = "up"
    DOWN = "down"
    FLAT = "flat"
    UNKNOWN = "unknown"


class CandlestickSummary(BaseModel):
    """Series-level candlestick metrics"""
    model_config = ConfigDict(frozen=True)

    count: int
    total_volume: float = 0.0
    average_volume: float = 0.0
    price_range: float = 0.0
    price_trend: PriceTrend = PriceTrend.UNKNOWN
    first_close: Optional[float] = None
    last_close: Optional[float] = None


def _close(candle: "Candlestick") -> Optional[float]:
    return candle.price.close if candle.price is not None else None


def total_volume(candles: Iterable["Candlestick"]) -> float:
    return sum(c.volume or 0 for c in candles)


def average_volume(candles: Iterable["Candlestick"]) -> float:
    candles = list(candles)
    if not candles:
        return 0.0
    return total_volume(candles) / len(candles)


def price_range(candles: Iterable["Candlestick"]) -> float:
    """
    max(high) - min(low) across candlesticks that carry a price block.
    Candlesticks without one are skipped rather than read as zero.
    """
    highs = []
    lows = []
    for candle in candles:
        if candle.price is None:
            continue
        if candle.price.high is not None:
            highs.append(candle.price.high)
        if candle.price.low is not None:
            lows.append(candle.price.low)

    if not highs or not lows:
        return 0.0
    return max(highs) - min(lows)


def price_trend(candles: Iterable["Candlestick"]) -> PriceTrend:
    candles = list(candles)
    if len(candles) < 2:
        return PriceTrend.UNKNOWN

    first_price = _close(candles[0])
    last_price = _close(candles[-1])
    if first_price is None or last_price is None:
        return PriceTrend.UNKNOWN

    if last_price > first_price:
        return PriceTrend.UP
    if last_price < first_price:
        return PriceTrend.DOWN
    return PriceTrend.FLAT


def time_series(candles: Iterable["Candlestick"]) -> List[Tuple[datetime, float]]:
    """(end time, close) pairs; candlesticks without a close are left out"""
    series = []
    for candle in candles:
        close = _close(candle)
        if close is None:
            continue
        series.append((to_datetime(candle.end_period_ts), close))
    return series


def candlestick_summary(candles: Iterable["Candlestick"]) -> CandlestickSummary:
    candles = list(candles)
    return CandlestickSummary(
        count=len(candles),
        total_volume=total_volume(candles),
        average_volume=average_volume(candles),
        price_range=price_range(candles),
        price_trend=price_trend(candles),
        first_close=_close(candles[0]) if candles else None,
        last_close=_close(candles[-1]) if candles else None,
    )
