"""Test the PnL performance engine over wallet PnL-to-date series"""
import pytest

from dome_api import analytics
from dome_api.models import PnLData, WalletPnLResponse


def series(*values, start=1726857600, step=86400):
    """PnL points with one-day spacing"""
    return [PnLData(timestamp=start + i * step, pnl_to_date=v) for i, v in enumerate(values)]


class TestDrawdown:
    """Peak, trough and drawdown rules"""

    def test_drawdown_from_peak_to_trough(self):
        points = series(1000, 1500, 1200, 800, 2000)

        assert analytics.peak_pnl(points) == 2000
        assert analytics.trough_pnl(points) == 800
        assert analytics.max_drawdown(points) == 1200
        assert analytics.max_drawdown_percent(points) == pytest.approx(60.0)

    def test_no_drawdown_when_series_never_goes_positive(self):
        """A peak <= 0 means zero drawdown whatever the trough"""
        points = series(-100, -50, -200)

        assert analytics.peak_pnl(points) == -50
        assert analytics.trough_pnl(points) == -200
        assert analytics.max_drawdown(points) == 0
        assert analytics.max_drawdown_percent(points) == 0.0

    def test_zero_peak_counts_as_never_positive(self):
        points = series(0, -300, 0)

        assert analytics.max_drawdown(points) == 0
        assert analytics.max_drawdown_percent(points) == 0.0

    def test_drawdown_uses_whole_series_extremes(self):
        """Trough before the peak still counts: |peak - trough|"""
        points = series(-500, 300)

        assert analytics.max_drawdown(points) == 800
        assert analytics.max_drawdown_percent(points) == pytest.approx(800 / 300 * 100)


class TestDailyChanges:
    """First-difference series and the metrics derived from it"""

    def test_changes_are_first_differences(self):
        points = series(1000, 1500, 1200, 800, 2000)
        changes = analytics.daily_changes(points)

        assert [c.change for c in changes] == [500, -300, -400, 1200]
        assert [c.change_dollars for c in changes] == [5.0, -3.0, -4.0, 12.0]
        # Each change carries the later point's timestamp
        assert [c.timestamp for c in changes] == [p.timestamp for p in points[1:]]

    def test_best_worst_and_average(self):
        points = series(1000, 1500, 1200, 800, 2000)

        assert analytics.best_day(points).change == 1200
        assert analytics.worst_day(points).change == -400
        assert analytics.average_daily_pnl(points) == pytest.approx(250.0)

    def test_single_point_has_no_changes(self):
        points = series(700)

        assert analytics.daily_changes(points) == []
        assert analytics.best_day(points) is None
        assert analytics.worst_day(points) is None
        assert analytics.average_daily_pnl(points) == 0.0

    def test_change_date_is_utc_datetime(self):
        change = analytics.daily_changes(series(0, 100))[0]
        assert change.date.year == 2024
        assert change.date.utcoffset().total_seconds() == 0


class TestDayClassification:
    """Profit/loss/break-even days classify each point's cumulative value"""

    def test_all_positive_cumulative_values_are_profit_days(self):
        """Falling days still count as profit days while cumulative PnL is above zero"""
        points = series(1000, 1500, 1200, 800, 2000)

        assert analytics.profit_days(points) == 5
        assert analytics.loss_days(points) == 0
        assert analytics.break_even_days(points) == 0
        assert analytics.win_rate(points) == pytest.approx(100.0)

    def test_mixed_signs(self):
        points = series(-200, 0, 300, -100)

        assert analytics.profit_days(points) == 1
        assert analytics.loss_days(points) == 2
        assert analytics.break_even_days(points) == 1
        assert analytics.win_rate(points) == pytest.approx(25.0)


class TestEmptySeries:
    """Defaults for a wallet with no PnL points"""

    def test_empty_defaults(self):
        assert analytics.peak_pnl([]) == 0
        assert analytics.trough_pnl([]) == 0
        assert analytics.max_drawdown([]) == 0
        assert analytics.max_drawdown_percent([]) == 0.0
        assert analytics.win_rate([]) == 0.0
        assert analytics.daily_changes([]) == []

    def test_current_pnl_is_none_but_total_pnl_is_zero(self):
        assert analytics.current_pnl([]) is None
        assert analytics.total_pnl([]) == 0


class TestPerformanceSummary:
    """pnl_performance() and the WalletPnLResponse accessors agree"""

    def test_summary_matches_individual_metrics(self):
        points = series(1000, 1500, 1200, 800, 2000)
        perf = analytics.pnl_performance(points)

        assert perf.points == 5
        assert perf.current_pnl == 2000
        assert perf.total_pnl == 2000
        assert perf.peak_pnl == 2000
        assert perf.trough_pnl == 800
        assert perf.max_drawdown == 1200
        assert perf.max_drawdown_percent == pytest.approx(60.0)
        assert perf.win_rate == pytest.approx(100.0)
        assert perf.best_day.change == 1200
        assert perf.worst_day.change == -400
        assert perf.average_daily_pnl == pytest.approx(250.0)

    def test_dollar_values_are_derived_from_cents(self):
        perf = analytics.pnl_performance(series(1000, 1500, 1200, 800, 2000))

        assert perf.total_pnl_dollars == 20.0
        assert perf.peak_pnl_dollars == 20.0
        assert perf.trough_pnl_dollars == 8.0
        assert perf.max_drawdown_dollars == 12.0
        assert perf.average_daily_pnl_dollars == pytest.approx(2.5)

        dumped = perf.model_dump()
        assert dumped["max_drawdown_dollars"] == 12.0
        assert dumped["best_day"]["change_dollars"] == 12.0

    def test_empty_summary(self):
        perf = analytics.pnl_performance([])

        assert perf.points == 0
        assert perf.current_pnl is None
        assert perf.current_pnl_dollars is None
        assert perf.total_pnl == 0
        assert perf.best_day is None

    def test_response_methods(self, pnl_payload):
        response = WalletPnLResponse.model_validate(pnl_payload)

        assert response.size == 5
        assert response.current_pnl() == 2000
        assert response.current_pnl_dollars() == 20.0
        assert response.total_pnl_dollars() == 20.0
        assert response.max_drawdown() == 1200
        assert response.max_drawdown_dollars() == 12.0
        assert response.max_drawdown_percent() == pytest.approx(60.0)
        assert [c.change for c in response.daily_changes()] == [500, -300, -400, 1200]
        assert response.best_day().change == 1200
        assert response.worst_day().change == -400
        assert response.average_daily_pnl_dollars() == pytest.approx(2.5)
        assert response.performance().win_rate == pytest.approx(100.0)

    def test_empty_response_methods(self):
        response = WalletPnLResponse.model_validate({"granularity": "day", "pnl_over_time": []})

        assert response.is_empty
        assert response.current_pnl() is None
        assert response.current_pnl_dollars() is None
        assert response.total_pnl() == 0
        assert response.total_pnl_dollars() == 0.0
        assert response.first is None
