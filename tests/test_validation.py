"""Test argument validation that runs before any request is built"""
import pytest

from dome_api.errors import DomeAPIError, InvalidArgumentError
from dome_api.validation import (
    MAX_MARKETS_LIMIT,
    MAX_ORDERS_LIMIT,
    is_valid_wallet_address,
    validate_granularity,
    validate_interval,
    validate_limit,
    validate_list_filter,
    validate_non_blank,
    validate_offset,
    validate_optional_time_range,
    validate_time_range,
    validate_wallet_address,
)

WALLET = "0x742d35Cc6634C0532925a3b844Bc9e7595f0bEb0"


class TestWalletAddress:

    @pytest.mark.parametrize("address", [
        WALLET,
        "0x" + "0" * 40,
        "0x" + "abcdefABCDEF" * 3 + "0123",
    ])
    def test_valid(self, address):
        assert is_valid_wallet_address(address)
        validate_wallet_address(address)

    @pytest.mark.parametrize("address", [
        "742d35Cc6634C0532925a3b844Bc9e7595f0bEb0",    # no prefix
        "0X742d35Cc6634C0532925a3b844Bc9e7595f0bEb0",  # upper-case prefix
        WALLET[:-1],                                    # 39 hex chars
        WALLET + "0",                                   # 41 hex chars
        "0x742d35Cc6634C0532925a3b844Bc9e7595f0bEbg",  # non-hex char
        WALLET + "\n",                                  # trailing newline
        " " + WALLET,
    ])
    def test_invalid_format(self, address):
        assert not is_valid_wallet_address(address)
        with pytest.raises(InvalidArgumentError, match="Invalid wallet_address format"):
            validate_wallet_address(address)

    @pytest.mark.parametrize("address", [None, "", "   "])
    def test_blank(self, address):
        with pytest.raises(InvalidArgumentError, match="wallet_address cannot be empty"):
            validate_wallet_address(address)

    def test_error_names_the_parameter(self):
        with pytest.raises(InvalidArgumentError, match="Invalid user format"):
            validate_wallet_address("0xnope", "user")

    def test_non_string_is_not_an_address(self):
        assert not is_valid_wallet_address(12345)


class TestLimitsAndOffsets:

    @pytest.mark.parametrize("limit", [1, 500, MAX_ORDERS_LIMIT])
    def test_order_limits_in_range(self, limit):
        validate_limit(limit, MAX_ORDERS_LIMIT)

    @pytest.mark.parametrize("limit", [0, -1, MAX_ORDERS_LIMIT + 1, 1.5, "10", True, None])
    def test_order_limits_out_of_range(self, limit):
        with pytest.raises(InvalidArgumentError, match="limit must be between 1 and 1000"):
            validate_limit(limit, MAX_ORDERS_LIMIT)

    def test_markets_limit_caps_at_100(self):
        validate_limit(MAX_MARKETS_LIMIT, MAX_MARKETS_LIMIT)
        with pytest.raises(InvalidArgumentError, match="between 1 and 100"):
            validate_limit(101, MAX_MARKETS_LIMIT)

    def test_offset(self):
        validate_offset(0)
        validate_offset(250)
        for bad in (-1, 2.0, None):
            with pytest.raises(InvalidArgumentError, match="offset must be >= 0"):
                validate_offset(bad)


class TestTimeRanges:

    def test_valid_range(self):
        validate_time_range(1640995200, 1672531200)

    def test_start_must_precede_end(self):
        with pytest.raises(InvalidArgumentError, match="start_time must be less than end_time"):
            validate_time_range(1672531200, 1640995200)
        with pytest.raises(InvalidArgumentError, match="start_time must be less than end_time"):
            validate_time_range(1640995200, 1640995200)

    @pytest.mark.parametrize("start,end,name", [
        (None, 1672531200, "start_time"),
        (0, 1672531200, "start_time"),
        (1640995200, -5, "end_time"),
        (1640995200, "1672531200", "end_time"),
    ])
    def test_bounds_must_be_positive_ints(self, start, end, name):
        with pytest.raises(InvalidArgumentError, match=f"{name} must be a positive integer"):
            validate_time_range(start, end)

    def test_optional_range_checks_only_given_bounds(self):
        validate_optional_time_range(None, None)
        validate_optional_time_range(1640995200, None)
        validate_optional_time_range(None, 1672531200)

        with pytest.raises(InvalidArgumentError):
            validate_optional_time_range(1672531200, 1640995200)
        with pytest.raises(InvalidArgumentError):
            validate_optional_time_range(-1, None)


class TestEnumerations:

    @pytest.mark.parametrize("interval", [1, 60, 1440])
    def test_valid_intervals(self, interval):
        validate_interval(interval)

    @pytest.mark.parametrize("interval", [0, 5, 30, 1441, "60", None])
    def test_invalid_intervals(self, interval):
        with pytest.raises(InvalidArgumentError, match="interval must be one of: 1, 60, 1440"):
            validate_interval(interval)

    @pytest.mark.parametrize("granularity", ["day", "week", "month", "year", "all"])
    def test_valid_granularities(self, granularity):
        validate_granularity(granularity)

    @pytest.mark.parametrize("granularity", ["hour", "Day", "", None])
    def test_invalid_granularities(self, granularity):
        with pytest.raises(InvalidArgumentError, match="granularity must be one of"):
            validate_granularity(granularity)


class TestFilters:

    def test_list_filters(self):
        validate_list_filter(None, "tags")
        validate_list_filter([], "tags")
        validate_list_filter(["politics", "crypto"], "tags")
        validate_list_filter(("a", "b"), "market_slug")

    def test_bare_string_is_rejected(self):
        with pytest.raises(InvalidArgumentError, match="tags must be an array"):
            validate_list_filter("politics", "tags")

    def test_items_must_be_strings(self):
        with pytest.raises(InvalidArgumentError, match="condition_id must contain only strings"):
            validate_list_filter(["0xabc", 7], "condition_id")

    @pytest.mark.parametrize("value", [None, "", "  \t"])
    def test_non_blank(self, value):
        with pytest.raises(InvalidArgumentError, match="token_id cannot be empty"):
            validate_non_blank(value, "token_id")


def test_argument_errors_are_value_errors_and_dome_errors():
    with pytest.raises(ValueError):
        validate_offset(-1)
    with pytest.raises(DomeAPIError):
        validate_offset(-1)
