"""
Argument validation for Dome API calls

Pure checks run before any request is built. Each raises
InvalidArgumentError naming the parameter and the constraint it broke.
"""
import re
from typing import Any, Optional

from .errors import InvalidArgumentError

WALLET_ADDRESS_PATTERN = re.compile(r"\A0x[0-9a-fA-F]{40}\Z")

VALID_INTERVALS = (1, 60, 1440)  # 1m, 1h, 1d
VALID_GRANULARITIES = ("day", "week", "month", "year", "all")

MAX_ORDERS_LIMIT = 1000
MAX_MARKETS_LIMIT = 100


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_valid_wallet_address(value: Any) -> bool:
    """True for exactly '0x' followed by 40 hex characters"""
    return isinstance(value, str) and WALLET_ADDRESS_PATTERN.match(value) is not None


def validate_wallet_address(wallet_address: Any, name: str = "wallet_address") -> None:
    if wallet_address is None or not str(wallet_address).strip():
        raise InvalidArgumentError(f"{name} cannot be empty")

    if not is_valid_wallet_address(wallet_address):
        raise InvalidArgumentError(
            f"Invalid {name} format. Must be a valid Ethereum address "
            "(0x followed by 40 hex characters)"
        )


def validate_non_blank(value: Any, name: str) -> None:
    if value is None or not str(value).strip():
        raise InvalidArgumentError(f"{name} cannot be empty")


def validate_limit(limit: Any, maximum: int = MAX_ORDERS_LIMIT) -> None:
    if not _is_int(limit) or limit < 1 or limit > maximum:
        raise InvalidArgumentError(f"limit must be between 1 and {maximum}")


def validate_offset(offset: Any) -> None:
    if not _is_int(offset) or offset < 0:
        raise InvalidArgumentError("offset must be >= 0")


def validate_positive_timestamp(value: Any, name: str) -> None:
    if not _is_int(value) or value <= 0:
        raise InvalidArgumentError(f"{name} must be a positive integer (Unix timestamp)")


def validate_time_range(start_time: Any, end_time: Any) -> None:
    """Both bounds required, positive, and start strictly before end"""
    validate_positive_timestamp(start_time, "start_time")
    validate_positive_timestamp(end_time, "end_time")

    if start_time >= end_time:
        raise InvalidArgumentError("start_time must be less than end_time")


def validate_optional_time_range(start_time: Optional[Any], end_time: Optional[Any]) -> None:
    """Same rules as validate_time_range, applied only to the bounds that are given"""
    if start_time is not None:
        validate_positive_timestamp(start_time, "start_time")
    if end_time is not None:
        validate_positive_timestamp(end_time, "end_time")

    if start_time is not None and end_time is not None and start_time >= end_time:
        raise InvalidArgumentError("start_time must be less than end_time")


def validate_interval(interval: Any) -> None:
    if not _is_int(interval) or interval not in VALID_INTERVALS:
        allowed = ", ".join(str(i) for i in VALID_INTERVALS)
        raise InvalidArgumentError(f"interval must be one of: {allowed} (1=1m, 60=1h, 1440=1d)")


def validate_granularity(granularity: Any) -> None:
    if granularity not in VALID_GRANULARITIES:
        raise InvalidArgumentError(
            f"granularity must be one of: {', '.join(VALID_GRANULARITIES)}"
        )


def validate_list_filter(value: Any, name: str) -> None:
    """Array-typed filters must be a list or tuple of strings; a bare string is rejected"""
    if value is None:
        return

    if not isinstance(value, (list, tuple)):
        raise InvalidArgumentError(f"{name} must be an array")

    for item in value:
        if not isinstance(item, str):
            raise InvalidArgumentError(f"{name} must contain only strings")
