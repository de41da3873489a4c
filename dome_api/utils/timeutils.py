"""Unix timestamp helpers shared by the entities and analytics"""
from datetime import datetime, timezone
from typing import Optional

TIME_FORMATS = {
    "readable": "%Y-%m-%d %H:%M:%S UTC",
    "date_only": "%Y-%m-%d",
}


def to_datetime(timestamp: Optional[int]) -> Optional[datetime]:
    """Unix seconds -> timezone-aware UTC datetime (None passes through)"""
    if timestamp is None:
        return None
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def format_datetime(value: Optional[datetime], fmt: str = "default") -> Optional[str]:
    """
    Render a datetime as 'iso', 'readable', 'date_only', or str() for anything else.
    """
    if value is None:
        return None
    if fmt == "iso":
        return value.isoformat()
    pattern = TIME_FORMATS.get(fmt)
    if pattern:
        return value.strftime(pattern)
    return str(value)


def to_unix(value) -> float:
    """Accept a datetime (naive means local time) or Unix seconds and return Unix seconds"""
    if isinstance(value, datetime):
        return value.timestamp()
    return float(value)
