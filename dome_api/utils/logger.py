"""
Centralized logging configuration for the Dome API client

The package only installs a NullHandler, so nothing is printed and no
third-party logger is touched until an application opts in with
configure_logging().

Usage:
    from dome_api.utils.logger import configure_logging, get_logger

    configure_logging("DEBUG")  # optional, application side

    logger = get_logger(__name__)
    logger.info("Fetching candlesticks")
    logger.error("Request failed", exc_info=True)
"""
import logging
import sys
from typing import Optional
from ..config import Config

# Define log format
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Every logger in the package hangs off this one
PACKAGE_LOGGER = "dome_api"

# Silent unless the host application configures logging
logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())

# Global logging configuration
_configured = False


def configure_logging(level: Optional[str] = None):
    """
    Configure logging for the dome_api package
    Safe to call more than once; only the first call takes effect.

    The root logger is left alone. Besides the package logger, only the
    httpx, httpcore and websocket loggers are raised to WARNING.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
               Defaults to Config.LOG_LEVEL.
    """
    global _configured

    if _configured:
        return

    if level is None:
        level = Config.LOG_LEVEL

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level.upper())

    if not any(not isinstance(h, logging.NullHandler) for h in package_logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        package_logger.addHandler(handler)

    # Set specific loggers to reduce noise
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("websocket").setLevel(logging.WARNING)

    _configured = True

    package_logger.debug(f"Logging configured at {level} level")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module (does not configure any handlers)

    Args:
        name: Usually __name__ of the calling module

    Returns:
        Logger under the dome_api hierarchy
    """
    return logging.getLogger(name)


def log_api_call(logger: logging.Logger, method: str, url: str, status: int, duration_ms: float):
    """Log an API call with consistent format"""
    logger.info(
        f"API {method} {url} - {status} ({duration_ms:.0f}ms)",
        extra={
            "method": method,
            "url": url,
            "status": status,
            "duration_ms": duration_ms,
            "type": "api_call"
        }
    )


def log_stream_event(logger: logging.Logger, event: str, detail: Optional[str] = None):
    """Log a streaming connection event with consistent format"""
    detail_str = f" - {detail}" if detail else ""
    logger.info(
        f"WS {event}{detail_str}",
        extra={
            "event": event,
            "detail": detail,
            "type": "stream_event"
        }
    )
