"""
Configuration settings for the Dome API client
"""
import os
from dotenv import load_dotenv

from .version import __version__

# Load environment variables from .env file
load_dotenv()


class Config:
    """Client configuration"""

    # Credentials (explicit constructor arguments always win)
    DOME_API_KEY = os.getenv("DOME_API_KEY")

    # Endpoints
    BASE_URL = os.getenv("DOME_API_BASE_URL", "https://api.domeapi.io/v1")
    WS_URL = os.getenv("DOME_WS_URL", "wss://ws.domeapi.io")
    VENUE = "polymarket"

    # Transport defaults
    REQUEST_TIMEOUT = float(os.getenv("DOME_REQUEST_TIMEOUT", "30"))
    USER_AGENT = f"dome-api-python/{__version__}"

    # Streaming
    WS_POLL_INTERVAL = 1.0
    WS_PROTOCOL_VERSION = 1

    # Logging
    LOG_LEVEL = os.getenv("DOME_LOG_LEVEL", "INFO")

    @classmethod
    def get_api_key(cls, explicit=None):
        """Return the explicit key when it is non-blank, else the configured one"""
        if explicit is not None and str(explicit).strip():
            return explicit
        return cls.DOME_API_KEY
