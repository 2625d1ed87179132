"""
lookout/config.py

Environment variable configuration.

Contains:
- Config: Centralized settings from environment variables
- LOG_LEVEL, poll protocol timings, window resize budget, CDP endpoint, etc.
"""

import logging
import os
from typing import Any

from dotenv import load_dotenv

load_dotenv()

# configure urllib3 logger to suppress verbose HTTP logs from target discovery
logging.getLogger("urllib3").setLevel(logging.WARNING)


class Config():
    """
    Centralized configuration for environment variables.
    """

    # logging configuration
    LOG_LEVEL: int = logging.getLevelNamesMapping().get(
        os.getenv("LOG_LEVEL", "INFO").upper(),
        logging.INFO
    )
    LOG_DATE_FORMAT: str = os.getenv("LOG_DATE_FORMAT", "%Y-%m-%d %H:%M:%S")
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "[%(asctime)s] %(levelname)s:%(name)s:%(message)s")

    # Poll script protocol (seconds)
    POLL_EXECUTION_TIMEOUT: float = float(os.getenv("LOOKOUT_POLL_EXECUTION_TIMEOUT", "300"))
    POLL_INTERVAL: float = float(os.getenv("LOOKOUT_POLL_INTERVAL", "0.2"))

    # Window resizing: settle time after each resize (seconds) and retries after the first attempt
    WINDOW_RESIZE_SETTLE: float = float(os.getenv("LOOKOUT_WINDOW_RESIZE_SETTLE", "3.0"))
    WINDOW_RESIZE_RETRIES: int = int(os.getenv("LOOKOUT_WINDOW_RESIZE_RETRIES", "3"))

    # Chrome DevTools Protocol backend
    CDP_HTTP_URL: str = os.getenv("LOOKOUT_CDP_HTTP_URL", "http://127.0.0.1:9222")
    CDP_COMMAND_TIMEOUT: float = float(os.getenv("LOOKOUT_CDP_COMMAND_TIMEOUT", "10"))

    @classmethod
    def as_dict(cls) -> dict[str, Any]:
        """
        Return a dictionary of all UPPERCASE class attributes and their values.
        Return:
            dict[str, Any]: A dictionary of all UPPERCASE class attributes and their values.
        """
        return {
            key: getattr(cls, key)
            for key in dir(cls)
            if key.isupper()
        }
