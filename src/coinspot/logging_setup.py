"""
Logging setup for the coinspot logger namespace.
"""

import logging
from typing import Any, Dict, Optional

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(config: Optional[Dict[str, Any]] = None) -> logging.Logger:
    """
    Configure the `coinspot` logger.

    Args:
        config: Settings dictionary (as returned by load_config). Only the
            `logging` section is read: level, format, date_format.

    Returns:
        Configured `coinspot` logger.
    """
    log_cfg = (config or {}).get("logging") or {}
    log_level = str(log_cfg.get("level", "INFO"))
    log_format = log_cfg.get("format", DEFAULT_FORMAT)
    date_format = log_cfg.get("date_format", DEFAULT_DATE_FORMAT)
    level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger("coinspot")
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(log_format, datefmt=date_format))
    root_logger.addHandler(console_handler)

    return root_logger
