"""
Logging setup

Installs a single console handler on the root logger. Modules log through
logging.getLogger(__name__).

Usage:
    from splitledger.core.logging import setup_logging
    setup_logging("INFO")
"""

import logging
import sys
from typing import Union

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are too chatty at INFO
NOISY_LOGGERS = [
    "httpcore",
    "httpx",
    "asyncio",
    "multipart",
]


def setup_logging(level: Union[str, int] = logging.INFO) -> logging.Logger:
    """
    Configure root logging.

    Calling it again replaces the previously installed handler instead of
    adding a second one.

    Args:
        level: Logging level name or number (e.g. "INFO")

    Returns:
        The configured root logger
    """
    if isinstance(level, str):
        level = level.upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in list(root_logger.handlers):
        if getattr(handler, "_splitledger", False):
            root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
    console_handler._splitledger = True
    root_logger.addHandler(console_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger
