"""Logging configuration."""

import logging
import sys
from typing import Optional

from fundbalance.config.settings import LogLevel, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that are chatty at INFO
_QUIET_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore")


def setup_logging(level: Optional[LogLevel] = None) -> None:
    """
    Configure logging for the application.

    Args:
        level: Overrides ``Settings.log_level`` for this process (the CLI
            ``--log-level`` flag). Level names are validated by ``Settings``.
    """
    level = level or get_settings().log_level

    logging.basicConfig(
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("fundbalance").setLevel(level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
