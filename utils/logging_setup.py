#!/usr/bin/env python3
"""
Centralized Logging Setup Utility

Provides a single function to configure logging for the schedule CLI and
library modules. Uses the configuration from config.py so every entry point
logs the same way. Records always go to stderr; stdout is reserved for the
rendered report.

Usage:
    from utils.logging_setup import setup_logging

    # Basic setup
    setup_logging()

    # With custom level
    setup_logging(level="DEBUG")

    # With a rotating log file under LOGS_PATH
    setup_logging(enable_file_logging=True, log_filename="schedule.log")
"""

import copy
import logging
import logging.config
from typing import Optional

from config import LOGGING_CONFIG, LOGS_PATH


def setup_logging(level: str = "INFO",
                 enable_file_logging: bool = False,
                 log_filename: Optional[str] = None) -> None:
    """
    Set up centralized logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        enable_file_logging: Whether to enable file logging
        log_filename: Custom log filename inside LOGS_PATH
    """

    # Deep copy so repeated calls never mutate the module-level dict
    config = copy.deepcopy(LOGGING_CONFIG)

    config["root"]["level"] = level.upper()

    if enable_file_logging:
        if log_filename:
            config["handlers"]["file"]["filename"] = str(LOGS_PATH / log_filename)
        LOGS_PATH.mkdir(parents=True, exist_ok=True)

        if "file" not in config["root"]["handlers"]:
            config["root"]["handlers"].append("file")
    else:
        config["root"]["handlers"] = [h for h in config["root"]["handlers"] if h != "file"]
        # dictConfig instantiates every declared handler, so drop the unused one
        config["handlers"].pop("file", None)

    logging.config.dictConfig(config)

    logger = logging.getLogger(__name__)
    logger.debug(f"Centralized logging configured: level={level}, file_logging={enable_file_logging}")


def disable_noisy_loggers():
    """Reduce verbosity of third-party loggers used by the report writers."""

    noisy_loggers = [
        'pyarrow',
        'pandas',
    ]

    for logger_name in noisy_loggers:
        logging.getLogger(logger_name).setLevel(logging.WARNING)
