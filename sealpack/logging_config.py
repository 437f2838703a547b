"""
Logging setup for SealPack entry points.

Library modules only create module-level loggers; handlers are installed
here, once, by whatever process is driving the archiver.
"""

from __future__ import annotations

import logging

import json_log_formatter

from .config import ArchiverSettings


def setup_logging(settings: ArchiverSettings, verbose: bool = False) -> None:
    """Configure the root logger.

    Args:
        settings: Settings providing log level and format
        verbose: Force DEBUG level regardless of settings
    """
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.INFO)

    if settings.log_format == "json":
        formatter: logging.Formatter = json_log_formatter.JSONFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [handler]
