"""Logging configuration."""

import logging

from moodbites.config import LOG_LEVEL


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger for CLI and UI entry points."""
    name = (level or LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
