"""Utility functions for the sheet localizer."""

import re
from typing import Any
import logging

_NUMERIC_PATTERN = re.compile(r"^\d+(\.\d+)?$")


def is_numeric_text(text: str) -> bool:
    """Check if text is a plain number, optionally with a decimal point.

    Args:
        text: Text to check (already trimmed)

    Returns:
        True if the text only holds digits
    """
    return bool(_NUMERIC_PATTERN.match(text))


def is_blank(value: Any) -> bool:
    """True when the value is missing or only whitespace."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def setup_logging(log_level: str = "INFO", log_file: str = None) -> None:
    """Set up logging configuration.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path
    """
    handlers = [logging.StreamHandler()]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )
