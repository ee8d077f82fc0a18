"""Recover positional translations from the service's reply."""

import json
import re
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

# Tried in order; the first that matches a line wins
LINE_PATTERNS = [
    re.compile(r"^\s*(\d+)\.\s*(.*)$"),
    re.compile(r"^\s*(\d+)\)\s*(.*)$"),
    re.compile(r"^\s*(\d+):\s*(.*)$"),
    re.compile(r"^\s*(\d+)\s*-\s*(.*)$"),
]


def parse_numbered_lines(content: str, expected: int) -> List[Optional[str]]:
    """Parse a numbered list such as ``1. Hello`` into positional results.

    Lines without a leading index, with an empty text, or with an index outside
    ``1..expected`` are ignored and their positions stay None.

    Args:
        content: Raw reply text
        expected: Number of texts that were sent

    Returns:
        List of length ``expected`` with None for every missing entry
    """
    results: List[Optional[str]] = [None] * expected

    for line in content.strip().splitlines():
        for pattern in LINE_PATTERNS:
            match = pattern.match(line)
            if not match:
                continue

            index = int(match.group(1)) - 1
            text = match.group(2).strip()
            if text and 0 <= index < expected:
                results[index] = text
            break

    return results


def parse_json_translations(content: str, expected: int) -> Optional[List[Optional[str]]]:
    """Parse a ``{"translations": [...]}`` object or a bare JSON array.

    Returns:
        Positional results, or None when the content is not usable JSON
    """
    try:
        data = json.loads(content)
    except (TypeError, ValueError):
        return None

    if isinstance(data, dict):
        data = data.get("translations")
    if not isinstance(data, list):
        return None

    if len(data) != expected:
        logger.warning(f"Expected {expected} translations, reply contained {len(data)}")

    results: List[Optional[str]] = [None] * expected
    for index, item in enumerate(data[:expected]):
        if isinstance(item, str) and item.strip():
            results[index] = item.strip()
    return results


def parse_response(content: str, expected: int) -> List[Optional[str]]:
    """Parse a reply, preferring structured JSON over the numbered-line format."""
    results = parse_json_translations(content, expected)
    if results is not None:
        return results

    logger.debug("Reply is not JSON, falling back to numbered lines")
    return parse_numbered_lines(content, expected)
