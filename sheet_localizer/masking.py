"""Protect markup from the translation service.

Substrings the service must not touch (HTML-like tags, ``!!directive!!``
blocks, URLs, e-mail addresses and line breaks) are swapped for numbered tokens before a
text is sent and swapped back afterwards. Text that already looks like a token
is protected too, so unmasking can never confuse user input with a token.
"""

import re
from typing import List, Tuple
import logging

logger = logging.getLogger(__name__)

TOKEN_TEMPLATE = "__TAG_{}__"
TOKEN_PATTERN = re.compile(r"__TAG_(\d+)__")

PROTECTED_PATTERN = re.compile(
    "|".join([
        r"__TAG_\d+_*",
        r"<[^<>]+>",
        r"!![^!]+!!",
        r"(?:https?://|www\.)[^\s<>\"']*[^\s<>\"'.,;:!?)\]]",
        r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}",
        r"\r?\n",
    ])
)


class PlaceholderMap:
    """Ordered originals for one text; entry ``n`` is token ``__TAG_n__``."""

    def __init__(self):
        self._originals: List[str] = []

    def add(self, original: str) -> str:
        """Record a protected substring and return its token."""
        token = TOKEN_TEMPLATE.format(len(self._originals))
        self._originals.append(original)
        return token

    def original(self, index: int) -> str:
        return self._originals[index]

    def items(self) -> List[Tuple[str, str]]:
        return [(TOKEN_TEMPLATE.format(i), original) for i, original in enumerate(self._originals)]

    def missing_tokens(self, text: str) -> List[str]:
        """Tokens that do not appear in ``text``."""
        return [token for token, _ in self.items() if token not in text]

    def __len__(self) -> int:
        return len(self._originals)

    def __contains__(self, index: int) -> bool:
        return 0 <= index < len(self._originals)


def mask_text(text: str) -> Tuple[str, PlaceholderMap]:
    """Replace protected substrings with sequential tokens.

    Args:
        text: Source text

    Returns:
        The masked text and the map needed to restore it
    """
    placeholder_map = PlaceholderMap()
    masked = PROTECTED_PATTERN.sub(lambda match: placeholder_map.add(match.group(0)), text)
    return masked, placeholder_map


def unmask_text(text: str, placeholder_map: PlaceholderMap) -> str:
    """Put the original substrings back in place of their tokens.

    Every occurrence of a known token is replaced in a single pass, so restored
    text is never scanned again. Unknown token numbers are left untouched.
    """
    if not len(placeholder_map):
        return text

    missing = placeholder_map.missing_tokens(text)
    if missing:
        logger.warning(f"Translation dropped placeholders {', '.join(missing)}")

    def restore(match):
        index = int(match.group(1))
        if index in placeholder_map:
            return placeholder_map.original(index)
        return match.group(0)

    return TOKEN_PATTERN.sub(restore, text)
