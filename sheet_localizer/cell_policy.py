"""Detection of cells visually marked as "do not translate".

Spreadsheet authors flag non-localizable content by filling the cell in gray.
Excel can express that gray in several ways (explicit RGB, legacy indexed
palette, theme colour plus tint), so the check is a heuristic. The thresholds
are kept in a frozen dataclass so tests and callers can override them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import FrozenSet, Optional
import logging

logger = logging.getLogger(__name__)

DEFAULT_GRAY_RGB = frozenset({
    "F2F2F2", "EDEDED", "E7E6E6", "DDDDDD", "DBDBDB", "D9D9D9", "D0CECE",
    "C9C9C9", "C0C0C0", "BFBFBF", "AEAAAA", "A6A6A6", "969696", "808080",
    "7F7F7F", "757171", "595959", "404040", "3A3838", "262626",
})


@dataclass(frozen=True)
class GrayFillThresholds:
    """Tunable values for the gray fill heuristic.

    Args:
        rgb_palette: Known gray RGB values, upper-case hex without alpha
        indexed_colors: Legacy palette indexes that render as gray
        light_themes: Theme slots that turn gray when darkened; None accepts every slot
        max_theme_tint: A theme colour is gray when its tint is at or below this
        dark_themes: Theme slots (text dark 1) that turn gray when lightened
        min_dark_theme_tint: A dark theme colour is gray when its tint is at or above this
    """

    rgb_palette: FrozenSet[str] = DEFAULT_GRAY_RGB
    indexed_colors: FrozenSet[int] = frozenset({22, 23, 55})
    light_themes: Optional[FrozenSet[int]] = None
    max_theme_tint: float = -0.05
    dark_themes: FrozenSet[int] = frozenset({1})
    min_dark_theme_tint: float = 0.25


class CellPolicy(ABC):
    """Decides whether a cell carries the protection marker."""

    @abstractmethod
    def is_protected(self, cell) -> bool:
        """Return True if the cell is marked as non-localizable content."""
        pass


class GrayFillPolicy(CellPolicy):
    """openpyxl implementation: a solid gray fill marks a protected cell."""

    def __init__(self, thresholds: Optional[GrayFillThresholds] = None):
        self.thresholds = thresholds or GrayFillThresholds()

    def is_protected(self, cell) -> bool:
        fill = getattr(cell, "fill", None)
        if fill is None or getattr(fill, "fill_type", None) != "solid":
            return False
        return self.is_gray(fill.fgColor)

    def is_gray(self, color) -> bool:
        """Check an openpyxl ``Color`` against the configured gray definitions."""
        if color is None:
            return False

        t = self.thresholds
        kind = getattr(color, "type", None)

        if kind == "rgb":
            rgb = color.rgb
            if not isinstance(rgb, str):
                return False
            # ARGB "FFD9D9D9" -> "D9D9D9"
            return rgb.upper()[-6:] in t.rgb_palette

        if kind == "indexed":
            return color.indexed in t.indexed_colors

        if kind == "theme":
            tint = color.tint or 0.0
            if color.theme in t.dark_themes and tint >= t.min_dark_theme_tint:
                return True
            if t.light_themes is not None and color.theme not in t.light_themes:
                return False
            return tint <= t.max_theme_tint

        logger.debug(f"Unrecognised fill colour type: {kind}")
        return False
