"""Locale lookup table used to classify spreadsheet columns."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional

DEFAULT_LOCALE_CODES: Dict[str, str] = {
    "1031": "DEU",
    "1036": "FRA",
    "1040": "ITA",
    "1034": "ESP",
    "2070": "POR",
    "1043": "NLD",
    "1053": "SWE",
    "1044": "NOR",
    "1030": "DAN",
    "1035": "FIN",
    "1045": "POL",
    "1029": "CZE",
    "1038": "HUN",
    "1048": "ROM",
    "1049": "RUS",
    "1041": "JPN",
    "1042": "KOR",
    "2052": "CHN",
    "1025": "ARA",
    "2057": "ENG",
}

DEFAULT_LANGUAGE_NAMES: Dict[str, str] = {
    "ENG": "English",
    "FRA": "French",
    "DEU": "German",
    "ITA": "Italian",
    "ESP": "Spanish",
    "POR": "Portuguese",
    "NLD": "Dutch",
    "SWE": "Swedish",
    "NOR": "Norwegian",
    "DAN": "Danish",
    "FIN": "Finnish",
    "POL": "Polish",
    "CZE": "Czech",
    "HUN": "Hungarian",
    "ROM": "Romanian",
    "RUS": "Russian",
    "JPN": "Japanese",
    "KOR": "Korean",
    "CHN": "Chinese",
    "ARA": "Arabic",
}


@dataclass(frozen=True)
class LocaleTable:
    """Immutable mapping of numeric locale codes to 3-letter language codes.

    Args:
        codes: Numeric code (as written in the header) to 3-letter code
        names: 3-letter code to a human readable language name for prompts
    """

    codes: Mapping[str, str] = field(default_factory=lambda: DEFAULT_LOCALE_CODES)
    names: Mapping[str, str] = field(default_factory=lambda: DEFAULT_LANGUAGE_NAMES)

    def __post_init__(self):
        # Freeze copies so callers cannot mutate a table shared between runs
        object.__setattr__(self, "codes", MappingProxyType(dict(self.codes)))
        object.__setattr__(self, "names", MappingProxyType(dict(self.names)))

    def locale_for(self, numeric_code: str) -> Optional[str]:
        return self.codes.get(numeric_code)

    def matches(self, numeric_code: str, locale_code: str) -> bool:
        """Return True if the numeric code maps to exactly this locale code."""
        return self.codes.get(numeric_code) == locale_code

    def language_name(self, locale_code: str) -> str:
        """Return the language name for a locale code, or the code itself."""
        return self.names.get(locale_code, locale_code)
