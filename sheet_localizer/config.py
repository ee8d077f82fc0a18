"""Runtime settings loaded from the environment and an optional .env file."""

import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigurationError

DEFAULT_MODEL = "gpt-4o"
DEFAULT_OUTPUT_DIR = "output"
DEFAULT_TIMEOUT = 90.0


@dataclass(frozen=True)
class Settings:
    """Settings for a translation run.

    Environment variables:
        OPENAI_API_KEY              Required before any call to the service
        SHEET_LOCALIZER_MODEL       Chat model (default: gpt-4o)
        SHEET_LOCALIZER_OUTPUT_DIR  Where translated workbooks are written (default: output)
        SHEET_LOCALIZER_TIMEOUT     Per-request deadline in seconds (default: 90)
    """

    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    output_dir: str = DEFAULT_OUTPUT_DIR
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        if self.timeout <= 0:
            raise ConfigurationError(f"Timeout must be a positive number of seconds, got {self.timeout}")

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "Settings":
        """Build settings from the process environment after loading .env."""
        load_dotenv(dotenv_path)

        raw_timeout = os.getenv("SHEET_LOCALIZER_TIMEOUT", str(DEFAULT_TIMEOUT))
        try:
            timeout = float(raw_timeout)
        except ValueError as e:
            raise ConfigurationError(
                f"SHEET_LOCALIZER_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
            ) from e

        return cls(
            api_key=os.getenv("OPENAI_API_KEY") or None,
            model=os.getenv("SHEET_LOCALIZER_MODEL") or DEFAULT_MODEL,
            output_dir=os.getenv("SHEET_LOCALIZER_OUTPUT_DIR") or DEFAULT_OUTPUT_DIR,
            timeout=timeout
        )

    def with_overrides(self, **overrides) -> "Settings":
        """Return a copy with the non-None overrides applied."""
        return replace(self, **{key: value for key, value in overrides.items() if value is not None})

    def require_api_key(self) -> str:
        if not self.api_key:
            raise ConfigurationError("OPENAI_API_KEY is not configured (set it in the environment or .env)")
        return self.api_key
