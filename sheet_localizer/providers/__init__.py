"""Translation providers for different LLM services."""

from .openai_provider import OpenAIProvider
from .base_provider import BaseProvider

__all__ = ["BaseProvider", "OpenAIProvider"]
