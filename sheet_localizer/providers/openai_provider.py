"""OpenAI provider for translation services."""

import asyncio
import logging

from openai import OpenAI, OpenAIError

from .base_provider import BaseProvider
from ..errors import EmptyResponseError, TranslationServiceError

logger = logging.getLogger(__name__)


class OpenAIProvider(BaseProvider):
    """OpenAI translation provider."""

    supports_json = True

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o",
        timeout: float = 90.0,
        temperature: float = 0.2,
        max_tokens: int = 3000
    ):
        """Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            model: OpenAI model to use
            timeout: Deadline for each request in seconds
            temperature: Sampling temperature
            max_tokens: Upper bound on reply length
        """
        super().__init__(api_key, model, timeout)
        self.temperature = temperature
        self.max_tokens = max_tokens
        # The client gives up after one attempt; a failed batch is reported, not retried
        self.client = OpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    async def complete(self, system: str, prompt: str, json_mode: bool = False) -> str:
        """Send one chat completion request.

        Args:
            system: System instructions
            prompt: User message holding the numbered texts
            json_mode: Request a JSON object reply

        Returns:
            Raw reply content
        """
        messages = [
            {"role": "system", "content": system},
            {"role": "user", "content": prompt}
        ]
        options = {}
        if json_mode:
            options["response_format"] = {"type": "json_object"}

        try:
            response = await asyncio.to_thread(
                lambda: self.client.chat.completions.create(
                    model=self.model,
                    messages=messages,
                    temperature=self.temperature,
                    max_tokens=self.max_tokens,
                    **options
                )
            )
        except OpenAIError as e:
            raise TranslationServiceError(f"OpenAI request failed: {e}") from e

        if not response.choices:
            raise EmptyResponseError("OpenAI returned no choices")

        content = response.choices[0].message.content
        if not content or not content.strip():
            raise EmptyResponseError("OpenAI returned an empty message")

        logger.debug(f"OpenAI reply ({len(content)} chars) from {self.model}")
        return content

    async def ping(self) -> None:
        """Send a tiny request to check the API key and connectivity."""
        try:
            await asyncio.to_thread(
                lambda: self.client.chat.completions.create(
                    model=self.model,
                    messages=[{"role": "user", "content": "Hello, test connection"}],
                    max_tokens=10
                )
            )
        except OpenAIError as e:
            raise TranslationServiceError(f"OpenAI connection failed: {e}") from e

        logger.info("Connection to OpenAI works")
