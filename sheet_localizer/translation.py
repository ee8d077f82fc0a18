"""Batched translation of plain-text strings through an LLM provider."""

import asyncio
import enum
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union
import logging

from tqdm import tqdm

from .locales import LocaleTable
from .masking import mask_text, unmask_text
from .parsing import parse_response
from .providers import BaseProvider

logger = logging.getLogger(__name__)

BATCH_SIZE = 15
BATCH_DELAY = 1.0

SYSTEM_PROMPT = (
    "You are a professional translator specialised in software interfaces and "
    "survey questionnaires. You strictly follow the instructions about keeping "
    "placeholders and formatting intact."
)


class FailureReason(enum.Enum):
    SERVICE_ERROR = "service_error"
    NOT_RETURNED = "not_returned"


@dataclass(frozen=True)
class Translated:
    text: str


@dataclass(frozen=True)
class Failed:
    reason: FailureReason
    detail: str = ""


TranslationOutcome = Union[Translated, Failed]


def build_prompt(
    texts: Sequence[str],
    source_language: str,
    target_language: str,
    json_mode: bool = False
) -> str:
    """Compose the user message for one batch of masked texts."""
    text_list = "\n".join(f"{index}. {text}" for index, text in enumerate(texts, 1))

    if json_mode:
        output_rule = (
            'Reply with a JSON object {"translations": [...]} holding exactly '
            f"{len(texts)} strings, in the same order as the input, and nothing else."
        )
    else:
        output_rule = (
            "Reply ONLY with the numbered translations, one per line, using the "
            "same numbers as the input, without any explanations."
        )

    return f"""Translate the following texts from {source_language} to {target_language}.

IMPORTANT RULES:
- Keep EVERY placeholder of the form __TAG_X__ exactly as written and in the right position
- Do NOT translate or modify the __TAG_X__ placeholders
- For very short texts (1-2 words), give the most natural translation
- For incomplete or truncated texts, translate the fragment naturally without completing it
- Keep the original formatting and spacing
- {output_rule}

Texts to translate:
{text_list}"""


class BatchTranslationClient:
    """Translates lists of strings in sequential, fixed-size batches.

    A batch that fails is not retried and does not stop the run: every text in
    it comes back as ``Failed(SERVICE_ERROR)``. Texts the reply leaves out come
    back as ``Failed(NOT_RETURNED)``.
    """

    def __init__(
        self,
        provider: BaseProvider,
        locale_table: Optional[LocaleTable] = None,
        batch_size: int = BATCH_SIZE,
        batch_delay: float = BATCH_DELAY,
        show_progress: bool = False
    ):
        """Initialize the client.

        Args:
            provider: Translation provider to use
            locale_table: Resolves locale codes to language names for the prompt
            batch_size: Number of texts sent per request
            batch_delay: Pause in seconds between consecutive requests
            show_progress: Display a progress bar over batches
        """
        self.provider = provider
        self.locale_table = locale_table or LocaleTable()
        self.batch_size = batch_size
        self.batch_delay = batch_delay
        self.show_progress = show_progress

    async def translate(
        self,
        texts: Sequence[str],
        source_locale: str,
        target_locale: str
    ) -> List[Optional[str]]:
        """Translate texts, returning None where no translation was obtained."""
        outcomes = await self.translate_outcomes(texts, source_locale, target_locale)
        return [outcome.text if isinstance(outcome, Translated) else None for outcome in outcomes]

    async def translate_outcomes(
        self,
        texts: Sequence[str],
        source_locale: str,
        target_locale: str
    ) -> List[TranslationOutcome]:
        """Translate texts batch by batch.

        Args:
            texts: Plain texts to translate
            source_locale: 3-letter source locale code
            target_locale: 3-letter target locale code

        Returns:
            One outcome per input text, in input order
        """
        if not texts:
            return []

        source_language = self.locale_table.language_name(source_locale)
        target_language = self.locale_table.language_name(target_locale)
        total_batches = math.ceil(len(texts) / self.batch_size)
        logger.info(f"Translating {len(texts)} texts from {source_language} to {target_language}")

        outcomes: List[TranslationOutcome] = []
        pbar = tqdm(total=total_batches, desc=target_language, disable=not self.show_progress)

        for batch_number, start in enumerate(range(0, len(texts), self.batch_size), 1):
            batch = list(texts[start:start + self.batch_size])
            logger.info(f"Batch {batch_number}/{total_batches}")

            try:
                outcomes.extend(
                    await self.translate_batch(batch, source_language, target_language)
                )
            except Exception as e:
                logger.error(f"Batch {batch_number} failed: {e}")
                outcomes.extend(Failed(FailureReason.SERVICE_ERROR, str(e)) for _ in batch)

            pbar.update(1)
            if start + self.batch_size < len(texts) and self.batch_delay > 0:
                await asyncio.sleep(self.batch_delay)

        pbar.close()
        return outcomes

    async def translate_batch(
        self,
        texts: Sequence[str],
        source_language: str,
        target_language: str
    ) -> List[TranslationOutcome]:
        """Translate one batch with a single request.

        Args:
            texts: Plain texts, at most one batch worth
            source_language: Source language name used in the prompt
            target_language: Target language name used in the prompt

        Returns:
            One outcome per input text

        Raises:
            TranslationServiceError: If the provider call fails
        """
        masked = [mask_text(text) for text in texts]
        json_mode = self.provider.supports_json
        prompt = build_prompt(
            [masked_text for masked_text, _ in masked],
            source_language,
            target_language,
            json_mode=json_mode
        )

        content = await self.provider.complete(SYSTEM_PROMPT, prompt, json_mode=json_mode)
        parsed = parse_response(content, len(texts))

        outcomes: List[TranslationOutcome] = []
        for index, translation in enumerate(parsed):
            if translation is None:
                logger.warning(f"No translation returned for text {index + 1} of batch")
                outcomes.append(Failed(FailureReason.NOT_RETURNED, f"item {index + 1} missing from reply"))
            else:
                outcomes.append(Translated(unmask_text(translation, masked[index][1])))
        return outcomes

    def translate_sync(
        self,
        texts: Sequence[str],
        source_locale: str,
        target_locale: str
    ) -> List[Optional[str]]:
        """Synchronous wrapper for translate."""
        return asyncio.run(self.translate(texts, source_locale, target_locale))
