"""Translate the missing locale cells of a workbook and save a new copy."""

import asyncio
import os
import time
from copy import copy
from dataclasses import dataclass, field
from typing import List, Optional
from zipfile import BadZipFile
import logging

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from .config import Settings
from .errors import TranslationServiceError, WorkbookLoadError
from .locales import LocaleTable
from .planner import SpreadsheetTranslationPlanner, TranslationPlan
from .providers import BaseProvider, OpenAIProvider
from .translation import (
    BATCH_DELAY,
    BATCH_SIZE,
    BatchTranslationClient,
    Failed,
    FailureReason,
    Translated,
)

logger = logging.getLogger(__name__)


@dataclass
class WorkbookStats:
    source_column: str
    target_columns: List[str]
    texts_found: int
    translations_applied: int = 0
    service_failures: int = 0
    missing_translations: int = 0
    elapsed_seconds: float = 0.0

    def to_dict(self) -> dict:
        return {
            "sourceColumn": self.source_column,
            "targetColumns": list(self.target_columns),
            "textsFound": self.texts_found,
            "translationsApplied": self.translations_applied,
            "serviceFailures": self.service_failures,
            "missingTranslations": self.missing_translations,
            "elapsedSeconds": round(self.elapsed_seconds, 2),
        }


@dataclass
class WorkbookResult:
    """Descriptor handed back to the caller after a run."""

    filename: str
    output_file: str
    stats: WorkbookStats = field(repr=False)

    def to_dict(self) -> dict:
        return {
            "filename": self.filename,
            "outputFile": self.output_file,
            "stats": self.stats.to_dict(),
        }


class WorkbookTranslator:
    """Fills empty locale cells of the first worksheet with machine translations."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        provider: Optional[BaseProvider] = None,
        planner: Optional[SpreadsheetTranslationPlanner] = None,
        locale_table: Optional[LocaleTable] = None,
        batch_size: int = BATCH_SIZE,
        batch_delay: float = BATCH_DELAY,
        show_progress: bool = False
    ):
        """Initialize the workbook translator.

        Args:
            settings: Runtime settings; read from the environment when omitted
            provider: Translation provider; an OpenAIProvider is built on first use when omitted
            planner: Column planner; built from ``locale_table`` when omitted
            locale_table: Locale lookup shared by the planner and the client
            batch_size: Number of texts per request
            batch_delay: Pause in seconds between requests
            show_progress: Display progress bars while translating
        """
        self.settings = settings or Settings.from_env()
        self.locale_table = locale_table or LocaleTable()
        self.planner = planner or SpreadsheetTranslationPlanner(locale_table=self.locale_table)
        self.batch_size = batch_size
        self.batch_delay = batch_delay
        self.show_progress = show_progress
        self._provider = provider

    @property
    def provider(self) -> BaseProvider:
        if self._provider is None:
            self._provider = OpenAIProvider(
                api_key=self.settings.require_api_key(),
                model=self.settings.model,
                timeout=self.settings.timeout
            )
        return self._provider

    def load_workbook(self, file_path: str) -> openpyxl.Workbook:
        try:
            return openpyxl.load_workbook(file_path)
        except (OSError, InvalidFileException, BadZipFile, KeyError, ValueError) as e:
            raise WorkbookLoadError(f"Could not open workbook {file_path}: {e}") from e

    async def process_workbook_async(self, file_path: str) -> WorkbookResult:
        """Translate missing cells and write the result to a new file.

        Args:
            file_path: Path to the input .xlsx file; it is not modified

        Returns:
            Output file name and run statistics

        Raises:
            WorkbookLoadError: If the input cannot be read
            StructuralError: If the first sheet has nothing to translate
            ConfigurationError: If no API key is available
        """
        logger.info(f"Reading workbook {file_path}")
        start_time = time.time()

        workbook = self.load_workbook(file_path)
        worksheet = workbook.worksheets[0]
        plan = self.planner.plan(worksheet)

        client = BatchTranslationClient(
            provider=self.provider,
            locale_table=self.locale_table,
            batch_size=self.batch_size,
            batch_delay=self.batch_delay,
            show_progress=self.show_progress
        )

        stats = WorkbookStats(
            source_column=plan.source.header,
            target_columns=[target.header for target in plan.targets],
            texts_found=len(plan.units)
        )

        for target in plan.targets:
            units = plan.units_for(target.column_index)
            if not units:
                continue

            logger.info(f"Translating {len(units)} texts into {target.header} ({target.locale_code})")
            outcomes = await client.translate_outcomes(
                [unit.source_text for unit in units],
                plan.source.locale_code,
                target.locale_code
            )

            for unit, outcome in zip(units, outcomes):
                if isinstance(outcome, Translated):
                    if self.apply_translation(worksheet, plan, unit.row, target.column_index, outcome.text):
                        stats.translations_applied += 1
                elif isinstance(outcome, Failed):
                    if outcome.reason is FailureReason.SERVICE_ERROR:
                        stats.service_failures += 1
                    else:
                        stats.missing_translations += 1

        output_file = self.save_workbook(workbook)
        stats.elapsed_seconds = time.time() - start_time
        logger.info(
            f"Translation completed. Applied {stats.translations_applied} translations for "
            f"{stats.texts_found} texts in {stats.elapsed_seconds:.2f} seconds"
        )
        return WorkbookResult(
            filename=os.path.basename(output_file),
            output_file=output_file,
            stats=stats
        )

    def apply_translation(
        self,
        worksheet,
        plan: TranslationPlan,
        row: int,
        column_index: int,
        text: str
    ) -> bool:
        """Write a translation into an empty target cell.

        A locked target keeps its own style; any other target takes the style
        of the source cell on the same row.

        Returns:
            True if the cell was written
        """
        target_cell = worksheet.cell(row=row, column=column_index)
        if not self.planner.is_empty(target_cell):
            logger.warning(f"Refusing to overwrite {target_cell.coordinate}")
            return False

        locked = self.planner.is_locked(target_cell)
        target_cell.value = text

        if not locked:
            source_cell = worksheet.cell(row=row, column=plan.source.column_index)
            target_cell.font = copy(source_cell.font)
            target_cell.fill = copy(source_cell.fill)
            target_cell.border = copy(source_cell.border)
            target_cell.alignment = copy(source_cell.alignment)
            target_cell.protection = copy(source_cell.protection)
            target_cell.number_format = source_cell.number_format

        logger.debug(f"Cell {target_cell.coordinate} set to {text!r}")
        return True

    def save_workbook(self, workbook: openpyxl.Workbook) -> str:
        """Save to ``translated_<epoch-millis>.xlsx`` in the output directory."""
        os.makedirs(self.settings.output_dir, exist_ok=True)
        filename = f"translated_{int(time.time() * 1000)}.xlsx"
        output_file = os.path.join(self.settings.output_dir, filename)
        workbook.save(output_file)
        logger.info(f"Saved to {output_file}")
        return output_file

    async def test_service_reachable_async(self) -> bool:
        """Check that the API key is set and the service answers.

        Raises:
            ConfigurationError: If no API key is configured
        """
        provider = self.provider
        try:
            await provider.ping()
        except TranslationServiceError as e:
            logger.error(f"Translation service is not reachable: {e}")
            return False
        return True

    def process_workbook(self, file_path: str) -> WorkbookResult:
        """Synchronous wrapper for process_workbook_async."""
        return asyncio.run(self.process_workbook_async(file_path))

    def test_service_reachable(self) -> bool:
        """Synchronous wrapper for test_service_reachable_async."""
        return asyncio.run(self.test_service_reachable_async())


def process_workbook(file_path: str, settings: Optional[Settings] = None) -> WorkbookResult:
    """Translate ``file_path`` with the default OpenAI provider."""
    return WorkbookTranslator(settings=settings).process_workbook(file_path)


def check_service_reachable(settings: Optional[Settings] = None) -> bool:
    """Check the configured translation service."""
    return WorkbookTranslator(settings=settings).test_service_reachable()
