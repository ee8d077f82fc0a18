"""Column classification and translation unit extraction."""

import re
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional
import logging

from openpyxl.worksheet.worksheet import Worksheet

from .cell_policy import CellPolicy, GrayFillPolicy
from .errors import (
    NoLanguageColumnsError,
    NoSourceColumnError,
    NoTargetColumnsError,
    NoTranslationUnitsError,
)
from .locales import LocaleTable
from .utils import is_blank, is_numeric_text

logger = logging.getLogger(__name__)

HEADER_PATTERN = re.compile(r"^(\d+)\(([A-Z]{3})\)$")
HEADER_ROW = 1
FIRST_DATA_ROW = HEADER_ROW + 1


@dataclass(frozen=True)
class LanguageColumn:
    """A worksheet column holding one locale's text."""

    column_index: int
    header: str
    numeric_code: str
    locale_code: str


@dataclass(frozen=True)
class TranslationUnit:
    """A source text and the target columns missing its translation."""

    row: int
    source_text: str
    target_columns: FrozenSet[int]


@dataclass(frozen=True)
class TranslationPlan:
    source: LanguageColumn
    targets: List[LanguageColumn]
    units: List[TranslationUnit]

    def units_for(self, column_index: int) -> List[TranslationUnit]:
        """Units that still need a translation in the given column."""
        return [unit for unit in self.units if column_index in unit.target_columns]


class SpreadsheetTranslationPlanner:
    """Works out what needs translating in a worksheet.

    Rows and columns use openpyxl's 1-based numbering: row 1 holds the locale
    headers and data starts on row 2.
    """

    def __init__(
        self,
        locale_table: Optional[LocaleTable] = None,
        cell_policy: Optional[CellPolicy] = None,
        skip_locked_targets: bool = True
    ):
        """Initialize the planner.

        Args:
            locale_table: Numeric code to locale code lookup
            cell_policy: Detector for "do not translate" cells
            skip_locked_targets: Never plan translations into locked target cells
        """
        self.locale_table = locale_table or LocaleTable()
        self.cell_policy = cell_policy or GrayFillPolicy()
        self.skip_locked_targets = skip_locked_targets

    def plan(self, worksheet: Worksheet) -> TranslationPlan:
        """Run the full classification and extraction on a worksheet.

        Raises:
            StructuralError: When the sheet leaves nothing to translate
        """
        columns = self.classify_columns(worksheet)
        logger.info("Found language columns: " + ", ".join(
            f"{col.header} ({col.locale_code})" for col in columns.values()
        ))

        source = self.select_source_column(worksheet, columns)
        logger.info(f"Source column: {source.header} ({source.locale_code})")

        targets = self.select_target_columns(columns, source)
        logger.info("Target columns: " + ", ".join(
            f"{col.header} ({col.locale_code})" for col in targets
        ))

        units = self.build_translation_units(worksheet, source, targets)
        logger.info(f"Found {len(units)} texts to translate")
        if not units:
            raise NoTranslationUnitsError("No texts were found that need translation")

        return TranslationPlan(source=source, targets=targets, units=units)

    def classify_columns(self, worksheet: Worksheet) -> Dict[int, LanguageColumn]:
        """Map column index to LanguageColumn for every locale-coded header."""
        columns = {}

        for column_index in range(1, worksheet.max_column + 1):
            header = worksheet.cell(row=HEADER_ROW, column=column_index).value
            if not isinstance(header, str):
                continue

            match = HEADER_PATTERN.match(header)
            if not match:
                continue

            numeric_code, locale_code = match.groups()
            if not self.locale_table.matches(numeric_code, locale_code):
                logger.debug(f"Ignoring header {header!r}: {numeric_code} is not {locale_code}")
                continue

            columns[column_index] = LanguageColumn(
                column_index=column_index,
                header=header,
                numeric_code=numeric_code,
                locale_code=locale_code
            )

        if not columns:
            raise NoLanguageColumnsError(
                "No language columns found; headers must look like 1031(DEU)"
            )
        return columns

    def select_source_column(
        self,
        worksheet: Worksheet,
        columns: Dict[int, LanguageColumn]
    ) -> LanguageColumn:
        """Pick the column with the most translatable cells.

        Ties keep the first column encountered.
        """
        best_column = None
        max_count = 0

        for column in columns.values():
            count = sum(
                1
                for row in range(FIRST_DATA_ROW, worksheet.max_row + 1)
                if self.is_translatable(worksheet.cell(row=row, column=column.column_index))
            )
            logger.debug(f"Column {column.header} has {count} translatable cells")

            if count > max_count:
                max_count = count
                best_column = column

        if best_column is None:
            raise NoSourceColumnError("No source column with text to translate was found")
        return best_column

    def select_target_columns(
        self,
        columns: Dict[int, LanguageColumn],
        source: LanguageColumn
    ) -> List[LanguageColumn]:
        targets = [
            column for column in columns.values()
            if column.column_index != source.column_index
        ]
        if not targets:
            raise NoTargetColumnsError(
                f"{source.header} is the only language column; nothing to translate into"
            )
        return targets

    def is_translatable(self, cell) -> bool:
        """Check if a cell holds text worth translating.

        Empty, single-character, purely numeric, formula and locked cells are skipped.
        """
        value = cell.value
        if not isinstance(value, str):
            return False
        if cell.data_type == "f":
            return False

        text = value.strip()
        if len(text) < 2:
            return False
        if is_numeric_text(text):
            return False
        if self.is_locked(cell):
            return False
        return True

    def is_locked(self, cell) -> bool:
        return self.cell_policy.is_protected(cell)

    @staticmethod
    def is_empty(cell) -> bool:
        return is_blank(cell.value)

    def build_translation_units(
        self,
        worksheet: Worksheet,
        source: LanguageColumn,
        targets: List[LanguageColumn]
    ) -> List[TranslationUnit]:
        """Collect source texts whose translation is missing in some target column."""
        units = []

        for row in range(FIRST_DATA_ROW, worksheet.max_row + 1):
            source_cell = worksheet.cell(row=row, column=source.column_index)
            if not self.is_translatable(source_cell):
                continue

            empty_targets = []
            for target in targets:
                target_cell = worksheet.cell(row=row, column=target.column_index)
                if not self.is_empty(target_cell):
                    continue
                if self.skip_locked_targets and self.is_locked(target_cell):
                    logger.debug(f"Skipping locked cell {target_cell.coordinate}")
                    continue
                empty_targets.append(target.column_index)

            if empty_targets:
                units.append(TranslationUnit(
                    row=row,
                    source_text=source_cell.value,
                    target_columns=frozenset(empty_targets)
                ))

        return units
