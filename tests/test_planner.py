"""Tests for column classification and translation unit extraction."""

import pytest
from openpyxl.styles import PatternFill

from conftest import make_sheet
from sheet_localizer.errors import (
    NoLanguageColumnsError,
    NoSourceColumnError,
    NoTargetColumnsError,
    NoTranslationUnitsError,
)
from sheet_localizer.locales import LocaleTable
from sheet_localizer.planner import SpreadsheetTranslationPlanner

GRAY = PatternFill(fill_type="solid", fgColor="D9D9D9")


class TestClassifyColumns:
    """Test header classification."""

    def test_known_headers_are_classified(self):
        """Test that locale-coded headers map to their columns."""
        sheet = make_sheet([["Key", "1031(DEU)", "2057(ENG)", "Notes"]])
        columns = SpreadsheetTranslationPlanner().classify_columns(sheet)

        assert sorted(columns) == [2, 3]
        assert columns[2].header == "1031(DEU)"
        assert columns[2].numeric_code == "1031"
        assert columns[2].locale_code == "DEU"
        assert columns[3].locale_code == "ENG"

    def test_mismatched_and_malformed_headers_are_ignored(self):
        """Test that headers disagreeing with the table or the pattern are skipped."""
        sheet = make_sheet([[
            "1031(ENG)",    # code belongs to DEU
            "9999(DEU)",    # unknown code
            "1031 (DEU)",   # space
            "1031(deu)",    # lower case
            "x1036(FRA)",   # prefix
            " 1031(DEU)",   # leading space
            "1031(DEU) ",   # trailing space
            "1036(FRA)",
        ]])
        columns = SpreadsheetTranslationPlanner().classify_columns(sheet)

        assert list(columns) == [8]

    def test_no_language_columns_raises(self):
        """Test that a sheet without locale headers is a structural failure."""
        sheet = make_sheet([["Key", "Text"], ["a", "Hello"]])
        with pytest.raises(NoLanguageColumnsError):
            SpreadsheetTranslationPlanner().classify_columns(sheet)

    def test_injected_locale_table(self):
        """Test that classification follows the table given to the planner."""
        table = LocaleTable(codes={"7": "XXX"}, names={"XXX": "Test"})
        sheet = make_sheet([["7(XXX)", "1031(DEU)"]])
        columns = SpreadsheetTranslationPlanner(locale_table=table).classify_columns(sheet)

        assert list(columns) == [1]


class TestSelectColumns:
    """Test source and target column selection."""

    def test_most_populated_column_is_source(self):
        """Test that 9 translatable cells beat 3 regardless of column order."""
        rows = [["2057(ENG)", "1031(DEU)"]]
        for i in range(9):
            rows.append([f"Text {i}" if i < 3 else None, f"Satz {i}"])
        sheet = make_sheet(rows)

        planner = SpreadsheetTranslationPlanner()
        columns = planner.classify_columns(sheet)
        source = planner.select_source_column(sheet, columns)

        assert source.locale_code == "DEU"

    def test_tie_keeps_first_column(self):
        """Test that equal counts keep the left-most column."""
        sheet = make_sheet([["1031(DEU)", "2057(ENG)"], ["Hallo", "Hello"]])
        planner = SpreadsheetTranslationPlanner()
        source = planner.select_source_column(sheet, planner.classify_columns(sheet))

        assert source.locale_code == "DEU"

    def test_numeric_cells_do_not_count(self):
        """Test that numbers never make a column the source."""
        sheet = make_sheet([
            ["1031(DEU)", "2057(ENG)"],
            ["42", "Hello"],
            [7, None],
            ["3.14", None],
        ])
        planner = SpreadsheetTranslationPlanner()
        source = planner.select_source_column(sheet, planner.classify_columns(sheet))

        assert source.locale_code == "ENG"

    def test_no_translatable_text_raises(self):
        """Test that columns holding only numbers have no source."""
        sheet = make_sheet([["1031(DEU)", "2057(ENG)"], ["42", None]])
        planner = SpreadsheetTranslationPlanner()
        with pytest.raises(NoSourceColumnError):
            planner.select_source_column(sheet, planner.classify_columns(sheet))

    def test_single_language_column_has_no_targets(self):
        """Test that one classified column is a structural failure, not a crash."""
        sheet = make_sheet([["1031(DEU)", "Notes"], ["Hallo", "x"]])
        planner = SpreadsheetTranslationPlanner()
        with pytest.raises(NoTargetColumnsError):
            planner.plan(sheet)

    def test_targets_keep_order(self):
        """Test that every non-source column is a target, in column order."""
        sheet = make_sheet([["1036(FRA)", "1031(DEU)", "2057(ENG)"], [None, "Hallo", None]])
        planner = SpreadsheetTranslationPlanner()
        columns = planner.classify_columns(sheet)
        source = planner.select_source_column(sheet, columns)
        targets = planner.select_target_columns(columns, source)

        assert [t.locale_code for t in targets] == ["FRA", "ENG"]


class TestCellPredicates:
    """Test the translatable and empty checks."""

    @pytest.mark.parametrize("value, expected", [
        ("Hello", True),
        ("  Hi  ", True),
        ("A", False),
        (" A ", False),
        ("", False),
        ("   ", False),
        (None, False),
        ("42", False),
        ("3.14", False),
        (42, False),
        ("42 apples", True),
        ("v1.2.3", True),
    ])
    def test_is_translatable(self, worksheet, value, expected):
        """Test translatable text detection."""
        cell = worksheet.cell(row=2, column=1)
        cell.value = value
        assert SpreadsheetTranslationPlanner().is_translatable(cell) is expected

    def test_locked_cell_is_not_translatable(self, worksheet):
        """Test that gray cells are excluded from source text."""
        cell = worksheet.cell(row=2, column=1)
        cell.value = "Brand name"
        cell.fill = GRAY
        assert SpreadsheetTranslationPlanner().is_translatable(cell) is False

    @pytest.mark.parametrize("formula", ['=CONCAT("Hal","lo")', "=A1", '=IF(B2="","leer","voll")'])
    def test_formula_cell_is_not_translatable(self, worksheet, formula):
        """Test that formulas are never sent for translation."""
        cell = worksheet.cell(row=2, column=1)
        cell.value = formula

        assert cell.data_type == "f"
        assert SpreadsheetTranslationPlanner().is_translatable(cell) is False

    def test_formulas_do_not_count_towards_source(self):
        """Test that a column of formulas loses to a column of text."""
        sheet = make_sheet([
            ["1031(DEU)", "2057(ENG)"],
            ["=B2", "Hello"],
            ['=CONCAT("Hal","lo")', None],
            ["=UPPER(B2)", None],
        ])
        planner = SpreadsheetTranslationPlanner()
        source = planner.select_source_column(sheet, planner.classify_columns(sheet))

        assert source.locale_code == "ENG"

    @pytest.mark.parametrize("value, expected", [
        (None, True),
        ("", True),
        ("  ", True),
        ("x", False),
        (0, False),
    ])
    def test_is_empty(self, worksheet, value, expected):
        """Test emptiness, which ignores the length and numeric rules."""
        cell = worksheet.cell(row=2, column=1)
        cell.value = value
        assert SpreadsheetTranslationPlanner.is_empty(cell) is expected


class TestBuildTranslationUnits:
    """Test unit extraction."""

    def test_units_list_empty_targets_only(self):
        """Test that filled target cells are never scheduled."""
        sheet = make_sheet([
            ["1031(DEU)", "2057(ENG)", "1036(FRA)"],
            ["Hallo", None, "Bonjour"],
            ["Danke", "Thanks", "Merci"],
            ["Bitte", "", None],
            ["42", None, None],
        ])
        plan = SpreadsheetTranslationPlanner().plan(sheet)

        assert plan.source.locale_code == "DEU"
        assert [(u.row, u.source_text, sorted(u.target_columns)) for u in plan.units] == [
            (2, "Hallo", [2]),
            (4, "Bitte", [2, 3]),
        ]
        assert [u.row for u in plan.units_for(3)] == [4]

    def test_locked_source_rows_are_skipped(self):
        """Test that a gray source cell produces no unit."""
        sheet = make_sheet([["1031(DEU)", "2057(ENG)"], ["Hallo", None], ["Marke", None]])
        sheet["A3"].fill = GRAY
        plan = SpreadsheetTranslationPlanner().plan(sheet)

        assert [u.row for u in plan.units] == [2]

    def test_locked_empty_targets_are_skipped_by_default(self):
        """Test that gray target cells never receive a translation."""
        sheet = make_sheet([["1031(DEU)", "2057(ENG)", "1036(FRA)"], ["Hallo", None, None]])
        sheet["B2"].fill = GRAY
        plan = SpreadsheetTranslationPlanner().plan(sheet)

        assert plan.units[0].target_columns == frozenset({3})

    def test_locked_empty_targets_allowed_when_configured(self):
        """Test that lock and emptiness can be treated independently."""
        sheet = make_sheet([["1031(DEU)", "2057(ENG)"], ["Hallo", None]])
        sheet["B2"].fill = GRAY
        planner = SpreadsheetTranslationPlanner(skip_locked_targets=False)

        assert planner.plan(sheet).units[0].target_columns == frozenset({2})

    def test_fully_translated_sheet_raises(self):
        """Test that a sheet without missing translations aborts."""
        sheet = make_sheet([["1031(DEU)", "2057(ENG)"], ["Hallo", "Hello"]])
        with pytest.raises(NoTranslationUnitsError):
            SpreadsheetTranslationPlanner().plan(sheet)
