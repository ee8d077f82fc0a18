"""Sheet Localizer - Fill missing locale columns of Excel workbooks with LLM translations."""

__version__ = "1.0.0"
__description__ = "Translates empty locale cells of a spreadsheet while keeping cell formatting."

from .planner import SpreadsheetTranslationPlanner
from .translation import BatchTranslationClient
from .workbook import WorkbookTranslator, process_workbook
from .cli import main

__all__ = ["SpreadsheetTranslationPlanner", "BatchTranslationClient", "WorkbookTranslator", "process_workbook", "main"]
