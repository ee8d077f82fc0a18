"""Exception hierarchy for the sheet localizer."""


class SheetLocalizerError(Exception):
    """Base exception for all custom errors."""


class ConfigurationError(SheetLocalizerError):
    """Raised when required settings (such as the API key) are missing or invalid."""


class WorkbookLoadError(SheetLocalizerError):
    """Raised when the input workbook cannot be opened."""


class StructuralError(SheetLocalizerError):
    """Raised when the workbook layout leaves nothing to translate.

    Structural errors abort the run before any call to the translation service.
    """


class NoLanguageColumnsError(StructuralError):
    """Raised when no header matches a known locale code."""


class NoSourceColumnError(StructuralError):
    """Raised when no language column holds translatable text."""


class NoTargetColumnsError(StructuralError):
    """Raised when the source column is the only language column."""


class NoTranslationUnitsError(StructuralError):
    """Raised when every source text already has all its translations."""


class TranslationServiceError(SheetLocalizerError):
    """Raised by providers when a call to the translation service fails."""


class EmptyResponseError(TranslationServiceError):
    """Raised when the translation service replies without any content."""
