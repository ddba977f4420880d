"""Exceptions raised when a source cannot be ingested at all.

Cell-level problems are never raised; they are collected as diagnostics.
"""


class LoadError(Exception):
    """Raised when a file is not readable as tabular data."""


class UnsupportedFileError(LoadError):
    """Raised for file extensions the loader does not handle."""


class SheetNotFoundError(LoadError):
    """Raised when the requested worksheet is not in the workbook."""

    def __init__(self, sheet, available):
        self.sheet = sheet
        self.available = list(available)
        super().__init__(
            f"Sheet {sheet!r} not found; available sheets: {', '.join(map(str, self.available)) or '(none)'}"
        )
