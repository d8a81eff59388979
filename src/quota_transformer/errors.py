"""Typed errors raised by the transform pipeline and the format adapters.

Pipeline errors all derive from :class:`TransformError`, so a caller can catch
one class and display ``str(err)``.  Adapter errors derive from
:class:`AdapterError` and are raised before the pipeline ever runs.
"""

from __future__ import annotations


# ---------------------------------------------------------------------------
# Pipeline errors
# ---------------------------------------------------------------------------


class TransformError(Exception):
    """Base class for every failure of :func:`transform_data`."""


class EmptyInputError(TransformError):
    """Input is empty or whitespace-only after pre-processing."""

    def __init__(self, message: str = "Input data cannot be empty."):
        super().__init__(message)


class InsufficientRowsError(TransformError):
    """Fewer than one header row plus one data row remain."""

    def __init__(
        self,
        message: str = "Input must contain a header row and at least one data row.",
    ):
        super().__init__(message)


class MissingHeaderError(TransformError):
    """No row carries an identifier column (``ID`` / ``RDQuota`` / ``QuotaId``)."""

    def __init__(
        self,
        message: str = 'Missing required header column: "ID" or "RDQuota"',
    ):
        super().__init__(message)


class MissingColumnError(TransformError):
    """A required field has no resolvable column in raw mode."""

    def __init__(self, field_name: str, message: str | None = None):
        super().__init__(message or f'Missing required header column: "{field_name}"')
        self.field_name = field_name


class EmptyResultError(TransformError):
    """Every data row was dropped as degenerate."""

    def __init__(
        self,
        message: str = "No valid data rows could be processed. Please check your input.",
    ):
        super().__init__(message)


class UnknownParseError(TransformError):
    """Unexpected failure while parsing; wraps the underlying exception."""

    def __init__(self, cause: BaseException):
        super().__init__(f"An unknown error occurred during processing: {cause}")
        self.cause = cause


# ---------------------------------------------------------------------------
# Adapter errors
# ---------------------------------------------------------------------------


class AdapterError(Exception):
    """A source file could not be turned into delimited text."""


class UnsupportedFormatError(AdapterError):
    """The file extension is not one the loaders know how to read."""

    def __init__(self, suffix: str):
        super().__init__(
            f"Unsupported file format {suffix!r}. "
            "Please upload CSV, Excel, Word, or HTML files."
        )
        self.suffix = suffix


class NoTableFoundError(AdapterError):
    """The Word or HTML document holds no ``<table>`` element."""

    def __init__(self, source: str):
        super().__init__(f"No table found in the {source}.")
        self.source = source


class SheetSelectionRequiredError(AdapterError):
    """A multi-sheet workbook was given without choosing a sheet."""

    def __init__(self, sheet_names: list[str]):
        super().__init__(
            "Workbook has multiple sheets; select one of: " + ", ".join(sheet_names)
        )
        self.sheet_names = sheet_names


class SerializationValidationError(Exception):
    """Raised when an export row fails validation."""

    def __init__(
        self,
        message: str,
        record_index: int,
        column_name: str | None = None,
    ):
        super().__init__(message)
        self.record_index = record_index
        self.column_name = column_name
