"""quota-transformer: normalize and categorize quota-request exports."""

from quota_transformer import serialize
from quota_transformer.cleaners import clean_region, clean_value, clean_vm_type
from quota_transformer.columns import ColumnResolver
from quota_transformer.config import TransformConfig
from quota_transformer.errors import (
    AdapterError,
    EmptyInputError,
    EmptyResultError,
    InsufficientRowsError,
    MissingColumnError,
    MissingHeaderError,
    NoTableFoundError,
    SerializationValidationError,
    SheetSelectionRequiredError,
    TransformError,
    UnknownParseError,
    UnsupportedFormatError,
)
from quota_transformer.headers import HeaderInfo, HeaderStrategy, locate_header
from quota_transformer.labels import DICTIONARY, translate_label
from quota_transformer.normalize import prepare_input
from quota_transformer.pipeline import TransformResult, transform_data
from quota_transformer.records import (
    FINAL_HEADERS,
    CanonicalRecord,
    InputMode,
    RequestTypeCode,
)
from quota_transformer.separator import Separator, detect_separator
from quota_transformer.serialize import (
    to_csv,
    to_html_table,
    to_json,
    to_pandas,
    to_polars,
    to_tsv,
    to_xlsx,
)

# Format adapters (lazy imports to avoid optional dependency issues)
def load_input_text(*args, **kwargs):
    """Read a CSV/TSV/TXT, Excel, Word or HTML file as pipeline input text."""
    from quota_transformer.loaders import load_input_text as _load
    return _load(*args, **kwargs)

def sheet_to_tsv(*args, **kwargs):
    """Convert one Excel worksheet to TSV. Requires: openpyxl (xlsx) / xlrd (xls)"""
    from quota_transformer.xlsx_extractor import sheet_to_tsv as _convert
    return _convert(*args, **kwargs)

def list_sheet_names(*args, **kwargs):
    """List the worksheets of an Excel workbook."""
    from quota_transformer.xlsx_extractor import list_sheet_names as _list
    return _list(*args, **kwargs)

def docx_to_tsv(*args, **kwargs):
    """Convert the first table of a DOCX file to TSV. Requires: python-docx"""
    from quota_transformer.docx_extractor import docx_to_tsv as _convert
    return _convert(*args, **kwargs)

def html_table_to_tsv(*args, **kwargs):
    """Convert the first HTML table to TSV. Requires: selectolax"""
    from quota_transformer.html_extractor import html_table_to_tsv as _convert
    return _convert(*args, **kwargs)


__all__ = [
    # Pipeline
    "TransformConfig",
    "TransformResult",
    "transform_data",
    "prepare_input",
    # Core types
    "CanonicalRecord",
    "ColumnResolver",
    "FINAL_HEADERS",
    "HeaderInfo",
    "HeaderStrategy",
    "InputMode",
    "RequestTypeCode",
    "Separator",
    # Building blocks
    "clean_region",
    "clean_value",
    "clean_vm_type",
    "detect_separator",
    "locate_header",
    # Errors
    "AdapterError",
    "EmptyInputError",
    "EmptyResultError",
    "InsufficientRowsError",
    "MissingColumnError",
    "MissingHeaderError",
    "NoTableFoundError",
    "SerializationValidationError",
    "SheetSelectionRequiredError",
    "TransformError",
    "UnknownParseError",
    "UnsupportedFormatError",
    # Labels
    "DICTIONARY",
    "translate_label",
    # Export
    "serialize",
    "to_csv",
    "to_html_table",
    "to_json",
    "to_pandas",
    "to_polars",
    "to_tsv",
    "to_xlsx",
    # Format adapters
    "docx_to_tsv",
    "html_table_to_tsv",
    "list_sheet_names",
    "load_input_text",
    "sheet_to_tsv",
]
