"""Missing-value-aware loading of spreadsheet and CSV data into typed columns.

Public entry points:
    load_table(file_path, *, sheet_name=0, na_values=(), config=None)
    infer(column, missing_set, name=None)
    reload_with_sentinels(file_path, na_values, *, sheet_name=0, config=None)

Sentinel strings for "missing" are always explicit: with no ``na_values`` a
column holding "NA" or blank cells stays text and each such cell is reported
as a diagnostic.
"""

from .errors import LoadError, SheetNotFoundError, UnsupportedFileError  # noqa: F401
from .inference import (  # noqa: F401
    Diagnostic,
    Missing,
    Number,
    Text,
    TypedColumn,
    infer,
    infer_frame,
)
from .diagnostics import DiagnosticReport  # noqa: F401
from .cleaning_utils import COMMON_NA_SENTINELS  # noqa: F401
from .loader import DEFAULT_CONFIG, LoadResult, load_table  # noqa: F401
from .data_profiler import DataProfiler, describe_column, describe_table  # noqa: F401
from .compare import compare_loads, reload_with_sentinels  # noqa: F401

__all__ = [
    "infer",
    "infer_frame",
    "load_table",
    "reload_with_sentinels",
    "compare_loads",
    "describe_table",
    "describe_column",
    "DataProfiler",
    "DiagnosticReport",
    "Diagnostic",
    "TypedColumn",
    "Number",
    "Missing",
    "Text",
    "LoadResult",
    "DEFAULT_CONFIG",
    "COMMON_NA_SENTINELS",
    "LoadError",
    "SheetNotFoundError",
    "UnsupportedFileError",
]
