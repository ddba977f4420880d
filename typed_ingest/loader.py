from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

import pandas as pd

from .cleaning_utils import _drop_fully_blank_rows, build_headers, synthetic_headers
from .data_profiler import DataProfiler
from .diagnostics import DiagnosticReport
from .errors import LoadError, SheetNotFoundError, UnsupportedFileError
from .inference import TypedColumn, infer_frame

logger = logging.getLogger(__name__)

EXCEL_EXTENSIONS = (".xlsx", ".xlsm", ".xls")
CSV_EXTENSIONS = (".csv",)

DEFAULT_CONFIG: Dict[str, Any] = {
    # Index of the header row, counted after fully blank rows are dropped.
    "header_row": 0,
    "treat_first_row_as_data": False,
    "trim_whitespace": True,
    "drop_blank_rows": True,
}

SheetRef = Union[str, int]


@dataclass
class LoadResult:
    """Typed table plus everything observed while producing it."""

    table: pd.DataFrame
    columns: Dict[str, TypedColumn]
    diagnostics: DiagnosticReport
    source: Dict[str, Any] = field(default_factory=dict)

    @property
    def column_kinds(self) -> Dict[str, str]:
        return {name: col.kind for name, col in self.columns.items()}

    @property
    def numeric_columns(self) -> List[str]:
        return [name for name, col in self.columns.items() if col.is_numeric]

    @property
    def text_columns(self) -> List[str]:
        return [name for name, col in self.columns.items() if not col.is_numeric]

    def to_payload(self, include_stats: bool = True) -> Dict[str, Any]:
        """JSON-ready description of the load."""
        payload: Dict[str, Any] = {
            "source": {**self.source, "na_values": sorted(self.source.get("na_values", []))},
            "dataset": {
                "rows": int(self.table.shape[0]),
                "columns": int(self.table.shape[1]),
                "column_names": list(self.table.columns),
            },
            "column_kinds": self.column_kinds,
            "diagnostics": {
                "total": len(self.diagnostics),
                "by_column": self.diagnostics.summary(),
            },
        }
        if include_stats:
            payload["statistics"] = DataProfiler().describe_table(self)
        return payload


def _resolve_config(config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    cfg = dict(DEFAULT_CONFIG)
    if config:
        unknown = sorted(set(config) - set(DEFAULT_CONFIG))
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        cfg.update(config)
    if int(cfg["header_row"]) < 0:
        raise ValueError("header_row must be >= 0")
    return cfg


def _normalize_na_values(na_values: Optional[Iterable[str]]) -> frozenset:
    if na_values is None:
        return frozenset()
    if isinstance(na_values, str):
        # A bare string is one sentinel, not a set of characters.
        return frozenset([na_values])
    return frozenset(str(v) for v in na_values)


def _resolve_sheet(sheet_name: SheetRef, available: List[str]) -> SheetRef:
    """Match a sheet by exact name first, then by 0-based position.

    A digit string such as ``"2024"`` names a sheet when one has that name and
    is read as a position otherwise.
    """
    if sheet_name in available:
        return sheet_name
    position = sheet_name
    if isinstance(sheet_name, str) and sheet_name.isdigit():
        position = int(sheet_name)
    if isinstance(position, int) and 0 <= position < len(available):
        return position
    raise SheetNotFoundError(sheet_name, available)


def _read_excel(path: Path, sheet_name: SheetRef) -> pd.DataFrame:
    engine = None if path.suffix.lower() == ".xls" else "openpyxl"
    try:
        with pd.ExcelFile(path, engine=engine) as book:
            sheet = _resolve_sheet(sheet_name, list(book.sheet_names))
            return pd.read_excel(
                book,
                sheet_name=sheet,
                header=None,
                dtype=object,
                keep_default_na=False,
                na_filter=False,
            )
    except LoadError:
        raise
    except Exception as exc:
        raise LoadError(f"Could not read workbook {path}: {exc}") from exc


def _read_csv(path: Path) -> pd.DataFrame:
    try:
        return pd.read_csv(
            path,
            header=None,
            dtype=str,
            keep_default_na=False,
            na_filter=False,
            engine="python",
        )
    except pd.errors.EmptyDataError as exc:
        raise LoadError(f"No tabular data in {path}") from exc
    except (pd.errors.ParserError, UnicodeDecodeError, ValueError) as exc:
        raise LoadError(f"Could not parse {path} as CSV: {exc}") from exc


def _load_raw(file_path: Union[str, Path], sheet_name: SheetRef) -> Tuple[pd.DataFrame, str]:
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    ext = path.suffix.lower()
    if ext in EXCEL_EXTENSIONS:
        return _read_excel(path, sheet_name), "excel"
    if ext in CSV_EXTENSIONS:
        if sheet_name not in (0, "0"):
            logger.debug("Ignoring sheet %r for CSV source %s", sheet_name, path)
        return _read_csv(path), "csv"
    raise UnsupportedFileError(f"Unsupported file type: {ext or '(none)'}")


def _split_header(df_raw: pd.DataFrame, cfg: Dict[str, Any]) -> pd.DataFrame:
    """Return the body of ``df_raw`` with header names applied."""
    df_work = _drop_fully_blank_rows(df_raw) if cfg["drop_blank_rows"] else df_raw.reset_index(drop=True)

    if cfg["treat_first_row_as_data"]:
        body = df_work.reset_index(drop=True)
        body.columns = synthetic_headers(df_work.shape[1])
        return body

    header_row = int(cfg["header_row"])
    if header_row >= df_work.shape[0]:
        if df_work.empty:
            return pd.DataFrame()
        raise LoadError(
            f"header_row={header_row} is beyond the {df_work.shape[0]} non-blank rows in the source"
        )
    headers = build_headers(df_work.iloc[header_row].tolist())
    body = df_work.iloc[header_row + 1 :].reset_index(drop=True)
    body.columns = headers
    return body


def load_table(
    file_path: Union[str, Path],
    *,
    sheet_name: SheetRef = 0,
    na_values: Optional[Iterable[str]] = (),
    config: Optional[Dict[str, Any]] = None,
) -> LoadResult:
    """Load one sheet (or CSV) into typed columns.

    Parameters
    ----------
    file_path : str or Path
        ``.xlsx``/``.xlsm``/``.xls`` workbook or ``.csv`` file.
    sheet_name : str or int
        Worksheet name or 0-based position. Ignored for CSV.
    na_values : iterable of str
        Sentinel strings meaning "missing". Nothing is treated as missing
        unless listed here, the empty string included.
    config : dict, optional
        Overrides for DEFAULT_CONFIG.

    Raises
    ------
    FileNotFoundError, UnsupportedFileError, SheetNotFoundError, LoadError
        When the source cannot be read at all. Bad cells never raise.
    """
    cfg = _resolve_config(config)
    missing_set = _normalize_na_values(na_values)
    logger.info("Loading %s (sheet=%r, na_values=%s)", file_path, sheet_name, sorted(missing_set))

    df_raw, file_kind = _load_raw(file_path, sheet_name)
    body = _split_header(df_raw, cfg)

    table, columns, diagnostics = infer_frame(
        body, missing_set, trim=bool(cfg["trim_whitespace"])
    )
    report = DiagnosticReport(diagnostics)

    for name, diags in report.by_column().items():
        logger.info("Column %r kept as text (%d unparsed cell(s))", name, len(diags))
    logger.info(
        "Loaded %d rows x %d columns from %s with %d diagnostic(s)",
        table.shape[0],
        table.shape[1],
        file_path,
        len(report),
    )

    source = {
        "path": str(file_path),
        "sheet": sheet_name if file_kind == "excel" else None,
        "file_kind": file_kind,
        "rows": int(table.shape[0]),
        "na_values": missing_set,
    }
    return LoadResult(table=table, columns=columns, diagnostics=report, source=source)
