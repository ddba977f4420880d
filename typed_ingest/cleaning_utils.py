"""Raw-cell utilities shared by the inferencer and the loader.

Only text-level helpers live here:
  - Raw text conversion (to_raw_text, _normalize_whitespace_and_minus)
  - Strict numeric parsing (NUMERIC_PATTERN, parse_numeric_series)
  - Row/header handling (_drop_fully_blank_rows, build_headers)

No sentinel is ever applied implicitly. COMMON_NA_SENTINELS is a curated list
callers may opt into.
"""

from __future__ import annotations

from typing import Iterable, List, Dict, Tuple
import re
import numpy as np
import pandas as pd

# -----------------------------
# Opt-in sentinel preset (case-sensitive, matched after trimming)
# -----------------------------
COMMON_NA_SENTINELS = frozenset(
    {
        "",
        "-",
        "--",
        "NA",
        "N/A",
        "n/a",
        "na",
        "N.A.",
        "n.a.",
        "NaN",
        "nan",
        "NULL",
        "null",
        "None",
        "none",
        "nil",
        "missing",
        "Missing",
        "#N/A",
        "#NULL!",
        "#DIV/0!",
        "#VALUE!",
        "#REF!",
        "#NAME?",
        "#NUM!",
        "(blank)",
        "(empty)",
    }
)

# Plain decimal notation only: no "nan"/"inf", separators or currency marks.
NUMERIC_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def _normalize_whitespace_and_minus(series: pd.Series) -> pd.Series:
    s = series.astype(str)
    s = s.str.replace("\u2212", "-", regex=False)
    s = s.str.replace("\u00a0", " ", regex=False)
    s = s.str.replace(r"[\u2000-\u200B]", " ", regex=True)
    return s


def _cell_to_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and np.isnan(value):
        return ""
    if value is pd.NaT or value is pd.NA:
        return ""
    if isinstance(value, float) and value.is_integer():
        # Spreadsheet number cells: 5.0 reads back the way the cell shows it.
        return str(int(value))
    return str(value)


def to_raw_text(series: pd.Series, trim: bool = True) -> pd.Series:
    """Render every cell of ``series`` as text; blank cells become ``""``."""
    s = pd.Series(
        [_cell_to_text(v) for v in series.tolist()], index=series.index, dtype=object
    )
    if trim:
        s = _normalize_whitespace_and_minus(s).str.strip()
    return s.astype(object)


def parse_numeric_series(series: pd.Series) -> Tuple[pd.Series, pd.Series]:
    """Parse text cells strictly.

    Returns ``(values, ok)`` where ``ok`` marks cells that matched
    NUMERIC_PATTERN and converted to a finite float, and ``values`` holds
    those floats (NaN elsewhere). Overflowing literals such as ``1e999`` are
    not ok.
    """
    s = series.astype(str)
    ok = s.str.fullmatch(NUMERIC_PATTERN.pattern).fillna(False).astype(bool)
    values = pd.to_numeric(s.where(ok), errors="coerce").astype(float)
    ok = ok & pd.Series(np.isfinite(values.to_numpy()), index=values.index)
    return values.where(ok), ok


def _drop_fully_blank_rows(df: pd.DataFrame) -> pd.DataFrame:
    if df.empty:
        return df
    is_blank = df.apply(lambda s: to_raw_text(s).eq(""), axis=0)
    keep_mask = ~is_blank.all(axis=1)
    return df.loc[keep_mask].reset_index(drop=True)


def _dedupe_headers(headers: List[str]) -> List[str]:
    # Suffixed names must not collide with any header already in the row.
    taken = set(headers)
    seen: Dict[str, int] = {}
    used: set = set()
    out: List[str] = []
    for h in headers:
        if h not in used:
            used.add(h)
            out.append(h)
            continue
        n = seen.get(h, 0)
        while True:
            n += 1
            candidate = f"{h}_{n}"
            if candidate not in used and candidate not in taken:
                break
        seen[h] = n
        used.add(candidate)
        out.append(candidate)
    return out


def build_headers(row: Iterable[object]) -> List[str]:
    """Turn a header row into unique, non-blank column names."""
    headers: List[str] = []
    for i, val in enumerate(row):
        s = re.sub(r"\s+", " ", _cell_to_text(val).strip())
        headers.append(s or f"Column_{i+1}")
    return _dedupe_headers(headers)


def synthetic_headers(n: int) -> List[str]:
    return [f"Column_{i+1}" for i in range(n)]


__all__ = [
    "COMMON_NA_SENTINELS",
    "NUMERIC_PATTERN",
    "to_raw_text",
    "parse_numeric_series",
    "_drop_fully_blank_rows",
    "build_headers",
    "synthetic_headers",
    "_normalize_whitespace_and_minus",
]
