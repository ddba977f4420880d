from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple, Union

import pandas as pd

from .data_profiler import DataProfiler
from .loader import LoadResult, SheetRef, load_table

COMPARE_COLUMNS = [
    "kind_before",
    "kind_after",
    "changed",
    "diagnostics_before",
    "diagnostics_after",
    "missing_before",
    "missing_after",
    "mean_before",
    "mean_after",
    "levels_before",
    "levels_after",
]


def _column_facts(result: LoadResult, name: str, profiler: DataProfiler) -> Dict[str, Any]:
    col = result.columns.get(name)
    if col is None:
        return {"kind": None, "diagnostics": 0, "missing": None, "mean": None, "levels": None}
    stats = profiler.describe_column(col)
    return {
        "kind": col.kind,
        "diagnostics": len(result.diagnostics.by_column().get(name, [])),
        "missing": stats["missing"],
        "mean": stats.get("mean"),
        "levels": stats.get("levels"),
    }


def compare_loads(before: LoadResult, after: LoadResult) -> pd.DataFrame:
    """Column-by-column view of how two loads of the same data differ.

    Columns present in only one load appear with ``None`` on the other side.
    """
    profiler = DataProfiler()
    order = list(before.columns)
    for name in after.columns:
        if name not in order:
            order.append(name)

    rows = []
    for name in order:
        b = _column_facts(before, name, profiler)
        a = _column_facts(after, name, profiler)
        rows.append(
            {
                "column": name,
                "kind_before": b["kind"],
                "kind_after": a["kind"],
                "changed": b["kind"] != a["kind"],
                "diagnostics_before": b["diagnostics"],
                "diagnostics_after": a["diagnostics"],
                "missing_before": b["missing"],
                "missing_after": a["missing"],
                "mean_before": b["mean"],
                "mean_after": a["mean"],
                "levels_before": b["levels"],
                "levels_after": a["levels"],
            }
        )
    # object dtype: one-sided columns keep None on every pandas version
    return pd.DataFrame(rows, columns=["column"] + COMPARE_COLUMNS, dtype=object).set_index("column")


def reload_with_sentinels(
    file_path: Union[str, Path],
    na_values: Iterable[str],
    *,
    sheet_name: SheetRef = 0,
    config: Optional[Dict[str, Any]] = None,
) -> Tuple[LoadResult, LoadResult, pd.DataFrame]:
    """Load once with no sentinels and once with ``na_values``; compare the two."""
    before = load_table(file_path, sheet_name=sheet_name, na_values=(), config=config)
    after = load_table(file_path, sheet_name=sheet_name, na_values=na_values, config=config)
    return before, after, compare_loads(before, after)
