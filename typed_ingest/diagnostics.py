"""Aggregate view over per-cell parse diagnostics."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List

import pandas as pd

from .inference import Diagnostic


class DiagnosticReport:
    """Diagnostics collected during one load, inspectable per column.

    Grouping the offending values by column lets a caller see whether a column
    fell back to text because of genuinely mixed data (``"two"``, ``"n.d."``)
    or because of a sentinel that was not configured (``"NA"`` everywhere).
    """

    def __init__(self, diagnostics: Iterable[Diagnostic] = ()):
        self._diagnostics: List[Diagnostic] = list(diagnostics)

    def __len__(self) -> int:
        return len(self._diagnostics)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._diagnostics)

    def __bool__(self) -> bool:
        return bool(self._diagnostics)

    def __repr__(self) -> str:
        return f"DiagnosticReport({len(self)} diagnostics in {len(self.by_column())} columns)"

    def by_column(self) -> Dict[str, List[Diagnostic]]:
        grouped: Dict[str, List[Diagnostic]] = {}
        for d in self._diagnostics:
            grouped.setdefault(d.column, []).append(d)
        return grouped

    def summary(self) -> Dict[str, Dict[str, Any]]:
        """Per affected column: count, distinct offending values, first row."""
        out: Dict[str, Dict[str, Any]] = {}
        for column, diags in self.by_column().items():
            out[column] = {
                "count": len(diags),
                "distinct_values": sorted({d.value for d in diags}),
                "first_row": min(d.row for d in diags),
            }
        return out

    def to_records(self) -> List[Dict[str, Any]]:
        return [
            {"column": d.column, "row": d.row, "value": d.value, "expected": d.expected}
            for d in self._diagnostics
        ]

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            self.to_records(), columns=["column", "row", "value", "expected"]
        )
