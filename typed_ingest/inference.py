"""Missing-value-aware column type inference.

A raw column is a sequence of cell texts. Given a set of sentinel strings that
mean "no data", each column is typed as either numeric or text:

    infer(["1", "NA", "3.5"], {"NA"})  -> numeric [1.0, Missing, 3.5]
    infer(["1", "NA", "3.5"], set())   -> text, one diagnostic for "NA"

A column is numeric only if every non-sentinel value parses as a number.
Otherwise it is kept as text and every offending cell is reported as a
Diagnostic. Nothing is raised and nothing goes through ``warnings``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import AbstractSet, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from .cleaning_utils import parse_numeric_series, to_raw_text

logger = logging.getLogger(__name__)

NUMERIC = "numeric"
TEXT = "text"


@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class Missing:
    pass


@dataclass(frozen=True)
class Text:
    value: str


CellValue = Union[Number, Missing, Text]

MISSING = Missing()


@dataclass(frozen=True)
class Diagnostic:
    """A cell that was expected to be numeric but was neither a number nor a sentinel."""

    column: str
    row: int
    value: str
    expected: str = NUMERIC

    @property
    def message(self) -> str:
        return f"expecting {self.expected}, got {self.value!r} (column {self.column!r}, row {self.row})"


@dataclass
class TypedColumn:
    name: str
    kind: str
    values: List[CellValue] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.values)

    @property
    def is_numeric(self) -> bool:
        return self.kind == NUMERIC

    @property
    def missing_count(self) -> int:
        return sum(isinstance(v, Missing) for v in self.values)

    def to_series(self) -> pd.Series:
        """Numeric columns become float64, text columns a pandas category."""
        if self.is_numeric:
            data = [v.value if isinstance(v, Number) else np.nan for v in self.values]
            return pd.Series(data, name=self.name, dtype=float)
        data = [v.value if isinstance(v, Text) else np.nan for v in self.values]
        return pd.Series(data, name=self.name, dtype="category")


def infer(
    column: Union[Sequence[object], pd.Series],
    missing_set: AbstractSet[str] = frozenset(),
    name: Optional[str] = None,
    *,
    trim: bool = True,
) -> Tuple[TypedColumn, List[Diagnostic]]:
    """Type one raw column.

    Parameters
    ----------
    column : sequence or pd.Series
        Raw cells. Non-text cells (blank cells, numbers read by a spreadsheet
        engine) are rendered as text first.
    missing_set : set of str
        Sentinel strings meaning "value absent". Empty means nothing is
        special-cased.
    name : str, optional
        Column name used in diagnostics; defaults to the Series name.
    trim : bool
        Strip surrounding whitespace before matching and parsing.

    Returns
    -------
    (TypedColumn, list of Diagnostic)
    """
    series = column if isinstance(column, pd.Series) else pd.Series(list(column), dtype=object)
    if name is None:
        name = "" if series.name is None else str(series.name)
    raw = to_raw_text(series, trim=trim).reset_index(drop=True)

    missing_mask = raw.isin(set(missing_set))
    values, ok = parse_numeric_series(raw)
    bad_mask = ~missing_mask & ~ok

    diagnostics = [
        Diagnostic(column=name, row=int(i), value=raw.iat[i])
        for i in np.flatnonzero(bad_mask.to_numpy())
    ]

    missing_flags = missing_mask.tolist()
    if not diagnostics:
        typed: List[CellValue] = [
            MISSING if is_missing else Number(float(v))
            for is_missing, v in zip(missing_flags, values.tolist())
        ]
        return TypedColumn(name, NUMERIC, typed), diagnostics

    logger.debug(
        "Column %r kept as text: %d cell(s) not numeric", name, len(diagnostics)
    )
    typed = [
        MISSING if is_missing else Text(text)
        for is_missing, text in zip(missing_flags, raw.tolist())
    ]
    return TypedColumn(name, TEXT, typed), diagnostics


def infer_frame(
    df: pd.DataFrame,
    missing_set: AbstractSet[str] = frozenset(),
    *,
    trim: bool = True,
) -> Tuple[pd.DataFrame, Dict[str, TypedColumn], List[Diagnostic]]:
    """Run ``infer`` on every column of a raw frame.

    Returns the typed DataFrame, the TypedColumn per column name and all
    diagnostics in column order.

    Raises ValueError if column labels are not unique.
    """
    duplicated = df.columns[df.columns.duplicated()]
    if len(duplicated):
        raise ValueError(
            f"Column labels must be unique; duplicated: {', '.join(map(str, duplicated.unique()))}"
        )
    columns: Dict[str, TypedColumn] = {}
    diagnostics: List[Diagnostic] = []
    for col in df.columns:
        typed, diags = infer(df[col], missing_set, name=str(col), trim=trim)
        columns[typed.name] = typed
        diagnostics.extend(diags)

    table = pd.DataFrame(
        {name: typed.to_series() for name, typed in columns.items()},
        index=pd.RangeIndex(len(df)),
    )
    return table, columns, diagnostics


def to_text(column: TypedColumn, missing_text: str) -> List[str]:
    """Render a typed column back to raw text, writing missing cells as ``missing_text``."""
    out: List[str] = []
    for v in column.values:
        if isinstance(v, Missing):
            out.append(missing_text)
        elif isinstance(v, Number):
            out.append(repr(v.value))
        else:
            out.append(v.value)
    return out


__all__ = [
    "NUMERIC",
    "TEXT",
    "Number",
    "Missing",
    "Text",
    "CellValue",
    "MISSING",
    "Diagnostic",
    "TypedColumn",
    "infer",
    "infer_frame",
    "to_text",
]
