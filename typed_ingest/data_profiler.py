import pandas as pd
from typing import Dict, Any, List, Optional

from .inference import TypedColumn


class DataProfiler:
    """Descriptive statistics over typed columns."""

    def describe_table(self, result) -> Dict[str, Any]:
        """Profile every column of a LoadResult."""

        columns = {
            name: self.describe_column(col) for name, col in result.columns.items()
        }

        return {
            "dataset_info": self._get_dataset_info(result),
            "columns": columns,
        }

    def _get_dataset_info(self, result) -> Dict[str, Any]:
        """Get basic dataset information."""

        missing_cells = sum(col.missing_count for col in result.columns.values())
        return {
            "total_rows": int(result.table.shape[0]),
            "total_columns": int(result.table.shape[1]),
            "numeric_columns": result.numeric_columns,
            "text_columns": result.text_columns,
            "missing_cells": int(missing_cells),
        }

    def describe_column(self, column: TypedColumn) -> Dict[str, Any]:
        """Generate profile for a single typed column."""

        series = column.to_series()
        missing = int(series.isnull().sum())
        profile = {
            "name": column.name,
            "kind": column.kind,
            "count": int(len(series) - missing),
            "missing": missing,
        }

        if column.is_numeric:
            profile.update(self._get_numeric_statistics(series))
        else:
            profile.update(self._get_text_statistics(series))

        return profile

    def _get_numeric_statistics(self, series: pd.Series) -> Dict[str, Optional[float]]:
        """Get numeric statistics for series."""

        clean_series = series.dropna()

        if len(clean_series) == 0:
            return {k: None for k in ("mean", "median", "std", "min", "max")}

        std = float(clean_series.std()) if len(clean_series) > 1 else None
        return {
            "mean": float(clean_series.mean()),
            "median": float(clean_series.median()),
            "std": std,
            "min": float(clean_series.min()),
            "max": float(clean_series.max()),
        }

    def _get_text_statistics(self, series: pd.Series) -> Dict[str, Any]:
        """Level counts, as a model would see the column when used as a factor."""

        clean_series = series.dropna().astype(str)
        value_counts = clean_series.value_counts()

        return {
            "levels": int(len(value_counts)),
            "most_common": str(value_counts.index[0]) if len(value_counts) else None,
            "top_values": self._get_most_frequent_values(value_counts, len(series)),
        }

    def _get_most_frequent_values(
        self, value_counts: pd.Series, total: int, top_n: int = 5
    ) -> List[Dict[str, Any]]:
        """Get most frequent values in series."""

        return [
            {
                "value": str(value),
                "count": int(count),
                "percentage": float(count / total * 100) if total else 0.0,
            }
            for value, count in value_counts.head(top_n).items()
        ]


def describe_table(result) -> Dict[str, Any]:
    return DataProfiler().describe_table(result)


def describe_column(column: TypedColumn) -> Dict[str, Any]:
    return DataProfiler().describe_column(column)
