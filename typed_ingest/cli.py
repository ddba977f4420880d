"""Command-line interface for missing-value-aware spreadsheet loading.

Usage (examples):
    python -m typed_ingest.cli survey.xlsx --sheet responses
    python -m typed_ingest.cli survey.xlsx --na "" --na NA
    python -m typed_ingest.cli survey.xlsx --na "" --na NA --compare
    python -m typed_ingest.cli data.csv --na-preset common --json --output result.json

The CLI prints a concise human-readable summary by default; use --json for full payload.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional
import warnings

import pandas as pd

from .cleaning_utils import COMMON_NA_SENTINELS
from .compare import reload_with_sentinels
from .errors import LoadError
from .loader import LoadResult, load_table


def _summarize(result: LoadResult) -> str:
    cols = list(result.table.columns)
    preview_cols = cols[:8]
    more = "" if len(cols) <= 8 else f" (+{len(cols)-8} more)"
    sentinels = ", ".join(repr(v) for v in sorted(result.source.get("na_values", []))) or "(none)"
    lines = [
        f"Rows: {result.table.shape[0]}  Columns: {result.table.shape[1]}",
        f"Columns: {', '.join(preview_cols)}{more}",
        f"Missing-value sentinels: {sentinels}",
    ]
    for name, kind in result.column_kinds.items():
        lines.append(f"  - {name}: {kind} missing={result.columns[name].missing_count}")

    summary = result.diagnostics.summary()
    if summary:
        lines.append(f"Diagnostics: {len(result.diagnostics)} cell(s) not numeric")
        for column, info in summary.items():
            shown = ", ".join(repr(v) for v in info["distinct_values"][:5])
            extra = "" if len(info["distinct_values"]) <= 5 else ", ..."
            lines.append(
                f"  - {column}: {info['count']} cell(s), first at row {info['first_row']}: {shown}{extra}"
            )
    else:
        lines.append("Diagnostics: none")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Load a CSV or Excel sheet into typed columns with explicit missing-value sentinels."
    )
    parser.add_argument("file", help="Path to input CSV or Excel file")
    parser.add_argument(
        "--sheet",
        help="Worksheet name, or 0-based index when no sheet has that name (default: first sheet)",
    )
    parser.add_argument(
        "--na",
        action="append",
        default=[],
        metavar="TOKEN",
        help='Missing-value sentinel; repeat for several (use --na "" for blank cells)',
    )
    parser.add_argument(
        "--na-preset",
        choices=["common"],
        help="Add a curated list of common sentinels (NA, N/A, #N/A, blank, ...)",
    )
    parser.add_argument(
        "--header-row",
        type=int,
        default=0,
        help="Header row index, counted after blank rows are dropped (default: 0)",
    )
    parser.add_argument(
        "--treat-first-row-as-data",
        action="store_true",
        help="Do not read a header row; generate synthetic headers.",
    )
    parser.add_argument(
        "--no-trim",
        action="store_true",
        help="Do not strip surrounding whitespace before matching sentinels.",
    )
    parser.add_argument(
        "--compare",
        action="store_true",
        help="Also load without sentinels and print a before/after comparison",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print full JSON payload to stdout (in addition to summary)",
    )
    parser.add_argument(
        "--suppress-warnings",
        action="store_true",
        help="Suppress third-party runtime warnings (e.g., openpyxl styles).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log load progress to stderr",
    )
    parser.add_argument(
        "--output",
        help="Optional path to write full JSON payload (pretty-printed)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    path = Path(args.file)
    if not path.exists():
        raise SystemExit(f"File not found: {path}")

    if args.suppress_warnings:
        # Target common noisy warnings we expect
        warnings.filterwarnings(
            "ignore", message="Workbook contains no default style", category=UserWarning
        )
        warnings.filterwarnings(
            "ignore", message="Data Validation extension is not supported", category=UserWarning
        )

    na_values = set(args.na)
    if args.na_preset == "common":
        na_values |= COMMON_NA_SENTINELS

    config = {
        "header_row": args.header_row,
        "treat_first_row_as_data": args.treat_first_row_as_data,
        "trim_whitespace": not args.no_trim,
    }
    # Names win over positions; the loader resolves digit strings.
    sheet = args.sheet if args.sheet is not None else 0

    try:
        if args.compare:
            before, result, comparison = reload_with_sentinels(
                path, na_values, sheet_name=sheet, config=config
            )
        else:
            result = load_table(path, sheet_name=sheet, na_values=na_values, config=config)
            comparison = None
    except LoadError as exc:
        parser.exit(2, f"error: {exc}\n")

    print(_summarize(result))

    payload: Dict[str, Any] = result.to_payload()
    if comparison is not None:
        print("\n=== Without sentinels vs. with sentinels ===")
        with pd.option_context("display.width", 160, "display.max_columns", 20):
            print(comparison.to_string())
        payload["comparison"] = comparison.reset_index().to_dict(orient="records")
        payload["before"] = before.to_payload(include_stats=False)

    if args.json:
        print("\n=== JSON Payload ===")
        print(json.dumps(payload, indent=2, default=str))

    if args.output:
        out_path = Path(args.output)
        out_path.write_text(
            json.dumps(payload, indent=2, default=str), encoding="utf-8"
        )
        print(f"\nSaved JSON payload to {out_path}")


if __name__ == "__main__":  # pragma: no cover
    main()
