import numpy as np
import pandas as pd
import pytest
import sys
from pathlib import Path as _P

# Ensure project root (containing the 'typed_ingest' package directory) is on sys.path
_project_root = _P(__file__).resolve().parents[2]
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from typed_ingest import Missing, Number, Text, infer, infer_frame
from typed_ingest.inference import NUMERIC, TEXT, to_text


def test_numeric_with_sentinel():
    col, diags = infer(["1", "NA", "3.5"], {"NA"}, name="x")
    assert col.kind == NUMERIC
    assert col.values == [Number(1.0), Missing(), Number(3.5)]
    assert diags == []


def test_non_numeric_value_keeps_column_text():
    col, diags = infer(["1", "two", "3"], set(), name="x")
    assert col.kind == TEXT
    assert col.values == [Text("1"), Text("two"), Text("3")]
    assert len(diags) == 1
    assert (diags[0].column, diags[0].row, diags[0].value) == ("x", 1, "two")
    assert "two" in diags[0].message


def test_blank_and_na_recognized():
    col, diags = infer(["", "NA", "5", "6"], {"", "NA"})
    assert col.kind == NUMERIC
    assert col.values == [Missing(), Missing(), Number(5.0), Number(6.0)]
    assert diags == []


def test_empty_missing_set_reports_every_sentinel():
    col, diags = infer(["", "NA", "5", "6"], set(), name="score")
    assert col.kind == TEXT
    assert [(d.row, d.value) for d in diags] == [(0, ""), (1, "NA")]
    # Nothing is missing when no sentinel is configured
    assert col.missing_count == 0


def test_sentinels_stay_missing_in_text_column():
    col, diags = infer(["a", "NA", "b"], {"NA"})
    assert col.kind == TEXT
    assert col.values == [Text("a"), Missing(), Text("b")]
    assert [d.value for d in diags] == ["a", "b"]


def test_round_trip_through_text_is_stable():
    missing_set = {"NA", ""}
    first, _ = infer(["1", "NA", "3.5", "-2e3", "", "0.1"], missing_set)
    assert first.kind == NUMERIC

    second, diags = infer(to_text(first, "NA"), missing_set)
    assert diags == []
    assert second.kind == NUMERIC
    assert second.values == first.values


@pytest.mark.parametrize(
    "raw",
    [
        ["1", "NA", "3"],
        ["", "-", "4.5", "n/a"],
        ["x", "NA", "2"],
        ["1", "2", "3"],
        ["NA", "NA"],
    ],
)
def test_adding_a_sentinel_never_demotes_to_text(raw):
    base = {""}
    extended = base | {"NA", "-", "n/a"}
    before, _ = infer(raw, base)
    after, _ = infer(raw, extended)
    if before.kind == NUMERIC:
        assert after.kind == NUMERIC
    assert len(after) == len(before) == len(raw)


@pytest.mark.parametrize("value", ["nan", "inf", "1,000", "$5", "1_000", "5%", "1.2.3", "e5", "1e999"])
def test_numeric_parse_is_strict(value):
    col, diags = infer(["1", value], set())
    assert col.kind == TEXT
    assert [d.value for d in diags] == [value]


@pytest.mark.parametrize(
    "value,expected",
    [("-3", -3.0), ("+4", 4.0), (".5", 0.5), ("1e3", 1000.0), ("2.5E-1", 0.25)],
)
def test_decimal_notation_accepted(value, expected):
    col, _ = infer([value], set())
    assert col.values == [Number(expected)]


def test_whitespace_trimmed_unless_disabled():
    col, diags = infer([" 7 ", " NA"], {"NA"})
    assert col.values == [Number(7.0), Missing()]

    col, diags = infer([" 7 ", " NA"], {"NA"}, trim=False)
    assert col.kind == TEXT
    assert len(diags) == 2


def test_unicode_minus_and_nbsp_normalized():
    col, _ = infer(["\u22125", "\u00a08"], set())
    assert col.values == [Number(-5.0), Number(8.0)]


def test_non_text_cells_rendered_first():
    # Blank spreadsheet cells arrive as None/NaN, numbers as int/float
    col, diags = infer([1, None, 2.5, np.nan, 4.0], {""})
    assert col.kind == NUMERIC
    assert col.values == [Number(1.0), Missing(), Number(2.5), Missing(), Number(4.0)]
    assert diags == []


def test_all_missing_column_is_numeric():
    col, diags = infer(["NA", ""], {"NA", ""})
    assert col.kind == NUMERIC
    assert col.missing_count == 2
    assert diags == []


def test_to_series_numeric_and_text():
    num, _ = infer(["1", "NA", "3"], {"NA"}, name="n")
    s = num.to_series()
    assert s.dtype == float
    assert s.name == "n"
    assert s.isna().tolist() == [False, True, False]
    assert s.mean() == 2.0

    txt, _ = infer(["a", "NA", "b", "a"], {"NA"}, name="t")
    s = txt.to_series()
    assert isinstance(s.dtype, pd.CategoricalDtype)
    assert sorted(s.cat.categories) == ["a", "b"]
    assert s.isna().sum() == 1


def test_series_name_used_for_diagnostics():
    col, diags = infer(pd.Series(["1", "oops"], name="weight"), set())
    assert col.name == "weight"
    assert diags[0].column == "weight"


def test_infer_frame_types_each_column():
    raw = pd.DataFrame(
        {
            "id": ["1", "2", "3"],
            "score": ["10", "NA", "12"],
            "group": ["a", "b", "NA"],
        }
    )
    table, columns, diags = infer_frame(raw, {"NA"})
    assert list(table.columns) == ["id", "score", "group"]
    assert columns["score"].kind == NUMERIC
    assert columns["group"].kind == TEXT
    assert table["score"].dtype == float
    assert table["score"].sum() == 22.0
    assert [(d.column, d.value) for d in diags] == [("group", "a"), ("group", "b")]


@pytest.mark.parametrize(
    "raw,blocker",
    [
        (["1", "NA", "3"], "NA"),
        (["", "4.5", "-", "6"], "-"),
        (["n/a", "n/a", "0.25"], "n/a"),
    ],
)
def test_adding_the_only_blocker_promotes_to_numeric(raw, blocker):
    base = {""}
    before, before_diags = infer(raw, base)
    assert before.kind == TEXT
    assert {d.value for d in before_diags} == {blocker}

    after, after_diags = infer(raw, base | {blocker})
    assert after.kind == NUMERIC
    assert after_diags == []
    assert after.missing_count == sum(v in base | {blocker} for v in raw)


def test_non_ascii_digits_are_not_numbers():
    # Arabic-Indic three and fullwidth five
    col, diags = infer(["\u0663", "\uff15", "7"], set(), name="n")
    assert col.kind == TEXT
    assert [(d.row, d.value) for d in diags] == [(0, "\u0663"), (1, "\uff15")]
    assert col.values[2] == Text("7")


def test_overflowing_literal_is_reported_and_round_trip_holds():
    col, diags = infer(["1e999", "2"], set(), name="big")
    assert col.kind == TEXT
    assert [d.value for d in diags] == ["1e999"]

    col, _ = infer(["1e300", "2"], set())
    again, diags = infer(to_text(col, "NA"), {"NA"})
    assert diags == []
    assert again.values == col.values


def test_infer_frame_rejects_duplicate_labels():
    raw = pd.DataFrame([["1", "2"], ["3", "4"]], columns=["a", "a"])
    with pytest.raises(ValueError, match="duplicated: a"):
        infer_frame(raw, set())
