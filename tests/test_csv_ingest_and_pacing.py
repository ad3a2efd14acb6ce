import os

import pytest

from football_form import pacing
from football_form.csv_ingest import list_input_files, read_rows
from football_form.pacing import FixedPacer, NoopPacer


def test_read_rows_keeps_raw_strings(tmp_path):
    path = tmp_path / "serie_a.csv"
    path.write_text(
        "\ufeffTeam;League;PPG_Total;GF_Total;CleanSheets;sofascore_id\n"
        "Inter;Serie A;2.10;58;12;2697\n"
        "Como;Serie A;1.05;;3;\n",
        encoding="utf-8",
    )

    rows = read_rows(str(path))

    assert rows[0]["Team"] == "Inter"
    assert rows[0]["PPG_Total"] == "2.10"
    assert rows[0]["sofascore_id"] == "2697"
    assert rows[1]["GF_Total"] == ""
    assert rows[1]["sofascore_id"] == ""


def test_read_rows_fills_missing_known_columns(tmp_path):
    path = tmp_path / "short.csv"
    path.write_text("Team;League\nAlpha;X\n", encoding="utf-8")

    rows = read_rows(str(path))

    assert rows == [
        {
            "Team": "Alpha",
            "League": "X",
            "PPG_Total": "",
            "GF_Total": "",
            "CleanSheets": "",
            "sofascore_id": "",
        }
    ]


def test_read_rows_trailing_separator_keeps_columns_aligned(tmp_path):
    path = tmp_path / "trailing.csv"
    path.write_text(
        "Team;League;PPG_Total;GF_Total;CleanSheets\n"
        "Alpha;X;1.8;20;5;\n"
        "Beta;Y;1.2;14;3;\n",
        encoding="utf-8",
    )

    rows = read_rows(str(path))

    assert [r["Team"] for r in rows] == ["Alpha", "Beta"]
    assert rows[0]["League"] == "X"
    assert rows[0]["PPG_Total"] == "1.8"
    assert rows[0]["GF_Total"] == "20"
    assert rows[0]["CleanSheets"] == "5"


@pytest.mark.parametrize(
    "lines",
    [
        ["Alpha;X;1.8;20;5;extra", "Beta;Y;1.2;14;3"],
        ["Beta;Y;1.2;14;3", "Alpha;X;1.8;20;5;extra"],
    ],
)
def test_read_rows_extra_field_does_not_shift_rows(tmp_path, lines):
    path = tmp_path / "extra.csv"
    path.write_text(
        "\n".join(["Team;League;PPG_Total;GF_Total;CleanSheets", *lines]) + "\n",
        encoding="utf-8",
    )

    rows = {r["Team"]: r for r in read_rows(str(path))}

    assert set(rows) == {"Alpha", "Beta"}
    assert rows["Alpha"]["League"] == "X"
    assert rows["Alpha"]["CleanSheets"] == "5"
    assert rows["Beta"]["League"] == "Y"
    assert rows["Beta"]["CleanSheets"] == "3"
    assert "extra" not in rows["Alpha"].values()


def test_read_rows_empty_file(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")

    assert read_rows(str(path)) == []


def test_list_input_files_filters_and_sorts(tmp_path):
    target = tmp_path / "in"
    assert list_input_files(str(target)) == []
    for name in ("b.csv", "a.CSV", "readme.md"):
        (target / name).write_text("Team\n", encoding="utf-8")
    os.makedirs(target / "nested.csv")

    files = list_input_files(str(target))

    assert [os.path.basename(p) for p in files] == ["a.CSV", "b.csv"]


def test_fixed_pacer_sleeps_configured_duration(monkeypatch):
    slept = []
    monkeypatch.setattr(pacing.time, "sleep", slept.append)

    FixedPacer(0.8).pause("event")
    FixedPacer(0).pause("row")
    FixedPacer(-1).pause("row")

    assert slept == [0.8]


def test_noop_pacer_records_reasons():
    pacer = NoopPacer()
    pacer.pause("event")
    pacer.pause()

    assert pacer.calls == ["event", ""]
