"""Tests for the one-shot CLI."""

import json

import pytest

from quakedash.cli import main


def test_cli_prints_summary_and_writes_json(sample_csv, tmp_path, capsys):
    out = tmp_path / "views.json"
    top = tmp_path / "top.csv"
    code = main(["--csv", sample_csv, "--json", str(out), "--top-csv", str(top)])
    assert code == 0

    printed = capsys.readouterr().out
    assert "Loaded 6 rows, 4 usable after cleaning." in printed
    assert "Strongest magnitude: 7.9" in printed

    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["summary"]["total_count"] == 4
    assert payload["summary"]["strong_count"] == 2
    assert top.exists()


def test_cli_seed_is_recorded(sample_csv, tmp_path):
    out = tmp_path / "views.json"
    assert main(["--csv", sample_csv, "--json", str(out), "--seed", "7"]) == 0
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["config"]["sample_seed"] == 7


def test_cli_schema_error_exits_nonzero(write_csv, capsys):
    path = write_csv("a,b,c\n1,2,3\n")
    assert main(["--csv", path]) == 1
    assert "Missing required column" in capsys.readouterr().err


def test_cli_empty_dataset_reports_no_data(write_csv, tmp_path, capsys):
    path = write_csv("latitude,longitude,richter,focal_depth\n,,,\n")
    report = tmp_path / "r.docx"
    assert main(["--csv", path, "--report", str(report)]) == 0
    printed = capsys.readouterr().out
    assert "Strongest magnitude: No data" in printed
    assert "report not written" in printed
    assert not report.exists()


def test_cli_writes_report(sample_csv, tmp_path):
    pytest.importorskip("docx")
    pytest.importorskip("matplotlib")
    report = tmp_path / "dashboard.docx"
    assert main(["--csv", sample_csv, "--report", str(report)]) == 0
    assert report.exists()
