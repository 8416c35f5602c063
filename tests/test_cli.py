# tests/test_cli.py

from __future__ import annotations

import json

from typer.testing import CliRunner

from gedcom_codec.cli.app import app
from gedcom_codec.utils import mock_file_path

runner = CliRunner()


def test_stats_command(sample_path) -> None:
    result = runner.invoke(app, ["stats", str(sample_path)])

    assert result.exit_code == 0
    assert "GEDCOM Statistics" in result.stdout
    assert "Individuals" in result.stdout
    assert "Repositories" in result.stdout


def test_reformat_to_stdout(sample_path) -> None:
    result = runner.invoke(app, ["reformat", str(sample_path)])

    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert lines[0] == "0 HEAD"
    assert lines[-1] == "0 TRLR"
    assert "0 @I1@ INDI" in lines


def test_reformat_to_file(sample_path, tmp_path) -> None:
    out = tmp_path / "out.ged"
    result = runner.invoke(app, ["reformat", str(sample_path), "--out", str(out), "--log-unhandled"])

    assert result.exit_code == 0
    text = out.read_text(encoding="utf-8")
    assert text.startswith("0 HEAD\n")
    assert text.endswith("0 TRLR\n")


def test_export_command(sample_path) -> None:
    result = runner.invoke(app, ["export", str(sample_path), "--indent", "2"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert [i["xref"] for i in data["individuals"]] == ["I1", "I2", "I3"]


def test_export_to_file_is_compact_by_default(sample_path, tmp_path) -> None:
    out = tmp_path / "json" / "sample.json"
    result = runner.invoke(app, ["export", str(sample_path), "--out", str(out)])

    assert result.exit_code == 0
    text = out.read_text(encoding="utf-8")
    assert "\n" not in text
    assert json.loads(text)["trailer"] is True


def test_decode_error_exits_non_zero() -> None:
    result = runner.invoke(app, ["stats", str(mock_file_path("broken_eof.ged"))])

    assert result.exit_code == 1
    assert "Error" in result.stdout


def test_missing_file_is_rejected() -> None:
    result = runner.invoke(app, ["stats", str(mock_file_path("does_not_exist.ged"))])
    assert result.exit_code != 0
