"""Unit tests for CLI command handling."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from cli.main import format_result_lines, main
from core.types import OUTCOME_DUMPED, RecordResult


def test_cli_converts_and_reports_done(
    tmp_path: Path,
    write_csv: Callable[[str], Path],
    red_png_payload: str,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """CLI should convert rows and print the completion line."""
    output_dir = tmp_path / "output"
    csv_path = write_csv(f"img1,{red_png_payload}\nbad1,not-valid-base64!!\n")

    exit_code = main(["--csv", str(csv_path), "--output", str(output_dir)])
    output = capsys.readouterr().out

    assert exit_code == 0
    assert f"Done! Check {output_dir} for image output." in output
    assert "Format: png" in output and "bad1.txt" in output


def test_cli_returns_nonzero_for_missing_input(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Missing input files should exit with a nonzero code."""
    exit_code = main(["--csv", str(tmp_path / "missing.csv"), "--output", str(tmp_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Error:" in captured.err


def test_cli_returns_nonzero_for_malformed_row(
    tmp_path: Path, write_csv: Callable[[str], Path]
) -> None:
    """Rows without exactly two fields should abort the run."""
    csv_path = write_csv("a,b,c\n")

    exit_code = main(["--csv", str(csv_path), "--output", str(tmp_path / "output")])

    assert exit_code == 1
    assert (tmp_path / "output").exists() is False


def test_cli_rejects_non_positive_workers(tmp_path: Path) -> None:
    """Worker counts below one should be a usage error."""
    with pytest.raises(SystemExit) as exit_info:
        main(["--csv", str(tmp_path / "x.csv"), "--workers", "0"])

    assert exit_info.value.code == 2


def test_format_result_lines_for_dumped_record(tmp_path: Path) -> None:
    """Dumped results should mention the reason and dump path."""
    result = RecordResult(
        identifier="bad1",
        outcome=OUTCOME_DUMPED,
        output_path=tmp_path / "bad1.txt",
        reason="invalid base64",
    )

    lines = format_result_lines(result)

    assert lines[0] == "Attempting to decode data with ID: bad1"
    assert lines[-1] == f"Dumped data to '{tmp_path / 'bad1.txt'}' for debugging"
