"""Unit tests for single-record conversion outcomes."""

from __future__ import annotations

import base64
from pathlib import Path

import pytest

import convert.record_converter as record_converter
from convert.record_converter import convert_record
from core.errors import EncodeError
from core.types import OUTCOME_CONVERTED, OUTCOME_DUMPED, OUTCOME_FAILED, Record


def test_convert_record_writes_png(tmp_path: Path, red_png_payload: str) -> None:
    """Decodable PNG records should be converted."""
    result = convert_record(Record(identifier="img1", payload=red_png_payload), tmp_path)

    assert result.outcome == OUTCOME_CONVERTED
    assert (result.detected_format, result.output_path) == ("png", tmp_path / "img1.png")


def test_convert_record_dumps_invalid_base64(tmp_path: Path) -> None:
    """Invalid base64 should produce only a dump file."""
    result = convert_record(Record(identifier="bad1", payload="not-valid-base64!!"), tmp_path)

    assert result.outcome == OUTCOME_DUMPED and result.detected_format is None
    assert sorted(path.name for path in tmp_path.iterdir()) == ["bad1.txt"]


def test_convert_record_dumps_unrecognized_image(tmp_path: Path) -> None:
    """Valid base64 of non-image bytes should be dumped."""
    payload = base64.b64encode(b"plain text").decode("ascii")

    result = convert_record(Record(identifier="bad2", payload=payload), tmp_path)

    assert result.outcome == OUTCOME_DUMPED
    assert (tmp_path / "bad2.txt").read_text(encoding="utf-8") == payload + "\n"


def test_convert_record_dumps_on_encode_error(
    tmp_path: Path,
    red_png_payload: str,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Encoding failures should fall back to dumping the payload."""

    def _failing_encode(*_args: object, **_kwargs: object) -> Path:
        raise EncodeError("encoder exploded")

    monkeypatch.setattr(record_converter, "encode_image", _failing_encode)

    result = convert_record(Record(identifier="img1", payload=red_png_payload), tmp_path)

    assert result.outcome == OUTCOME_DUMPED and result.detected_format == "png"
    assert result.output_path == tmp_path / "img1.txt"


def test_convert_record_fails_without_files_for_unsafe_identifier(
    tmp_path: Path, red_png_payload: str
) -> None:
    """Unsafe identifiers should fail without writing anything."""
    result = convert_record(Record(identifier="../escape", payload=red_png_payload), tmp_path)

    assert result.outcome == OUTCOME_FAILED
    assert list(tmp_path.iterdir()) == []


def test_convert_record_fails_when_dump_cannot_be_written(tmp_path: Path) -> None:
    """A failed dump should leave the record failed with no further fallback."""
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")

    result = convert_record(Record(identifier="bad1", payload="!!"), blocker)

    assert result.outcome == OUTCOME_FAILED and "dump failed" in (result.reason or "")
