"""Fallback dumping of undecodable payloads."""

from __future__ import annotations

from pathlib import Path

from convert.output_paths import prepare_output_path
from core.constants import DUMP_EXTENSION
from core.errors import OutputIOError
from core.types import Record


def dump_payload(record: Record, output_dir: Path) -> Path:
    """Write a record's raw payload plus newline to ``<output_dir>/<identifier>.txt``.

    Args:
        record: Record whose payload failed to convert.
        output_dir: Output directory, created if missing.

    Returns:
        Written dump file path.

    Raises:
        OutputIOError: If the directory or file cannot be written.
    """
    dump_path = prepare_output_path(output_dir, record.identifier, DUMP_EXTENSION)
    try:
        with dump_path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(record.payload + "\n")
    except OSError as error:
        raise OutputIOError(f"Failed to write dump file {dump_path}: {error}.") from error
    return dump_path
