"""Record source for CSV image payload files.

This module loads the whole input file into memory and exposes a
pull-based reader yielding typed two-field records.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Iterator

from core.constants import CSV_FIELD_COUNT
from core.errors import InputIOError, MalformedRowError
from core.types import Record


class RecordReader:
    """Pull-based reader over rows of an in-memory CSV document."""

    def __init__(self, text: str, source_name: str = "<memory>") -> None:
        self._source_name = source_name
        self._rows = csv.reader(io.StringIO(text, newline=""), strict=True)

    def read(self) -> Record | None:
        """Return the next record, or None once the input is exhausted.

        Raises:
            MalformedRowError: If a row is not exactly two fields or has
                broken quoting.
        """
        while True:
            try:
                row = next(self._rows)
            except StopIteration:
                return None
            except csv.Error as error:
                line_number = self._rows.line_num
                raise MalformedRowError(
                    f"Failed to parse CSV row at {self._source_name}:{line_number}: "
                    f"{error}. Fix the quoting and retry.",
                    line_number,
                ) from error
            if row:
                return self._build_record(row)

    def __iter__(self) -> Iterator[Record]:
        record = self.read()
        while record is not None:
            yield record
            record = self.read()

    def _build_record(self, row: list[str]) -> Record:
        line_number = self._rows.line_num
        if len(row) != CSV_FIELD_COUNT:
            raise MalformedRowError(
                f"Invalid row at {self._source_name}:{line_number}: "
                f"expected {CSV_FIELD_COUNT} fields, got {len(row)}. "
                "Rows must be '<identifier>,<base64 payload>'.",
                line_number,
            )
        identifier, payload = row
        return Record(identifier=identifier, payload=payload, line_number=line_number)


def open_record_reader(csv_path: Path) -> RecordReader:
    """Read a CSV file fully and return a reader over its rows.

    Args:
        csv_path: Input CSV file path.

    Returns:
        Reader positioned at the first row.

    Raises:
        InputIOError: If the file is missing or unreadable.
    """
    try:
        text = csv_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as error:
        raise InputIOError(
            f"Failed to read input CSV at {csv_path}: {error}. "
            "Provide an existing, readable UTF-8 file with --csv."
        ) from error
    return RecordReader(text, source_name=str(csv_path))
