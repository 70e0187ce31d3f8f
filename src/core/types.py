"""Shared typed models.

This module defines immutable data models passed between the record
source, the per-record converters, and the pipeline driver.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from PIL import Image

from core.constants import (
    DEFAULT_CSV_PATH,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_ROUTING_POLICY,
)

OUTCOME_CONVERTED = "converted"
OUTCOME_DUMPED = "dumped"
OUTCOME_FAILED = "failed"


@dataclass(frozen=True)
class Record:
    """One parsed input row.

    Attributes:
        identifier: Output file stem for this row.
        payload: Base64-encoded image bytes, exactly as read.
        line_number: One-based line of the row in the input file.
    """

    identifier: str
    payload: str
    line_number: int = 0


@dataclass(frozen=True)
class DecodedImage:
    """Decoded image and the format sniffed from its signature.

    Attributes:
        pixels: Fully loaded Pillow image.
        detected_format: Lowercase format name, e.g. ``jpeg`` or ``png``.
    """

    pixels: Image.Image
    detected_format: str


@dataclass(frozen=True)
class ConversionOptions:
    """Conversion run options.

    Attributes:
        csv_path: Input CSV file path.
        output_dir: Directory receiving image and dump files.
        routing_policy: Output format routing policy name.
        max_workers: Optional worker pool size, executor default if omitted.
    """

    csv_path: Path = DEFAULT_CSV_PATH
    output_dir: Path = DEFAULT_OUTPUT_DIR
    routing_policy: str = DEFAULT_ROUTING_POLICY
    max_workers: int | None = None


@dataclass(frozen=True)
class RecordResult:
    """Terminal outcome of one record.

    Attributes:
        identifier: Record identifier.
        outcome: One of ``converted``, ``dumped`` or ``failed``.
        detected_format: Sniffed image format when decoding succeeded.
        output_path: Written image or dump file, if any.
        reason: Failure reason for dumped and failed records.
    """

    identifier: str
    outcome: str
    detected_format: str | None = None
    output_path: Path | None = None
    reason: str | None = None


@dataclass(frozen=True)
class RunSummary:
    """Aggregated results of one conversion run."""

    output_dir: Path
    results: tuple[RecordResult, ...] = field(default_factory=tuple)

    def count(self, outcome: str) -> int:
        """Return how many records finished with ``outcome``."""
        return sum(1 for result in self.results if result.outcome == outcome)
