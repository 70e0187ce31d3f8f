"""Single-record conversion: decode, then encode or dump.

Each call owns its record, its decoded image and its output file, so
calls are safe to run concurrently without locking.
"""

from __future__ import annotations

from pathlib import Path

from convert.fallback_dump import dump_payload
from convert.image_decoder import decode_payload
from convert.image_encoder import RoutingTable, encode_image
from convert.output_paths import validate_identifier
from core.errors import DecodeError, EncodeError, InvalidIdentifierError, OutputIOError
from core.types import (
    OUTCOME_CONVERTED,
    OUTCOME_DUMPED,
    OUTCOME_FAILED,
    Record,
    RecordResult,
)


def convert_record(
    record: Record,
    output_dir: Path,
    routing: RoutingTable | None = None,
) -> RecordResult:
    """Convert one record into an image file or a fallback dump.

    Per-record failures are captured in the returned result and never
    raised.

    Args:
        record: Input record.
        output_dir: Output directory.
        routing: Optional output format routing table.

    Returns:
        Terminal result for the record.
    """
    try:
        validate_identifier(record.identifier)
    except InvalidIdentifierError as error:
        return RecordResult(identifier=record.identifier, outcome=OUTCOME_FAILED, reason=str(error))
    try:
        decoded = decode_payload(record.payload)
    except DecodeError as error:
        return _dump_record(record, output_dir, str(error))
    try:
        output_path = encode_image(decoded, output_dir, record.identifier, routing)
    except EncodeError as error:
        return _dump_record(record, output_dir, str(error), decoded.detected_format)
    except OutputIOError as error:
        return RecordResult(
            identifier=record.identifier,
            outcome=OUTCOME_FAILED,
            detected_format=decoded.detected_format,
            reason=str(error),
        )
    finally:
        decoded.pixels.close()
    return RecordResult(
        identifier=record.identifier,
        outcome=OUTCOME_CONVERTED,
        detected_format=decoded.detected_format,
        output_path=output_path,
    )


def _dump_record(
    record: Record,
    output_dir: Path,
    reason: str,
    detected_format: str | None = None,
) -> RecordResult:
    """Dump the raw payload; a dump failure leaves the record failed."""
    try:
        dump_path = dump_payload(record, output_dir)
    except OutputIOError as error:
        return RecordResult(
            identifier=record.identifier,
            outcome=OUTCOME_FAILED,
            detected_format=detected_format,
            reason=f"{reason}; dump failed: {error}",
        )
    return RecordResult(
        identifier=record.identifier,
        outcome=OUTCOME_DUMPED,
        detected_format=detected_format,
        output_path=dump_path,
        reason=reason,
    )
