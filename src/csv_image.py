"""Public SDK surface for the CSV image converter.

This module provides a stable import path for library users.
It re-exports the conversion entry points and typed models.
"""

from __future__ import annotations

from convert.fallback_dump import dump_payload
from convert.image_decoder import decode_payload
from convert.image_encoder import encode_image, resolve_routing_table, supported_routing_policies
from convert.record_converter import convert_record
from core.config import CsvImageConfig
from core.types import ConversionOptions, DecodedImage, Record, RecordResult, RunSummary
from ingest.pipeline import run_conversion
from ingest.record_reader import open_record_reader

__all__ = [
    "ConversionOptions",
    "CsvImageConfig",
    "DecodedImage",
    "Record",
    "RecordResult",
    "RunSummary",
    "convert_record",
    "decode_payload",
    "dump_payload",
    "encode_image",
    "open_record_reader",
    "resolve_routing_table",
    "run_conversion",
    "supported_routing_policies",
]
