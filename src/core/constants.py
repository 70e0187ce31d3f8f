"""Core constants used across converter modules.

This module centralizes defaults, file extensions, and codec settings.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_CSV_PATH = Path("./test.csv")
DEFAULT_OUTPUT_DIR = Path("./output")
DEFAULT_LOG_LEVEL = "info"
SUPPORTED_LOG_LEVELS = ("debug", "info", "warning", "error")
CSV_FIELD_COUNT = 2
JPEG_FORMAT = "jpeg"
PNG_FORMAT = "png"
JPEG_EXTENSION = ".jpeg"
PNG_EXTENSION = ".png"
DUMP_EXTENSION = ".txt"
JPEG_QUALITY = 100
JPEG_ENCODABLE_MODES = ("L", "RGB", "CMYK")
PNG_ENCODABLE_MODES = ("1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA")
DETECTED_FORMAT_ALIASES = {"mpo": JPEG_FORMAT}
DEFAULT_ROUTING_POLICY = "auto"
SUPPORTED_ROUTING_POLICIES = ("auto", "jpeg", "png")
FORBIDDEN_IDENTIFIER_CHARACTERS = ("/", "\\", "\x00")
RESERVED_IDENTIFIERS = ("", ".", "..")
