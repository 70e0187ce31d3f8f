"""Runtime configuration model for the converter.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import DEFAULT_LOG_LEVEL, SUPPORTED_LOG_LEVELS
from core.errors import CsvImageConfigError


@dataclass(frozen=True)
class CsvImageConfig:
    """Validated runtime configuration.

    Attributes:
        max_workers: Optional worker pool size for per-record conversion.
        log_level: Minimum structured log level.
    """

    max_workers: int | None
    log_level: str

    @classmethod
    def from_env(cls) -> "CsvImageConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            CsvImageConfigError: If environment values are invalid.
        """
        max_workers_value = os.getenv("CSV_IMAGE_MAX_WORKERS")
        log_level_value = os.getenv("CSV_IMAGE_LOG_LEVEL", DEFAULT_LOG_LEVEL)
        return cls(
            max_workers=_parse_max_workers(max_workers_value),
            log_level=_parse_log_level(log_level_value),
        )


def _parse_max_workers(raw_value: str | None) -> int | None:
    """Parse the worker count environment value.

    Args:
        raw_value: Raw string from environment, or None when unset.

    Returns:
        Parsed positive worker count, or None for the executor default.

    Raises:
        CsvImageConfigError: If value is not a positive integer.
    """
    if raw_value is None or not raw_value.strip():
        return None
    try:
        max_workers = int(raw_value)
    except ValueError as error:
        raise CsvImageConfigError(
            "Invalid CSV_IMAGE_MAX_WORKERS value: "
            f"expected integer, got '{raw_value}'. "
            "Set CSV_IMAGE_MAX_WORKERS to a positive number."
        ) from error
    if max_workers < 1:
        raise CsvImageConfigError(
            f"Invalid CSV_IMAGE_MAX_WORKERS value {max_workers}: expected value >= 1."
        )
    return max_workers


def _parse_log_level(raw_value: str) -> str:
    """Normalize and validate the log level environment value."""
    log_level = raw_value.strip().lower()
    if log_level not in SUPPORTED_LOG_LEVELS:
        raise CsvImageConfigError(
            f"Invalid CSV_IMAGE_LOG_LEVEL value '{raw_value}'. "
            f"Supported levels: {', '.join(SUPPORTED_LOG_LEVELS)}."
        )
    return log_level
