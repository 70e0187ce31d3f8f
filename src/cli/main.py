"""CSV image converter CLI entry point.
This module maps argparse flags onto a conversion run and prints
human-readable per-record outcome lines.
"""

from __future__ import annotations

import argparse
from pathlib import Path
import sys
from typing import Sequence

from convert.image_encoder import supported_routing_policies
from core.config import CsvImageConfig
from core.constants import DEFAULT_CSV_PATH, DEFAULT_OUTPUT_DIR, DEFAULT_ROUTING_POLICY
from core.errors import CsvImageError
from core.logging_config import configure_logging, get_logger
from core.types import OUTCOME_CONVERTED, OUTCOME_DUMPED, ConversionOptions, RecordResult
from ingest.pipeline import run_conversion

_LOGGER = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="csv-image",
        description="Convert base64 image payloads in a CSV file into image files",
    )
    parser.add_argument("--csv", default=str(DEFAULT_CSV_PATH), help="Path to CSV to import")
    parser.add_argument(
        "--output",
        default=str(DEFAULT_OUTPUT_DIR),
        help="Directory to write images to",
    )
    parser.add_argument(
        "--workers",
        type=int,
        help="Worker pool size; 1 converts records sequentially",
    )
    parser.add_argument(
        "--routing",
        default=DEFAULT_ROUTING_POLICY,
        choices=supported_routing_policies(),
        help="Output format policy: auto keeps JPEG and writes PNG otherwise",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the converter CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.workers is not None and args.workers < 1:
        parser.error(f"--workers must be >= 1, got {args.workers}")
    options = ConversionOptions(
        csv_path=Path(args.csv).expanduser(),
        output_dir=Path(args.output).expanduser(),
        routing_policy=args.routing,
        max_workers=args.workers,
    )
    try:
        config = CsvImageConfig.from_env()
        configure_logging(config.log_level)
        print(f"Importing file '{options.csv_path}'...")
        summary = run_conversion(options, config, on_result=_print_result)
    except CsvImageError as error:
        _LOGGER.error("conversion_aborted", error=str(error), error_type=type(error).__name__)
        print(f"Error: {error}", file=sys.stderr)
        return 1
    print(f"\nDone! Check {summary.output_dir} for image output.")
    return 0


def format_result_lines(result: RecordResult) -> list[str]:
    """Render one record result as console lines.

    Args:
        result: Finished record result.

    Returns:
        Lines without trailing newlines.
    """
    lines = [f"Attempting to decode data with ID: {result.identifier}"]
    if result.detected_format:
        lines.append(f"Format: {result.detected_format}")
    if result.outcome == OUTCOME_CONVERTED:
        lines.append(f"Created '{result.output_path}'")
    elif result.outcome == OUTCOME_DUMPED:
        lines.append(f"Parsing error: {result.reason}")
        lines.append(f"Dumped data to '{result.output_path}' for debugging")
    else:
        lines.append(f"Failed: {result.reason}")
    return lines


def _print_result(result: RecordResult) -> None:
    """Print one record block followed by a blank separator line."""
    print("\n".join(format_result_lines(result)) + "\n")
