"""Conversion orchestration over CSV records.

This module reads records sequentially, dispatches each record to a
worker pool, and reports worker results from the driver thread only.
"""

from __future__ import annotations

from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Callable

from convert.image_encoder import resolve_routing_table
from convert.record_converter import convert_record
from core.config import CsvImageConfig
from core.logging_config import get_logger
from core.types import (
    OUTCOME_CONVERTED,
    OUTCOME_DUMPED,
    OUTCOME_FAILED,
    ConversionOptions,
    RecordResult,
    RunSummary,
)
from ingest.record_reader import open_record_reader

_LOGGER = get_logger(__name__)

ResultCallback = Callable[[RecordResult], None]


class ConversionPipelineRunner:
    """Runner for one conversion pass over an input CSV file."""

    def __init__(
        self,
        options: ConversionOptions,
        config: CsvImageConfig,
        on_result: ResultCallback | None = None,
    ) -> None:
        self._options = options
        self._routing = resolve_routing_table(options.routing_policy)
        self._max_workers = options.max_workers or config.max_workers
        self._on_result = on_result
        self._results: list[RecordResult] = []

    def run(self) -> RunSummary:
        """Convert every record and return the run summary.

        In-flight records are drained and reported before a fatal input
        error propagates; rows after a malformed row are never dispatched.

        Raises:
            InputIOError: If the input file cannot be read.
            MalformedRowError: If a row is not exactly two fields.
        """
        reader = open_record_reader(self._options.csv_path)
        _LOGGER.info(
            "conversion_started",
            csv_path=str(self._options.csv_path),
            output_dir=str(self._options.output_dir),
            routing_policy=self._options.routing_policy,
            max_workers=self._max_workers,
        )
        pending: set[Future[RecordResult]] = set()
        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            try:
                for record in reader:
                    future = executor.submit(
                        convert_record, record, self._options.output_dir, self._routing
                    )
                    pending.add(future)
                    pending = self._report_finished(pending, block=False)
            finally:
                while pending:
                    pending = self._report_finished(pending, block=True)
        summary = RunSummary(output_dir=self._options.output_dir, results=tuple(self._results))
        _log_conversion_completion(self._options, summary)
        return summary

    def _report_finished(
        self,
        pending: set[Future[RecordResult]],
        block: bool,
    ) -> set[Future[RecordResult]]:
        timeout = None if block else 0
        done, still_pending = wait(pending, timeout=timeout, return_when=FIRST_COMPLETED)
        for future in done:
            self._report(future.result())
        return still_pending

    def _report(self, result: RecordResult) -> None:
        self._results.append(result)
        _log_record_result(result)
        if self._on_result is not None:
            self._on_result(result)


def run_conversion(
    options: ConversionOptions,
    config: CsvImageConfig,
    on_result: ResultCallback | None = None,
) -> RunSummary:
    """Convert every record of an input CSV file.

    Args:
        options: Conversion request options.
        config: Runtime configuration.
        on_result: Optional callback invoked once per finished record,
            always from the calling thread.

    Returns:
        Summary with one result per dispatched record.

    Raises:
        CsvImageIngestError: If the input file is unreadable or malformed.
        CsvImageConfigError: If the routing policy is unknown.
    """
    runner = ConversionPipelineRunner(options, config, on_result)
    return runner.run()


def _log_record_result(result: RecordResult) -> None:
    """Log one record outcome with contextual fields."""
    output_path = str(result.output_path) if result.output_path else None
    if result.outcome == OUTCOME_CONVERTED:
        _LOGGER.info(
            "record_converted",
            identifier=result.identifier,
            detected_format=result.detected_format,
            output_path=output_path,
        )
    elif result.outcome == OUTCOME_DUMPED:
        _LOGGER.warning(
            "record_dumped",
            identifier=result.identifier,
            detected_format=result.detected_format,
            reason=result.reason,
            dump_path=output_path,
        )
    else:
        _LOGGER.error("record_failed", identifier=result.identifier, reason=result.reason)


def _log_conversion_completion(options: ConversionOptions, summary: RunSummary) -> None:
    """Log pipeline completion with per-outcome counts."""
    _LOGGER.info(
        "conversion_completed",
        csv_path=str(options.csv_path),
        output_dir=str(options.output_dir),
        record_count=len(summary.results),
        converted_count=summary.count(OUTCOME_CONVERTED),
        dumped_count=summary.count(OUTCOME_DUMPED),
        failed_count=summary.count(OUTCOME_FAILED),
    )
