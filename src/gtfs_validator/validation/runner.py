"""Validation run orchestration.

One run is a straight line: load the feed, run the check plan, compute the
statistics, render the report and emit it. Two preconditions abort the run
before any check executes: an unreadable archive and a feed without trips.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from gtfs_validator.core.dates import maybe_date, merge_date_range
from gtfs_validator.core.enums import ReportFormat, ReportSection
from .checks import FeedBackend, FeedStatistics
from .config import ValidatorConfig
from .errors import EmptyFeedError, FeedLoadError
from .models import FeedSummary, ValidationResult
from .registry import run_checks
from .report import render_full_report, render_json_report
from .sinks import OutputSink

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1


@dataclass
class ValidationOutcome:
    """What a validation run produced.

    Attributes:
        exit_code: Process exit status for the run.
        report: Rendered report, or None when the run aborted.
        summary: Feed statistics, or None when the run aborted.
        results: Validation result per report section.
    """

    exit_code: int
    report: Optional[str] = None
    summary: Optional[FeedSummary] = None
    results: Dict[ReportSection, ValidationResult] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.exit_code == EXIT_OK


def collect_summary(stats: FeedStatistics) -> FeedSummary:
    """Build the FeedSummary from a backend's statistics.

    The service range is the widest envelope of the calendar_dates range
    and the weekly service calendar range.
    """
    service_range = merge_date_range(
        maybe_date(stats.calendar_date_start()),
        maybe_date(stats.calendar_date_end()),
        stats.calendar_service_range_start(),
        stats.calendar_service_range_end(),
    )
    return FeedSummary(
        agency_count=stats.agency_count(),
        route_count=stats.route_count(),
        trip_count=stats.trip_count(),
        stop_count=stats.stop_count(),
        stop_times_count=stats.stop_times_count(),
        service_range=service_range,
        agency_names=tuple(stats.agency_names()),
    )


class FeedValidator:
    """Runs the full validation pipeline for one feed.

    Args:
        backend: Loads the feed and provides checks and statistics.
        sink: Receives progress lines, fatal messages and the report.
        config: Run configuration; defaults apply when omitted.

    Examples:
        >>> validator = FeedValidator(backend, ConsoleSink())
        >>> outcome = validator.run(Path("gtfs.zip"))
        >>> outcome.exit_code
        0
    """

    def __init__(
        self,
        backend: FeedBackend,
        sink: OutputSink,
        config: Optional[ValidatorConfig] = None,
    ) -> None:
        self.backend = backend
        self.sink = sink
        self.config = config or ValidatorConfig()

    def run(self, feed_path: Path) -> ValidationOutcome:
        """Validate a feed and emit its report.

        Returns:
            ValidationOutcome with exit code 0 and the report on success, or
            EXIT_FATAL and no report when the feed is unreadable or empty.
        """
        try:
            feed = self._load(feed_path)
        except (FeedLoadError, EmptyFeedError) as e:
            self.sink.write_error(str(e))
            return ValidationOutcome(exit_code=EXIT_FATAL)

        checks = self.backend.checks(feed)
        results = run_checks(checks, self.config, self.sink.write_progress)

        self.sink.write_progress("Calculating statistics")
        stats = self.backend.statistics(feed)
        summary = collect_summary(stats)

        for result in results.values():
            result.seal()

        report = self._render(summary, results, stats)
        self.sink.write_report(report)
        return ValidationOutcome(
            exit_code=EXIT_OK,
            report=report,
            summary=summary,
            results=results,
        )

    def _load(self, feed_path: Path) -> Any:
        self.sink.write_progress(f"Reading GTFS from {feed_path}")
        try:
            feed = self.backend.load(feed_path)
        except OSError as e:
            logger.debug("Loading %s failed: %s", feed_path, e)
            raise FeedLoadError(
                f"Could not read file {feed_path}; does it exist and is it readable?"
            ) from e
        self.sink.write_progress("Read GTFS")

        if self.backend.trip_count(feed) == 0:
            raise EmptyFeedError("No Trips Found in GTFS, exiting")
        return feed

    def _render(
        self,
        summary: FeedSummary,
        results: Dict[ReportSection, ValidationResult],
        stats: FeedStatistics,
    ) -> str:
        max_lines = self.config.max_findings_per_section
        if self.config.report_format == ReportFormat.JSON:
            return render_json_report(summary, results, max_lines=max_lines)

        active_calendars = None
        if self.config.active_calendar_days > 0:
            active_calendars = stats.active_calendars(self.config.active_calendar_days)
        return render_full_report(
            summary.agency_names,
            summary,
            results,
            max_lines=max_lines,
            active_calendars=active_calendars,
            active_calendar_days=self.config.active_calendar_days,
        )


def validate_feed(
    feed_path: Path,
    backend: FeedBackend,
    sink: OutputSink,
    config: Optional[ValidatorConfig] = None,
) -> ValidationOutcome:
    """Validate one feed with a fresh FeedValidator.

    Examples:
        >>> from gtfs_validator.validation import MemorySink, validate_feed
        >>> sink = MemorySink()
        >>> outcome = validate_feed(Path("gtfs.zip"), backend, sink)
        >>> print(sink.reports[0])
    """
    return FeedValidator(backend, sink, config).run(feed_path)


__all__ = [
    "EXIT_FATAL",
    "EXIT_OK",
    "FeedValidator",
    "ValidationOutcome",
    "collect_summary",
    "validate_feed",
]
