"""Validation result aggregation and reporting.

This module provides the pipeline between a feed backend's checks and the
final report:

- **Models**: Finding, ValidationResult, FeedSummary - validation result data structures
- **Checks**: Backend protocols the feed loader, checks and statistics implement
- **Config**: Report policy defaults and ValidatorConfig (import from .config)
- **Registry**: Check plan and backend resolution
- **Report**: Pure rendering functions for the text and JSON reports
- **Runner**: FeedValidator / validate_feed - one full validation run

Public API:
    Finding: One flagged problem with its one-line description
    ValidationResult: Ordered, appendable findings of one check category
    FeedSummary: Feed counts plus the merged service date range
    FeedValidator: Orchestrates load, checks, statistics and rendering
    validate_feed: Run a FeedValidator once

Usage:
    >>> from gtfs_validator.validation import ConsoleSink, validate_feed, load_backend
    >>> from pathlib import Path
    >>> backend = load_backend("my_gtfs_backend:Backend")
    >>> outcome = validate_feed(Path("gtfs.zip"), backend, ConsoleSink())

For implementation details:
    - See validation/checks/__init__.py for the backend interface
    - See validation/config.py for policy defaults and section order
    - See validation/report.py for the report layout
"""

from __future__ import annotations

from gtfs_validator.core.enums import FindingCategory, ReportSection, Severity

from .config import ValidatorConfig, load_config
from .errors import EmptyFeedError, FeedLoadError
from .models import FeedSummary, Finding, ValidationResult
from .registry import load_backend
from .runner import FeedValidator, ValidationOutcome, validate_feed
from .sinks import ConsoleSink, MemorySink

__all__ = [
    # Data models
    "Finding",
    "ValidationResult",
    "FeedSummary",
    # Runner
    "FeedValidator",
    "ValidationOutcome",
    "validate_feed",
    "load_backend",
    # Configuration
    "ValidatorConfig",
    "load_config",
    # Output
    "ConsoleSink",
    "MemorySink",
    # Errors
    "EmptyFeedError",
    "FeedLoadError",
    # Enums
    "FindingCategory",
    "ReportSection",
    "Severity",
]
