"""Feed backend interface.

This module defines the protocols (interfaces) a feed backend must implement.
The backend owns everything this package deliberately does not: reading the
feed archive, deciding what is invalid, and counting entities. Each check
returns one ValidationResult; the runner only merges and renders them.

To plug in a backend:

1. Implement the three protocols below in your own package
2. Expose a class or factory that builds the FeedBackend
3. Point the ``backend`` config key (or ``--backend``) at it as
   ``"package.module:attr"``

Example:
    ```python
    # mybackend.py
    from gtfs_validator.validation.models import ValidationResult

    class MyChecks:
        def __init__(self, feed):
            self.feed = feed

        def validate_routes(self) -> ValidationResult:
            result = ValidationResult("routes")
            # Validation logic here
            return result

        ...

    class MyBackend:
        def load(self, path):
            return read_my_feed(path)  # raise OSError when unreadable

        def trip_count(self, feed) -> int:
            return len(feed.trips)

        def checks(self, feed):
            return MyChecks(feed)

        def statistics(self, feed):
            return MyStatistics(feed)
    ```
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any, List, Optional, Protocol

from ..models import ValidationResult


class FeedChecks(Protocol):
    """Checks bound to one loaded feed.

    Every method only reads the feed and returns a fresh ValidationResult.
    Malformed but parseable data must be reported as findings, not raised.
    """

    def validate_routes(self) -> ValidationResult:
        """Semantic route checks (names, types, agency references)."""
        ...

    def validate_trips(self) -> ValidationResult:
        """Semantic trip checks (route/service references, stop times)."""
        ...

    def duplicate_stops(self) -> ValidationResult:
        """Stops that duplicate one another."""
        ...

    def reversed_trip_shapes(self) -> ValidationResult:
        """Trips whose shape runs against the direction of travel."""
        ...

    def stops_away_from_shape(self, threshold: float) -> ValidationResult:
        """Stops farther than ``threshold`` (feed units) from their trip's shape."""
        ...

    def calendar_problems(self) -> ValidationResult:
        """Dates inside the service window that have no trips."""
        ...


class FeedStatistics(Protocol):
    """Counts and calendar bounds of one loaded feed."""

    def agency_count(self) -> int: ...

    def route_count(self) -> int: ...

    def trip_count(self) -> int: ...

    def stop_count(self) -> int: ...

    def stop_times_count(self) -> int: ...

    def agency_names(self) -> List[str]:
        """Agency names in the feed's own order."""
        ...

    def calendar_date_start(self) -> Optional[date]:
        """First date listed in calendar_dates, or None when there is none."""
        ...

    def calendar_date_end(self) -> Optional[date]:
        """Last date listed in calendar_dates, or None when there is none."""
        ...

    def calendar_service_range_start(self) -> date:
        """Start of the weekly service calendar range."""
        ...

    def calendar_service_range_end(self) -> date:
        """End of the weekly service calendar range."""
        ...

    def active_calendars(self, days: int) -> str:
        """Markdown text listing the active calendars for each of the next ``days`` days."""
        ...


class FeedBackend(Protocol):
    """Loads feeds and hands out checks and statistics for them."""

    def load(self, path: Path) -> Any:
        """Load a feed archive.

        Raises:
            OSError: If the archive cannot be read.
        """
        ...

    def trip_count(self, feed: Any) -> int:
        """Number of trips in a loaded feed."""
        ...

    def checks(self, feed: Any) -> FeedChecks: ...

    def statistics(self, feed: Any) -> FeedStatistics: ...


__all__ = ["FeedBackend", "FeedChecks", "FeedStatistics"]
