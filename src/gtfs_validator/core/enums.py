"""Core enumerations used across the package."""

from __future__ import annotations

from enum import Enum


class FindingCategory(str, Enum):
    """Feed entity a finding relates to.

    Values double as the label printed at the start of a report line.
    """

    AGENCY = "Agency"
    ROUTE = "Route"
    TRIP = "Trip"
    STOP = "Stop"
    STOP_TIME = "StopTime"
    SHAPE = "Shape"
    CALENDAR = "Calendar"
    FEED = "Feed"


class Severity(str, Enum):
    """Severity of a finding, when the producing check distinguishes one."""

    WARNING = "warning"
    ERROR = "error"


class ReportSection(str, Enum):
    """Report sections, one per group of checks.

    Iteration order of this enum is not relied upon; see
    ``validation.config.SECTION_ORDER`` for the rendering order.
    """

    ROUTES = "Routes"
    TRIPS = "Trips"
    STOPS = "Stops"
    SHAPES = "Shapes"
    DATES = "Dates"


class ReportFormat(str, Enum):
    """Output formats supported by the CLI."""

    MARKDOWN = "markdown"
    JSON = "json"


__all__ = ["FindingCategory", "Severity", "ReportSection", "ReportFormat"]
