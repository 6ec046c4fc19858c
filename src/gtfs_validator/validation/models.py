"""Validation data models.

This module defines core data structures for validation results:
- Finding: One flagged problem in the feed
- ValidationResult: Ordered findings produced by one group of checks
- FeedSummary: Feed composition counts and the merged service range
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from gtfs_validator.core.dates import FeedDateRange
from gtfs_validator.core.enums import FindingCategory, Severity


@dataclass(frozen=True)
class Finding:
    """One data-quality problem detected by a check.

    Attributes:
        category: Feed entity the problem relates to.
        affected_entity_id: Identifier of the offending record, if known.
        message: Human-readable description of the problem.
        severity: Warning or error, when the check distinguishes them.

    Examples:
        >>> Finding(FindingCategory.STOP, "S12", "Duplicate of stop S13").describe()
        'Stop S12: Duplicate of stop S13'
    """

    category: FindingCategory
    affected_entity_id: Optional[str]
    message: str
    severity: Optional[Severity] = None

    def describe(self) -> str:
        """Return the one-line description used in report bullets."""
        label = self.category.value
        if self.affected_entity_id:
            label = f"{label} {self.affected_entity_id}"
        line = f"{label}: {self.message}"
        if self.severity is not None:
            line = f"{line} [{self.severity.value}]"
        return line

    def to_dict(self) -> dict:
        return {
            "category": self.category.value,
            "affected_entity_id": self.affected_entity_id,
            "message": self.message,
            "severity": self.severity.value if self.severity is not None else None,
        }


@dataclass
class ValidationResult:
    """Ordered findings produced by one check category.

    Findings keep discovery order and are never deduplicated or reordered;
    that is the producing check's business. Once ``seal()`` has been called
    (rendering has started) the result can no longer change.

    Attributes:
        check_name: Name of the check or check group that produced the findings.
        findings: Findings in discovery order.

    Examples:
        >>> shapes = ValidationResult("reversed_trip_shapes")
        >>> shapes.append(ValidationResult("stops_away_from_shape"))
        >>> shapes.size()
        0
    """

    check_name: str
    findings: List[Finding] = field(default_factory=list)
    _sealed: bool = field(default=False, init=False, repr=False, compare=False)

    def add(self, finding: Finding) -> None:
        """Record one more finding at the end of the sequence."""
        self._ensure_open()
        self.findings.append(finding)

    def append(self, other: ValidationResult) -> None:
        """Concatenate the findings of another result onto this one.

        Order is preserved: this result's findings first, then ``other``'s.
        Appending an empty result is a no-op.
        """
        if not other.findings:
            return
        self._ensure_open()
        self.findings.extend(other.findings)

    def size(self) -> int:
        return len(self.findings)

    def seal(self) -> None:
        """Freeze the result before it is rendered."""
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def _ensure_open(self) -> None:
        if self._sealed:
            raise RuntimeError(f"Validation result '{self.check_name}' is sealed for rendering")

    def __len__(self) -> int:
        return len(self.findings)

    def __iter__(self) -> Iterator[Finding]:
        return iter(self.findings)


@dataclass(frozen=True)
class FeedSummary:
    """Feed composition shown in the statistics block of the report.

    Attributes:
        agency_count: Number of agencies.
        route_count: Number of routes.
        trip_count: Number of trips.
        stop_count: Number of stops.
        stop_times_count: Number of stop times.
        service_range: Merged service date range.
        agency_names: Agency names in the feed's own order.
    """

    agency_count: int
    route_count: int
    trip_count: int
    stop_count: int
    stop_times_count: int
    service_range: FeedDateRange
    agency_names: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate field constraints."""
        object.__setattr__(self, "agency_names", tuple(self.agency_names))
        for name in ("agency_count", "route_count", "trip_count", "stop_count", "stop_times_count"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")


__all__ = ["Finding", "ValidationResult", "FeedSummary"]
