"""Service date range helpers.

A feed declares service in two ways: weekly patterns in ``calendar.txt``
(the service-calendar range) and one-off dates in ``calendar_dates.txt``
(the explicit-date range). The feed's operative window is the outer bound of
both. The explicit range may be missing entirely, so its bounds are passed as
``MaybeDate`` values rather than ``None``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union


@dataclass(frozen=True)
class Present:
    """A date bound that the feed declares."""

    value: date

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _as_date(self.value))


@dataclass(frozen=True)
class Absent:
    """A date bound that the feed does not declare."""


ABSENT = Absent()

MaybeDate = Union[Present, Absent]


@dataclass(frozen=True)
class FeedDateRange:
    """Inclusive calendar date range.

    Attributes:
        start: First service day.
        end: Last service day.
    """

    start: date
    end: date

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", _as_date(self.start))
        object.__setattr__(self, "end", _as_date(self.end))


def maybe_date(value: Optional[date]) -> MaybeDate:
    """Wrap an optional date coming from a collaborator.

    Examples:
        >>> maybe_date(None)
        Absent()
        >>> maybe_date(date(2024, 1, 5))
        Present(value=datetime.date(2024, 1, 5))
    """
    if value is None:
        return ABSENT
    return Present(value)


def earliest_date(candidate: MaybeDate, base: date) -> date:
    """Return the candidate when present and strictly earlier than base."""
    base = _as_date(base)
    if isinstance(candidate, Present) and candidate.value < base:
        return candidate.value
    return base


def latest_date(candidate: MaybeDate, base: date) -> date:
    """Return the candidate when present and strictly later than base."""
    base = _as_date(base)
    if isinstance(candidate, Present) and candidate.value > base:
        return candidate.value
    return base


def merge_date_range(
    explicit_start: MaybeDate,
    explicit_end: MaybeDate,
    base_start: date,
    base_end: date,
) -> FeedDateRange:
    """Combine explicit-date bounds with the service-calendar range.

    Takes the earliest start and the latest end. Absent explicit bounds do
    not participate, so the result equals the base range in that case.

    Args:
        explicit_start: First explicit service date, if any.
        explicit_end: Last explicit service date, if any.
        base_start: Start of the service-calendar range.
        base_end: End of the service-calendar range.

    Returns:
        The widest envelope of the two ranges.

    Examples:
        >>> merge_date_range(
        ...     Present(date(2023, 12, 25)),
        ...     Present(date(2024, 1, 2)),
        ...     date(2024, 1, 1),
        ...     date(2024, 12, 31),
        ... )
        FeedDateRange(start=datetime.date(2023, 12, 25), end=datetime.date(2024, 12, 31))
    """
    return FeedDateRange(
        start=earliest_date(explicit_start, base_start),
        end=latest_date(explicit_end, base_end),
    )


def _as_date(value: date) -> date:
    # datetime is a date subclass but does not compare with plain dates
    if isinstance(value, datetime):
        return value.date()
    return value


__all__ = [
    "ABSENT",
    "Absent",
    "FeedDateRange",
    "MaybeDate",
    "Present",
    "earliest_date",
    "latest_date",
    "maybe_date",
    "merge_date_range",
]
