"""Shared pytest configuration, fixtures, and a fake feed backend."""

from dataclasses import dataclass, field
from datetime import date, timedelta
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pandas as pd
import pytest

from gtfs_validator.core.enums import FindingCategory
from gtfs_validator.validation.models import Finding, ValidationResult


@dataclass
class FakeFeed:
    """In-memory feed: GTFS tables as DataFrames plus canned check findings.

    ``findings`` is keyed by FeedChecks method name.
    """

    agencies: pd.DataFrame
    routes: pd.DataFrame
    trips: pd.DataFrame
    stops: pd.DataFrame
    stop_times: pd.DataFrame
    service_range: Tuple[date, date]
    calendar_dates: List[date] = field(default_factory=list)
    findings: Dict[str, List[Finding]] = field(default_factory=dict)


class FakeChecks:
    """FeedChecks returning the findings stored on the feed."""

    def __init__(self, feed: FakeFeed, calls: List[str]) -> None:
        self.feed = feed
        self.calls = calls
        self.thresholds: List[float] = []

    def _result(self, name: str) -> ValidationResult:
        self.calls.append(name)
        return ValidationResult(name, list(self.feed.findings.get(name, [])))

    def validate_routes(self) -> ValidationResult:
        return self._result("validate_routes")

    def validate_trips(self) -> ValidationResult:
        return self._result("validate_trips")

    def duplicate_stops(self) -> ValidationResult:
        return self._result("duplicate_stops")

    def reversed_trip_shapes(self) -> ValidationResult:
        return self._result("reversed_trip_shapes")

    def stops_away_from_shape(self, threshold: float) -> ValidationResult:
        self.thresholds.append(threshold)
        return self._result("stops_away_from_shape")

    def calendar_problems(self) -> ValidationResult:
        return self._result("calendar_problems")


class FakeStatistics:
    """FeedStatistics computed from the feed's DataFrames."""

    def __init__(self, feed: FakeFeed) -> None:
        self.feed = feed

    def agency_count(self) -> int:
        return len(self.feed.agencies)

    def route_count(self) -> int:
        return len(self.feed.routes)

    def trip_count(self) -> int:
        return len(self.feed.trips)

    def stop_count(self) -> int:
        return len(self.feed.stops)

    def stop_times_count(self) -> int:
        return len(self.feed.stop_times)

    def agency_names(self) -> List[str]:
        return self.feed.agencies["agency_name"].tolist()

    def calendar_date_start(self) -> Optional[date]:
        return min(self.feed.calendar_dates) if self.feed.calendar_dates else None

    def calendar_date_end(self) -> Optional[date]:
        return max(self.feed.calendar_dates) if self.feed.calendar_dates else None

    def calendar_service_range_start(self) -> date:
        return self.feed.service_range[0]

    def calendar_service_range_end(self) -> date:
        return self.feed.service_range[1]

    def active_calendars(self, days: int) -> str:
        start = self.feed.service_range[0]
        service_ids = sorted(self.feed.trips["service_id"].unique())
        return "\n".join(
            f"- {start + timedelta(days=i)}: {', '.join(service_ids)}" for i in range(days)
        )


class FakeBackend:
    """FeedBackend serving FakeFeeds registered by path."""

    def __init__(self, feeds: Optional[Dict[str, FakeFeed]] = None) -> None:
        self.feeds = dict(feeds or {})
        self.check_calls: List[str] = []
        self.last_checks: Optional[FakeChecks] = None

    def load(self, path: Path) -> FakeFeed:
        try:
            return self.feeds[str(path)]
        except KeyError:
            raise FileNotFoundError(f"No such feed: {path}") from None

    def trip_count(self, feed: FakeFeed) -> int:
        return len(feed.trips)

    def checks(self, feed: FakeFeed) -> FakeChecks:
        self.last_checks = FakeChecks(feed, self.check_calls)
        return self.last_checks

    def statistics(self, feed: FakeFeed) -> FakeStatistics:
        return FakeStatistics(feed)


def make_feed(
    agency_names: List[str],
    trip_count: int = 4,
    findings: Optional[Dict[str, List[Finding]]] = None,
    service_range: Tuple[date, date] = (date(2024, 1, 1), date(2024, 12, 31)),
    calendar_dates: Optional[List[date]] = None,
) -> FakeFeed:
    """Build a small FakeFeed with the given agencies and trip count."""
    agencies = pd.DataFrame(
        {
            "agency_id": [f"A{i}" for i in range(len(agency_names))],
            "agency_name": agency_names,
        }
    )
    routes = pd.DataFrame(
        {
            "route_id": ["R1", "R2", "R3"],
            "agency_id": ["A0", "A0", "A0"],
            "route_short_name": ["1", "2", "3"],
        }
    )
    trips = pd.DataFrame(
        {
            "trip_id": [f"T{i}" for i in range(trip_count)],
            "route_id": ["R1"] * trip_count,
            "service_id": ["WEEKDAY"] * trip_count,
        }
    )
    stops = pd.DataFrame(
        {
            "stop_id": ["S1", "S2", "S3", "S4", "S5"],
            "stop_lat": [37.77, 37.78, 37.78, 37.79, 37.80],
            "stop_lon": [-122.41, -122.42, -122.42, -122.43, -122.44],
        }
    )
    stop_times = pd.DataFrame(
        {
            "trip_id": [t for t in trips["trip_id"] for _ in range(2)],
            "stop_id": ["S1", "S2"] * trip_count,
        }
    )
    return FakeFeed(
        agencies=agencies,
        routes=routes,
        trips=trips,
        stops=stops,
        stop_times=stop_times,
        service_range=service_range,
        calendar_dates=list(calendar_dates or []),
        findings=dict(findings or {}),
    )


def stop_findings(count: int) -> List[Finding]:
    """Duplicate-stop findings numbered in discovery order."""
    return [
        Finding(FindingCategory.STOP, f"S{i}", f"Stop is a duplicate of stop S{i + 1}")
        for i in range(1, count + 1)
    ]


@pytest.fixture
def metro_feed() -> FakeFeed:
    """Two agencies, clean trips, three duplicate stops, no shape problems."""
    return make_feed(
        ["Metro", "Valley Transit"],
        findings={"duplicate_stops": stop_findings(3)},
    )


@pytest.fixture
def fake_backend(metro_feed) -> FakeBackend:  # pylint: disable=redefined-outer-name
    """Backend serving metro_feed at 'metro.zip' and an empty feed at 'empty.zip'."""
    return FakeBackend(
        {
            "metro.zip": metro_feed,
            "empty.zip": make_feed(["Ghost Lines"], trip_count=0),
        }
    )
