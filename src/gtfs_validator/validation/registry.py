"""Check plan and backend resolution.

This module orchestrates which checks run and in which order:
- CHECK_PLAN: Ordered list of planned checks, one per report section
- run_checks(): Executes the plan against a FeedChecks instance
- load_backend(): Resolves a backend from its import path
"""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List

from gtfs_validator.core.enums import ReportSection
from .checks import FeedBackend, FeedChecks
from .config import ValidatorConfig
from .models import ValidationResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlannedCheck:
    """One step of the check plan.

    Attributes:
        section: Report section that receives the result.
        progress_message: Line written on the progress channel before running.
        run: Callable producing the section's result.
    """

    section: ReportSection
    progress_message: str
    run: Callable[[FeedChecks, ValidatorConfig], ValidationResult]


def _shape_checks(checks: FeedChecks, config: ValidatorConfig) -> ValidationResult:
    shapes = checks.reversed_trip_shapes()
    shapes.append(checks.stops_away_from_shape(config.shape_distance_threshold))
    return shapes


# Checks run in this order; the report order is config.SECTION_ORDER
CHECK_PLAN: List[PlannedCheck] = [
    PlannedCheck(
        ReportSection.ROUTES,
        "Validating routes",
        lambda checks, config: checks.validate_routes(),
    ),
    PlannedCheck(
        ReportSection.TRIPS,
        "Validating trips",
        lambda checks, config: checks.validate_trips(),
    ),
    PlannedCheck(
        ReportSection.STOPS,
        "Checking for duplicate stops",
        lambda checks, config: checks.duplicate_stops(),
    ),
    PlannedCheck(
        ReportSection.SHAPES,
        "Checking for problems with shapes",
        _shape_checks,
    ),
    PlannedCheck(
        ReportSection.DATES,
        "Checking for dates with no trips",
        lambda checks, config: checks.calendar_problems(),
    ),
]


def run_checks(
    checks: FeedChecks,
    config: ValidatorConfig,
    progress: Callable[[str], None],
) -> Dict[ReportSection, ValidationResult]:
    """Run every planned check and collect the results by section.

    Args:
        checks: Checks bound to the loaded feed.
        config: Run configuration (supplies the shape distance threshold).
        progress: Receives each step's progress message before it runs.

    Returns:
        Mapping of report section to its ValidationResult.
    """
    results: Dict[ReportSection, ValidationResult] = {}
    for step in CHECK_PLAN:
        progress(step.progress_message)
        result = step.run(checks, config)
        logger.debug("%s: %d findings", step.section.value, result.size())
        if step.section in results:
            results[step.section].append(result)
        else:
            results[step.section] = result
    return results


def load_backend(spec: str) -> FeedBackend:
    """Resolve a feed backend from ``"package.module:attr"``.

    A callable attribute (class or factory) is called without arguments and
    its return value is used as the backend.

    Args:
        spec: Import path of the backend.

    Returns:
        The backend instance.

    Raises:
        ValueError: If the spec is malformed, cannot be imported, or does not
            resolve to an object with ``load``, ``trip_count``, ``checks`` and
            ``statistics`` methods.

    Examples:
        >>> backend = load_backend("my_gtfs_backend.backend:Backend")
    """
    module_name, sep, attr_name = spec.partition(":")
    if not sep or not module_name or not attr_name:
        raise ValueError(f"Invalid backend '{spec}'. Expected format: package.module:attr")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f"Cannot import backend module '{module_name}': {e}") from e

    try:
        target = getattr(module, attr_name)
    except AttributeError as e:
        raise ValueError(f"Backend module '{module_name}' has no attribute '{attr_name}'") from e

    backend = target() if callable(target) else target

    missing = [
        name
        for name in ("load", "trip_count", "checks", "statistics")
        if not callable(getattr(backend, name, None))
    ]
    if missing:
        raise ValueError(f"Backend '{spec}' is missing methods: {', '.join(missing)}")

    logger.debug("Loaded feed backend %s", spec)
    return backend


__all__ = ["CHECK_PLAN", "PlannedCheck", "load_backend", "run_checks"]
