"""Validation configuration.

This module centralizes report policy defaults and the run configuration.
Adjust these constants to tune how much of a large feed's findings ends up in
the report.

Policy values:
    - max_findings_per_section: Hard ceiling on bullet lines per detail section
    - shape_distance_threshold: Distance (feed units, usually meters) beyond
      which a stop counts as detached from its trip's shape
    - active_calendar_days: Look-ahead window of the active calendars section
      (0 disables the section)
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from gtfs_validator.core.enums import ReportFormat, ReportSection

# ============================================================================
# POLICY DEFAULTS
# ============================================================================

DEFAULT_MAX_FINDINGS_PER_SECTION = 128
DEFAULT_SHAPE_DISTANCE_THRESHOLD = 130.0
DEFAULT_ACTIVE_CALENDAR_DAYS = 30

# Config file picked up by the CLI when --config is not given
DEFAULT_CONFIG_PATH = Path("config/validator.yaml")


# ============================================================================
# SECTION ORDER
# ============================================================================
# Rendering order of the report sections. Summary lines and detail sections
# both follow this tuple, never the iteration order of a results mapping.

SECTION_ORDER: Tuple[ReportSection, ...] = (
    ReportSection.ROUTES,
    ReportSection.TRIPS,
    ReportSection.STOPS,
    ReportSection.SHAPES,
    ReportSection.DATES,
)


@dataclass(frozen=True)
class ValidatorConfig:
    """Settings for one validation run.

    Attributes:
        backend: Import path (``"package.module:attr"``) of the feed backend.
        silent: Discard every progress, diagnostic and report write.
        max_findings_per_section: Bullet lines shown per detail section.
        shape_distance_threshold: Threshold handed to the stops-away-from-shape check.
        active_calendar_days: Days covered by the active calendars section.
        report_format: Markdown or JSON report.
    """

    backend: Optional[str] = None
    silent: bool = False
    max_findings_per_section: int = DEFAULT_MAX_FINDINGS_PER_SECTION
    shape_distance_threshold: float = DEFAULT_SHAPE_DISTANCE_THRESHOLD
    active_calendar_days: int = DEFAULT_ACTIVE_CALENDAR_DAYS
    report_format: ReportFormat = ReportFormat.MARKDOWN

    def __post_init__(self) -> None:
        """Validate field constraints."""
        if not isinstance(self.report_format, ReportFormat):
            try:
                object.__setattr__(
                    self, "report_format", ReportFormat(str(self.report_format).lower())
                )
            except ValueError:
                valid = ", ".join(f.value for f in ReportFormat)
                raise ValueError(
                    f"Invalid report_format: {self.report_format}. Valid formats: {valid}"
                ) from None
        if isinstance(self.max_findings_per_section, bool) or not isinstance(
            self.max_findings_per_section, int
        ):
            raise ValueError("max_findings_per_section must be an integer")
        if self.max_findings_per_section < 1:
            raise ValueError(
                f"max_findings_per_section must be at least 1, got {self.max_findings_per_section}"
            )
        if isinstance(self.shape_distance_threshold, bool) or not isinstance(
            self.shape_distance_threshold, (int, float)
        ):
            raise ValueError("shape_distance_threshold must be a number")
        if self.shape_distance_threshold <= 0:
            raise ValueError(
                f"shape_distance_threshold must be positive, got {self.shape_distance_threshold}"
            )
        if isinstance(self.active_calendar_days, bool) or not isinstance(
            self.active_calendar_days, int
        ):
            raise ValueError("active_calendar_days must be an integer")
        if self.active_calendar_days < 0:
            raise ValueError(
                f"active_calendar_days must be non-negative, got {self.active_calendar_days}"
            )
        if not isinstance(self.silent, bool):
            raise ValueError("silent must be true or false")
        if self.backend is not None and not isinstance(self.backend, str):
            raise ValueError("backend must be an import path such as 'package.module:attr'")

    def with_overrides(self, **overrides: Any) -> ValidatorConfig:
        """Return a copy with the non-None overrides applied.

        Examples:
            >>> ValidatorConfig().with_overrides(silent=True, backend=None).silent
            True
        """
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)


def load_config(path: Path) -> ValidatorConfig:
    """Load a ValidatorConfig from a YAML file.

    The file holds a flat mapping whose keys are ValidatorConfig field names.
    Missing keys keep their defaults; an empty file yields the defaults.

    Args:
        path: Path to the YAML file.

    Returns:
        The parsed configuration.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the YAML is malformed, not a mapping, holds unknown
            keys, or holds invalid values.

    Examples:
        >>> config = load_config(Path("config/validator.yaml"))
        >>> config.max_findings_per_section
        128
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")

    known = {f.name for f in fields(ValidatorConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(
            f"Unknown config keys in {path}: {', '.join(map(str, unknown))}. "
            f"Valid keys: {', '.join(sorted(known))}"
        )

    values: Dict[str, Any] = dict(data)
    return ValidatorConfig(**values)


__all__ = [
    "DEFAULT_ACTIVE_CALENDAR_DAYS",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_MAX_FINDINGS_PER_SECTION",
    "DEFAULT_SHAPE_DISTANCE_THRESHOLD",
    "SECTION_ORDER",
    "ValidatorConfig",
    "load_config",
]
