"""Report rendering.

Pure functions turning validation results and feed statistics into the
markdown-style text report (or its JSON counterpart). Nothing here writes
output; the runner hands the returned strings to a sink.
"""

from __future__ import annotations

import json
from typing import List, Mapping, Optional, Sequence

from gtfs_validator.core.enums import ReportSection
from .config import (
    DEFAULT_ACTIVE_CALENDAR_DAYS,
    DEFAULT_MAX_FINDINGS_PER_SECTION,
    SECTION_ORDER,
)
from .models import FeedSummary, ValidationResult

NO_FINDINGS_MESSAGE = "Hooray! No errors here (at least, none that we could find)."
TRUNCATION_MARKER = "And Many More..."


def render_agency_list(names: Sequence[str]) -> str:
    """Join agency names the way a sentence would.

    No serial comma, so two names read "A and B" and three read "A, B and C".

    Examples:
        >>> render_agency_list([])
        ''
        >>> render_agency_list(["BART", "AirBART"])
        'BART and AirBART'
        >>> render_agency_list(["Metro", "Valley Transit", "Harbor Ferry"])
        'Metro, Valley Transit and Harbor Ferry'
    """
    names = list(names)
    if not names:
        return ""
    if len(names) == 1:
        return names[0]
    return f"{', '.join(names[:-1])} and {names[-1]}"


def render_summary_line(result: ValidationResult) -> str:
    """Return a single-line summary of a ValidationResult."""
    return f"{result.size()} errors/warnings"


def render_detail_section(
    result: ValidationResult, max_lines: int = DEFAULT_MAX_FINDINGS_PER_SECTION
) -> str:
    """Return the bullet list of a result's findings.

    Findings are listed in stored order. At most ``max_lines`` bullets are
    printed; if more findings exist a single truncation line follows, so
    truncation always drops the tail.

    Args:
        result: Result to render.
        max_lines: Maximum number of bullet lines.

    Returns:
        Newline-joined lines without a trailing newline, or the fixed
        no-findings message when the result is empty.

    Raises:
        ValueError: If max_lines is smaller than 1.
    """
    if max_lines < 1:
        raise ValueError(f"max_lines must be at least 1, got {max_lines}")
    if result.size() == 0:
        return NO_FINDINGS_MESSAGE

    lines = [f"- {finding.describe()}" for finding in result.findings[:max_lines]]
    if result.size() > max_lines:
        lines.append(TRUNCATION_MARKER)
    return "\n".join(lines)


def render_statistics(summary: FeedSummary) -> str:
    """Return the feed statistics block."""
    lines = [
        "## Feed statistics",
        f"- {summary.agency_count} agencies",
        f"- {summary.route_count} routes",
        f"- {summary.trip_count} trips",
        f"- {summary.stop_count} stops",
        f"- {summary.stop_times_count} stop times",
        # blank line keeps the sentence out of the list in markdown viewers
        "",
        f"Feed has service from {summary.service_range.start.isoformat()} "
        f"to {summary.service_range.end.isoformat()}",
    ]
    return "\n".join(lines)


def render_full_report(
    agency_names: Sequence[str],
    summary: FeedSummary,
    named_results: Mapping[ReportSection, ValidationResult],
    *,
    max_lines: int = DEFAULT_MAX_FINDINGS_PER_SECTION,
    active_calendars: Optional[str] = None,
    active_calendar_days: int = DEFAULT_ACTIVE_CALENDAR_DAYS,
) -> str:
    """Compose the full validation report.

    Layout, in fixed order: title naming the agencies, statistics block,
    one summary line per section, then one detail section per section.
    Sections follow ``SECTION_ORDER`` regardless of the mapping's order.

    Args:
        agency_names: Agency names for the title, in feed order.
        summary: Feed counts and merged service range.
        named_results: Result for every report section.
        max_lines: Bullet cap per detail section.
        active_calendars: Optional text for the trailing active calendars section.
        active_calendar_days: Window named in the active calendars header.

    Returns:
        The report text, ending with a newline.

    Raises:
        ValueError: If a section is missing from named_results.

    Examples:
        >>> report = render_full_report(["Metro"], summary, results)
        >>> report.splitlines()[0]
        '# Validation report for Metro'
    """
    _require_sections(named_results)

    lines: List[str] = [
        f"# Validation report for {render_agency_list(agency_names)}".rstrip(),
        render_statistics(summary),
        "## Validation Results",
    ]
    for section in SECTION_ORDER:
        lines.append(f"- {section.value}: {render_summary_line(named_results[section])}")

    for section in SECTION_ORDER:
        lines.append("")
        lines.append(f"### {section.value}")
        lines.append(render_detail_section(named_results[section], max_lines))

    if active_calendars is not None:
        lines.append("")
        lines.append(f"### Active Calendars for the next {active_calendar_days} days")
        lines.append(active_calendars.rstrip("\n"))

    return "\n".join(lines) + "\n"


def render_json_report(
    summary: FeedSummary,
    named_results: Mapping[ReportSection, ValidationResult],
    *,
    max_lines: int = DEFAULT_MAX_FINDINGS_PER_SECTION,
) -> str:
    """Generate the JSON counterpart of the text report.

    Findings per section are capped at ``max_lines`` like the text report;
    ``count`` always holds the full number and ``truncated`` flags the cap.

    Returns:
        Formatted JSON string.
    """
    if max_lines < 1:
        raise ValueError(f"max_lines must be at least 1, got {max_lines}")
    _require_sections(named_results)

    report_data = {
        "agencies": list(summary.agency_names),
        "statistics": {
            "agencies": summary.agency_count,
            "routes": summary.route_count,
            "trips": summary.trip_count,
            "stops": summary.stop_count,
            "stop_times": summary.stop_times_count,
        },
        "service_range": {
            "start": summary.service_range.start.isoformat(),
            "end": summary.service_range.end.isoformat(),
        },
        "sections": [
            {
                "section": section.value,
                "count": named_results[section].size(),
                "truncated": named_results[section].size() > max_lines,
                "findings": [
                    finding.to_dict() for finding in named_results[section].findings[:max_lines]
                ],
            }
            for section in SECTION_ORDER
        ],
    }
    return json.dumps(report_data, indent=2, ensure_ascii=False)


def _require_sections(named_results: Mapping[ReportSection, ValidationResult]) -> None:
    missing = [section.value for section in SECTION_ORDER if section not in named_results]
    if missing:
        raise ValueError(f"Missing validation results for sections: {', '.join(missing)}")


__all__ = [
    "NO_FINDINGS_MESSAGE",
    "TRUNCATION_MARKER",
    "render_agency_list",
    "render_detail_section",
    "render_full_report",
    "render_json_report",
    "render_statistics",
    "render_summary_line",
]
