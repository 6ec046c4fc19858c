import argparse
import logging
from pathlib import Path
from typing import Optional

import colorlog

from gtfs_validator import __version__ as _PACKAGE_VERSION
from gtfs_validator.core.enums import ReportFormat
from gtfs_validator.validation.config import DEFAULT_CONFIG_PATH, ValidatorConfig, load_config
from gtfs_validator.validation.registry import load_backend
from gtfs_validator.validation.runner import EXIT_FATAL, FeedValidator
from gtfs_validator.validation.sinks import ConsoleSink

EXIT_USAGE = 2

REPORT_FORMAT_CHOICES = [f.value for f in ReportFormat]


def setup_logging(verbose: bool = False, silent: bool = False) -> None:
    logger = logging.getLogger()
    for h in list(logger.handlers):
        logger.removeHandler(h)
    log_format = "%(asctime)s:%(levelname)s:%(name)s: %(message)s"
    log_colors = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold_red",
    }
    stream_handler = colorlog.StreamHandler()
    formatter = colorlog.ColoredFormatter(f"%(log_color)s{log_format}", log_colors=log_colors)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    if silent:
        logger.setLevel(logging.CRITICAL + 1)
    else:
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def resolve_config(args: argparse.Namespace) -> ValidatorConfig:
    """Combine the config file (if any) with command-line overrides.

    An explicit --config must exist. Without it, config/validator.yaml is used
    when present and the built-in defaults otherwise.

    Raises:
        FileNotFoundError: If an explicit config file is missing.
        ValueError: If the config file or an override is invalid.
    """
    config_arg = getattr(args, "config", None)
    if config_arg is not None:
        config = load_config(Path(config_arg))
    elif DEFAULT_CONFIG_PATH.exists():
        config = load_config(DEFAULT_CONFIG_PATH)
    else:
        config = ValidatorConfig()

    return config.with_overrides(
        backend=getattr(args, "backend", None),
        silent=getattr(args, "silent", None),
        max_findings_per_section=getattr(args, "max_findings", None),
        shape_distance_threshold=getattr(args, "shape_distance_threshold", None),
        active_calendar_days=getattr(args, "active_calendar_days", None),
        report_format=getattr(args, "format", None),
    )


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate one feed and write its report.

    Returns:
        0 if the report was produced (findings do not change the status)
        1 if the feed could not be read or has no trips
        2 if the configuration or backend is invalid
    """
    try:
        config = resolve_config(args)
    except (FileNotFoundError, ValueError) as e:
        logging.error("Invalid configuration: %s", e)
        return EXIT_USAGE

    if config.silent:
        # silent may come from the config file, after logging was set up
        logging.getLogger().setLevel(logging.CRITICAL + 1)

    if not config.backend:
        logging.error(
            "No feed backend configured. Pass --backend package.module:attr "
            "or set 'backend' in %s",
            DEFAULT_CONFIG_PATH,
        )
        return EXIT_USAGE

    try:
        backend = load_backend(config.backend)
    except ValueError as e:
        logging.error("Failed to load feed backend: %s", e)
        return EXIT_USAGE

    output = getattr(args, "output", None)
    sink = ConsoleSink(
        silent=config.silent,
        report_path=Path(output) if output else None,
    )
    try:
        outcome = FeedValidator(backend, sink, config).run(Path(args.feed))
    except OSError as e:
        # FeedValidator turns unreadable feeds into an exit code; this is the report write
        logging.error("Failed to write report: %s", e)
        return EXIT_FATAL
    return outcome.exit_code


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="gtfs-validator",
        description=f"GTFS feed validation report (v{_PACKAGE_VERSION})",
    )
    p.add_argument("feed", help="Path to the GTFS feed archive (e.g. /path/to/gtfs.zip)")
    p.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    p.add_argument(
        "--silent",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Suppress all output, including the report (overrides --verbose); "
        "--no-silent overrides 'silent: true' in the config file",
    )
    p.add_argument(
        "--config",
        default=None,
        help=f"Path to validator YAML config (defaults to {DEFAULT_CONFIG_PATH} when present)",
    )
    p.add_argument(
        "--backend",
        default=None,
        help="Feed backend as package.module:attr (overrides the config file)",
    )
    p.add_argument(
        "--max-findings",
        type=int,
        default=None,
        help="Maximum findings listed per report section (default 128)",
    )
    p.add_argument(
        "--shape-distance-threshold",
        type=float,
        default=None,
        help="Distance beyond which a stop is flagged as away from its shape (default 130.0)",
    )
    p.add_argument(
        "--active-calendar-days",
        type=int,
        default=None,
        help="Days covered by the active calendars section; 0 disables it (default 30)",
    )
    p.add_argument(
        "--format",
        type=str.lower,
        choices=REPORT_FORMAT_CHOICES,
        default=None,
        help="Report format (default markdown)",
    )
    p.add_argument(
        "--output",
        default=None,
        help="Write the report to this file instead of stdout",
    )
    p.set_defaults(func=cmd_validate)
    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(
        verbose=bool(args.verbose),
        silent=bool(getattr(args, "silent", False)),
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
