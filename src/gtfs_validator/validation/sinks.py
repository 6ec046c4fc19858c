"""Output sinks.

A validation run writes on two channels: a line-oriented diagnostic channel
(progress and fatal messages) and the report channel. Sinks decide where
those go. ``silent`` is fixed at construction and discards every write on
both channels.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional, Protocol, TextIO

logger = logging.getLogger("gtfs_validator.progress")


class OutputSink(Protocol):
    """Destination of a validation run's output."""

    def write_progress(self, line: str) -> None: ...

    def write_error(self, line: str) -> None: ...

    def write_report(self, text: str) -> None: ...


class ConsoleSink:
    """Diagnostics through ``logging``, report to stdout or a file.

    Args:
        silent: Discard all writes.
        stream: Report stream used when no report_path is set (default stdout).
        report_path: Write the report to this file instead of the stream.
    """

    def __init__(
        self,
        silent: bool = False,
        stream: Optional[TextIO] = None,
        report_path: Optional[Path] = None,
    ) -> None:
        self.silent = silent
        self.stream = stream
        self.report_path = report_path

    def write_progress(self, line: str) -> None:
        if self.silent:
            return
        logger.info(line)

    def write_error(self, line: str) -> None:
        if self.silent:
            return
        logger.error(line)

    def write_report(self, text: str) -> None:
        if self.silent:
            return
        if self.report_path is not None:
            self.report_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.report_path, "w", encoding="utf-8") as f:
                f.write(text)
            logger.info("Report saved: %s", self.report_path)
            return
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write(text)
        stream.flush()


class MemorySink:
    """Keeps everything written to it; used by tests and embedding callers."""

    def __init__(self, silent: bool = False) -> None:
        self.silent = silent
        self.progress: List[str] = []
        self.errors: List[str] = []
        self.reports: List[str] = []

    def write_progress(self, line: str) -> None:
        if not self.silent:
            self.progress.append(line)

    def write_error(self, line: str) -> None:
        if not self.silent:
            self.errors.append(line)

    def write_report(self, text: str) -> None:
        if not self.silent:
            self.reports.append(text)


__all__ = ["OutputSink", "ConsoleSink", "MemorySink"]
