"""Fatal input errors.

These abort a validation run. They are never turned into findings.
"""

from __future__ import annotations


class FeedLoadError(OSError):
    """The feed archive could not be read."""


class EmptyFeedError(ValueError):
    """The feed loaded but contains no trips."""


__all__ = ["FeedLoadError", "EmptyFeedError"]
