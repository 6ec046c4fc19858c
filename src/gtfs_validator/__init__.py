"""GTFS Validator: aggregate validation findings into a feed report.

The package does not parse feeds or decide what is invalid. A pluggable
backend loads the feed and runs the checks; this package merges their
results, computes the effective service range and renders the report.
"""

__all__ = [
    "__version__",
]

__version__ = "0.1.0"
