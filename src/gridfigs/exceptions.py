"""Custom exception hierarchy for gridfigs.

All domain-specific exceptions inherit from ``GridfigsError``, enabling
callers to catch broad categories or specific error types.

Example::

    from gridfigs.exceptions import MissingBaselineError

    try:
        indexed = index_to_baseline(prices, STOCK_SCHEMA, "2012-06-01")
    except MissingBaselineError as exc:
        logger.error("Cannot normalise prices: %s", exc)
"""

from __future__ import annotations


class GridfigsError(Exception):
    """Base exception for all gridfigs domain errors."""


class ConfigError(GridfigsError):
    """Raised for invalid configuration values."""


class DataValidationError(GridfigsError):
    """Raised for malformed observation tables and schema violations."""


class DataLoadError(DataValidationError):
    """Raised when a tabular source cannot be read."""


class MissingBaselineError(DataValidationError):
    """Raised when a group has no baseline row to normalise against."""


class UnknownCategoryError(DataValidationError):
    """Raised when a label is not covered by a regrouping lookup."""


class RenderError(GridfigsError):
    """Raised when a chart specification cannot be rendered."""
