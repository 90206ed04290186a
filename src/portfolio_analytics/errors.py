# src/portfolio_analytics/errors.py
from __future__ import annotations


class AnalyticsError(ValueError):
    """Base class for input-shape errors raised by the analytics engine."""


class EmptyInputError(AnalyticsError):
    """Raised when an operation needs at least one observation and gets none."""


class LengthMismatchError(AnalyticsError):
    """Raised when paired return series do not have the same length."""


class ReturnSeriesUnavailableError(LookupError):
    """Raised by a return-series provider that has no data for a symbol."""
