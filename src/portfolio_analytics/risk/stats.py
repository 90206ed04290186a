# src/portfolio_analytics/risk/stats.py
from __future__ import annotations

import math
import sys
from typing import Sequence, Union

import numpy as np

from portfolio_analytics.errors import EmptyInputError, LengthMismatchError
from portfolio_analytics.risk.fallbacks import (
    CORRELATION_ZERO_VARIANCE,
    ZERO_VARIANCE,
)

ReturnSeries = Union[Sequence[float], np.ndarray]


def as_series(xs: ReturnSeries) -> np.ndarray:
    """Convert a return series to a 1D float array without reordering it."""
    r = np.asarray(xs, dtype=float)
    if r.ndim != 1:
        msg = "return series must be a 1D sequence."
        raise ValueError(msg)
    return r


def _is_constant(r: np.ndarray) -> bool:
    return bool(np.all(r == r[0]))


def _centered_cross(x: np.ndarray, y: np.ndarray) -> float:
    # Shared by variance and covariance so that cov(x, x) == var(x) bit for bit.
    dx = x - x.mean()
    dy = y - y.mean()
    return float(np.dot(dx, dy) / (x.size - 1))


def mean(xs: ReturnSeries) -> float:
    """Arithmetic mean. Raises EmptyInputError for an empty series."""
    r = as_series(xs)
    if r.size == 0:
        msg = "cannot take the mean of an empty series."
        raise EmptyInputError(msg)
    return float(r.mean())


def sample_variance(xs: ReturnSeries) -> float:
    """
    Unbiased sample variance (divides by n - 1).

    Fewer than 2 observations give 0.0, and so does a series whose values
    are all identical.
    """
    r = as_series(xs)
    if r.size < 2 or _is_constant(r):
        return ZERO_VARIANCE
    return _centered_cross(r, r)


def stddev(xs: ReturnSeries) -> float:
    return math.sqrt(sample_variance(xs))


def covariance(xs: ReturnSeries, ys: ReturnSeries) -> float:
    """
    Sample covariance of two equal-length series.

    Raises LengthMismatchError when the lengths differ.
    """
    x = as_series(xs)
    y = as_series(ys)
    if x.size != y.size:
        msg = f"series lengths differ: {x.size} != {y.size}."
        raise LengthMismatchError(msg)
    if x.size < 2 or _is_constant(x) or _is_constant(y):
        return ZERO_VARIANCE
    return _centered_cross(x, y)


def quantile_index(n: int, confidence: float) -> int:
    """
    Index into an ascending sort of ``n`` returns marking the loss tail at
    ``confidence``: floor(n * (1 - confidence)), clamped to [0, n - 1].
    """
    if not (0.0 < confidence < 1.0):
        msg = "confidence must be in (0, 1)."
        raise ValueError(msg)
    if n < 1:
        msg = "need at least 1 observation for a quantile."
        raise EmptyInputError(msg)
    idx = math.floor(n * (1.0 - confidence))
    return min(max(idx, 0), n - 1)


def quantile(xs: ReturnSeries, confidence: float) -> float:
    """Empirical loss-tail quantile of a series (see ``quantile_index``)."""
    r = as_series(xs)
    idx = quantile_index(r.size, confidence)
    return float(np.sort(r)[idx])


def pearson_correlation(xs: ReturnSeries, ys: ReturnSeries) -> float:
    """
    Pearson correlation cov(x, y) / sqrt(var(x) * var(y)).

    Returns 0.0 when either series has zero variance, or when the
    variances are so small that the denominator underflows to zero.
    """
    cov = covariance(xs, ys)
    var_x = sample_variance(xs)
    var_y = sample_variance(ys)
    if var_x == 0.0 or var_y == 0.0:
        return CORRELATION_ZERO_VARIANCE

    product = var_x * var_y
    if sys.float_info.min <= product < math.inf:
        denom = math.sqrt(product)
    else:
        # product left the normal float range
        denom = math.sqrt(var_x) * math.sqrt(var_y)
    if denom == 0.0:
        return CORRELATION_ZERO_VARIANCE

    rho = cov / denom
    return float(min(1.0, max(-1.0, rho)))
