# src/portfolio_analytics/risk/var.py
from __future__ import annotations

import numpy as np

from portfolio_analytics.errors import EmptyInputError
from portfolio_analytics.risk.stats import ReturnSeries, as_series, quantile_index


def loss_from_return(r: float) -> float:
    """Positive loss magnitude of a return; gains carry no loss."""
    return float(-r) if r < 0.0 else 0.0


def compute_historical_var(
    returns: ReturnSeries,
    confidence: float,
) -> float:
    """
    Compute historical (empirical) VaR on returns.

    Parameters
    ----------
    returns:
        1D series of periodic returns.
    confidence:
        Confidence level in (0, 1), e.g. 0.95 or 0.99.

    Returns
    -------
    var:
        Positive loss at the sorted return with index
        floor(n * (1 - confidence)), clamped to [0, n - 1]. Roughly
        (1 - confidence) of the periods were worse than this.
    """
    r = as_series(returns)
    if r.size == 0:
        msg = "returns must be non-empty to compute VaR."
        raise EmptyInputError(msg)

    idx = quantile_index(r.size, confidence)
    return loss_from_return(np.sort(r)[idx])
