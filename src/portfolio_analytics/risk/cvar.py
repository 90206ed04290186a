# src/portfolio_analytics/risk/cvar.py
from __future__ import annotations

import numpy as np

from portfolio_analytics.errors import EmptyInputError
from portfolio_analytics.risk.stats import ReturnSeries, as_series, quantile_index
from portfolio_analytics.risk.var import compute_historical_var, loss_from_return


def compute_conditional_var(
    returns: ReturnSeries,
    confidence: float = 0.95,
) -> float:
    """
    Compute historical CVaR (Expected Shortfall) on returns.

    Definition:
        cutoff = sorted(returns)[floor(n * (1 - confidence))]
        CVaR   = loss of mean(returns strictly below cutoff)

    When no return is strictly worse than the cutoff, CVaR collapses to the
    historical VaR at the same confidence.
    """
    r = as_series(returns)
    if r.size == 0:
        msg = "returns must be non-empty to compute CVaR."
        raise EmptyInputError(msg)

    cutoff = np.sort(r)[quantile_index(r.size, confidence)]
    tail = r[r < cutoff]
    if tail.size == 0:
        return compute_historical_var(r, confidence)

    return loss_from_return(float(tail.mean()))
