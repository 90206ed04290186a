# src/portfolio_analytics/risk/fallbacks.py
"""
Documented values returned for numerically degenerate but structurally
valid inputs.

Structural problems (empty input, mismatched lengths) raise errors from
``portfolio_analytics.errors``. Everything in this table is a defined
outcome instead:

    case                                   value
    -------------------------------------  -----
    variance of fewer than 2 observations  0.0
    Sharpe with zero volatility            0.0
    Sortino with no downside deviation     10.0
    Calmar with zero drawdown              0.0
    Treynor with zero beta                 0.0
    beta with degenerate market series     1.0
    correlation with a constant series     0.0
    diversification of <= 1 holding        1.0
    CVaR with an empty tail                VaR at the same confidence
"""
from __future__ import annotations

ZERO_VARIANCE = 0.0
SHARPE_ZERO_VOLATILITY = 0.0
SORTINO_NO_DOWNSIDE = 10.0
CALMAR_ZERO_DRAWDOWN = 0.0
TREYNOR_ZERO_BETA = 0.0
NEUTRAL_BETA = 1.0
CORRELATION_ZERO_VARIANCE = 0.0
BASE_DIVERSIFICATION_RATIO = 1.0
