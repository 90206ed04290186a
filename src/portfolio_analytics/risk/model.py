# src/portfolio_analytics/risk/model.py
from __future__ import annotations

from portfolio_analytics.risk.cvar import compute_conditional_var
from portfolio_analytics.risk.diversification import diversification_ratio
from portfolio_analytics.risk.fallbacks import (
    BASE_DIVERSIFICATION_RATIO,
    NEUTRAL_BETA,
)
from portfolio_analytics.risk.metrics import (
    TRADING_DAYS,
    annualized_volatility,
    compute_beta,
)
from portfolio_analytics.risk.schemas import RiskMetrics
from portfolio_analytics.risk.stats import ReturnSeries, as_series
from portfolio_analytics.risk.var import compute_historical_var


def neutral_risk_metrics() -> RiskMetrics:
    """Baseline reported for a portfolio with no holdings."""
    return RiskMetrics(
        portfolio_beta=NEUTRAL_BETA,
        portfolio_volatility=0.0,
        value_at_risk_95=0.0,
        value_at_risk_99=0.0,
        conditional_var=0.0,
        diversification_ratio=BASE_DIVERSIFICATION_RATIO,
    )


def compute_risk_metrics(
    portfolio_returns: ReturnSeries,
    market_returns: ReturnSeries,
    holding_count: int,
    periods_per_year: int = TRADING_DAYS,
) -> RiskMetrics:
    """
    Combine beta, annualized volatility, historical VaR (95% / 99%) and
    95% CVaR into a RiskMetrics record. Percent fields are scaled by 100.
    """
    if holding_count <= 0:
        return neutral_risk_metrics()

    p = as_series(portfolio_returns)

    return RiskMetrics(
        portfolio_beta=compute_beta(p, market_returns),
        portfolio_volatility=annualized_volatility(p, periods_per_year) * 100.0,
        value_at_risk_95=compute_historical_var(p, 0.95) * 100.0,
        value_at_risk_99=compute_historical_var(p, 0.99) * 100.0,
        conditional_var=compute_conditional_var(p, 0.95) * 100.0,
        diversification_ratio=diversification_ratio(holding_count),
    )
