# src/portfolio_analytics/risk/metrics.py
from __future__ import annotations

import math
from typing import Optional

import numpy as np

from portfolio_analytics.risk.fallbacks import (
    CALMAR_ZERO_DRAWDOWN,
    NEUTRAL_BETA,
    SHARPE_ZERO_VOLATILITY,
    SORTINO_NO_DOWNSIDE,
    TREYNOR_ZERO_BETA,
)
from portfolio_analytics.risk.schemas import PerformanceMetrics
from portfolio_analytics.risk.stats import (
    ReturnSeries,
    as_series,
    covariance,
    mean,
    sample_variance,
    stddev,
)

# 3-month US Treasury bill proxy, annualized.
RISK_FREE_RATE = 0.05
TRADING_DAYS = 252
INITIAL_VALUE = 100_000.0


def annualized_return(
    returns: ReturnSeries,
    periods_per_year: int = TRADING_DAYS,
) -> float:
    return mean(returns) * periods_per_year


def annualized_volatility(
    returns: ReturnSeries,
    periods_per_year: int = TRADING_DAYS,
) -> float:
    return stddev(returns) * math.sqrt(periods_per_year)


def sharpe_ratio(
    returns: ReturnSeries,
    risk_free_rate: float = RISK_FREE_RATE,
    periods_per_year: int = TRADING_DAYS,
) -> float:
    """
    Annualized Sharpe ratio:

        (mean * ppy - rf) / (std * sqrt(ppy))

    Returns 0.0 when the series has zero volatility.
    """
    ann_return = annualized_return(returns, periods_per_year)
    vol = annualized_volatility(returns, periods_per_year)
    if vol == 0.0:
        return SHARPE_ZERO_VOLATILITY
    return (ann_return - risk_free_rate) / vol


def compute_beta(
    portfolio_returns: ReturnSeries,
    market_returns: ReturnSeries,
) -> float:
    """
    Beta of the portfolio against the market:

        beta = cov(p, m) / var(m)

    Falls back to 1.0 (market-neutral) when the series lengths differ,
    there are fewer than 2 observations, or the market has zero variance.
    """
    p = as_series(portfolio_returns)
    m = as_series(market_returns)
    if p.size != m.size or p.size < 2:
        return NEUTRAL_BETA

    market_var = sample_variance(m)
    if market_var == 0.0:
        return NEUTRAL_BETA

    return covariance(p, m) / market_var


def compute_alpha(
    portfolio_returns: ReturnSeries,
    market_returns: ReturnSeries,
    risk_free_rate: float = RISK_FREE_RATE,
    periods_per_year: int = TRADING_DAYS,
    beta: Optional[float] = None,
) -> float:
    """
    CAPM alpha as an annualized fraction:

        alpha = R_p - (rf + beta * (R_m - rf))
    """
    if beta is None:
        beta = compute_beta(portfolio_returns, market_returns)
    r_p = annualized_return(portfolio_returns, periods_per_year)
    r_m = annualized_return(market_returns, periods_per_year)
    return r_p - (risk_free_rate + beta * (r_m - risk_free_rate))


def cumulative_values(
    returns: ReturnSeries,
    initial_value: float = INITIAL_VALUE,
) -> np.ndarray:
    """
    Compound returns into a value path of length n + 1 that starts at
    ``initial_value``.
    """
    if initial_value <= 0.0:
        msg = "initial_value must be strictly positive."
        raise ValueError(msg)
    r = as_series(returns)
    growth = np.cumprod(1.0 + r)
    return np.concatenate(([initial_value], initial_value * growth))


def compute_max_drawdown(values: ReturnSeries) -> float:
    """
    Maximum drawdown of a value path as a positive fraction of the peak.

    Fewer than 2 values have no drawdown (0.0).
    """
    v = as_series(values)
    if v.size < 2:
        return 0.0
    if v[0] <= 0.0:
        msg = "value path must start at a strictly positive value."
        raise ValueError(msg)

    peak = v[0]
    max_dd = 0.0
    for value in v:
        if value > peak:
            peak = value
        drawdown = (peak - value) / peak
        if drawdown > max_dd:
            max_dd = drawdown
    return float(max_dd)


def max_drawdown_from_returns(
    returns: ReturnSeries,
    initial_value: float = INITIAL_VALUE,
) -> float:
    return compute_max_drawdown(cumulative_values(returns, initial_value))


def sortino_ratio(
    returns: ReturnSeries,
    risk_free_rate: float = RISK_FREE_RATE,
    periods_per_year: int = TRADING_DAYS,
    target_return: float = 0.0,
) -> float:
    """
    Sharpe-like ratio using the annualized standard deviation of the
    returns below ``target_return`` only.

    With no downside returns (or no dispersion among them) the ratio is
    capped at 10.0.
    """
    r = as_series(returns)
    ann_return = annualized_return(r, periods_per_year)

    downside = r[r < target_return]
    if downside.size == 0:
        return SORTINO_NO_DOWNSIDE

    downside_vol = stddev(downside) * math.sqrt(periods_per_year)
    if downside_vol == 0.0:
        return SORTINO_NO_DOWNSIDE

    return (ann_return - risk_free_rate) / downside_vol


def calmar_ratio(
    returns: ReturnSeries,
    periods_per_year: int = TRADING_DAYS,
    max_drawdown: Optional[float] = None,
    initial_value: float = INITIAL_VALUE,
) -> float:
    """Annualized return over maximum drawdown; 0.0 without a drawdown."""
    ann_return = annualized_return(returns, periods_per_year)
    if max_drawdown is None:
        max_drawdown = max_drawdown_from_returns(returns, initial_value)
    if max_drawdown == 0.0:
        return CALMAR_ZERO_DRAWDOWN
    return ann_return / max_drawdown


def treynor_ratio(
    portfolio_returns: ReturnSeries,
    market_returns: ReturnSeries,
    risk_free_rate: float = RISK_FREE_RATE,
    periods_per_year: int = TRADING_DAYS,
    beta: Optional[float] = None,
) -> float:
    """Excess annualized return per unit of beta; 0.0 when beta is 0."""
    if beta is None:
        beta = compute_beta(portfolio_returns, market_returns)
    if beta == 0.0:
        return TREYNOR_ZERO_BETA
    excess = annualized_return(portfolio_returns, periods_per_year) - risk_free_rate
    return excess / beta


def neutral_performance_metrics() -> PerformanceMetrics:
    """Baseline reported for a portfolio with no holdings."""
    return PerformanceMetrics(
        sharpe_ratio=SHARPE_ZERO_VOLATILITY,
        beta=NEUTRAL_BETA,
        alpha=0.0,
        volatility=0.0,
        max_drawdown=0.0,
        calmar_ratio=CALMAR_ZERO_DRAWDOWN,
        sortino_ratio=0.0,
        treynor_ratio=TREYNOR_ZERO_BETA,
    )


def compute_performance_metrics(
    portfolio_returns: ReturnSeries,
    market_returns: ReturnSeries,
    risk_free_rate: float = RISK_FREE_RATE,
    periods_per_year: int = TRADING_DAYS,
    target_return: float = 0.0,
    initial_value: float = INITIAL_VALUE,
) -> PerformanceMetrics:
    """
    Compute the full set of performance metrics for a portfolio.

    Parameters
    ----------
    portfolio_returns:
        Periodic portfolio returns in chronological order.
    market_returns:
        Benchmark returns over the same periods.
    risk_free_rate:
        Annualized risk-free rate.
    periods_per_year:
        Annualization factor (252 for daily returns).
    target_return:
        Per-period threshold separating downside returns for Sortino.
    initial_value:
        Starting value of the compounded path used for drawdown.

    Returns
    -------
    PerformanceMetrics
        Alpha, volatility and max drawdown in percent.
    """
    p = as_series(portfolio_returns)
    m = as_series(market_returns)

    beta = compute_beta(p, m)
    max_dd = max_drawdown_from_returns(p, initial_value)

    return PerformanceMetrics(
        sharpe_ratio=sharpe_ratio(p, risk_free_rate, periods_per_year),
        beta=beta,
        alpha=compute_alpha(p, m, risk_free_rate, periods_per_year, beta=beta)
        * 100.0,
        volatility=annualized_volatility(p, periods_per_year) * 100.0,
        max_drawdown=max_dd * 100.0,
        calmar_ratio=calmar_ratio(p, periods_per_year, max_drawdown=max_dd),
        sortino_ratio=sortino_ratio(
            p, risk_free_rate, periods_per_year, target_return=target_return
        ),
        treynor_ratio=treynor_ratio(
            p, m, risk_free_rate, periods_per_year, beta=beta
        ),
    )
