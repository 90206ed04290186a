# src/portfolio_analytics/risk/concentration.py
from __future__ import annotations

from typing import List, Sequence

from portfolio_analytics.risk.diversification import concentration_score
from portfolio_analytics.risk.schemas import ConcentrationReport, RiskAlert

CONCENTRATION_ALERT = 70.0
VOLATILITY_ALERT = 25.0
BETA_ALERT = 1.3
MARKET_VOLATILITY = 20.0


def build_risk_alerts(
    concentration: float,
    volatility: float,
    beta: float,
) -> List[RiskAlert]:
    """
    Alerts for a concentration score above 70, annualized volatility above
    25% and beta above 1.3. Thresholds are exclusive.
    """
    alerts: List[RiskAlert] = []

    if concentration > CONCENTRATION_ALERT:
        alerts.append(
            RiskAlert(
                type="concentration",
                severity="high",
                message=(
                    f"High concentration risk detected (score {concentration:.0f} "
                    "of 100). Consider diversifying."
                ),
            )
        )

    if volatility > VOLATILITY_ALERT:
        alerts.append(
            RiskAlert(
                type="volatility",
                severity="medium",
                message=(
                    f"Portfolio volatility is {volatility:.1f}%, above the market "
                    f"average of {MARKET_VOLATILITY:.0f}%. This indicates higher "
                    "price fluctuations."
                ),
            )
        )

    if beta > BETA_ALERT:
        alerts.append(
            RiskAlert(
                type="exposure",
                severity="medium",
                message=(
                    f"Portfolio beta of {beta:.2f} indicates "
                    f"{(beta - 1.0) * 100:.0f}% more volatile than the market."
                ),
            )
        )

    return alerts


def compute_concentration_report(
    weights: Sequence[float],
    volatility: float,
    beta: float,
    sharpe_ratio: float,
) -> ConcentrationReport:
    """
    Parameters
    ----------
    weights:
        Holding weights summing to 1. An empty sequence gives an all-zero
        report with no alerts.
    volatility:
        Annualized portfolio volatility in percent.
    beta, sharpe_ratio:
        Portfolio beta and Sharpe ratio against the benchmark.
    """
    if len(weights) == 0:
        return ConcentrationReport()

    concentration = concentration_score(weights)
    return ConcentrationReport(
        concentration_score=concentration,
        diversification_score=max(0.0, 100.0 - concentration),
        volatility=volatility,
        beta=beta,
        sharpe_ratio=sharpe_ratio,
        alerts=build_risk_alerts(concentration, volatility, beta),
    )
