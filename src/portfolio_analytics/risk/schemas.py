# src/portfolio_analytics/risk/schemas.py
from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field


class PerformanceMetrics(BaseModel):
    """
    Risk-adjusted performance of a portfolio against a benchmark.

    Ratios are dimensionless. ``alpha``, ``volatility`` and ``max_drawdown``
    are expressed in percent (annualized where applicable).
    """

    model_config = ConfigDict(frozen=True)

    sharpe_ratio: float = Field(..., serialization_alias="sharpeRatio")
    beta: float = Field(..., serialization_alias="beta")
    alpha: float = Field(
        ..., serialization_alias="alpha", description="Annualized alpha in %."
    )
    volatility: float = Field(
        ..., serialization_alias="volatility", description="Annualized vol in %."
    )
    max_drawdown: float = Field(
        ...,
        serialization_alias="maxDrawdown",
        description="Largest peak-to-trough decline in % of peak (positive).",
    )
    calmar_ratio: float = Field(..., serialization_alias="calmarRatio")
    sortino_ratio: float = Field(..., serialization_alias="sortinoRatio")
    treynor_ratio: float = Field(..., serialization_alias="treynorRatio")


class CorrelationMatrix(BaseModel):
    """
    Symmetric Pearson correlation matrix across holdings.

    ``symbols[i]`` labels both row i and column i of ``matrix``.
    """

    model_config = ConfigDict(frozen=True)

    symbols: List[str] = Field(default_factory=list)
    matrix: List[List[float]] = Field(default_factory=list)
    interpretation: str = Field(..., min_length=1)


class CorrelationPair(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol1: str
    symbol2: str
    correlation: float


class CorrelationAnalysis(BaseModel):
    """
    Most correlated holding pairs, highest first, and the average
    correlation among strongly correlated (> 0.7) pairs.
    """

    model_config = ConfigDict(frozen=True)

    pairs: List[CorrelationPair] = Field(default_factory=list)
    concentration_risk: float = Field(
        0.0, serialization_alias="concentrationRisk"
    )


class RiskMetrics(BaseModel):
    """
    Tail-risk summary of a portfolio.

    Volatility is annualized in percent; VaR and CVaR are single-period
    loss thresholds in percent.
    """

    model_config = ConfigDict(frozen=True)

    portfolio_beta: float = Field(..., serialization_alias="portfolioBeta")
    portfolio_volatility: float = Field(
        ..., serialization_alias="portfolioVolatility"
    )
    value_at_risk_95: float = Field(..., serialization_alias="valueAtRisk95")
    value_at_risk_99: float = Field(..., serialization_alias="valueAtRisk99")
    conditional_var: float = Field(..., serialization_alias="conditionalVaR")
    diversification_ratio: float = Field(
        ..., serialization_alias="diversificationRatio"
    )


class RiskAlert(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["concentration", "volatility", "exposure"]
    severity: Literal["high", "medium"]
    message: str


class ConcentrationReport(BaseModel):
    """
    Position concentration of a portfolio with headline risk figures and
    the alerts they trigger.

    Scores run from 0 to 100; ``volatility`` is annualized in percent.
    """

    model_config = ConfigDict(frozen=True)

    concentration_score: float = Field(
        0.0, ge=0.0, le=100.0, serialization_alias="concentrationScore"
    )
    diversification_score: float = Field(
        0.0, ge=0.0, le=100.0, serialization_alias="diversificationScore"
    )
    volatility: float = Field(0.0, serialization_alias="volatility")
    beta: float = Field(0.0, serialization_alias="beta")
    sharpe_ratio: float = Field(0.0, serialization_alias="sharpeRatio")
    alerts: List[RiskAlert] = Field(default_factory=list)
