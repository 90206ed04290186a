# src/portfolio_analytics/config/models.py
from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ============================================================
# Return-series provider
# ============================================================


class ProviderSettings(BaseModel):
    """
    Where the engine's caller gets return series from.
    """

    model_config = ConfigDict(extra="forbid")

    kind: Literal["synthetic", "csv"] = "synthetic"
    path: Optional[str] = Field(
        default=None, description="Price CSV. Required if kind='csv'."
    )
    seed: int = Field(default=0, ge=0, description="Seed for synthetic returns.")

    @model_validator(mode="after")
    def _csv_needs_path(self) -> "ProviderSettings":
        if self.kind == "csv" and not self.path:
            raise ValueError("provider.path must be set when provider.kind='csv'.")
        return self


# ============================================================
# Top-level AnalyticsConfig
# ============================================================


class AnalyticsConfig(BaseModel):
    """
    Parameters shared by all analytics computations.
    """

    model_config = ConfigDict(extra="forbid")

    risk_free_rate: float = Field(
        default=0.05, description="Annualized risk-free rate."
    )
    periods_per_year: int = Field(
        default=252, gt=0, description="Return periods per year (252 = daily)."
    )
    target_return: float = Field(
        default=0.0, description="Per-period Sortino downside threshold."
    )
    initial_value: float = Field(
        default=100_000.0, gt=0.0, description="Start of the drawdown value path."
    )
    lookback: int = Field(
        default=252, ge=1, description="Return periods requested per symbol."
    )
    benchmark_symbol: str = Field(default="SPY", min_length=1)
    decimals: Optional[int] = Field(
        default=2, ge=0, description="Rounding of reported records; None keeps full precision."
    )

    provider: ProviderSettings = Field(default_factory=ProviderSettings)
