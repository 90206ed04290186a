# src/portfolio_analytics/portfolio/schemas.py
from __future__ import annotations

from typing import List, Sequence

from pydantic import BaseModel, ConfigDict, Field


class HoldingWeight(BaseModel):
    """
    Weight of a single holding in total portfolio value.

    Weights across a snapshot are expected to sum to 1; that is the
    caller's responsibility.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str = Field(..., min_length=1, description="Ticker (e.g. 'AAPL').")
    weight: float = Field(..., ge=0.0, le=1.0, description="Fraction of value.")


class Holding(BaseModel):
    """
    Position as kept by the holdings store.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str = Field(..., min_length=1)
    quantity: float = Field(..., ge=0.0)
    average_price: float = Field(..., ge=0.0)

    @property
    def market_value(self) -> float:
        return self.quantity * self.average_price


def holdings_to_weights(holdings: Sequence[Holding]) -> List[HoldingWeight]:
    """
    Convert positions to value weights: quantity * average_price / total.
    """
    total = sum(h.market_value for h in holdings)
    if total <= 0.0:
        if holdings:
            msg = "holdings must have a positive total market value."
            raise ValueError(msg)
        return []
    return [
        HoldingWeight(symbol=h.symbol, weight=h.market_value / total)
        for h in holdings
    ]
