# src/portfolio_analytics/risk/diversification.py
from __future__ import annotations

from typing import Sequence

import numpy as np

from portfolio_analytics.risk.fallbacks import BASE_DIVERSIFICATION_RATIO

RATIO_STEP = 0.1


def diversification_ratio(holding_count: int) -> float:
    """
    Coarse diversification signal: 1 + (count - 1) * 0.1.

    This is a placeholder that grows with the number of holdings, not the
    textbook ratio of weighted-average volatility to portfolio volatility.
    Do not read it as a risk decomposition.
    """
    if holding_count <= 1:
        return BASE_DIVERSIFICATION_RATIO
    return BASE_DIVERSIFICATION_RATIO + (holding_count - 1) * RATIO_STEP


def herfindahl_index(weights: Sequence[float]) -> float:
    w = np.asarray(weights, dtype=float)
    return float(np.sum(w**2))


def concentration_score(weights: Sequence[float]) -> float:
    """
    Concentration on a 0-100 scale (higher = more concentrated), from the
    normalized Herfindahl-Hirschman index of weights summing to 1:

        score = 100 * (HHI - 1/N) / (1 - 1/N)

    Equal weights score 0, a single holding scores 100.
    """
    n = len(weights)
    if n == 0:
        return 0.0
    if n == 1:
        return 100.0
    floor = 1.0 / n
    score = (herfindahl_index(weights) - floor) / (1.0 - floor) * 100.0
    return min(100.0, max(0.0, score))
