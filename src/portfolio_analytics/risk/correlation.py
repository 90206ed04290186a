# src/portfolio_analytics/risk/correlation.py
from __future__ import annotations

from itertools import combinations
from typing import List, Mapping

from portfolio_analytics.errors import LengthMismatchError
from portfolio_analytics.risk.schemas import (
    CorrelationAnalysis,
    CorrelationMatrix,
    CorrelationPair,
)
from portfolio_analytics.risk.stats import ReturnSeries, as_series, pearson_correlation

HIGH_CORRELATION = 0.7
LOW_CORRELATION = 0.3

NO_HOLDINGS_MESSAGE = "Add holdings to see correlation analysis"
SINGLE_HOLDING_MESSAGE = "Add more holdings to analyze correlations"


def interpret_correlations(matrix: List[List[float]]) -> str:
    """
    Describe diversification from the share of strongly (|rho| > 0.7) and
    weakly (|rho| < 0.3) correlated pairs in the upper triangle.
    """
    n = len(matrix)
    if n == 0:
        return NO_HOLDINGS_MESSAGE
    if n == 1:
        return SINGLE_HOLDING_MESSAGE

    high = 0
    low = 0
    for i, j in combinations(range(n), 2):
        rho = abs(matrix[i][j])
        if rho > HIGH_CORRELATION:
            high += 1
        if rho < LOW_CORRELATION:
            low += 1

    total_pairs = n * (n - 1) / 2
    high_pct = high / total_pairs * 100.0
    low_pct = low / total_pairs * 100.0

    if high_pct > 50.0:
        return (
            f"High correlation detected ({high_pct:.0f}% of pairs). Portfolio lacks "
            "diversification - consider adding uncorrelated assets."
        )
    if low_pct > 70.0:
        return (
            f"Well-diversified portfolio ({low_pct:.0f}% of pairs have low "
            "correlation). Good risk distribution across holdings."
        )
    return (
        f"Moderate diversification. {high_pct:.0f}% highly correlated, "
        f"{low_pct:.0f}% lowly correlated pairs."
    )


def compute_correlation_matrix(
    returns_by_symbol: Mapping[str, ReturnSeries],
) -> CorrelationMatrix:
    """
    Build the Pearson correlation matrix across holdings.

    Parameters
    ----------
    returns_by_symbol:
        Mapping of symbol -> return series. All series must have the same
        length. Row/column order follows the mapping's iteration order.

    Returns
    -------
    CorrelationMatrix
        Diagonal is exactly 1.0. Each unordered pair is computed once and
        written to both cells, so the matrix is exactly symmetric.
    """
    symbols = list(returns_by_symbol)
    series = [as_series(returns_by_symbol[s]) for s in symbols]

    lengths = {r.size for r in series}
    if len(lengths) > 1:
        msg = f"return series must share one length, got {sorted(lengths)}."
        raise LengthMismatchError(msg)

    n = len(symbols)
    matrix = [[1.0 if i == j else 0.0 for j in range(n)] for i in range(n)]
    for i, j in combinations(range(n), 2):
        rho = pearson_correlation(series[i], series[j])
        matrix[i][j] = rho
        matrix[j][i] = rho

    return CorrelationMatrix(
        symbols=symbols,
        matrix=matrix,
        interpretation=interpret_correlations(matrix),
    )


def rank_correlation_pairs(
    correlation: CorrelationMatrix,
    limit: int = 5,
) -> CorrelationAnalysis:
    """
    List holding pairs by correlation, highest first, and average the
    correlations of pairs above 0.7 into a concentration-risk score.
    """
    if limit < 0:
        raise ValueError("limit must be non-negative.")

    symbols = correlation.symbols
    pairs = [
        CorrelationPair(
            symbol1=symbols[i],
            symbol2=symbols[j],
            correlation=correlation.matrix[i][j],
        )
        for i, j in combinations(range(len(symbols)), 2)
    ]

    high = [p.correlation for p in pairs if p.correlation > HIGH_CORRELATION]
    concentration_risk = sum(high) / len(high) if high else 0.0

    pairs.sort(key=lambda p: p.correlation, reverse=True)
    return CorrelationAnalysis(
        pairs=pairs[:limit],
        concentration_risk=concentration_risk,
    )
