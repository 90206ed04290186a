# src/portfolio_analytics/analytics/service.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence, TypeVar

import numpy as np
from pydantic import BaseModel

from portfolio_analytics.config.models import AnalyticsConfig
from portfolio_analytics.data.providers import ReturnSeriesProvider
from portfolio_analytics.errors import LengthMismatchError
from portfolio_analytics.portfolio.schemas import HoldingWeight
from portfolio_analytics.risk.concentration import compute_concentration_report
from portfolio_analytics.risk.correlation import (
    compute_correlation_matrix,
    rank_correlation_pairs,
)
from portfolio_analytics.risk.metrics import (
    annualized_volatility,
    compute_beta,
    compute_performance_metrics,
    neutral_performance_metrics,
    sharpe_ratio,
)
from portfolio_analytics.risk.model import compute_risk_metrics, neutral_risk_metrics
from portfolio_analytics.risk.schemas import (
    ConcentrationReport,
    CorrelationAnalysis,
    CorrelationMatrix,
    PerformanceMetrics,
    RiskMetrics,
)
from portfolio_analytics.risk.stats import as_series

LOGGER = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


def _round_value(value: Any, decimals: int) -> Any:
    if isinstance(value, float):
        return round(value, decimals)
    if isinstance(value, list):
        return [_round_value(v, decimals) for v in value]
    if isinstance(value, dict):
        return {k: _round_value(v, decimals) for k, v in value.items()}
    return value


def round_record(record: RecordT, decimals: Optional[int]) -> RecordT:
    """Round every float in a result record; ``None`` leaves it untouched."""
    if decimals is None:
        return record
    return type(record).model_validate(_round_value(record.model_dump(), decimals))


class PortfolioAnalyticsService:
    """
    Entry point computing performance, correlation and risk records for a
    set of holdings.

    Usage:
        service = PortfolioAnalyticsService(provider, config)
        perf = service.compute_performance_metrics(holdings)

    Return series come from ``provider``; the service keeps no state
    between calls. An empty holdings list yields a neutral record, while
    mismatched series lengths raise LengthMismatchError.
    """

    def __init__(
        self,
        provider: ReturnSeriesProvider,
        config: Optional[AnalyticsConfig] = None,
    ):
        self.provider = provider
        self.config = config or AnalyticsConfig()

    # ------------------------------------------------------------------
    # Return series
    # ------------------------------------------------------------------

    def _returns_by_symbol(
        self, holdings: Sequence[HoldingWeight]
    ) -> Dict[str, np.ndarray]:
        lookback = self.config.lookback
        return {
            h.symbol: as_series(self.provider.get_returns(h.symbol, lookback))
            for h in holdings
        }

    def _portfolio_returns(self, holdings: Sequence[HoldingWeight]) -> np.ndarray:
        """Weighted sum of holding returns, period by period."""
        series = self._returns_by_symbol(holdings)
        lengths = {symbol: r.size for symbol, r in series.items()}
        if len(set(lengths.values())) > 1:
            msg = f"holding return series differ in length: {lengths}."
            raise LengthMismatchError(msg)

        weights = np.array([h.weight for h in holdings], dtype=float)
        returns = np.column_stack([series[h.symbol] for h in holdings])
        return returns @ weights

    def _market_returns(self) -> np.ndarray:
        cfg = self.config
        return as_series(self.provider.get_returns(cfg.benchmark_symbol, cfg.lookback))

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def compute_performance_metrics(
        self, holdings: Sequence[HoldingWeight]
    ) -> PerformanceMetrics:
        if not holdings:
            LOGGER.info("No holdings; returning neutral performance metrics.")
            return neutral_performance_metrics()

        LOGGER.info("Computing performance metrics for %d holdings", len(holdings))
        cfg = self.config
        portfolio = self._portfolio_returns(holdings)
        market = self._market_returns()

        metrics = compute_performance_metrics(
            portfolio,
            market,
            risk_free_rate=cfg.risk_free_rate,
            periods_per_year=cfg.periods_per_year,
            target_return=cfg.target_return,
            initial_value=cfg.initial_value,
        )
        LOGGER.debug("Performance metrics: %s", metrics)
        return round_record(metrics, cfg.decimals)

    def compute_correlation_matrix(
        self, holdings: Sequence[HoldingWeight]
    ) -> CorrelationMatrix:
        if len(holdings) < 2:
            LOGGER.info("Fewer than 2 holdings; skipping correlation estimation.")
            return compute_correlation_matrix({h.symbol: [] for h in holdings})

        LOGGER.info(
            "Computing correlation matrix for %s",
            ", ".join(h.symbol for h in holdings),
        )
        return compute_correlation_matrix(self._returns_by_symbol(holdings))

    def compute_correlation_analysis(
        self,
        holdings: Sequence[HoldingWeight],
        limit: int = 5,
    ) -> CorrelationAnalysis:
        if len(holdings) < 2:
            return CorrelationAnalysis()

        matrix = compute_correlation_matrix(self._returns_by_symbol(holdings))
        return rank_correlation_pairs(matrix, limit)

    def compute_risk_metrics(self, holdings: Sequence[HoldingWeight]) -> RiskMetrics:
        if not holdings:
            LOGGER.info("No holdings; returning neutral risk metrics.")
            return neutral_risk_metrics()

        LOGGER.info("Computing risk metrics for %d holdings", len(holdings))
        cfg = self.config
        metrics = compute_risk_metrics(
            self._portfolio_returns(holdings),
            self._market_returns(),
            holding_count=len(holdings),
            periods_per_year=cfg.periods_per_year,
        )
        LOGGER.debug("Risk metrics: %s", metrics)
        return round_record(metrics, cfg.decimals)

    def compute_concentration_report(
        self, holdings: Sequence[HoldingWeight]
    ) -> ConcentrationReport:
        if not holdings:
            LOGGER.info("No holdings; returning empty concentration report.")
            return ConcentrationReport()

        LOGGER.info("Computing concentration report for %d holdings", len(holdings))
        cfg = self.config
        portfolio = self._portfolio_returns(holdings)
        market = self._market_returns()

        report = compute_concentration_report(
            [h.weight for h in holdings],
            volatility=annualized_volatility(portfolio, cfg.periods_per_year) * 100.0,
            beta=compute_beta(portfolio, market),
            sharpe_ratio=sharpe_ratio(
                portfolio,
                risk_free_rate=cfg.risk_free_rate,
                periods_per_year=cfg.periods_per_year,
            ),
        )
        if report.alerts:
            LOGGER.warning(
                "Risk alerts raised: %s", ", ".join(a.type for a in report.alerts)
            )
        return round_record(report, cfg.decimals)
