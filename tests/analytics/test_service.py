# tests/analytics/test_service.py
import math

import numpy as np
import pytest

from portfolio_analytics.analytics.service import PortfolioAnalyticsService, round_record
from portfolio_analytics.config.models import AnalyticsConfig
from portfolio_analytics.data.providers import (
    InMemoryReturnProvider,
    SyntheticReturnProvider,
)
from portfolio_analytics.errors import LengthMismatchError
from portfolio_analytics.portfolio.schemas import HoldingWeight
from portfolio_analytics.risk.metrics import compute_performance_metrics
from portfolio_analytics.risk.model import neutral_risk_metrics


def _in_memory_service(decimals=None, n=252):
    rng = np.random.default_rng(21)
    spy = rng.normal(loc=0.0004, scale=0.01, size=n)
    data = {
        "SPY": spy,
        "AAA": 1.1 * spy + rng.normal(scale=0.01, size=n),
        "BBB": 0.6 * spy + rng.normal(scale=0.015, size=n),
        "CCC": rng.normal(scale=0.02, size=n),
    }
    cfg = AnalyticsConfig(decimals=decimals, lookback=n)
    return PortfolioAnalyticsService(InMemoryReturnProvider(data), cfg), data


HOLDINGS = [
    HoldingWeight(symbol="AAA", weight=0.5),
    HoldingWeight(symbol="BBB", weight=0.3),
    HoldingWeight(symbol="CCC", weight=0.2),
]


def test_empty_portfolio_records():
    service = PortfolioAnalyticsService(SyntheticReturnProvider())

    risk = service.compute_risk_metrics([])
    assert risk == neutral_risk_metrics()
    assert risk.model_dump(by_alias=True) == {
        "portfolioBeta": 1,
        "portfolioVolatility": 0,
        "valueAtRisk95": 0,
        "valueAtRisk99": 0,
        "conditionalVaR": 0,
        "diversificationRatio": 1,
    }

    perf = service.compute_performance_metrics([])
    assert perf.beta == 1.0
    assert perf.sharpe_ratio == 0.0

    corr = service.compute_correlation_matrix([])
    assert corr.symbols == []
    assert corr.matrix == []
    assert corr.interpretation


def test_single_holding_correlation():
    service = PortfolioAnalyticsService(SyntheticReturnProvider())
    corr = service.compute_correlation_matrix([HoldingWeight(symbol="AAPL", weight=1.0)])

    assert corr.symbols == ["AAPL"]
    assert corr.matrix == [[1.0]]
    assert corr.interpretation


def test_performance_uses_weighted_portfolio_returns():
    service, data = _in_memory_service()

    result = service.compute_performance_metrics(HOLDINGS)

    portfolio = 0.5 * data["AAA"] + 0.3 * data["BBB"] + 0.2 * data["CCC"]
    expected = compute_performance_metrics(portfolio, data["SPY"])
    for key, value in expected.model_dump().items():
        assert np.isclose(getattr(result, key), value, atol=1e-9)


def test_records_are_rounded_by_default():
    service, _ = _in_memory_service(decimals=2)

    perf = service.compute_performance_metrics(HOLDINGS)
    risk = service.compute_risk_metrics(HOLDINGS)

    for value in list(perf.model_dump().values()) + list(risk.model_dump().values()):
        assert value == round(value, 2)
        assert math.isfinite(value)
    assert risk.diversification_ratio == 1.2


def test_correlation_matrix_via_service():
    service, data = _in_memory_service()

    corr = service.compute_correlation_matrix(HOLDINGS)

    assert corr.symbols == ["AAA", "BBB", "CCC"]
    expected = np.corrcoef(np.vstack([data["AAA"], data["BBB"], data["CCC"]]))
    assert np.allclose(corr.matrix, expected, atol=1e-12)
    for i in range(3):
        assert corr.matrix[i][i] == 1.0
        for j in range(3):
            assert corr.matrix[i][j] == corr.matrix[j][i]


def test_correlation_analysis_via_service():
    service, _ = _in_memory_service()

    analysis = service.compute_correlation_analysis(HOLDINGS, limit=2)
    assert len(analysis.pairs) == 2
    assert analysis.pairs[0].correlation >= analysis.pairs[1].correlation

    empty = service.compute_correlation_analysis(HOLDINGS[:1])
    assert empty.pairs == []
    assert empty.concentration_risk == 0.0


def test_risk_metrics_via_service_is_deterministic():
    service = PortfolioAnalyticsService(SyntheticReturnProvider(seed=5))
    holdings = [
        HoldingWeight(symbol="AAPL", weight=0.25),
        HoldingWeight(symbol="MSFT", weight=0.25),
        HoldingWeight(symbol="JNJ", weight=0.25),
        HoldingWeight(symbol="XOM", weight=0.25),
    ]

    first = service.compute_risk_metrics(holdings)
    second = service.compute_risk_metrics(holdings)

    assert first == second
    assert first.value_at_risk_99 >= first.value_at_risk_95
    assert np.isclose(first.diversification_ratio, 1.3)


def test_mismatched_series_lengths_propagate():
    provider = InMemoryReturnProvider(
        {
            "SPY": [0.01, -0.01, 0.02, 0.0],
            "AAA": [0.01, 0.02, -0.01, 0.0],
            "BBB": [0.01, 0.02],
        }
    )
    service = PortfolioAnalyticsService(provider, AnalyticsConfig(lookback=4))
    holdings = [
        HoldingWeight(symbol="AAA", weight=0.5),
        HoldingWeight(symbol="BBB", weight=0.5),
    ]

    with pytest.raises(LengthMismatchError):
        service.compute_risk_metrics(holdings)
    with pytest.raises(LengthMismatchError):
        service.compute_correlation_matrix(holdings)


def test_round_record_keeps_full_precision_when_disabled():
    risk = neutral_risk_metrics().model_copy(update={"portfolio_volatility": 12.34567})
    assert round_record(risk, None).portfolio_volatility == 12.34567
    assert round_record(risk, 2).portfolio_volatility == 12.35


def test_correlation_records_are_not_rounded():
    service, data = _in_memory_service(decimals=2)

    corr = service.compute_correlation_matrix(HOLDINGS)
    expected = np.corrcoef(np.vstack([data["AAA"], data["BBB"], data["CCC"]]))
    assert np.allclose(corr.matrix, expected, atol=1e-12)
    assert corr.matrix[0][1] != round(corr.matrix[0][1], 2)

    analysis = service.compute_correlation_analysis(HOLDINGS)
    assert analysis.pairs[0].correlation == max(
        corr.matrix[0][1], corr.matrix[0][2], corr.matrix[1][2]
    )


def test_concentration_report_via_service():
    service, data = _in_memory_service()
    holdings = [
        HoldingWeight(symbol="AAA", weight=0.9),
        HoldingWeight(symbol="BBB", weight=0.05),
        HoldingWeight(symbol="CCC", weight=0.05),
    ]

    report = service.compute_concentration_report(holdings)

    portfolio = 0.9 * data["AAA"] + 0.05 * data["BBB"] + 0.05 * data["CCC"]
    risk = service.compute_risk_metrics(holdings)
    perf = service.compute_performance_metrics(holdings)
    assert np.isclose(report.volatility, risk.portfolio_volatility)
    assert np.isclose(report.beta, risk.portfolio_beta)
    assert np.isclose(report.sharpe_ratio, perf.sharpe_ratio)
    assert np.isclose(report.volatility, np.std(portfolio, ddof=1) * np.sqrt(252) * 100)

    assert report.concentration_score > 70.0
    assert np.isclose(report.diversification_score, 100.0 - report.concentration_score)
    assert "concentration" in [a.type for a in report.alerts]

    empty = service.compute_concentration_report([])
    assert empty.concentration_score == 0.0
    assert empty.alerts == []
