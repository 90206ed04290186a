# tests/risk/test_concentration.py
import numpy as np

from portfolio_analytics.risk.concentration import (
    build_risk_alerts,
    compute_concentration_report,
)
from portfolio_analytics.risk.schemas import ConcentrationReport


def test_empty_weights_give_zero_report():
    report = compute_concentration_report([], volatility=30.0, beta=2.0, sharpe_ratio=1.0)
    assert report == ConcentrationReport()
    assert report.model_dump(by_alias=True) == {
        "concentrationScore": 0.0,
        "diversificationScore": 0.0,
        "volatility": 0.0,
        "beta": 0.0,
        "sharpeRatio": 0.0,
        "alerts": [],
    }


def test_equal_weights_are_fully_diversified():
    report = compute_concentration_report(
        [0.25] * 4, volatility=18.0, beta=1.0, sharpe_ratio=0.8
    )
    assert np.isclose(report.concentration_score, 0.0, atol=1e-9)
    assert np.isclose(report.diversification_score, 100.0)
    assert report.alerts == []


def test_single_holding_triggers_concentration_alert():
    report = compute_concentration_report(
        [1.0], volatility=18.0, beta=1.0, sharpe_ratio=0.5
    )
    assert report.concentration_score == 100.0
    assert report.diversification_score == 0.0
    assert [a.type for a in report.alerts] == ["concentration"]
    assert report.alerts[0].severity == "high"


def test_alert_thresholds_are_exclusive():
    assert build_risk_alerts(70.0, 25.0, 1.3) == []

    alerts = build_risk_alerts(70.5, 25.5, 1.35)
    assert [(a.type, a.severity) for a in alerts] == [
        ("concentration", "high"),
        ("volatility", "medium"),
        ("exposure", "medium"),
    ]
    assert "25.5%" in alerts[1].message
    assert "1.35" in alerts[2].message
    assert "35% more volatile" in alerts[2].message
