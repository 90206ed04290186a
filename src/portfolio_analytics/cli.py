from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from portfolio_analytics import __version__
from portfolio_analytics.analytics.service import PortfolioAnalyticsService
from portfolio_analytics.config.loader import build_provider, load_config
from portfolio_analytics.config.models import AnalyticsConfig, ProviderSettings
from portfolio_analytics.portfolio.schemas import (
    Holding,
    HoldingWeight,
    holdings_to_weights,
)

LOGGER = logging.getLogger(__name__)


# ============================================================
# Inputs
# ============================================================


def load_holdings(path: str | Path) -> List[HoldingWeight]:
    """
    Read holdings from a JSON list. Entries either carry a ``weight`` or a
    ``quantity`` and ``average_price`` (converted to value weights).
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Holdings file does not exist: {path}")

    raw = json.loads(path.read_text())
    if not isinstance(raw, list):
        raise ValueError("Holdings file must contain a JSON list.")

    if not all(isinstance(item, dict) for item in raw):
        raise ValueError("Each holding must be a JSON object.")

    if all("weight" in item for item in raw):
        return [HoldingWeight.model_validate(item) for item in raw]
    return holdings_to_weights([Holding.model_validate(item) for item in raw])


def _build_service(args: argparse.Namespace) -> PortfolioAnalyticsService:
    cfg = load_config(args.config) if args.config else AnalyticsConfig()
    if args.prices:
        cfg = cfg.model_copy(
            update={"provider": ProviderSettings(kind="csv", path=args.prices)}
        )
    return PortfolioAnalyticsService(build_provider(cfg.provider), cfg)


def _emit(payload: dict) -> None:
    print(json.dumps(payload, indent=2))


# ============================================================
# Commands
# ============================================================


def cmd_performance(args: argparse.Namespace) -> None:
    service = _build_service(args)
    metrics = service.compute_performance_metrics(load_holdings(args.holdings))
    _emit(metrics.model_dump(by_alias=True))


def cmd_correlation(args: argparse.Namespace) -> None:
    service = _build_service(args)
    holdings = load_holdings(args.holdings)
    payload = service.compute_correlation_matrix(holdings).model_dump(by_alias=True)
    if args.pairs:
        analysis = service.compute_correlation_analysis(holdings, limit=args.pairs)
        payload["analysis"] = analysis.model_dump(by_alias=True)
    _emit(payload)


def cmd_risk(args: argparse.Namespace) -> None:
    service = _build_service(args)
    metrics = service.compute_risk_metrics(load_holdings(args.holdings))
    _emit(metrics.model_dump(by_alias=True))


def cmd_concentration(args: argparse.Namespace) -> None:
    service = _build_service(args)
    report = service.compute_concentration_report(load_holdings(args.holdings))
    _emit(report.model_dump(by_alias=True))


def cmd_report(args: argparse.Namespace) -> None:
    service = _build_service(args)
    holdings = load_holdings(args.holdings)
    LOGGER.info("Building report for %d holdings", len(holdings))
    _emit(
        {
            "performance": service.compute_performance_metrics(holdings).model_dump(
                by_alias=True
            ),
            "correlation": service.compute_correlation_matrix(holdings).model_dump(
                by_alias=True
            ),
            "risk": service.compute_risk_metrics(holdings).model_dump(by_alias=True),
            "concentration": service.compute_concentration_report(
                holdings
            ).model_dump(by_alias=True),
        }
    )


def cmd_version(args: argparse.Namespace) -> None:
    print(__version__)


# ============================================================
# Main CLI
# ============================================================


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--holdings", required=True, help="Path to holdings JSON")
    p.add_argument("--config", default=None, help="Path to config YAML/JSON")
    p.add_argument(
        "--prices",
        default=None,
        help="Price CSV (timestamp,symbol,close); overrides the configured provider",
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        prog="portan", description="Portfolio risk & performance analytics"
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    sub = parser.add_subparsers(dest="command", required=True)

    p_perf = sub.add_parser("performance", help="Risk-adjusted performance metrics")
    _add_common(p_perf)
    p_perf.set_defaults(func=cmd_performance)

    p_corr = sub.add_parser("correlation", help="Correlation matrix across holdings")
    _add_common(p_corr)
    p_corr.add_argument(
        "--pairs", type=int, default=0, help="Also list the N most correlated pairs"
    )
    p_corr.set_defaults(func=cmd_correlation)

    p_risk = sub.add_parser("risk", help="VaR, CVaR, beta and volatility")
    _add_common(p_risk)
    p_risk.set_defaults(func=cmd_risk)

    p_conc = sub.add_parser(
        "concentration", help="Concentration and diversification scores with alerts"
    )
    _add_common(p_conc)
    p_conc.set_defaults(func=cmd_concentration)

    p_rep = sub.add_parser("report", help="All records as one JSON document")
    _add_common(p_rep)
    p_rep.set_defaults(func=cmd_report)

    p_ver = sub.add_parser("version", help="Show version")
    p_ver.set_defaults(func=cmd_version)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args.func(args)


if __name__ == "__main__":
    main()
