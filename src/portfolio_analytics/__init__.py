from portfolio_analytics.analytics.service import PortfolioAnalyticsService
from portfolio_analytics.errors import (
    AnalyticsError,
    EmptyInputError,
    LengthMismatchError,
    ReturnSeriesUnavailableError,
)
from portfolio_analytics.portfolio.schemas import Holding, HoldingWeight
from portfolio_analytics.risk.schemas import (
    ConcentrationReport,
    CorrelationAnalysis,
    CorrelationMatrix,
    PerformanceMetrics,
    RiskAlert,
    RiskMetrics,
)

__version__ = "0.1.0"

__all__ = [
    "AnalyticsError",
    "ConcentrationReport",
    "CorrelationAnalysis",
    "CorrelationMatrix",
    "EmptyInputError",
    "Holding",
    "HoldingWeight",
    "LengthMismatchError",
    "PerformanceMetrics",
    "PortfolioAnalyticsService",
    "ReturnSeriesUnavailableError",
    "RiskAlert",
    "RiskMetrics",
    "__version__",
]
