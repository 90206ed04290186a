# src/portfolio_analytics/data/providers.py
from __future__ import annotations

import logging
import zlib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Mapping

import numpy as np
import pandas as pd

from portfolio_analytics.errors import ReturnSeriesUnavailableError
from portfolio_analytics.risk.stats import ReturnSeries, as_series

LOGGER = logging.getLogger(__name__)


def _check_lookback(lookback: int) -> None:
    if lookback < 1:
        msg = "lookback must be at least 1 period."
        raise ValueError(msg)


class ReturnSeriesProvider(ABC):
    """Source of periodic returns for a symbol, oldest first."""

    @abstractmethod
    def get_returns(self, symbol: str, lookback: int) -> np.ndarray:
        """Return the most recent ``lookback`` returns for ``symbol``."""


class InMemoryReturnProvider(ReturnSeriesProvider):
    """
    Serves return series held in memory, e.g. loaded by the caller.
    """

    def __init__(self, returns_by_symbol: Mapping[str, ReturnSeries]):
        self._series: Dict[str, np.ndarray] = {
            symbol: as_series(r).copy() for symbol, r in returns_by_symbol.items()
        }

    def get_returns(self, symbol: str, lookback: int) -> np.ndarray:
        _check_lookback(lookback)
        if symbol not in self._series:
            raise ReturnSeriesUnavailableError(f"No returns loaded for {symbol!r}.")
        return self._series[symbol][-lookback:].copy()


class SyntheticReturnProvider(ReturnSeriesProvider):
    """
    Deterministic demonstration returns.

    Each symbol gets a drift in {-0.0002, 0, 0.0002} and a daily volatility
    between 1.5% and 3.3%, both derived from a stable hash of the symbol.
    Returns are drift + U(-1, 1) * vol drawn from a generator seeded by
    (symbol hash, seed), so the same inputs always give the same series.
    """

    def __init__(self, seed: int = 0):
        self.seed = int(seed)

    def get_returns(self, symbol: str, lookback: int) -> np.ndarray:
        _check_lookback(lookback)
        key = zlib.crc32(symbol.encode("utf-8"))
        trend = (key % 3 - 1) * 0.0002
        vol = 0.015 + (key % 10) * 0.002

        rng = np.random.default_rng([key, self.seed])
        returns = trend + rng.uniform(-1.0, 1.0, size=lookback) * vol
        LOGGER.debug(
            "Synthetic returns for %s: trend=%.4f vol=%.4f n=%d",
            symbol,
            trend,
            vol,
            lookback,
        )
        return returns


class CsvReturnProvider(ReturnSeriesProvider):
    """
    Simple returns computed from a long-format price CSV with columns
    ``timestamp``, ``symbol`` and ``close``.

    Periods where any symbol lacks a return are dropped, so every symbol's
    series covers the same timestamps and aligns position by position.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._returns = self._load(self.path)

    @staticmethod
    def _load(path: Path) -> pd.DataFrame:
        if not path.exists():
            raise FileNotFoundError(f"Price file does not exist: {path}")

        df = pd.read_csv(path)

        required = {"timestamp", "symbol", "close"}
        missing = required - set(df.columns)
        if missing:
            raise ValueError(
                f"CSV missing required columns: {missing}\nPresent: {df.columns.tolist()}"
            )

        df["timestamp"] = pd.to_datetime(df["timestamp"], errors="raise")
        prices = df.pivot_table(
            index="timestamp", columns="symbol", values="close", aggfunc="last"
        ).sort_index()
        LOGGER.info(
            "Loaded %d price rows for %d symbols from %s",
            len(df),
            prices.shape[1],
            path,
        )
        returns = prices.pct_change(fill_method=None)
        aligned = returns.dropna(how="any")
        dropped = len(returns) - len(aligned) - 1
        if dropped > 0:
            LOGGER.warning(
                "Dropped %d periods missing a price for at least one symbol", dropped
            )
        return aligned

    def get_returns(self, symbol: str, lookback: int) -> np.ndarray:
        _check_lookback(lookback)
        if symbol not in self._returns.columns:
            raise ReturnSeriesUnavailableError(f"No prices for {symbol!r} in {self.path}.")
        return self._returns[symbol].iloc[-lookback:].to_numpy(dtype=float)
