# src/portfolio_analytics/config/loader.py
from __future__ import annotations

import json
import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from portfolio_analytics.config.models import AnalyticsConfig, ProviderSettings
from portfolio_analytics.data.providers import (
    CsvReturnProvider,
    ReturnSeriesProvider,
    SyntheticReturnProvider,
)

LOGGER = logging.getLogger(__name__)


def load_config(path: str | Path) -> AnalyticsConfig:
    """
    Load an AnalyticsConfig from YAML or JSON.

    Validated with Pydantic v2; an empty file gives the defaults.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    text = path.read_text()

    try:
        if path.suffix.lower() in {".yaml", ".yml"}:
            raw = yaml.safe_load(text)
        elif path.suffix.lower() == ".json":
            raw = json.loads(text)
        else:
            raise ValueError("Config path must be YAML or JSON.")
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ValueError(f"Failed to parse config: {e}") from e

    try:
        cfg = AnalyticsConfig.model_validate(raw or {})
    except ValidationError as e:
        raise ValueError(f"Invalid AnalyticsConfig: {e}") from e

    LOGGER.info("Loaded config %s (provider=%s)", path, cfg.provider.kind)
    return cfg


def build_provider(settings: ProviderSettings) -> ReturnSeriesProvider:
    """Instantiate the return-series provider described by ``settings``."""
    if settings.kind == "csv":
        return CsvReturnProvider(settings.path)
    return SyntheticReturnProvider(seed=settings.seed)
