"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import InvalidParameterError
from .defaults import (
    AggregationParams,
    CompletionParams,
    DefaultConfig,
    LoggingParams,
    ScanParams,
    get_default_config,
)
from .validation import to_decimal


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_ticker_config(self, ticker: str) -> dict[str, Any]:
        """Load ticker-specific configuration overrides."""
        tickers_file = self.config_dir / "tickers.yaml"

        if not tickers_file.exists():
            return {}

        with open(tickers_file) as f:
            tickers_config = yaml.safe_load(f) or {}

        return tickers_config.get("tickers", {}).get(ticker, {}) or {}  # type: ignore[no-any-return]

    def merge_config(
        self,
        ticker: str,
        run_overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Per-run overrides (highest priority)
        2. Ticker-specific overrides
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        ticker_config = self.load_ticker_config(ticker)
        config = self._deep_merge(config, ticker_config)

        if run_overrides:
            config = self._deep_merge(config, run_overrides)

        return config

    def load(self, ticker: str, run_overrides: Optional[dict[str, Any]] = None) -> DefaultConfig:
        """Merge and build a typed configuration for a ticker."""
        return build_config(self.merge_config(ticker, run_overrides))

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name, _field in obj.__dataclass_fields__.items():
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def build_config(merged: dict[str, Any]) -> DefaultConfig:
    """Build a DefaultConfig from a merged configuration dict."""
    scan = dict(merged.get("scan", {}))
    if "initial_investment" in scan:
        scan["initial_investment"] = to_decimal(scan["initial_investment"], "initial_investment")

    try:
        return DefaultConfig(
            scan=ScanParams(**scan),
            completion=CompletionParams(**merged.get("completion", {})),
            aggregation=AggregationParams(**merged.get("aggregation", {})),
            logging=LoggingParams(**merged.get("logging", {})),
        )
    except TypeError as e:
        # Unknown key in one of the sections
        raise InvalidParameterError(f"Invalid configuration: {e}")
