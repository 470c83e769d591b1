#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import yaml

from dca_app.config.loader import ConfigLoader
from dca_app.config.validation import ConfigValidator, ValidationError


def validate_ticker_config(loader: ConfigLoader, ticker: str) -> List[ValidationError]:
    """Validate configuration for a specific ticker."""
    config = loader.merge_config(ticker)
    return ConfigValidator.validate_config(config)


def configured_tickers(loader: ConfigLoader) -> List[str]:
    """Tickers listed in tickers.yaml."""
    tickers_file = loader.config_dir / "tickers.yaml"
    if not tickers_file.exists():
        return []
    with open(tickers_file) as f:
        data = yaml.safe_load(f) or {}
    return list(data.get("tickers", {}))


def main():
    """Main validation function."""
    print("🔍 Validating DCA App configuration...")

    loader = ConfigLoader.create()

    # Unknown tickers fall back to the defaults
    tickers = configured_tickers(loader) + ["UNKNOWN-TICKER"]

    all_valid = True

    for ticker in tickers:
        print(f"\n📊 Validating {ticker}...")

        try:
            errors = validate_ticker_config(loader, ticker)

            if errors:
                print(f"❌ Found {len(errors)} validation errors:")
                for error in errors:
                    print(f"  • {error.field}: {error.message} (value: {error.value})")
                all_valid = False
            else:
                loader.load(ticker)
                print(f"✅ {ticker} configuration is valid")

        except Exception as e:
            print(f"❌ Error validating {ticker}: {e}")
            all_valid = False

    if all_valid:
        print(f"\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print(f"\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
