"""Default configuration parameters for the comparison engine."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class ScanParams:
    """Horizon scan parameters."""
    horizon_months: int = 12                              # Holding period evaluated
    staging_periods: int = 12                             # Monthly installments for DCA
    initial_investment: Decimal = Decimal("10000")        # Total sum for both strategies
    workers: int = 1                                      # Threads for the scan loop


@dataclass(frozen=True)
class CompletionParams:
    """Series completion parameters."""
    straddle_window: int = 1           # Longest gap (months) filled by neighbour mean


@dataclass(frozen=True)
class AggregationParams:
    """Summary parameters."""
    top_n: int = 10                    # Records kept in the largest-difference list


@dataclass(frozen=True)
class LoggingParams:
    """Logging parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    scan: ScanParams
    completion: CompletionParams
    aggregation: AggregationParams
    logging: LoggingParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        scan=ScanParams(),
        completion=CompletionParams(),
        aggregation=AggregationParams(),
        logging=LoggingParams(),
    )
