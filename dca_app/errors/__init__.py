"""
Error classification for the comparison engine.

This module provides the exception hierarchy for problems found in input
price data and for contract violations inside the simulation itself.
"""

from .data_quality import (
    DataQualityError,
    DataGapError,
    MalformedDataError,
    MissingDataError,
)
from .system_failures import (
    SystemFailureError,
    SeriesLookupError,
    InvalidParameterError,
    SimulationError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "DataGapError",
    "MalformedDataError",
    "MissingDataError",
    # System Failures
    "SystemFailureError",
    "SeriesLookupError",
    "InvalidParameterError",
    "SimulationError",
]
