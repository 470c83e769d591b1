"""
System failure error classifications.

These exceptions signal contract violations between components or invalid
run parameters. None of them is retried: the computation is pure, so the
same input always fails the same way.
"""

from datetime import date
from typing import Any, Optional


class SystemFailureError(Exception):
    """Base class for unrecoverable failures."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class SeriesLookupError(SystemFailureError, LookupError):
    """A date was requested that the completed series does not contain."""

    def __init__(self, message: str, lookup_date: Optional[date] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.lookup_date = lookup_date


class InvalidParameterError(SystemFailureError, ValueError):
    """Scan or plan parameters are out of range."""

    def __init__(self, message: str, parameter: Optional[str] = None,
                 value: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.parameter = parameter
        self.value = value


class SimulationError(SystemFailureError):
    """Unexpected failure while simulating a single starting month."""

    def __init__(self, message: str, start_date: Optional[date] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.start_date = start_date
