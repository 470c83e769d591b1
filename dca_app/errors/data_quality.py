"""
Data quality error classifications for price series processing.

These exceptions describe problems in the observations handed to the
engine by the data acquisition side, before any simulation runs.
"""

from datetime import date
from typing import Any, Optional


class DataQualityError(Exception):
    """Base class for problems with the input price observations."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class DataGapError(DataQualityError):
    """A month has no value and no earlier value exists to carry forward."""

    def __init__(self, message: str, missing_month: Optional[date] = None,
                 first_observed: Optional[date] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.missing_month = missing_month
        self.first_observed = first_observed
        # Back-filling would invent history, so a caller must supply more data
        self.recoverable = False


class MalformedDataError(DataQualityError):
    """Data exists but is in incorrect format."""

    def __init__(self, message: str, raw_data: Optional[str] = None,
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
        self.expected_format = expected_format


class MissingDataError(DataQualityError):
    """Required data is completely missing."""

    def __init__(self, message: str, data_type: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.data_type = data_type
