"""Series completion: turns sparse month-start observations into a gap-free monthly series"""

from .completer import SeriesCompleter, complete_monthly_series

__all__ = [
    "SeriesCompleter",
    "complete_monthly_series",
]
