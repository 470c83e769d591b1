"""Return simulation engine for upfront and staged investment strategies"""

from .returns import compute_return
from .scanner import HorizonScanner, scan_horizons
from .staged import compute_staged, simulate_staged

__all__ = [
    "HorizonScanner",
    "compute_return",
    "compute_staged",
    "simulate_staged",
    "scan_horizons",
]
