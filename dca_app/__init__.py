"""
DCA App - Upfront vs. Dollar-Cost Averaging Comparison Engine

Simulates investing a lump sum immediately versus staging it over monthly
installments, for every starting month of a historical price series, and
summarizes which strategy came out ahead.
"""

__version__ = "0.1.0"
__author__ = "DCA App Team"
