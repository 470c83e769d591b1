"""
Utility functions module.

Calendar helpers shared across the completer and the simulators.

Month Semantics:
- Every date the engine handles is the first calendar day of a month
- Month offsets are calendar months, never fixed day counts
"""
