"""
Configuration module.

Frozen dataclass defaults, YAML overrides per ticker, and parameter
validation for horizon scans.
"""
