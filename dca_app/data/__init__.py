"""
Data ingestion and models module.

Parses raw (date, close) observations handed over by the data acquisition
side and defines the value objects passed between pipeline stages.
"""
