"""
Centralized logging configuration for the DCA comparison engine.

This module provides standardized logging configuration using structlog
for all components. Gap fills are logged through a dedicated audit logger
so every substituted price can be traced back to the rule that produced it.
"""
import logging
import sys
from datetime import date
from decimal import Decimal
from typing import Any, Optional, Sequence

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer(default=str))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_fill_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for series completion decisions.

    Every value the completer substitutes for a missing month goes through
    this logger, bound with an audit flag so the fills can be filtered out
    of the general log stream.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for gap fills
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="series_completion",
        audit_trail=True
    )


def get_scan_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for horizon scans.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for horizon scans
    """
    logger = get_logger(name)

    return logger.bind(subsystem="horizon_scan")


def log_fill_decision(
    logger: FilteringBoundLogger,
    month: date,
    method: str,
    value: Decimal,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a single gap fill with standardized format.

    Args:
        logger: Structlog logger instance
        month: Month that had no observation
        method: Fill rule that produced the value
        value: Substituted close
        context: Additional context data (e.g. the neighbouring values)
    """
    bound_logger = logger.bind(
        month=month.isoformat(),
        fill_method=method,
        value=str(value),
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.debug("Filled missing month")


def log_scan_summary(
    logger: FilteringBoundLogger,
    horizon_months: int,
    staging_periods: int,
    records: Sequence[Any],
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log the outcome of one horizon scan.

    Args:
        logger: Structlog logger instance
        horizon_months: Holding period of the scan
        staging_periods: Number of installments in the staged strategy
        records: Comparison records produced by the scan (at least one)
        context: Additional context data
    """
    upfront_wins = sum(1 for record in records if record.favored_strategy.value == "upfront")

    bound_logger = logger.bind(
        horizon_months=horizon_months,
        staging_periods=staging_periods,
        months_scanned=len(records),
        upfront_favored=upfront_wins,
        staged_favored=len(records) - upfront_wins,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Horizon scan complete",
                      first_start=records[0].start_date.isoformat(),
                      last_start=records[-1].start_date.isoformat())
