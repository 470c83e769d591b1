"""Configuration validation utilities."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..errors import InvalidParameterError


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _as_number(value: Any) -> Optional[Decimal]:
    """Numeric value of a number or numeric string, None if it is neither."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal, str)):
        return None
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_scan_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate horizon scan parameters."""
        errors = []

        # Validate horizon_months
        if "horizon_months" in params:
            value = params["horizon_months"]
            if not _is_int(value) or value <= 0:
                errors.append(ValidationError(
                    field="horizon_months",
                    message="Must be a positive integer",
                    value=value
                ))

        # Validate staging_periods
        if "staging_periods" in params:
            value = params["staging_periods"]
            if not _is_int(value) or value < 1:
                errors.append(ValidationError(
                    field="staging_periods",
                    message="Must be an integer of at least 1",
                    value=value
                ))

        # Staging cannot outlast the horizon
        horizon = params.get("horizon_months")
        staging = params.get("staging_periods")
        if _is_int(horizon) and _is_int(staging) and 0 < horizon < staging:
            errors.append(ValidationError(
                field="staging_periods",
                message=f"Must not exceed horizon_months ({horizon})",
                value=staging
            ))

        # Validate initial_investment
        if "initial_investment" in params:
            value = params["initial_investment"]
            number = _as_number(value)
            if number is None or number <= 0:
                errors.append(ValidationError(
                    field="initial_investment",
                    message="Must be a positive number",
                    value=value
                ))

        # Validate workers
        if "workers" in params:
            value = params["workers"]
            if not _is_int(value) or value < 1:
                errors.append(ValidationError(
                    field="workers",
                    message="Must be an integer of at least 1",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_completion_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate series completion parameters."""
        errors = []

        if "straddle_window" in params:
            value = params["straddle_window"]
            if not _is_int(value) or value < 0:
                errors.append(ValidationError(
                    field="straddle_window",
                    message="Must be a non-negative integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_aggregation_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate aggregation parameters."""
        errors = []

        if "top_n" in params:
            value = params["top_n"]
            if not _is_int(value) or value < 0:
                errors.append(ValidationError(
                    field="top_n",
                    message="Must be a non-negative integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "scan" in config:
            errors.extend(ConfigValidator.validate_scan_params(config["scan"]))

        if "completion" in config:
            errors.extend(ConfigValidator.validate_completion_params(config["completion"]))

        if "aggregation" in config:
            errors.extend(ConfigValidator.validate_aggregation_params(config["aggregation"]))

        return errors


def to_decimal(value: Any, field: str) -> Decimal:
    """Convert a YAML/JSON number or string to Decimal without float noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise InvalidParameterError(f"{field} must be a number", parameter=field, value=value)
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as e:
        raise InvalidParameterError(f"{field} must be a number: {e}", parameter=field, value=value)


def _raise_first(errors: list[ValidationError]) -> None:
    if errors:
        error = errors[0]
        raise InvalidParameterError(
            f"{error.field}: {error.message} (got: {error.value})",
            parameter=error.field,
            value=error.value,
        )


def ensure_valid_investment(investment: Any) -> Decimal:
    """
    Validate an investment amount and return it as a Decimal.

    Raises:
        InvalidParameterError: If the amount is not a positive finite number
    """
    _raise_first(ConfigValidator.validate_scan_params({"initial_investment": investment}))
    return to_decimal(investment, "initial_investment")


def ensure_valid_scan(horizon_months: int, staging_periods: int, investment: Any) -> Decimal:
    """
    Validate scan parameters, raising on the first problem.

    Returns:
        The investment as a Decimal, ready for price arithmetic

    Raises:
        InvalidParameterError: If any parameter is out of range
    """
    _raise_first(ConfigValidator.validate_scan_params({
        "horizon_months": horizon_months,
        "staging_periods": staging_periods,
        "initial_investment": investment,
    }))
    return to_decimal(investment, "initial_investment")
