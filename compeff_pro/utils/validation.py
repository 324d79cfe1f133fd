"""Input validation and design rule checking for CompEff Pro."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class CalculationError(ValueError):
    """Raised when inputs describe a physically impossible operating point."""


class Severity(Enum):
    """Severity level for validation messages."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationMessage:
    """A single validation finding."""

    severity: Severity
    parameter: str
    message: str
    value: Any = None
    limit: Any = None


@dataclass
class ValidationResult:
    """Aggregated validation result."""

    messages: list[ValidationMessage] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not any(m.severity == Severity.ERROR for m in self.messages)

    @property
    def has_warnings(self) -> bool:
        return any(m.severity == Severity.WARNING for m in self.messages)

    @property
    def errors(self) -> list[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.WARNING]

    def add(self, severity: Severity, parameter: str, message: str, **kwargs: Any) -> None:
        self.messages.append(
            ValidationMessage(severity=severity, parameter=parameter, message=message, **kwargs)
        )

    def error(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.ERROR, parameter, message, **kwargs)

    def warning(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.WARNING, parameter, message, **kwargs)

    def info(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.INFO, parameter, message, **kwargs)

    def merge(self, other: ValidationResult) -> None:
        self.messages.extend(other.messages)

    def warning_texts(self) -> list[str]:
        """Plain-text list of warning messages, for attaching to results."""
        return [m.message for m in self.warnings]

    def raise_for_errors(self) -> None:
        """Raise CalculationError listing every error message, if any."""
        if not self.is_valid:
            raise CalculationError("; ".join(m.message for m in self.errors))


# --- Common validators ---


def validate_positive(name: str, value: float, result: ValidationResult) -> None:
    """Validate that a value is strictly positive."""
    if value <= 0:
        result.error(name, f"{name} must be positive, got {value}")


def validate_range(
    name: str,
    value: float,
    low: float,
    high: float,
    result: ValidationResult,
    severity: Severity = Severity.ERROR,
) -> None:
    """Validate that a value falls within [low, high]."""
    if value < low or value > high:
        result.add(severity, name, f"{name} = {value} is outside [{low}, {high}]")


def validate_efficiency(name: str, value: float, result: ValidationResult) -> None:
    """Validate that an efficiency lies in (0, 1]."""
    if not 0.0 < value <= 1.0:
        result.error(name, f"{name} must be in (0, 1], got {value}", value=value)


def validate_temperature_lift(T_evap: float, T_cond: float, result: ValidationResult) -> None:
    """Condensing temperature must lie above the evaporating temperature."""
    if T_cond <= T_evap:
        result.error(
            "T_cond",
            f"Condensing temperature ({T_cond:.2f}) must be higher than "
            f"evaporating temperature ({T_evap:.2f})",
            value=T_cond,
            limit=T_evap,
        )


def validate_discharge_estimate(T_discharge: float, T_cond: float, result: ValidationResult) -> None:
    """An oil-cooled discharge estimate still has to sit above condensing temperature."""
    if T_discharge <= T_cond:
        result.error(
            "T_discharge",
            f"Discharge temperature estimate ({T_discharge:.2f}) must be higher than "
            f"condensing temperature ({T_cond:.2f})",
            value=T_discharge,
            limit=T_cond,
        )
