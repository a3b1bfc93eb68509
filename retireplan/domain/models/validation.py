"""
DOMAIN MODELS - VALIDATION RESULTS

Validation failures are returned as values, never raised.
Each error carries the data a caller needs to build its own message.
"""

from dataclasses import dataclass
from typing import ClassVar, Optional, Union


@dataclass(frozen=True)
class AllocationError:
    """Stocks + bonds + cash did not add up to 100"""
    code: ClassVar[str] = "allocation_total"
    actual_total: int
    expected_total: int = 100


@dataclass(frozen=True)
class RangeError:
    """A single input lies outside its permitted range"""
    code: ClassVar[str] = "out_of_range"
    field: str
    value: int
    minimum: int
    maximum: int


@dataclass(frozen=True)
class AgeRangeError:
    """Current age outside the supported window"""
    code: ClassVar[str] = "age_range"
    current_age: int
    minimum: int = 18
    maximum: int = 100


@dataclass(frozen=True)
class RetirementAgeRangeError:
    """Retirement age outside the supported window"""
    code: ClassVar[str] = "retirement_age_range"
    retirement_age: int
    minimum: int = 55
    maximum: int = 75


@dataclass(frozen=True)
class RetirementOrderError:
    """Retirement age is not after the current age"""
    code: ClassVar[str] = "retirement_order"
    current_age: int
    retirement_age: int


AgeError = Union[AgeRangeError, RetirementAgeRangeError, RetirementOrderError]
ValidationError = Union[AllocationError, RangeError, AgeError]


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a single validator - at most one error (short-circuit)"""
    error: Optional[ValidationError] = None

    @property
    def is_valid(self) -> bool:
        return self.error is None

    @staticmethod
    def ok() -> "ValidationResult":
        return _OK

    @staticmethod
    def fail(error: ValidationError) -> "ValidationResult":
        return ValidationResult(error=error)


_OK = ValidationResult()


def describe_error(error: ValidationError) -> str:
    """Human-readable message for a validation error."""
    if isinstance(error, AllocationError):
        return (
            f"Asset allocation percentages must sum to {error.expected_total}% "
            f"(currently {error.actual_total}%)"
        )
    if isinstance(error, RangeError):
        return (
            f"{error.field} must be between {error.minimum} and {error.maximum} "
            f"(got {error.value})"
        )
    if isinstance(error, AgeRangeError):
        return f"Current age must be between {error.minimum} and {error.maximum} years"
    if isinstance(error, RetirementAgeRangeError):
        return f"Retirement age must be between {error.minimum} and {error.maximum} years"
    if isinstance(error, RetirementOrderError):
        return "Retirement age must be greater than current age"
    raise TypeError(f"Unknown validation error: {error!r}")
