"""
ALLOCATION VALIDATOR (ENGINE-1)
Check that a stocks / bonds / cash split sums to 100

RULES:
❌ No clamping of malformed percentages
❌ No exceptions for validation failures
✅ Missing values pass (presence is checked elsewhere)
✅ Pure function of its three inputs
"""

from typing import Optional

from retireplan.domain.models import (
    AllocationError,
    InvestmentStrategy,
    RangeError,
    ValidationResult,
)

REQUIRED_TOTAL = 100
MIN_PERCENTAGE = 0
MAX_PERCENTAGE = 100


def validate_allocation(
    stocks: Optional[int],
    bonds: Optional[int],
    cash: Optional[int],
) -> ValidationResult:
    """
    Validate an asset allocation split

    Args:
        stocks: Stocks percentage (0-100) or None
        bonds: Bonds percentage (0-100) or None
        cash: Cash percentage (0-100) or None

    Returns:
        ValidationResult carrying RangeError or AllocationError on failure
    """
    if stocks is None or bonds is None or cash is None:
        return ValidationResult.ok()

    for field, value in (("stocks", stocks), ("bonds", bonds), ("cash", cash)):
        if value < MIN_PERCENTAGE or value > MAX_PERCENTAGE:
            return ValidationResult.fail(
                RangeError(
                    field=field,
                    value=value,
                    minimum=MIN_PERCENTAGE,
                    maximum=MAX_PERCENTAGE,
                )
            )

    total = stocks + bonds + cash
    if total != REQUIRED_TOTAL:
        return ValidationResult.fail(AllocationError(actual_total=total))

    return ValidationResult.ok()


def validate_strategy(strategy: Optional[InvestmentStrategy]) -> ValidationResult:
    """Validate the allocation held by an InvestmentStrategy."""
    if strategy is None:
        return ValidationResult.ok()
    return validate_allocation(
        strategy.stocks_percentage,
        strategy.bonds_percentage,
        strategy.cash_percentage,
    )
