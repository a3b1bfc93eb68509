"""
Unit Tests for the allocation validator

✅ Sum rule and per-field range rule
✅ Vacuous pass on missing values
✅ Strategy wrapper
"""

import pytest

from retireplan.domain.models import (
    AllocationError,
    InvestmentStrategy,
    RangeError,
    describe_error,
)
from retireplan.domain.services.allocation_validator import (
    validate_allocation,
    validate_strategy,
)


@pytest.mark.unit
class TestValidateAllocation:
    """Test validate_allocation"""

    @pytest.mark.parametrize("stocks,bonds,cash", [
        (60, 30, 10),
        (100, 0, 0),
        (0, 0, 100),
        (80, 15, 5),
    ])
    def test_valid_splits(self, stocks, bonds, cash):
        """Splits summing to 100 pass"""
        assert validate_allocation(stocks, bonds, cash).is_valid

    def test_sum_below_100_fails(self):
        """60 + 30 + 5 reports the actual total"""
        result = validate_allocation(60, 30, 5)

        assert not result.is_valid
        assert isinstance(result.error, AllocationError)
        assert result.error.actual_total == 95
        assert result.error.expected_total == 100
        assert "currently 95%" in describe_error(result.error)

    def test_sum_above_100_fails(self):
        result = validate_allocation(70, 30, 10)

        assert result.error == AllocationError(actual_total=110)

    @pytest.mark.parametrize("stocks,bonds,cash", [
        (None, 30, 10),
        (60, None, 10),
        (60, 30, None),
        (None, None, None),
    ])
    def test_missing_value_passes(self, stocks, bonds, cash):
        """Presence is checked elsewhere"""
        assert validate_allocation(stocks, bonds, cash).is_valid

    def test_negative_value_is_range_error(self):
        """(120, -10, -10) sums to 100 but is still rejected"""
        result = validate_allocation(120, -10, -10)

        assert isinstance(result.error, RangeError)
        assert result.error.field == "stocks"
        assert result.error.value == 120

    def test_range_checked_in_field_order(self):
        result = validate_allocation(50, 101, -10)

        assert result.error == RangeError(field="bonds", value=101, minimum=0, maximum=100)

    def test_range_error_before_sum_error(self):
        """Range failures short-circuit the sum check"""
        result = validate_allocation(50, 50, 101)

        assert isinstance(result.error, RangeError)
        assert result.error.field == "cash"

    def test_deterministic(self):
        assert validate_allocation(60, 30, 5) == validate_allocation(60, 30, 5)


@pytest.mark.unit
class TestValidateStrategy:
    """Test validate_strategy"""

    def test_none_strategy_passes(self):
        assert validate_strategy(None).is_valid

    def test_valid_strategy(self):
        strategy = InvestmentStrategy(stocks_percentage=65, bonds_percentage=30, cash_percentage=5)

        assert validate_strategy(strategy).is_valid

    def test_invalid_strategy(self):
        strategy = InvestmentStrategy(stocks_percentage=65, bonds_percentage=30, cash_percentage=10)

        result = validate_strategy(strategy)

        assert result.error == AllocationError(actual_total=105)

    def test_partial_strategy_passes(self):
        assert validate_strategy(InvestmentStrategy(stocks_percentage=65)).is_valid
