"""
STRATEGY ENGINE
Age-banded investment strategy recommendations

RESPONSIBILITIES:
- Pick the configured strategy band for an age
- Split a portfolio value into stocks / bonds / cash amounts
- Every band allocation passes the allocation validator
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Sequence, Tuple

from retireplan.domain.models import StrategyRecommendation, describe_error
from retireplan.domain.services.allocation_validator import validate_allocation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StrategyBand:
    """Strategy for ages up to and including max_age (None = no upper bound)"""
    max_age: Optional[int]
    name: str
    risk_level: str
    stocks_percentage: int
    bonds_percentage: int
    cash_percentage: int
    recommendation: str

    def __post_init__(self):
        result = validate_allocation(
            self.stocks_percentage,
            self.bonds_percentage,
            self.cash_percentage,
        )
        if not result.is_valid:
            raise ValueError(f"Strategy '{self.name}': {describe_error(result.error)}")

    def covers(self, age: int) -> bool:
        return self.max_age is None or age <= self.max_age


class StrategyEngine:
    """
    Strategy Engine
    Maps an age to a recommended allocation
    """

    def __init__(
        self,
        bands: Sequence[StrategyBand],
        suggested_actions: Sequence[str] = (),
        default_age: int = 42,
    ):
        """
        Initialize strategy engine

        Args:
            bands: Strategy bands ordered by ascending max_age; the last one open-ended
            suggested_actions: Generic actions attached to every recommendation
            default_age: Age used when none is supplied
        """
        if not bands:
            raise ValueError("At least one strategy band is required")
        if bands[-1].max_age is not None:
            raise ValueError("The last strategy band must have no max_age")
        self.bands: Tuple[StrategyBand, ...] = tuple(bands)
        self.suggested_actions = tuple(suggested_actions)
        self.default_age = default_age

    def band_for(self, age: int) -> StrategyBand:
        for band in self.bands:
            if band.covers(age):
                return band
        return self.bands[-1]

    def recommend(
        self,
        age: Optional[int],
        portfolio_value: Decimal = Decimal("0"),
    ) -> StrategyRecommendation:
        """
        Recommend an allocation for an investor

        Args:
            age: Investor age (defaults to configured default_age)
            portfolio_value: Current portfolio value used for amount split

        Returns:
            StrategyRecommendation
        """
        if age is None:
            age = self.default_age
        if portfolio_value < Decimal("0"):
            raise ValueError("Portfolio value must be positive or zero")

        band = self.band_for(age)
        logger.debug("Age %d -> strategy '%s'", age, band.name)

        return StrategyRecommendation(
            name=band.name,
            risk_level=band.risk_level,
            stocks_percentage=band.stocks_percentage,
            bonds_percentage=band.bonds_percentage,
            cash_percentage=band.cash_percentage,
            stocks_amount=self._amount(portfolio_value, band.stocks_percentage),
            bonds_amount=self._amount(portfolio_value, band.bonds_percentage),
            cash_amount=self._amount(portfolio_value, band.cash_percentage),
            recommendation=band.recommendation,
            suggested_actions=self.suggested_actions,
        )

    @staticmethod
    def _amount(total: Decimal, percentage: int) -> Decimal:
        return (total * Decimal(percentage) / Decimal("100")).quantize(Decimal("0.01"))
