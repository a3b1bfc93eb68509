"""
DOMAIN MODELS - PLANNING

Immutable results of retirement projections and recommendations.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple


@dataclass(frozen=True)
class RetirementProjection:
    years_to_retirement: int
    total_monthly_contribution: Decimal
    projected_balance: Decimal
    projected_monthly_income: Decimal
    real_monthly_income: Decimal  # Inflation-adjusted to today's money
    desired_monthly_income: Decimal
    retirement_duration: int  # Years the balance is drawn down over
    drawdown_monthly_income: Decimal  # Payout that exhausts the balance over retirement_duration
    status: str  # "on_track" | "behind"
    recommendation: str

    @property
    def is_on_track(self) -> bool:
        return self.status == "on_track"

    @property
    def income_gap(self) -> Decimal:
        """Shortfall of projected vs desired monthly income (0 when on track)"""
        return max(self.desired_monthly_income - self.projected_monthly_income, Decimal("0"))


@dataclass(frozen=True)
class StrategyRecommendation:
    name: str
    risk_level: str
    stocks_percentage: int
    bonds_percentage: int
    cash_percentage: int
    stocks_amount: Decimal
    bonds_amount: Decimal
    cash_amount: Decimal
    recommendation: str
    suggested_actions: Tuple[str, ...]


@dataclass(frozen=True)
class SocialSecurityEstimate:
    full_retirement_age: int
    benefit_at_62: Decimal
    benefit_at_67: Decimal
    benefit_at_70: Decimal
    recommendation: str
