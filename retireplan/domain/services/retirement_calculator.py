"""
RETIREMENT CALCULATOR
Project retirement balance and income

RESPONSIBILITIES:
- Future value of current savings (monthly compounding)
- Future value of monthly contributions + employer match (annuity)
- Sustainable monthly income via a fixed withdrawal rate
- Level drawdown income over the expected retirement duration
- On-track / behind status against desired income

RULES:
❌ No I/O
✅ Decimal arithmetic, amounts rounded to cents
✅ Zero return rate falls back to simple accumulation
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Mapping

from retireplan.domain.models import RetirementProjection
from retireplan.domain.schemas.planning import RetirementPlanInput

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")
ON_TRACK = "on_track"
BEHIND = "behind"


@dataclass(frozen=True)
class ProjectionDefaults:
    """Values used when a plan leaves a field unset"""
    current_savings: Decimal
    monthly_contribution: Decimal
    employer_match: Decimal
    expected_return_rate: Decimal
    expected_inflation_rate: Decimal
    desired_monthly_income: Decimal
    retirement_duration: int  # Years
    withdrawal_rate: Decimal
    recommendations: Mapping[str, str]

    def __post_init__(self):
        if not Decimal("0") < self.withdrawal_rate <= Decimal("1"):
            raise ValueError("Withdrawal rate must be in (0, 1]")
        if self.retirement_duration < 1:
            raise ValueError("Retirement duration must be at least 1 year")
        missing = {ON_TRACK, BEHIND} - set(self.recommendations)
        if missing:
            raise ValueError(f"Missing projection recommendations: {sorted(missing)}")


class RetirementCalculator:
    """
    Retirement Calculator
    Compound-growth projection of a retirement plan
    """

    def __init__(self, defaults: ProjectionDefaults):
        self.defaults = defaults

    def calculate(self, plan: RetirementPlanInput) -> RetirementProjection:
        """
        Calculate retirement projection

        Args:
            plan: Validated plan input

        Returns:
            RetirementProjection
        """
        d = self.defaults
        current_savings = self._or_default(plan.current_savings, d.current_savings)
        monthly_contribution = self._or_default(plan.monthly_contribution, d.monthly_contribution)
        employer_match = self._or_default(plan.employer_match, d.employer_match)
        return_rate = self._or_default(plan.expected_return_rate, d.expected_return_rate)
        inflation_rate = self._or_default(plan.expected_inflation_rate, d.expected_inflation_rate)
        desired_income = self._or_default(plan.desired_monthly_income, d.desired_monthly_income)
        duration = plan.expected_retirement_duration or d.retirement_duration

        years = plan.retirement_age - plan.current_age
        total_months = years * 12
        total_monthly_contribution = monthly_contribution + employer_match

        monthly_rate = return_rate / Decimal("1200")
        growth = (Decimal("1") + monthly_rate) ** total_months

        # Future value of current savings
        fv_savings = current_savings * growth

        # Future value of monthly contributions
        if monthly_rate > Decimal("0"):
            fv_contributions = total_monthly_contribution * (growth - Decimal("1")) / monthly_rate
        else:
            fv_contributions = total_monthly_contribution * Decimal(total_months)

        projected_balance = (fv_savings + fv_contributions).quantize(CENTS)
        projected_income = (projected_balance * d.withdrawal_rate / Decimal("12")).quantize(CENTS)

        # Same income in today's money
        deflator = (Decimal("1") + inflation_rate / Decimal("100")) ** years
        real_income = (projected_income / deflator).quantize(CENTS)

        drawdown_income = self._drawdown_income(projected_balance, monthly_rate, duration * 12)

        status = ON_TRACK if projected_income >= desired_income else BEHIND

        logger.info(
            "Projection: %d years, balance=%s, monthly income=%s, drawdown over %d years=%s, status=%s",
            years, projected_balance, projected_income, duration, drawdown_income, status,
        )

        return RetirementProjection(
            years_to_retirement=years,
            total_monthly_contribution=total_monthly_contribution.quantize(CENTS),
            projected_balance=projected_balance,
            projected_monthly_income=projected_income,
            real_monthly_income=real_income,
            desired_monthly_income=desired_income.quantize(CENTS),
            retirement_duration=duration,
            drawdown_monthly_income=drawdown_income,
            status=status,
            recommendation=d.recommendations[status],
        )

    @staticmethod
    def _drawdown_income(balance: Decimal, monthly_rate: Decimal, months: int) -> Decimal:
        """
        Level monthly payout that exhausts the balance after `months`
        while the remainder keeps earning monthly_rate.
        """
        if monthly_rate > Decimal("0"):
            payout = balance * monthly_rate / (Decimal("1") - (Decimal("1") + monthly_rate) ** -months)
        else:
            payout = balance / Decimal(months)
        return payout.quantize(CENTS)

    @staticmethod
    def _or_default(value, default: Decimal) -> Decimal:
        return default if value is None else Decimal(value)
