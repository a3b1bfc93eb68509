"""
Simplified Social Security benefit estimate.

Base benefit replaces a fixed share of salary; claiming early or late
scales it by configured multipliers.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Optional, Sequence, Tuple

from retireplan.domain.models import SocialSecurityEstimate
from retireplan.domain.schemas.planning import SocialSecurityInput

CLAIMING_AGES = (62, 67, 70)


@dataclass(frozen=True)
class SocialSecurityConfig:
    replacement_rate: Decimal
    full_retirement_age: int
    multipliers: Mapping[int, Decimal]
    # (max_age, text) ordered by max_age; last entry has max_age None
    recommendations: Tuple[Tuple[Optional[int], str], ...]

    def __post_init__(self):
        missing = set(CLAIMING_AGES) - set(self.multipliers)
        if missing:
            raise ValueError(f"Missing claiming-age multipliers: {sorted(missing)}")
        if not self.recommendations or self.recommendations[-1][0] is not None:
            raise ValueError("The last social security recommendation must have no max_age")


class SocialSecurityEstimator:

    def __init__(self, config: SocialSecurityConfig):
        self.config = config

    def base_monthly_benefit(self, salary: Decimal) -> Decimal:
        return (salary * self.config.replacement_rate / Decimal("12")).quantize(
            Decimal("0.01"), rounding=ROUND_HALF_UP
        )

    def estimate(self, request: SocialSecurityInput) -> SocialSecurityEstimate:
        base = self.base_monthly_benefit(request.current_salary)
        at = {age: self._scaled(base, self.config.multipliers[age]) for age in CLAIMING_AGES}
        return SocialSecurityEstimate(
            full_retirement_age=self.config.full_retirement_age,
            benefit_at_62=at[62],
            benefit_at_67=at[67],
            benefit_at_70=at[70],
            recommendation=self._recommendation(request.current_age),
        )

    def _recommendation(self, age: Optional[int]) -> str:
        if age is None:
            return ""
        return _first_covering(self.config.recommendations, age)

    @staticmethod
    def _scaled(base: Decimal, multiplier: Decimal) -> Decimal:
        return (base * multiplier).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def _first_covering(entries: Sequence[Tuple[Optional[int], str]], age: int) -> str:
    for max_age, text in entries:
        if max_age is None or age <= max_age:
            return text
    return entries[-1][1]
