from decimal import Decimal

import pytest
from pydantic import ValidationError

from retireplan.domain.schemas.planning import SocialSecurityInput
from retireplan.domain.services.social_security import SocialSecurityEstimator


@pytest.fixture()
def estimator(planning_config):
    return SocialSecurityEstimator(planning_config.social_security)


@pytest.mark.unit
class TestSocialSecurityEstimator:

    def test_benefits_by_claiming_age(self, estimator):
        estimate = estimator.estimate(SocialSecurityInput(current_salary=Decimal("60000")))

        assert estimate.full_retirement_age == 67
        assert estimate.benefit_at_62 == Decimal("1500.00")
        assert estimate.benefit_at_67 == Decimal("2000.00")
        assert estimate.benefit_at_70 == Decimal("2640.00")

    def test_base_benefit_rounds_half_up(self, estimator):
        # 1000.05 * 0.40 / 12 = 33.335
        assert estimator.base_monthly_benefit(Decimal("1000.05")) == Decimal("33.34")

    @pytest.mark.parametrize("age,fragment", [
        (45, "Continue working"),
        (61, "Continue working"),
        (62, "claim reduced benefits"),
        (66, "claim reduced benefits"),
        (67, "at or past full retirement age"),
    ])
    def test_recommendation_by_age(self, estimator, age, fragment):
        estimate = estimator.estimate(
            SocialSecurityInput(current_salary=Decimal("50000"), current_age=age)
        )

        assert fragment in estimate.recommendation

    def test_no_age_no_recommendation(self, estimator):
        estimate = estimator.estimate(SocialSecurityInput(current_salary=Decimal("50000")))

        assert estimate.recommendation == ""

    def test_zero_salary(self, estimator):
        estimate = estimator.estimate(SocialSecurityInput(current_salary=Decimal("0")))

        assert estimate.benefit_at_70 == Decimal("0.00")

    def test_negative_salary_rejected(self):
        with pytest.raises(ValidationError):
            SocialSecurityInput(current_salary=Decimal("-1"))
