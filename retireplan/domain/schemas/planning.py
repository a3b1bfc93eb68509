from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class RetirementPlanInput(BaseModel):
    """
    Retirement projection request.
    Unset amounts and rates are filled from config/planning.yml.
    """
    current_age: int = Field(ge=18, le=100)
    retirement_age: int = Field(ge=55, le=75)
    # Drawdown horizon in years (default from config/planning.yml)
    expected_retirement_duration: Optional[int] = Field(default=None, ge=1, le=40)
    current_savings: Optional[Decimal] = Field(default=None, ge=0, le=10_000_000)
    monthly_contribution: Optional[Decimal] = Field(default=None, ge=0, le=50_000)
    # Monthly employer contribution in currency, not a percentage
    employer_match: Optional[Decimal] = Field(default=None, ge=0, le=50_000)
    desired_monthly_income: Optional[Decimal] = Field(default=None, ge=0, le=100_000)
    expected_return_rate: Optional[Decimal] = Field(default=None, ge=0, le=50)
    expected_inflation_rate: Optional[Decimal] = Field(default=None, ge=0, le=20)

    @model_validator(mode="after")
    def check_retirement_after_current_age(self) -> "RetirementPlanInput":
        if self.retirement_age <= self.current_age:
            raise ValueError("retirement_age must be greater than current_age")
        return self


class SocialSecurityInput(BaseModel):
    current_salary: Decimal = Field(ge=0, le=10_000_000)
    current_age: Optional[int] = Field(default=None, ge=18, le=100)
