"""
AGE ELIGIBILITY VALIDATOR (ENGINE-2)
Check current age, retirement age and their ordering

RULES:
✅ Checks run in a fixed order; the first failure is reported
✅ Missing date of birth passes (presence is checked elsewhere)
✅ "Today" is injectable so the check is a pure function
"""

from datetime import date
from typing import Optional

from retireplan.domain.models import (
    AgeRangeError,
    DEFAULT_RETIREMENT_AGE,
    RetirementAgeRangeError,
    RetirementOrderError,
    UserProfile,
    ValidationResult,
)
from retireplan.utils.time import local_today

MIN_CURRENT_AGE = 18
MAX_CURRENT_AGE = 100
MIN_RETIREMENT_AGE = 55
MAX_RETIREMENT_AGE = 75


def calculate_age(date_of_birth: date, on_date: date) -> int:
    """
    Whole calendar years between date_of_birth and on_date.

    The year only counts once the birthday anniversary has been reached,
    so a Feb 29 birthday ages on Mar 1 in non-leap years.
    """
    years = on_date.year - date_of_birth.year
    if (on_date.month, on_date.day) < (date_of_birth.month, date_of_birth.day):
        years -= 1
    return years


def validate_age_eligibility(
    date_of_birth: Optional[date],
    retirement_age: Optional[int] = None,
    today: Optional[date] = None,
) -> ValidationResult:
    """
    Validate age and retirement-age bounds

    Args:
        date_of_birth: Date of birth or None
        retirement_age: Planned retirement age (defaults to 65)
        today: Reference date (defaults to today in the configured timezone)

    Returns:
        ValidationResult carrying the first failing AgeError
    """
    if date_of_birth is None:
        return ValidationResult.ok()

    current_age = calculate_age(date_of_birth, today or local_today())

    if current_age < MIN_CURRENT_AGE or current_age > MAX_CURRENT_AGE:
        return ValidationResult.fail(
            AgeRangeError(
                current_age=current_age,
                minimum=MIN_CURRENT_AGE,
                maximum=MAX_CURRENT_AGE,
            )
        )

    if retirement_age is None:
        retirement_age = DEFAULT_RETIREMENT_AGE

    if retirement_age < MIN_RETIREMENT_AGE or retirement_age > MAX_RETIREMENT_AGE:
        return ValidationResult.fail(
            RetirementAgeRangeError(
                retirement_age=retirement_age,
                minimum=MIN_RETIREMENT_AGE,
                maximum=MAX_RETIREMENT_AGE,
            )
        )

    if retirement_age <= current_age:
        return ValidationResult.fail(
            RetirementOrderError(current_age=current_age, retirement_age=retirement_age)
        )

    return ValidationResult.ok()


def validate_profile(profile: Optional[UserProfile], today: Optional[date] = None) -> ValidationResult:
    """Validate the age fields held by a UserProfile."""
    if profile is None:
        return ValidationResult.ok()
    return validate_age_eligibility(profile.date_of_birth, profile.retirement_age, today=today)
