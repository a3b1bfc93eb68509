"""
Domain Models - Entities
Pure domain objects with no infrastructure dependencies
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional


DEFAULT_RETIREMENT_AGE = 65


class AccountType(str, Enum):
    """Retirement account type"""
    TOTAL = "TOTAL"  # Aggregate of all accounts
    K401 = "401K"
    IRA_TRADITIONAL = "IRA_TRADITIONAL"
    IRA_ROTH = "IRA_ROTH"
    BROKERAGE = "BROKERAGE"
    PENSION = "PENSION"


class ContributionType(str, Enum):
    """Source of a contribution"""
    EMPLOYEE_PRETAX = "EMPLOYEE_PRETAX"
    EMPLOYEE_ROTH = "EMPLOYEE_ROTH"
    EMPLOYER_MATCH = "EMPLOYER_MATCH"
    PREVIOUS_BALANCE_TRANSFER = "PREVIOUS_BALANCE_TRANSFER"
    CATCHUP = "CATCHUP"


EMPLOYEE_CONTRIBUTION_TYPES = frozenset({
    ContributionType.EMPLOYEE_PRETAX,
    ContributionType.EMPLOYEE_ROTH,
    ContributionType.CATCHUP,
})


class MetricPeriod(str, Enum):
    """Aggregation period of a performance metric"""
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    ANNUAL = "ANNUAL"


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"


class InsightType(str, Enum):
    POSITIVE = "positive"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class InvestmentStrategy:
    """Stocks / bonds / cash split in whole percent - Immutable"""
    stocks_percentage: Optional[int] = None
    bonds_percentage: Optional[int] = None
    cash_percentage: Optional[int] = None


@dataclass(frozen=True)
class UserProfile:
    """Age-related part of a user profile - Immutable"""
    date_of_birth: Optional[date] = None
    retirement_age: Optional[int] = DEFAULT_RETIREMENT_AGE


@dataclass(frozen=True)
class AccountSnapshot:
    """Point-in-time balance of one account - Immutable once recorded"""
    user_id: int
    account_type: AccountType
    balance: Decimal
    snapshot_date: date
    target_balance: Optional[Decimal] = None


@dataclass(frozen=True)
class ContributionRecord:
    """Single contribution into a retirement account - Immutable"""
    user_id: int
    type: ContributionType
    amount: Decimal
    contribution_date: date

    @property
    def is_employee(self) -> bool:
        """Employee-funded (pre-tax, Roth or catch-up)"""
        return self.type in EMPLOYEE_CONTRIBUTION_TYPES


@dataclass(frozen=True)
class PerformanceMetric:
    """Portfolio return over a period - Immutable"""
    user_id: int
    period: MetricPeriod
    period_start: date
    return_value: Decimal

    @property
    def quarter(self) -> int:
        """Calendar quarter (1-4) the period starts in"""
        return (self.period_start.month - 1) // 3 + 1
