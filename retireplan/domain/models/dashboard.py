"""
DOMAIN MODELS - DASHBOARD METRICS

Derived, transient view data. Never persisted.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

from .entities import AccountType, InsightType, TrendDirection


@dataclass(frozen=True)
class KeyStats:
    total_assets: Decimal
    total_assets_trend: TrendDirection
    trend_percentage: Decimal

    annual_contribution: Decimal
    annual_contribution_trend: TrendDirection
    contribution_trend_percentage: Decimal

    ytd_return: Optional[Decimal]
    ytd_return_trend: Optional[TrendDirection]
    return_trend_percentage: Optional[Decimal]

    on_track_score: int
    on_track_status: str


@dataclass(frozen=True)
class SavingsGrowthPoint:
    month: str
    actual_balance: Decimal
    target_balance: Optional[Decimal] = None


@dataclass(frozen=True)
class ContributionBreakdown:
    employee_contributions: Decimal
    employer_match: Decimal
    previous_balance: Decimal

    @property
    def total(self) -> Decimal:
        return self.employee_contributions + self.employer_match + self.previous_balance


@dataclass(frozen=True)
class AccountBreakdown:
    account_type: AccountType
    account_name: str
    balance: Decimal
    percentage: Decimal
    color: str


@dataclass(frozen=True)
class QuarterlyReturns:
    """
    Return per calendar quarter.
    None means "no data", which is distinct from a 0% return.
    """
    q1: Optional[Decimal] = None
    q2: Optional[Decimal] = None
    q3: Optional[Decimal] = None
    q4: Optional[Decimal] = None
    ytd_average: Optional[Decimal] = None

    def as_tuple(self) -> Tuple[Optional[Decimal], ...]:
        return (self.q1, self.q2, self.q3, self.q4)


@dataclass(frozen=True)
class Insight:
    title: str
    description: str
    type: InsightType
    icon: str


@dataclass(frozen=True)
class DashboardMetrics:
    key_stats: KeyStats
    savings_growth: Tuple[SavingsGrowthPoint, ...]
    contribution_breakdown: ContributionBreakdown
    account_breakdown: Tuple[AccountBreakdown, ...]
    quarterly_returns: QuarterlyReturns
    insights: Tuple[Insight, ...]
