"""
Domain Models Package
Export all domain entities
"""

from .entities import (
    # Enums
    AccountType,
    ContributionType,
    InsightType,
    MetricPeriod,
    TrendDirection,

    # Entities
    AccountSnapshot,
    ContributionRecord,
    InvestmentStrategy,
    PerformanceMetric,
    UserProfile,
    DEFAULT_RETIREMENT_AGE,
)
from .validation import (
    AgeError,
    AgeRangeError,
    AllocationError,
    RangeError,
    RetirementAgeRangeError,
    RetirementOrderError,
    ValidationError,
    ValidationResult,
    describe_error,
)
from .dashboard import (
    AccountBreakdown,
    ContributionBreakdown,
    DashboardMetrics,
    Insight,
    KeyStats,
    QuarterlyReturns,
    SavingsGrowthPoint,
)
from .planning import (
    RetirementProjection,
    SocialSecurityEstimate,
    StrategyRecommendation,
)

__all__ = [
    # Enums
    "AccountType",
    "ContributionType",
    "InsightType",
    "MetricPeriod",
    "TrendDirection",

    # Entities
    "AccountSnapshot",
    "ContributionRecord",
    "InvestmentStrategy",
    "PerformanceMetric",
    "UserProfile",
    "DEFAULT_RETIREMENT_AGE",

    # Validation
    "AgeError",
    "AgeRangeError",
    "AllocationError",
    "RangeError",
    "RetirementAgeRangeError",
    "RetirementOrderError",
    "ValidationError",
    "ValidationResult",
    "describe_error",

    # Dashboard
    "AccountBreakdown",
    "ContributionBreakdown",
    "DashboardMetrics",
    "Insight",
    "KeyStats",
    "QuarterlyReturns",
    "SavingsGrowthPoint",

    # Planning
    "RetirementProjection",
    "SocialSecurityEstimate",
    "StrategyRecommendation",
]
