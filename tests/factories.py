"""Record builders shared by the test suites."""

from datetime import date
from decimal import Decimal

from retireplan.domain.models import (
    AccountSnapshot,
    AccountType,
    ContributionRecord,
    ContributionType,
    MetricPeriod,
    PerformanceMetric,
)


def snapshot(account_type, balance, on, target=None, user_id=1) -> AccountSnapshot:
    """Test helper: AccountSnapshot from plain values"""
    return AccountSnapshot(
        user_id=user_id,
        account_type=AccountType(account_type),
        balance=Decimal(str(balance)),
        snapshot_date=on,
        target_balance=Decimal(str(target)) if target is not None else None,
    )


def contribution(type_, amount, on, user_id=1) -> ContributionRecord:
    return ContributionRecord(
        user_id=user_id,
        type=ContributionType(type_),
        amount=Decimal(str(amount)),
        contribution_date=on,
    )


def quarterly(year, quarter, value, user_id=1) -> PerformanceMetric:
    return PerformanceMetric(
        user_id=user_id,
        period=MetricPeriod.QUARTERLY,
        period_start=date(year, (quarter - 1) * 3 + 1, 1),
        return_value=Decimal(str(value)),
    )
