"""
DASHBOARD SERVICE - ASYNC
Fetch a user's history and hand it to the metrics aggregator

RESPONSIBILITIES:
- Resolve a reporting period (3m / 6m / 12m / all) to a date window
- Fetch snapshots, contributions and performance metrics
- Recompute dashboards for many users concurrently

RULES:
❌ No aggregation logic here (see MetricsAggregator)
✅ Repositories return records ordered by date ascending
"""

import asyncio
import logging
from datetime import date
from typing import Dict, Iterable, Optional, Protocol, Sequence, Tuple

from retireplan.config import settings
from retireplan.domain.models import (
    AccountSnapshot,
    ContributionRecord,
    DashboardMetrics,
    PerformanceMetric,
)
from retireplan.domain.services.metrics_aggregator import MetricsAggregator
from retireplan.utils.time import local_today, subtract_months, year_start

logger = logging.getLogger(__name__)

PERIOD_MONTHS = {
    "3m": 3,
    "6m": 6,
    "12m": 12,
    "all": 60,
}


class AccountSnapshotRepository(Protocol):
    """Protocol for account snapshot data access - ASYNC"""

    async def fetch_snapshots(
        self, user_id: int, start: Optional[date], end: date
    ) -> Sequence[AccountSnapshot]:
        """Snapshots dated start..end (start=None: from the first one)"""
        ...


class ContributionRepository(Protocol):
    """Protocol for contribution data access - ASYNC"""

    async def fetch_contributions(
        self, user_id: int, start: Optional[date], end: date
    ) -> Sequence[ContributionRecord]:
        """Contributions dated start..end"""
        ...


class PerformanceMetricRepository(Protocol):
    """Protocol for performance metric data access - ASYNC"""

    async def fetch_metrics(
        self, user_id: int, start: Optional[date], end: date
    ) -> Sequence[PerformanceMetric]:
        """Metrics with period_start in start..end"""
        ...


def resolve_window(period: str, end: date) -> Tuple[date, date]:
    """
    Resolve a period label to (window_start, window_end)

    Raises:
        ValueError: If the period is unknown
    """
    months = PERIOD_MONTHS.get(period)
    if months is None:
        raise ValueError(f"Unknown period '{period}'; expected one of {list(PERIOD_MONTHS)}")
    return subtract_months(end, months), end


class DashboardService:
    """
    Dashboard Service - ASYNC VERSION
    Read-only: never writes back to the repositories
    """

    def __init__(
        self,
        snapshot_repo: AccountSnapshotRepository,
        contribution_repo: ContributionRepository,
        metric_repo: PerformanceMetricRepository,
        aggregator: MetricsAggregator,
    ):
        self.snapshot_repo = snapshot_repo
        self.contribution_repo = contribution_repo
        self.metric_repo = metric_repo
        self.aggregator = aggregator

    async def get_dashboard(
        self,
        user_id: int,
        period: Optional[str] = None,
        today: Optional[date] = None,
    ) -> DashboardMetrics:
        """
        Compute dashboard metrics for one user

        Args:
            user_id: User identifier
            period: 3m / 6m / 12m / all (defaults to settings.DEFAULT_PERIOD)
            today: Reporting date (defaults to today in the configured timezone)

        Returns:
            DashboardMetrics
        """
        end = today or local_today()
        window_start, window_end = resolve_window(period or settings.DEFAULT_PERIOD, end)

        # Contribution trend compares with last year's year-to-date span
        contributions_from = min(window_start, subtract_months(year_start(end), 12))

        snapshots, contributions, metrics = await asyncio.gather(
            # Balances as of window_start may predate the window
            self.snapshot_repo.fetch_snapshots(user_id, None, window_end),
            self.contribution_repo.fetch_contributions(user_id, contributions_from, window_end),
            self.metric_repo.fetch_metrics(user_id, year_start(end), window_end),
        )

        logger.info(
            "Dashboard for user %s (%s..%s): %d snapshots, %d contributions, %d metrics",
            user_id, window_start, window_end, len(snapshots), len(contributions), len(metrics),
        )

        return self.aggregator.compute_dashboard_metrics(
            snapshots, contributions, metrics, window_start, window_end
        )

    async def refresh_dashboards(
        self,
        user_ids: Iterable[int],
        period: Optional[str] = None,
        today: Optional[date] = None,
    ) -> Dict[int, DashboardMetrics]:
        """
        Recompute dashboards for several users concurrently

        Returns:
            Mapping of user_id -> DashboardMetrics
        """
        ids = list(user_ids)
        results = await asyncio.gather(
            *(self.get_dashboard(user_id, period, today) for user_id in ids)
        )
        return dict(zip(ids, results))
