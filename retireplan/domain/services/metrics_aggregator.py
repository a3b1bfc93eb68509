"""
METRICS AGGREGATOR (ENGINE-3)
Time-series snapshots -> dashboard metrics

RESPONSIBILITIES:
- Total assets and trend over a reporting window
- Account breakdown with share of total and presentation color
- Contribution breakdown (employee / employer / rollover)
- Quarterly returns and year-to-date average
- Savings growth series, key stats, insights

RULES:
❌ No I/O, no re-sorting
❌ No exceptions on missing history (degrade to 0 / None)
✅ Inputs are ordered by date ascending (caller's contract)
✅ Output is an immutable DashboardMetrics value
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from retireplan.domain.models import (
    AccountBreakdown,
    AccountSnapshot,
    AccountType,
    ContributionBreakdown,
    ContributionRecord,
    ContributionType,
    DashboardMetrics,
    Insight,
    KeyStats,
    MetricPeriod,
    PerformanceMetric,
    QuarterlyReturns,
    SavingsGrowthPoint,
    TrendDirection,
)
from retireplan.domain.services.config_engine import DashboardConfig, get_config_engine
from retireplan.domain.services.insight_engine import InsightEngine
from retireplan.utils.time import subtract_months, year_start

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")
PCT = Decimal("0.01")

MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
                "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def percentage_change(previous: Decimal, current: Decimal) -> Decimal:
    """
    Signed change from previous to current in percent.
    A zero baseline yields 0 instead of a division error.
    """
    if previous == ZERO:
        return ZERO
    return ((current - previous) / previous * HUNDRED).quantize(PCT)


def trend_of(previous: Decimal, current: Decimal) -> Tuple[TrendDirection, Decimal]:
    """Direction plus unsigned magnitude of the change"""
    direction = TrendDirection.UP if current >= previous else TrendDirection.DOWN
    return direction, abs(percentage_change(previous, current))


def _signed(magnitude: Decimal, direction: TrendDirection) -> Decimal:
    return magnitude if direction is TrendDirection.UP else -magnitude


class MetricsAggregator:
    """
    Metrics Aggregator
    Derives dashboard figures from pre-fetched, date-ordered records
    """

    def __init__(self, config: DashboardConfig, insight_engine: Optional[InsightEngine] = None):
        """
        Initialize aggregator

        Args:
            config: Presentation mapping and rule tables
            insight_engine: Rule evaluator (built from config when omitted)
        """
        self.config = config
        self.insight_engine = insight_engine or InsightEngine(
            rules=config.insight_rules,
            scoring=config.on_track,
        )

    # ------------------------------------------------------------------
    # Balances
    # ------------------------------------------------------------------

    @staticmethod
    def _latest_by_type(
        snapshots: Sequence[AccountSnapshot],
        as_of: date,
    ) -> Dict[AccountType, AccountSnapshot]:
        """Latest snapshot per account type on or before as_of"""
        latest: Dict[AccountType, AccountSnapshot] = {}
        for snapshot in snapshots:
            if snapshot.snapshot_date > as_of:
                break
            latest[snapshot.account_type] = snapshot
        return latest

    @staticmethod
    def _counted_rows(latest: Mapping[AccountType, AccountSnapshot]) -> List[AccountSnapshot]:
        """
        Rows that make up the total: per-account rows when present,
        otherwise the aggregate TOTAL row. Never both.
        """
        accounts = [s for t, s in latest.items() if t is not AccountType.TOTAL]
        if accounts:
            return accounts
        total_row = latest.get(AccountType.TOTAL)
        return [total_row] if total_row else []

    def _total_as_of(self, snapshots: Sequence[AccountSnapshot], as_of: date) -> Decimal:
        rows = self._counted_rows(self._latest_by_type(snapshots, as_of))
        return sum((row.balance for row in rows), ZERO)

    def total_assets(
        self,
        snapshots: Sequence[AccountSnapshot],
        window_start: date,
        window_end: date,
    ) -> Tuple[Decimal, TrendDirection, Decimal]:
        """
        Total assets at window end and trend versus window start

        Args:
            snapshots: Snapshots ordered by snapshot_date ascending
            window_start: Baseline date
            window_end: Reporting date

        Returns:
            Tuple of (total, trend direction, unsigned trend percentage)
        """
        end_total = self._total_as_of(snapshots, window_end)
        start_total = self._total_as_of(snapshots, window_start)
        direction, pct = trend_of(start_total, end_total)
        return end_total, direction, pct

    def account_breakdown(
        self,
        snapshots: Sequence[AccountSnapshot],
        as_of: date,
    ) -> Tuple[AccountBreakdown, ...]:
        """
        Per-account balances and share of total as of a date

        Args:
            snapshots: Snapshots ordered by snapshot_date ascending
            as_of: Reporting date

        Returns:
            One entry per account type with data, in AccountType order
        """
        latest = self._latest_by_type(snapshots, as_of)
        rows = [latest[t] for t in AccountType if t is not AccountType.TOTAL and t in latest]
        total = sum((row.balance for row in rows), ZERO)

        breakdown = []
        for row in rows:
            pct = (row.balance / total * HUNDRED).quantize(PCT) if total != ZERO else ZERO
            breakdown.append(AccountBreakdown(
                account_type=row.account_type,
                account_name=self.config.name_for(row.account_type),
                balance=row.balance,
                percentage=pct,
                color=self.config.color_for(row.account_type),
            ))
        return tuple(breakdown)

    def savings_growth(
        self,
        snapshots: Sequence[AccountSnapshot],
        window_start: date,
        window_end: date,
    ) -> Tuple[SavingsGrowthPoint, ...]:
        """
        Month-by-month total balance within the window

        One point per calendar month that has a snapshot in the window,
        valued as of that month's last snapshot.
        """
        points: List[SavingsGrowthPoint] = []
        latest: Dict[AccountType, AccountSnapshot] = {}
        month_key: Optional[Tuple[int, int]] = None
        month_last: Optional[date] = None

        for snapshot in snapshots:
            if snapshot.snapshot_date > window_end:
                break
            key = (snapshot.snapshot_date.year, snapshot.snapshot_date.month)
            if month_key is not None and key != month_key and month_last >= window_start:
                points.append(self._growth_point(month_key, latest))
            latest[snapshot.account_type] = snapshot
            month_key = key
            month_last = snapshot.snapshot_date

        if month_key is not None and month_last >= window_start:
            points.append(self._growth_point(month_key, latest))

        return tuple(points)

    def _growth_point(
        self,
        month_key: Tuple[int, int],
        latest: Mapping[AccountType, AccountSnapshot],
    ) -> SavingsGrowthPoint:
        rows = self._counted_rows(latest)
        targets = [row.target_balance for row in rows if row.target_balance is not None]
        return SavingsGrowthPoint(
            month=MONTH_LABELS[month_key[1] - 1],
            actual_balance=sum((row.balance for row in rows), ZERO),
            target_balance=sum(targets, ZERO) if targets else None,
        )

    # ------------------------------------------------------------------
    # Contributions
    # ------------------------------------------------------------------

    @staticmethod
    def contribution_breakdown(
        records: Sequence[ContributionRecord],
        window_start: date,
        window_end: date,
    ) -> ContributionBreakdown:
        """
        Sum contributions by source within an inclusive window

        Args:
            records: Contributions ordered by contribution_date ascending
            window_start: First day included
            window_end: Last day included

        Returns:
            ContributionBreakdown
        """
        employee = ZERO
        employer = ZERO
        previous = ZERO

        for record in records:
            if record.contribution_date < window_start:
                continue
            if record.contribution_date > window_end:
                break
            if record.is_employee:
                employee += record.amount
            elif record.type is ContributionType.EMPLOYER_MATCH:
                employer += record.amount
            elif record.type is ContributionType.PREVIOUS_BALANCE_TRANSFER:
                previous += record.amount

        return ContributionBreakdown(
            employee_contributions=employee,
            employer_match=employer,
            previous_balance=previous,
        )

    def _contributed(self, records: Sequence[ContributionRecord], start: date, end: date) -> Decimal:
        """New money only (employee + employer), excluding rollovers"""
        breakdown = self.contribution_breakdown(records, start, end)
        return breakdown.employee_contributions + breakdown.employer_match

    # ------------------------------------------------------------------
    # Returns
    # ------------------------------------------------------------------

    @staticmethod
    def quarterly_returns(metrics: Sequence[PerformanceMetric], year: int) -> QuarterlyReturns:
        """
        Quarterly returns for a calendar year

        Args:
            metrics: Performance metrics ordered by period_start ascending
            year: Calendar year to report

        Returns:
            QuarterlyReturns; quarters without data are None
        """
        quarters: Dict[int, Decimal] = {}
        for metric in metrics:
            if metric.period is not MetricPeriod.QUARTERLY or metric.period_start.year != year:
                continue
            # Later record wins within a quarter
            quarters[metric.quarter] = metric.return_value

        present = list(quarters.values())
        ytd_average = (sum(present, ZERO) / len(present)).quantize(PCT) if present else None

        return QuarterlyReturns(
            q1=quarters.get(1),
            q2=quarters.get(2),
            q3=quarters.get(3),
            q4=quarters.get(4),
            ytd_average=ytd_average,
        )

    # ------------------------------------------------------------------
    # Key stats & insights
    # ------------------------------------------------------------------

    def key_stats(
        self,
        snapshots: Sequence[AccountSnapshot],
        contributions: Sequence[ContributionRecord],
        quarterly: QuarterlyReturns,
        window_start: date,
        window_end: date,
    ) -> KeyStats:
        """
        Headline figures for the dashboard

        Contribution trend compares year-to-date contributions with the
        same span of the previous year. YTD return is the quarterly
        average, compared against the configured benchmark.
        """
        total, assets_trend, assets_pct = self.total_assets(snapshots, window_start, window_end)

        ytd_start = year_start(window_end)
        annual = self._contributed(contributions, ytd_start, window_end)
        last_year = self._contributed(
            contributions,
            subtract_months(ytd_start, 12),
            subtract_months(window_end, 12),
        )
        contribution_trend, contribution_pct = trend_of(last_year, annual)

        ytd_return = quarterly.ytd_average
        ytd_trend: Optional[TrendDirection] = None
        return_pct: Optional[Decimal] = None
        if ytd_return is not None:
            benchmark = self.config.return_benchmark
            ytd_trend = TrendDirection.UP if ytd_return >= benchmark else TrendDirection.DOWN
            return_pct = abs(ytd_return - benchmark).quantize(PCT)

        score = self.insight_engine.score({
            "total_assets": total,
            "annual_contribution": annual,
            "ytd_return": ytd_return,
        })

        return KeyStats(
            total_assets=total,
            total_assets_trend=assets_trend,
            trend_percentage=assets_pct,
            annual_contribution=annual,
            annual_contribution_trend=contribution_trend,
            contribution_trend_percentage=contribution_pct,
            ytd_return=ytd_return,
            ytd_return_trend=ytd_trend,
            return_trend_percentage=return_pct,
            on_track_score=score,
            on_track_status=self.insight_engine.status_for(score),
        )

    @staticmethod
    def insight_metrics(
        stats: KeyStats,
        breakdown: Sequence[AccountBreakdown] = (),
    ) -> Dict[str, Any]:
        """Named figures the insight rules can reference"""
        return {
            "total_assets": stats.total_assets,
            "assets_change_percentage": _signed(stats.trend_percentage, stats.total_assets_trend),
            "annual_contribution": stats.annual_contribution,
            "contribution_change_percentage": _signed(
                stats.contribution_trend_percentage, stats.annual_contribution_trend
            ),
            "ytd_return": stats.ytd_return,
            "on_track_score": stats.on_track_score,
            "largest_account_share": max((b.percentage for b in breakdown), default=None),
        }

    def insights(
        self,
        stats: KeyStats,
        breakdown: Sequence[AccountBreakdown] = (),
    ) -> Tuple[Insight, ...]:
        return self.insight_engine.generate(self.insight_metrics(stats, breakdown))

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def compute_dashboard_metrics(
        self,
        snapshots: Sequence[AccountSnapshot],
        contributions: Sequence[ContributionRecord],
        metrics: Sequence[PerformanceMetric],
        window_start: date,
        window_end: date,
    ) -> DashboardMetrics:
        """
        Derive the full dashboard for one user

        Args:
            snapshots: Account snapshots ordered by snapshot_date ascending
            contributions: Contributions ordered by contribution_date ascending
            metrics: Performance metrics ordered by period_start ascending
            window_start: Start of reporting window
            window_end: End of reporting window

        Returns:
            DashboardMetrics

        Raises:
            ValueError: If window_start is after window_end
        """
        if window_start > window_end:
            raise ValueError(f"Window start {window_start} is after window end {window_end}")

        quarterly = self.quarterly_returns(metrics, window_end.year)
        stats = self.key_stats(snapshots, contributions, quarterly, window_start, window_end)
        breakdown = self.account_breakdown(snapshots, window_end)

        dashboard = DashboardMetrics(
            key_stats=stats,
            savings_growth=self.savings_growth(snapshots, window_start, window_end),
            contribution_breakdown=self.contribution_breakdown(contributions, window_start, window_end),
            account_breakdown=breakdown,
            quarterly_returns=quarterly,
            insights=self.insights(stats, breakdown),
        )

        logger.debug(
            "Dashboard %s..%s: total=%s, accounts=%d, insights=%d",
            window_start, window_end, stats.total_assets, len(breakdown), len(dashboard.insights),
        )
        return dashboard


def compute_dashboard_metrics(
    snapshots: Sequence[AccountSnapshot],
    contributions: Sequence[ContributionRecord],
    metrics: Sequence[PerformanceMetric],
    window_start: date,
    window_end: date,
    config: Optional[DashboardConfig] = None,
) -> DashboardMetrics:
    """Compute dashboard metrics with the configured (default) dashboard tables."""
    aggregator = MetricsAggregator(config or get_config_engine().dashboard)
    return aggregator.compute_dashboard_metrics(
        snapshots, contributions, metrics, window_start, window_end
    )
