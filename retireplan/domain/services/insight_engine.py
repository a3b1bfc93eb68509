"""
INSIGHT ENGINE
Rule tables -> insights and on-track score

RESPONSIBILITIES:
- Evaluate insight rules against derived dashboard figures
- Score progress toward the retirement goal (0-100)
- Map a score to a status label

RULES:
❌ No per-rule branching in code (rules live in config/dashboard.yml)
✅ Rules with missing metrics are skipped, never fatal
✅ Deterministic, file-order evaluation
"""

import logging
import operator
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from retireplan.domain.models import Insight, InsightType

logger = logging.getLogger(__name__)

OPERATORS: Dict[str, Callable[[Any, Any], bool]] = {
    "gt": operator.gt,
    "ge": operator.ge,
    "lt": operator.lt,
    "le": operator.le,
    "eq": operator.eq,
}


def _to_decimal(value: Any) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


@dataclass(frozen=True)
class Condition:
    """metric <operator> threshold"""
    metric: str
    operator: str
    threshold: Decimal

    def __post_init__(self):
        if self.operator not in OPERATORS:
            raise ValueError(
                f"Unknown operator '{self.operator}'; expected one of {sorted(OPERATORS)}"
            )

    def matches(self, metrics: Mapping[str, Any]) -> Optional[Any]:
        """
        Return the metric value when the condition holds, else None.
        Missing or None metrics never match.
        """
        value = metrics.get(self.metric)
        if value is None:
            return None
        if OPERATORS[self.operator](_to_decimal(value), self.threshold):
            return value
        return None


@dataclass(frozen=True)
class InsightRule:
    condition: Condition
    title: str
    description: str
    type: InsightType
    icon: str

    def render(self, value: Any) -> Insight:
        return Insight(
            title=self.title,
            description=self.description.format(value=value),
            type=self.type,
            icon=self.icon,
        )


@dataclass(frozen=True)
class ScoreAdjustment:
    condition: Condition
    points: int


@dataclass(frozen=True)
class StatusBand:
    min_score: int
    status: str


@dataclass(frozen=True)
class OnTrackScoring:
    base_score: int
    adjustments: Tuple[ScoreAdjustment, ...]
    status_bands: Tuple[StatusBand, ...]  # Highest min_score first
    min_score: int = 0
    max_score: int = 100

    def __post_init__(self):
        if not self.status_bands:
            raise ValueError("At least one on-track status band is required")
        scores = [band.min_score for band in self.status_bands]
        if scores != sorted(scores, reverse=True):
            raise ValueError("Status bands must be ordered by min_score, highest first")


class InsightEngine:
    """
    Insight Engine
    Evaluates configured rule tables; adds no rules of its own
    """

    def __init__(self, rules: Sequence[InsightRule], scoring: OnTrackScoring):
        self.rules = tuple(rules)
        self.scoring = scoring

    def score(self, metrics: Mapping[str, Any]) -> int:
        """
        Calculate the on-track score

        Args:
            metrics: Named figures (total_assets, annual_contribution, ytd_return, ...)

        Returns:
            Score clamped to [min_score, max_score]
        """
        score = self.scoring.base_score
        for adjustment in self.scoring.adjustments:
            if adjustment.condition.matches(metrics) is not None:
                score += adjustment.points
        return max(self.scoring.min_score, min(score, self.scoring.max_score))

    def status_for(self, score: int) -> str:
        for band in self.scoring.status_bands:
            if score >= band.min_score:
                return band.status
        # Below every band
        return self.scoring.status_bands[-1].status

    def generate(self, metrics: Mapping[str, Any]) -> Tuple[Insight, ...]:
        """
        Generate insights for the given figures

        Args:
            metrics: Named figures, e.g. contribution_change_percentage, on_track_score

        Returns:
            Insights of every matching rule, in rule order
        """
        insights: List[Insight] = []
        for rule in self.rules:
            value = rule.condition.matches(metrics)
            if value is None:
                continue
            insights.append(rule.render(value))

        logger.debug("Generated %d insight(s) from %d rule(s)", len(insights), len(self.rules))
        return tuple(insights)
