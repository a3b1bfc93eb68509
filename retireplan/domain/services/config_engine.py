"""
CONFIG ENGINE (ENGINE-0)
Load, validate, and expose domain configuration

RESPONSIBILITIES:
- Load YAML configuration files
- Validate configuration integrity
- Expose read-only typed objects

RULES:
❌ No defaults if config missing
❌ No hardcoded rule tables
✅ Fail fast on invalid config
✅ Deterministic output
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from retireplan.config import settings
from retireplan.domain.models import AccountType, InsightType
from retireplan.domain.services.insight_engine import (
    Condition,
    InsightRule,
    OnTrackScoring,
    ScoreAdjustment,
    StatusBand,
)
from retireplan.domain.services.retirement_calculator import ProjectionDefaults
from retireplan.domain.services.social_security import SocialSecurityConfig
from retireplan.domain.services.strategy_engine import StrategyBand

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccountPresentation:
    name: str
    color: str


@dataclass(frozen=True)
class DashboardConfig:
    """Presentation mapping and rule tables for dashboard metrics"""
    accounts: Mapping[AccountType, AccountPresentation]
    fallback_color: str
    return_benchmark: Decimal
    on_track: OnTrackScoring
    insight_rules: Tuple[InsightRule, ...]

    def color_for(self, account_type: AccountType) -> str:
        presentation = self.accounts.get(account_type)
        return presentation.color if presentation else self.fallback_color

    def name_for(self, account_type: AccountType) -> str:
        presentation = self.accounts.get(account_type)
        return presentation.name if presentation else account_type.value


@dataclass(frozen=True)
class PlanningConfig:
    strategy_bands: Tuple[StrategyBand, ...]
    suggested_actions: Tuple[str, ...]
    default_age: int
    projection: ProjectionDefaults
    social_security: SocialSecurityConfig


def _decimal(value: Any) -> Decimal:
    return Decimal(str(value))


def _condition(data: Dict[str, Any]) -> Condition:
    return Condition(
        metric=data['metric'],
        operator=data['operator'],
        threshold=_decimal(data['threshold']),
    )


class ConfigEngine:
    """
    Configuration Engine
    Single source of truth for domain configuration
    """

    def __init__(self, config_dir: Path):
        """Initialize with config directory"""
        self.config_dir = Path(config_dir)
        self._dashboard: Optional[DashboardConfig] = None
        self._planning: Optional[PlanningConfig] = None

    def load_all(self) -> None:
        """Load all configuration files"""
        self._load_dashboard()
        self._load_planning()
        logger.info("Configuration loaded from %s", self.config_dir)

    def _read_yaml(self, filename: str) -> Dict[str, Any]:
        path = self.config_dir / filename
        if not path.exists():
            raise FileNotFoundError(f"Config not found: {path}")

        with open(path, 'r') as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Invalid config format in {path}. Expected a top-level mapping.")
        return data

    def _load_dashboard(self) -> None:
        """Load presentation mapping and rule tables from dashboard.yml"""
        data = self._read_yaml("dashboard.yml")

        accounts = {}
        for key, item in data['accounts'].items():
            account_type = AccountType(str(key))
            accounts[account_type] = AccountPresentation(name=item['name'], color=item['color'])

        scoring_data = data['on_track']
        scoring = OnTrackScoring(
            base_score=int(scoring_data['base_score']),
            adjustments=tuple(
                ScoreAdjustment(condition=_condition(item), points=int(item['points']))
                for item in scoring_data.get('adjustments', [])
            ),
            status_bands=tuple(
                StatusBand(min_score=int(item['min_score']), status=item['status'])
                for item in scoring_data['status_bands']
            ),
        )

        rules = tuple(
            InsightRule(
                condition=_condition(item),
                title=item['title'],
                description=item['description'],
                type=InsightType(item['type']),
                icon=item['icon'],
            )
            for item in data.get('insights', [])
        )

        self._dashboard = DashboardConfig(
            accounts=MappingProxyType(accounts),
            fallback_color=data['fallback_color'],
            return_benchmark=_decimal(data['returns']['benchmark']),
            on_track=scoring,
            insight_rules=rules,
        )

    def _load_planning(self) -> None:
        """Load strategy bands, projection defaults and benefit factors from planning.yml"""
        data = self._read_yaml("planning.yml")

        strategies = data['strategies']
        bands = tuple(
            StrategyBand(
                max_age=item.get('max_age'),
                name=item['name'],
                risk_level=item['risk_level'],
                stocks_percentage=int(item['allocation']['stocks']),
                bonds_percentage=int(item['allocation']['bonds']),
                cash_percentage=int(item['allocation']['cash']),
                recommendation=item['recommendation'],
            )
            for item in strategies['bands']
        )

        projection = data['projection']
        defaults = projection['defaults']
        projection_defaults = ProjectionDefaults(
            current_savings=_decimal(defaults['current_savings']),
            monthly_contribution=_decimal(defaults['monthly_contribution']),
            employer_match=_decimal(defaults['employer_match']),
            expected_return_rate=_decimal(defaults['expected_return_rate']),
            expected_inflation_rate=_decimal(defaults['expected_inflation_rate']),
            desired_monthly_income=_decimal(defaults['desired_monthly_income']),
            retirement_duration=int(defaults['expected_retirement_duration']),
            withdrawal_rate=_decimal(projection['withdrawal_rate']),
            recommendations=MappingProxyType(dict(projection['recommendations'])),
        )

        ss = data['social_security']
        ss_config = SocialSecurityConfig(
            replacement_rate=_decimal(ss['replacement_rate']),
            full_retirement_age=int(ss['full_retirement_age']),
            multipliers=MappingProxyType({int(k): _decimal(v) for k, v in ss['multipliers'].items()}),
            recommendations=tuple(
                (item.get('max_age'), item['text']) for item in ss['recommendations']
            ),
        )

        self._planning = PlanningConfig(
            strategy_bands=bands,
            suggested_actions=tuple(strategies.get('suggested_actions', [])),
            default_age=int(strategies['default_age']),
            projection=projection_defaults,
            social_security=ss_config,
        )
        self._validate_planning()

    def _validate_planning(self) -> None:
        """Strategy bands must be ordered and end with an open band"""
        bounded = [band.max_age for band in self._planning.strategy_bands if band.max_age is not None]
        if bounded != sorted(bounded):
            raise ValueError("Strategy bands must be ordered by ascending max_age")
        if self._planning.strategy_bands[-1].max_age is not None:
            raise ValueError("The last strategy band must have no max_age")

    # Public getters

    @property
    def dashboard(self) -> DashboardConfig:
        """Get dashboard config"""
        if self._dashboard is None:
            raise RuntimeError("Config not loaded. Call load_all() first")
        return self._dashboard

    @property
    def planning(self) -> PlanningConfig:
        """Get planning config"""
        if self._planning is None:
            raise RuntimeError("Config not loaded. Call load_all() first")
        return self._planning


@lru_cache
def get_config_engine(config_dir: Optional[Path] = None) -> ConfigEngine:
    """Loaded ConfigEngine for config_dir (defaults to settings.CONFIG_DIR), cached per process."""
    engine = ConfigEngine(config_dir or settings.CONFIG_DIR)
    engine.load_all()
    return engine
