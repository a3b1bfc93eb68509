from pathlib import Path

import pytest

from retireplan.domain.services.config_engine import ConfigEngine
from retireplan.domain.services.metrics_aggregator import MetricsAggregator


@pytest.fixture(scope="session")
def config_dir() -> Path:
    return Path(__file__).resolve().parents[1] / "config"


@pytest.fixture(scope="session")
def config_engine(config_dir) -> ConfigEngine:
    engine = ConfigEngine(config_dir)
    engine.load_all()
    return engine


@pytest.fixture(scope="session")
def dashboard_config(config_engine):
    return config_engine.dashboard


@pytest.fixture(scope="session")
def planning_config(config_engine):
    return config_engine.planning


@pytest.fixture()
def aggregator(dashboard_config):
    return MetricsAggregator(dashboard_config)
