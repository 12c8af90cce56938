"""Root conftest — shared test configuration."""

import logging

import pytest

from envbind.config import get_settings
from envbind.core.domain_types import EnvLookup
from envbind.infrastructure.environment import mapping_lookup


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Tests never see a developer's ENVBIND_* variables or a cached Settings."""
    for key in ("ENVBIND_LOG_LEVEL", "ENVBIND_LOG_FORMAT", "ENVBIND_ENV_FILE", "ENVBIND_DOTENV_OVERRIDE"):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def clean_envbind_logger():
    logger = logging.getLogger("envbind")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)


@pytest.fixture
def env():
    """Build a lookup from keyword values: env(ENVIRONMENT="staging")."""
    def _make(**values: str) -> EnvLookup:
        return mapping_lookup(values)
    return _make
