"""Root test configuration."""

import logging

import pytest
import structlog

from oceanhost.config.settings import Settings, get_settings
from oceanhost.hosting.builder import DistributedApplicationBuilder


def pytest_configure(config):
    """Configure structlog for tests to suppress debug/info output."""
    logging.basicConfig(level=logging.WARNING, force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; reset around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings(tmp_path):
    """Settings isolated from the environment and any .env file."""
    return Settings(_env_file=None, output_dir=str(tmp_path / "out"))


@pytest.fixture
def builder(tmp_path):
    """Application builder rooted in a temporary directory without git."""
    return DistributedApplicationBuilder(app_directory=tmp_path)
