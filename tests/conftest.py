import logging
import sys

import pytest

from linear_cli.core.config import settings


# Configure logging for tests
logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)
logger.info("Test logging configured: level=DEBUG")


@pytest.fixture(autouse=True)
def log_test_start(request):
    """Log test start and end for each test."""
    logger.info("=" * 80)
    logger.info("Starting test: %s", request.node.name)
    yield
    logger.info("Completed test: %s", request.node.name)
    logger.info("=" * 80)


@pytest.fixture
def api_settings(monkeypatch):
    """Deterministic API settings regardless of the developer's env / .env."""
    monkeypatch.setattr(settings, "LINEAR_API_KEY", "lin_api_test")
    monkeypatch.setattr(settings, "LINEAR_API_URL", "https://api.linear.app/graphql")
    monkeypatch.setattr(settings, "LINEAR_MAX_ATTEMPTS", 1)
    return settings
