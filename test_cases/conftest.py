from pathlib import Path

import pytest

from catlog.core.log_manager import LogManager


FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def reports() -> list:
    return []


@pytest.fixture
def manager(reports):
    mgr = LogManager(fallback=reports.append)
    yield mgr
    mgr.shutdown()


@pytest.fixture
def seen() -> list:
    """Events delivered to the "tests" logger's own listener."""
    return []


@pytest.fixture
def logger(manager, seen):
    log = manager.get_logger("tests")
    log.set_level("TRACE")
    log.add_listener(seen.append)
    return log


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES
