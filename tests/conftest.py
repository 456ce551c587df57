"""
Pytest configuration for fsmcast tests.

Async tests are marked with ``@pytest.mark.asyncio`` and run under
pytest-asyncio.
"""

from typing import Generator

import pytest

from fsmcast.automaton import Automaton
from fsmcast.env import Env
from fsmcast.logging import LoggingConfig


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers", "asyncio: mark test as async"
    )


@pytest.fixture(autouse=True)
def quiet_logging() -> Generator[None, None, None]:
    config = LoggingConfig()
    config.update(log_level="error")
    yield
    config.update(log_level="info")


@pytest.fixture
def automaton() -> Automaton:
    return Automaton.create_default()


@pytest.fixture
def task_env() -> Env:
    return Env(
        FSMCAST_WORKER_EXECUTOR_TYPE="task",
        FSMCAST_MESSAGE_BLOCK_SIZE=4,
        FSMCAST_ACK_POLL_INTERVAL="0s",
        FSMCAST_COORDINATOR_TIMEOUT="10s",
        FSMCAST_LOG_LEVEL="error",
    )
