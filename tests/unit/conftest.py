"""Fixtures for unit tests."""

from typing import Generator
from unittest.mock import MagicMock

import pytest
import structlog

from git_p4_shelve.vcs.abc import ChangelistClientBase, GitClientBase


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def git() -> MagicMock:
    """A git client mock."""
    return MagicMock(spec=GitClientBase)


@pytest.fixture
def changelists() -> MagicMock:
    """A changelist client mock."""
    return MagicMock(spec=ChangelistClientBase)
