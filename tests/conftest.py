"""Shared test fixtures for docgen tests."""

from collections.abc import Callable
from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import pytest

from docgen.templates import InMemoryTemplateSource, TemplateResolver

if TYPE_CHECKING:
    from pendulum import DateTime


@pytest.fixture
def mock_logger() -> MagicMock:
    """Create a mock logger for testing.

    Returns:
        MagicMock configured as a FilteringBoundLogger.
    """
    logger = MagicMock()
    logger.bind.return_value = logger
    return logger


@pytest.fixture
def source() -> InMemoryTemplateSource:
    """Empty in-memory template source."""
    return InMemoryTemplateSource()


@pytest.fixture
def resolver(source: InMemoryTemplateSource, mock_logger: MagicMock) -> TemplateResolver:
    """Resolver over the in-memory source with default caches."""
    return TemplateResolver(source, logger=mock_logger)


FreezeTimeFunc = Callable[..., "DateTime"]


@pytest.fixture
def freeze_time(monkeypatch: pytest.MonkeyPatch) -> FreezeTimeFunc:
    """Return a function to freeze pendulum.now() to a fixed time."""
    import pendulum

    real_now = pendulum.now

    def _freeze(
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
    ) -> "DateTime":
        fixed = pendulum.datetime(year, month, day, hour, minute, second, tz="UTC")

        def mock_now(tz: str | None = None) -> "DateTime":
            return fixed if tz == "UTC" else real_now(tz)

        monkeypatch.setattr("pendulum.now", mock_now)
        return fixed

    return _freeze
