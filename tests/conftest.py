"""Shared fixtures for chaintest tests."""

import logging
from collections.abc import Iterator

import pytest

from chaintest.registry import TestRegistry, default_registry


@pytest.fixture(autouse=True)
def _fresh_default_registry() -> Iterator[None]:
    """Give every test its own process-wide registry."""
    default_registry.cache_clear()
    yield
    default_registry.cache_clear()


@pytest.fixture(autouse=True)
def _capture_info_logs(caplog: pytest.LogCaptureFixture) -> None:
    """Capture progress lines, which are logged at INFO."""
    caplog.set_level(logging.INFO)


@pytest.fixture
def registry() -> TestRegistry:
    """Create an empty registry."""
    return TestRegistry()
