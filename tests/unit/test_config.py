"""Tests for runner configuration."""

import pytest
from pydantic import ValidationError

from chaintest.config import DEFAULT_MAX_CHAIN_DEPTH, RunnerConfig


def test_defaults() -> None:
    """Defaults follow explicit causes with qualified type names."""
    config = RunnerConfig()

    assert config.type_namer == "qualified"
    assert config.follow_context is False
    assert config.max_chain_depth == DEFAULT_MAX_CHAIN_DEPTH == 128


@pytest.mark.parametrize("depth", [0, -1])
def test_max_chain_depth_must_be_positive(depth: int) -> None:
    """Rejects a chain depth that allows no links."""
    with pytest.raises(ValidationError):
        RunnerConfig(max_chain_depth=depth)


def test_config_is_frozen() -> None:
    """Config can't be changed after construction."""
    config = RunnerConfig()

    with pytest.raises(ValidationError):
        config.follow_context = True  # type: ignore[misc]


def test_unknown_fields_are_rejected() -> None:
    """Typos in field names are errors."""
    with pytest.raises(ValidationError):
        RunnerConfig(follow_cause=True)  # type: ignore[call-arg]
