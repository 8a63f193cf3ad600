"""A small test harness that checks and diffs chains of raised errors."""

from chaintest.api import (
    check,
    check_soft,
    must_throw,
    must_throw_soft,
    run_tests,
    test,
)
from chaintest.config import RunnerConfig
from chaintest.errors import InterruptTest
from chaintest.models.chain import ExpectedLink as Expected

__all__ = [
    "Expected",
    "InterruptTest",
    "RunnerConfig",
    "check",
    "check_soft",
    "must_throw",
    "must_throw_soft",
    "run_tests",
    "test",
]
