"""Per-test state shared between the runner and the assertions."""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field

from chaintest.chains.naming import TypeNamer, qualified_type_name
from chaintest.config import RunnerConfig
from chaintest.errors import NoActiveTestError
from chaintest.models.identity import TestIdentity

log = logging.getLogger(__name__)

# Same width as "  0 failed", the widest failed-tests counter we print.
IN_TEST_STATUS = "[   .    ]"

_current_test: ContextVar["TestContext | None"] = ContextVar(
    "chaintest_current_test", default=None
)


@dataclass(kw_only=True)
class TestContext:
    """State of the test that is currently running.

    Once a test is marked failed it stays failed.
    """

    __test__ = False

    identity: TestIdentity
    config: RunnerConfig = field(default_factory=RunnerConfig)
    type_namer: TypeNamer = qualified_type_name
    counters_width: int = 0
    _failed: bool = field(default=False, init=False)

    @property
    def failed(self) -> bool:
        return self._failed

    def fail(self) -> None:
        """Mark the test as failed."""
        self._failed = True

    def report(self, lines: list[str] | str) -> None:
        """Log diagnostic lines under the test's progress lines."""
        if isinstance(lines, str):
            lines = [lines]
        prefix = f"{' ' * self.counters_width} {IN_TEST_STATUS} "
        for line in lines:
            log.error("%s%s", prefix, line)

    @contextmanager
    def activate(self) -> Iterator["TestContext"]:
        """Make this the current test for the duration of the block."""
        token = _current_test.set(self)
        try:
            yield self
        finally:
            _current_test.reset(token)


def current_test() -> TestContext:
    """Return the context of the running test.

    Raises:
        NoActiveTestError: If no test is running

    """
    context = _current_test.get()
    if context is None:
        raise NoActiveTestError("Assertions can only be used inside a running test")
    return context


def flush_output() -> None:
    """Flush the user's output so it interleaves correctly with ours."""
    sys.stdout.flush()
    sys.stderr.flush()
