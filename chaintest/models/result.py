"""Models for test run results."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from chaintest.errors import EXIT_SUCCESS, EXIT_TESTS_FAILED
from chaintest.models.identity import TestIdentity


@dataclass(frozen=True, kw_only=True)
class RunSummary:
    """Result of a whole test run.

    Durations are in seconds and cover only the test body.
    """

    total: int
    failed: Sequence[TestIdentity] = ()
    durations: Mapping[TestIdentity, float] = field(default_factory=dict)

    @property
    def passed(self) -> int:
        return self.total - len(self.failed)

    @property
    def exit_code(self) -> int:
        """Process exit code. Having no tests to run counts as a failure."""
        if self.total == 0 or self.failed:
            return EXIT_TESTS_FAILED
        return EXIT_SUCCESS
