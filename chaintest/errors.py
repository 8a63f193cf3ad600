"""Error taxonomy for the harness."""

EXIT_SUCCESS = 0
EXIT_TESTS_FAILED = 1
EXIT_INTERNAL_ERROR = 2


class InterruptTest(BaseException):  # noqa: N818
    """Raised to stop the current test early.

    Doesn't affect the pass/fail status. Not an ``Exception`` subclass, so
    ``except Exception`` handlers in test code don't swallow it.
    """


class InfrastructureError(Exception):
    """Raised when the harness itself can't continue. Aborts the whole run."""


class DuplicateTestError(InfrastructureError):
    """Raised when two tests share the same file, line and name."""


class ChainTooDeepError(InfrastructureError):
    """Raised when an error chain exceeds the configured depth."""


class NoActiveTestError(InfrastructureError):
    """Raised when an assertion is used outside of a running test."""


class TestModuleLoadError(InfrastructureError):
    """Raised when a test module can't be imported."""

    __test__ = False


class TypeNamerNotFoundError(InfrastructureError):
    """Raised when a type namer is not found."""
