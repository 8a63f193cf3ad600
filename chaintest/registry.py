"""Registry of the tests known to the process."""

import functools
import logging
from collections.abc import Callable, Iterator

from chaintest.errors import DuplicateTestError
from chaintest.models.identity import TestIdentity, TestRecord

log = logging.getLogger(__name__)

type TestBody = Callable[[], object]


class TestRegistry:
    """Tests keyed by identity, iterated in identity order.

    Registration is expected to finish before a run starts.
    """

    __test__ = False

    def __init__(self) -> None:
        self._records: dict[TestIdentity, TestRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[TestRecord]:
        for identity in sorted(self._records):
            yield self._records[identity]

    def __contains__(self, identity: object) -> bool:
        return identity in self._records

    def register(self, identity: TestIdentity, body: TestBody) -> TestRecord:
        """Add a test.

        Raises:
            DuplicateTestError: If a test with the same identity exists

        """
        if identity in self._records:
            raise DuplicateTestError(
                f"A duplicate test was registered at `{identity.location}`, "
                f"named `{identity.name}`."
            )

        record = TestRecord(identity=identity, body=body)
        self._records[identity] = record
        log.debug("Registered test %s at %s", identity.name, identity.location)
        return record

    def test[F: TestBody](
        self, func: F | None = None, /, *, name: str | None = None
    ) -> F | Callable[[F], F]:
        """Register a function as a test, usable as ``@test`` or ``@test(name=...)``.

        The identity is the function's file, first line and name (or ``name``).
        The function is returned unchanged.
        """

        def decorator(body: F) -> F:
            self.register(identity_of(body, name=name), body)
            return body

        if func is None:
            return decorator
        return decorator(func)


def identity_of(func: Callable[..., object], *, name: str | None = None) -> TestIdentity:
    """Build the identity of a test function from its code object."""
    code = getattr(func, "__code__", None)
    if code is None:
        raise TypeError(f"Cannot register {func!r} as a test, it is not a function")
    return TestIdentity(
        file=code.co_filename,
        line=code.co_firstlineno,
        name=name or func.__name__,
    )


@functools.cache
def default_registry() -> TestRegistry:
    """Return the process-wide registry, creating it on first use."""
    return TestRegistry()
