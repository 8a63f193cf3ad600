"""Models identifying registered tests."""

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class Location:
    """A source location."""

    file: str
    line: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


@dataclass(frozen=True, order=True, kw_only=True)
class TestIdentity:
    """Identity of a registered test.

    Ordered by file, then line, then name. This ordering is the run order.
    """

    __test__ = False

    file: str
    line: int
    name: str

    def __post_init__(self) -> None:
        if not self.file:
            raise ValueError("Test file must not be empty")
        if self.line <= 0:
            raise ValueError(f"Test line must be positive, got {self.line}")
        if not self.name:
            raise ValueError("Test name must not be empty")

    @property
    def location(self) -> Location:
        """Source location where the test is declared."""
        return Location(file=self.file, line=self.line)


@dataclass(frozen=True, kw_only=True)
class TestRecord:
    """A registered test: its identity and the body to run."""

    __test__ = False

    identity: TestIdentity
    body: Callable[[], object]
