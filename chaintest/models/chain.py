"""Models for error chains and their comparison."""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum


@dataclass(frozen=True, kw_only=True)
class ErrorLink:
    """One level of an error chain.

    An empty ``type_tag`` means the error couldn't be classified, and then
    ``message`` is None.
    """

    type_tag: str
    message: str | None

    def __post_init__(self) -> None:
        if self.type_tag and self.message is None:
            raise ValueError("A classified error link must carry a message")
        if not self.type_tag and self.message is not None:
            raise ValueError("An unknown error link can't carry a message")

    @property
    def is_unknown(self) -> bool:
        """Whether the error couldn't be classified."""
        return not self.type_tag


UNKNOWN_LINK = ErrorLink(type_tag="", message=None)

# Outermost first, never empty.
ErrorChain = tuple[ErrorLink, ...]


@dataclass(frozen=True, kw_only=True)
class ExpectedLink:
    """One level of the error chain a test expects."""

    type_tag: str
    message: str


class DiffStatus(StrEnum):
    """Outcome of comparing a caught chain against an expected one."""

    MISSING = "missing"
    MATCHED = "matched"
    MISMATCHED = "mismatched"


@dataclass(frozen=True, kw_only=True)
class DiffResult:
    """Structured comparison of a caught chain against an expected chain.

    ``type_matches`` and ``message_matches`` have one entry per row, that is
    ``max(len(caught), len(expected))`` entries, and are False where either
    side is absent.
    """

    status: DiffStatus
    caught: ErrorChain | None
    expected: Sequence[ExpectedLink]
    type_matches: Sequence[bool] = ()
    message_matches: Sequence[bool] = ()

    @property
    def depth(self) -> int:
        """Number of rows needed to show both chains side by side."""
        return max(len(self.caught or ()), len(self.expected))
