"""Compare a caught error chain against the chain a test expects."""

from collections.abc import Sequence

from chaintest.models.chain import (
    DiffResult,
    DiffStatus,
    ErrorChain,
    ErrorLink,
    ExpectedLink,
)


def diff_chains(
    caught: ErrorChain | None, expected: Sequence[ExpectedLink]
) -> DiffResult:
    """Compare ``caught`` against ``expected`` link by link.

    Args:
        caught: The chain that was raised, None if nothing was raised
        expected: The expected chain. Empty means any chain is accepted.

    Returns:
        The comparison. A length mismatch is a mismatch even when every
        overlapping link matches.

    """
    expected = tuple(expected)

    if caught is None:
        return DiffResult(status=DiffStatus.MISSING, caught=None, expected=expected)

    if not expected:
        return DiffResult(status=DiffStatus.MATCHED, caught=caught, expected=expected)

    type_matches: list[bool] = []
    message_matches: list[bool] = []
    for index in range(max(len(caught), len(expected))):
        caught_link = caught[index] if index < len(caught) else None
        expected_link = expected[index] if index < len(expected) else None

        if caught_link is None or expected_link is None:
            type_matches.append(False)
            message_matches.append(False)
            continue

        type_matches.append(caught_link.type_tag == expected_link.type_tag)
        message_matches.append(_message_of(caught_link) == expected_link.message)

    matched = len(caught) == len(expected) and all(type_matches) and all(message_matches)
    return DiffResult(
        status=DiffStatus.MATCHED if matched else DiffStatus.MISMATCHED,
        caught=caught,
        expected=expected,
        type_matches=tuple(type_matches),
        message_matches=tuple(message_matches),
    )


def _message_of(link: ErrorLink) -> str:
    # Unknown links compare as an empty message.
    return link.message if link.message is not None else ""
