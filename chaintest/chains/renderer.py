"""Text rendering of error chains and chain comparisons.

A mismatch is rendered as a two-column table, caught on the left and
expected on the right::

    Exception:
        Caught             | Expected
        ValueError         | ValueError
            while loading: |     while loading:
        KeyError           # LookupError
            'missing'      #     'absent'

Each type row is followed by the message rows of that level. Messages are
split on line breaks independently on each side. A side that ran out of
lines is marked with ``.`` in front of its empty cell.
"""

from collections.abc import Sequence

from chaintest.models.chain import (
    DiffResult,
    DiffStatus,
    ErrorChain,
    ErrorLink,
    ExpectedLink,
)

UNKNOWN_LABEL = "(unknown)"
NONE_LABEL = "(none)"
MESSAGE_INDENT = 4

MATCH_SEPARATOR = "|"
MISMATCH_SEPARATOR = "#"
LINE_MARKER = " "
RAN_OUT_MARKER = "."


def render_diff(result: DiffResult) -> list[str]:
    """Render a mismatched comparison. Other statuses render to nothing."""
    if result.status is not DiffStatus.MISMATCHED:
        return []

    caught = result.caught or ()
    expected = result.expected
    width = column_width(caught, expected)

    if is_message_only(result):
        return [
            f"Message mismatch for {caught[0].type_tag}:",
            _header_row(width),
            *_message_rows(caught[0].message, expected[0].message, width),
        ]

    lines = ["Exception:", _header_row(width)]
    for index in range(result.depth):
        caught_link = caught[index] if index < len(caught) else None
        expected_link = expected[index] if index < len(expected) else None

        lines.append(
            _type_row(caught_link, expected_link, result.type_matches[index], width)
        )
        lines.extend(
            _message_rows(
                _caught_message(caught_link), _expected_message(expected_link), width
            )
        )
    return lines


def render_chain(chain: ErrorChain) -> list[str]:
    """Render a chain for display, each level indented further than its parent."""
    lines: list[str] = []
    for depth, link in enumerate(chain):
        indent = " " * (MESSAGE_INDENT * depth)
        if link.is_unknown:
            lines.append(f"{indent}Unknown exception.")
            continue

        lines.append(f"{indent}{link.type_tag}")
        message_indent = indent + " " * MESSAGE_INDENT
        lines.extend(f"{message_indent}{line}" for line in split_lines(link.message))
    return lines


def is_message_only(result: DiffResult) -> bool:
    """Whether the mismatch is confined to the message of a single-level chain."""
    caught = result.caught or ()
    return (
        len(caught) == 1
        and len(result.expected) == 1
        and not caught[0].is_unknown
        and result.type_matches[0]
    )


def column_width(caught: ErrorChain, expected: Sequence[ExpectedLink]) -> int:
    """Width of the left column, wide enough for every cell on both sides."""
    cells: list[int] = [len(UNKNOWN_LABEL)]
    for link in (*caught, *expected):
        cells.append(len(link.type_tag))
        cells.extend(
            len(line) + MESSAGE_INDENT for line in split_lines(link.message)
        )
    return max(cells)


def split_lines(message: str | None) -> list[str]:
    """Split a message on line breaks. A message without breaks is one line."""
    if message is None:
        return []
    return message.split("\n")


def pair_lines(
    left: str | None, right: str | None
) -> list[tuple[str | None, str | None]]:
    """Split two messages in lockstep.

    A side that has run out of lines, or has no message at all, yields None.
    Always yields at least one pair.
    """
    left_lines = split_lines(left)
    right_lines = split_lines(right)
    count = max(len(left_lines), len(right_lines), 1)
    return [
        (
            left_lines[index] if index < len(left_lines) else None,
            right_lines[index] if index < len(right_lines) else None,
        )
        for index in range(count)
    ]


def _header_row(width: int) -> str:
    return f"    {'Caught':<{width}} {MATCH_SEPARATOR} Expected"


def _type_row(
    caught: ErrorLink | None,
    expected: ExpectedLink | None,
    matches: bool,
    width: int,
) -> str:
    if caught is None:
        left = NONE_LABEL
    elif caught.is_unknown:
        left = UNKNOWN_LABEL
    else:
        left = caught.type_tag

    right = expected.type_tag if expected is not None else NONE_LABEL
    separator = MATCH_SEPARATOR if matches else MISMATCH_SEPARATOR
    return f"    {left:<{width}} {separator} {right}"


def _message_rows(left: str | None, right: str | None, width: int) -> list[str]:
    rows: list[str] = []
    for left_line, right_line in pair_lines(left, right):
        same = left_line is not None and left_line == right_line
        rows.append(
            f"   {' ' * MESSAGE_INDENT}"
            f"{_cell(left_line):<{width - MESSAGE_INDENT + 1}} "
            f"{MATCH_SEPARATOR if same else MISMATCH_SEPARATOR}"
            f"{' ' * MESSAGE_INDENT}{_cell(right_line)}".rstrip()
        )
    return rows


def _cell(line: str | None) -> str:
    if line is None:
        return RAN_OUT_MARKER
    return f"{LINE_MARKER}{line}"


def _caught_message(link: ErrorLink | None) -> str | None:
    if link is None or link.is_unknown:
        return None
    return link.message


def _expected_message(link: ExpectedLink | None) -> str | None:
    if link is None or not link.type_tag:
        return None
    return link.message
