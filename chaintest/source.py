"""Capture where an assertion was written and what it says."""

import ast
import inspect
import linecache
import sys
from dataclasses import dataclass
from types import FrameType

from chaintest.models.identity import Location


@dataclass(frozen=True, kw_only=True)
class CallSite:
    """Location and source text of an assertion call."""

    location: Location
    expression: str


def capture_call_site(depth: int = 1) -> CallSite:
    """Describe the call ``depth`` frames above the caller of this function.

    The expression is the source of the first argument of the call, or the
    body when that argument is a lambda. Falls back to the whole call, then
    to ``"<unknown>"`` when no source is available.
    """
    frame = sys._getframe(depth + 1)  # noqa: SLF001
    info = inspect.getframeinfo(frame, context=0)
    location = Location(file=info.filename, line=info.lineno)

    call_text = _call_source(frame, info)
    if call_text is None:
        return CallSite(location=location, expression="<unknown>")
    return CallSite(location=location, expression=first_argument_source(call_text))


def first_argument_source(call_text: str) -> str:
    """Extract the first argument of a call expression, unwrapping a lambda."""
    try:
        tree = ast.parse(call_text, mode="eval")
    except SyntaxError:
        return _squash(call_text)

    call = tree.body
    if not isinstance(call, ast.Call) or not call.args:
        return _squash(call_text)

    argument = call.args[0]
    if isinstance(argument, ast.Lambda):
        argument = argument.body
    segment = ast.get_source_segment(call_text, argument)
    return _squash(segment if segment is not None else call_text)


def _call_source(frame: FrameType, info: inspect.Traceback) -> str | None:
    positions = info.positions
    if (
        positions is None
        or positions.lineno is None
        or positions.end_lineno is None
        or positions.col_offset is None
        or positions.end_col_offset is None
    ):
        return None

    lines = linecache.getlines(info.filename, frame.f_globals)
    if len(lines) < positions.end_lineno:
        return None

    # Column offsets are in UTF-8 bytes.
    selected = [
        line.encode() for line in lines[positions.lineno - 1 : positions.end_lineno]
    ]
    selected[-1] = selected[-1][: positions.end_col_offset]
    selected[0] = selected[0][positions.col_offset :]
    return b"".join(selected).decode(errors="replace")


def _squash(text: str) -> str:
    return " ".join(line.strip() for line in text.splitlines() if line.strip())
