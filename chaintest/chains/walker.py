"""Walk a raised error and the errors it was chained from."""

import logging

from chaintest.chains.naming import TypeNamer, qualified_type_name
from chaintest.config import DEFAULT_MAX_CHAIN_DEPTH
from chaintest.errors import ChainTooDeepError
from chaintest.models.chain import UNKNOWN_LINK, ErrorChain, ErrorLink

log = logging.getLogger(__name__)

# Same placeholder the traceback module prints.
UNPRINTABLE_MESSAGE = "<exception str() failed>"


def walk_chain(
    error: BaseException,
    *,
    type_namer: TypeNamer = qualified_type_name,
    follow_context: bool = False,
    max_depth: int = DEFAULT_MAX_CHAIN_DEPTH,
) -> ErrorChain:
    """Describe ``error`` and every error it was chained from.

    Args:
        error: The error that escaped, the outermost link
        type_namer: Produces the type tag of each link
        follow_context: Also walk ``__context__`` when no explicit cause is set
        max_depth: Maximum number of links

    Returns:
        Links ordered outermost first. An error that can't be classified
        becomes the unknown link, which always ends the chain.

    Raises:
        ChainTooDeepError: If the chain has more than ``max_depth`` links

    """
    links: list[ErrorLink] = []
    seen: set[int] = set()
    current: BaseException | None = error

    while current is not None:
        if len(links) == max_depth:
            raise ChainTooDeepError(
                f"Error chain is deeper than {max_depth} links, "
                f"starting at {links[0].type_tag or 'an unknown error'}"
            )
        seen.add(id(current))

        link = classify_error(current, type_namer)
        links.append(link)
        if link.is_unknown:
            break

        current = underlying_cause(current, follow_context=follow_context)
        if current is not None and id(current) in seen:
            log.debug("Error chain loops back on itself, stopping the walk")
            break

    return tuple(links)


def classify_error(error: BaseException, type_namer: TypeNamer) -> ErrorLink:
    """Extract the type tag and message of a single error.

    Returns the unknown link when the namer raises or gives an empty tag. A
    message that ``str()`` can't produce is replaced by a placeholder.
    """
    try:
        type_tag = type_namer(error)
    except Exception:  # noqa: BLE001
        log.debug("Could not name %r", type(error), exc_info=True)
        return UNKNOWN_LINK

    if not type_tag:
        return UNKNOWN_LINK
    return ErrorLink(type_tag=type_tag, message=error_message(error))


def error_message(error: BaseException) -> str:
    """Return ``str(error)``, or a placeholder when that raises."""
    try:
        return str(error)
    except Exception:  # noqa: BLE001
        log.debug("Could not read the message of %r", type(error), exc_info=True)
        return UNPRINTABLE_MESSAGE


def underlying_cause(
    error: BaseException, *, follow_context: bool = False
) -> BaseException | None:
    """Return the error ``error`` was raised from, if any."""
    if error.__cause__ is not None:
        return error.__cause__
    if follow_context and not error.__suppress_context__:
        return error.__context__
    return None
