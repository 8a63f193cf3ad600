"""Evaluation of assertions inside a running test."""

from collections.abc import Callable, Sequence

from chaintest.chains.differ import diff_chains
from chaintest.chains.renderer import render_chain, render_diff
from chaintest.chains.walker import error_message, walk_chain
from chaintest.context import TestContext, flush_output
from chaintest.errors import InterruptTest
from chaintest.models.chain import DiffStatus, ErrorChain, ExpectedLink
from chaintest.models.identity import Location

type Expectation = ExpectedLink | BaseException


def assert_expression(
    context: TestContext,
    *,
    stop_on_failure: bool,
    location: Location,
    expression: str,
    evaluate: Callable[[], object] | object,
) -> bool:
    """Evaluate an assertion once and record a failure on the test.

    Args:
        context: The running test
        stop_on_failure: Interrupt the test on failure instead of continuing
        location: Where the assertion is written
        expression: Source text of the assertion
        evaluate: Called once, its result is converted to bool. Non-callable
            values are taken as already evaluated.

    Returns:
        The outcome of the assertion, False after a soft failure

    Raises:
        InterruptTest: On failure when ``stop_on_failure`` is set

    """
    error: BaseException | None = None
    try:
        outcome = bool(evaluate() if callable(evaluate) else evaluate)
    except (InterruptTest, KeyboardInterrupt):
        raise
    except BaseException as caught:  # noqa: BLE001
        error = caught
        outcome = False

    if outcome:
        return True

    context.fail()
    flush_output()
    context.report(
        [
            f"    Assertion failed at:  {location}",
            f"        Expression:  {expression}",
        ]
    )
    if error is None:
        context.report("        Evaluated to false.")
    else:
        context.report("        Threw an uncaught exception:")
        chain = _walk(context, error)
        context.report([f"            {line}" for line in render_chain(chain)])

    if stop_on_failure:
        raise InterruptTest
    return False


def assert_raises(
    context: TestContext,
    *,
    stop_on_failure: bool,
    location: Location,
    expression: str,
    body: Callable[[], object],
    expected: Sequence[Expectation] = (),
) -> bool:
    """Run ``body`` once and check the chain of errors it raises.

    Args:
        context: The running test
        stop_on_failure: Interrupt the test on failure instead of continuing
        location: Where the check is written
        expression: Source text of the body
        body: Must raise
        expected: The expected chain, outermost first. Empty accepts any
            error.

    Returns:
        Whether the raised chain matched

    Raises:
        InterruptTest: On failure when ``stop_on_failure`` is set

    """
    expected_links = normalize_expected(context, expected)

    caught: ErrorChain | None = None
    try:
        body()
    except (InterruptTest, KeyboardInterrupt):
        raise
    except BaseException as error:  # noqa: BLE001
        caught = _walk(context, error)

    result = diff_chains(caught, expected_links)
    if result.status is DiffStatus.MATCHED:
        return True

    context.fail()
    flush_output()
    if result.status is DiffStatus.MISSING:
        context.report(f"    Missing exception at:  {location}")
        context.report(f"        Expression:  {expression}")
    else:
        context.report(f"    Incorrect exception at:  {location}")
        context.report(f"        Expression:  {expression}")
        context.report([f"    {line}" for line in render_diff(result)])

    if stop_on_failure:
        raise InterruptTest
    return False


def normalize_expected(
    context: TestContext, expected: Sequence[Expectation]
) -> tuple[ExpectedLink, ...]:
    """Turn example errors into expected links using the test's type namer."""
    return tuple(
        item
        if isinstance(item, ExpectedLink)
        else ExpectedLink(type_tag=context.type_namer(item), message=error_message(item))
        for item in expected
    )


def _walk(context: TestContext, error: BaseException) -> ErrorChain:
    return walk_chain(
        error,
        type_namer=context.type_namer,
        follow_context=context.config.follow_context,
        max_depth=context.config.max_chain_depth,
    )
