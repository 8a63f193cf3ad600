"""Functions used by test modules to declare tests and assertions.

Example::

    from chaintest import check, must_throw, run_tests, test

    @test
    def parses_numbers():
        check(lambda: int("42") == 42)
        must_throw(lambda: int("x"), ValueError("invalid literal for int() with base 10: 'x'"))

    if __name__ == "__main__":
        raise SystemExit(run_tests())
"""

import logging
import sys
from collections.abc import Callable
from typing import NoReturn, overload

from chaintest.chains.loading import load_type_namer
from chaintest.config import RunnerConfig
from chaintest.context import current_test
from chaintest.engine import Expectation, assert_expression, assert_raises
from chaintest.errors import EXIT_INTERNAL_ERROR, InfrastructureError
from chaintest.registry import TestBody, TestRegistry, default_registry
from chaintest.runner import TestRunner
from chaintest.source import capture_call_site

log = logging.getLogger(__name__)


@overload
def test[F: TestBody](func: F, /) -> F: ...
@overload
def test[F: TestBody](*, name: str | None = None) -> Callable[[F], F]: ...
def test[F: TestBody](
    func: F | None = None, /, *, name: str | None = None
) -> F | Callable[[F], F]:
    """Register a test in the default registry.

    A duplicate test terminates the process with the internal error exit code.
    """

    def decorator(body: F) -> F:
        try:
            default_registry().test(body, name=name)
        except InfrastructureError as e:
            internal_error(e)
        return body

    if func is None:
        return decorator
    return decorator(func)


# Not a pytest test, even when imported into one.
test.__test__ = False  # type: ignore[attr-defined]


def check(evaluate: Callable[[], object] | object, /, *, expression: str | None = None) -> bool:
    """Assert that ``evaluate`` is truthy, stopping the test on failure.

    A callable is called and its result tested, so pass ``lambda: value`` to
    test the truthiness of a callable value itself.
    """
    return _check(evaluate, expression=expression, stop_on_failure=True)


def check_soft(
    evaluate: Callable[[], object] | object, /, *, expression: str | None = None
) -> bool:
    """Like `check`, but lets the test continue on failure."""
    return _check(evaluate, expression=expression, stop_on_failure=False)


def must_throw(
    body: Callable[[], object], /, *expected: Expectation, expression: str | None = None
) -> bool:
    """Assert that ``body`` raises ``expected``, stopping the test on failure.

    Several expected errors describe a chain, outermost first: the first one
    was raised from the second and so on. Without any, every error passes.
    """
    return _must_throw(body, expected, expression=expression, stop_on_failure=True)


def must_throw_soft(
    body: Callable[[], object], /, *expected: Expectation, expression: str | None = None
) -> bool:
    """Like `must_throw`, but lets the test continue on failure."""
    return _must_throw(body, expected, expression=expression, stop_on_failure=False)


def run_tests(
    registry: TestRegistry | None = None, config: RunnerConfig | None = None
) -> int:
    """Run the registered tests and return the process exit code."""
    logging.basicConfig(level=logging.INFO, format="%(message)s", stream=sys.stderr)
    config = config or RunnerConfig()

    try:
        runner = TestRunner(
            registry=registry if registry is not None else default_registry(),
            config=config,
            type_namer=load_type_namer(config.type_namer),
        )
        summary = runner.run()
    except InfrastructureError as e:
        log.critical("chaintest: Internal error: %s", e)
        return EXIT_INTERNAL_ERROR

    return summary.exit_code


def internal_error(error: Exception | str) -> NoReturn:
    """Log an infrastructure error and exit with the internal error code."""
    log.critical("chaintest: Internal error: %s", error)
    raise SystemExit(EXIT_INTERNAL_ERROR)


def _check(
    evaluate: Callable[[], object] | object,
    *,
    expression: str | None,
    stop_on_failure: bool,
) -> bool:
    context = current_test()
    site = capture_call_site(depth=2)
    return assert_expression(
        context,
        stop_on_failure=stop_on_failure,
        location=site.location,
        expression=expression or site.expression,
        evaluate=evaluate,
    )


def _must_throw(
    body: Callable[[], object],
    expected: tuple[Expectation, ...],
    *,
    expression: str | None,
    stop_on_failure: bool,
) -> bool:
    context = current_test()
    site = capture_call_site(depth=2)
    return assert_raises(
        context,
        stop_on_failure=stop_on_failure,
        location=site.location,
        expression=expression or site.expression,
        body=body,
        expected=expected,
    )
