"""Tests for the running test context."""

import pytest

from chaintest.context import TestContext, current_test
from chaintest.errors import NoActiveTestError
from chaintest.testing.factories import TestIdentityFactory


def test_activate_sets_and_resets_the_current_test() -> None:
    """The context is current only inside the block."""
    context = TestContext(identity=TestIdentityFactory.build())

    with context.activate():
        assert current_test() is context

    with pytest.raises(NoActiveTestError):
        current_test()


def test_activate_resets_after_an_error() -> None:
    """Errors escaping the block don't leave the context active."""
    context = TestContext(identity=TestIdentityFactory.build())

    with pytest.raises(RuntimeError), context.activate():
        raise RuntimeError("boom")

    with pytest.raises(NoActiveTestError):
        current_test()


def test_nested_activation_restores_the_outer_test() -> None:
    """Leaving an inner context restores the outer one."""
    outer = TestContext(identity=TestIdentityFactory.build())
    inner = TestContext(identity=TestIdentityFactory.build())

    with outer.activate():
        with inner.activate():
            assert current_test() is inner
        assert current_test() is outer


def test_fail_is_sticky() -> None:
    """A failed test stays failed."""
    context = TestContext(identity=TestIdentityFactory.build())
    assert not context.failed

    context.fail()
    context.fail()

    assert context.failed


def test_report_prefixes_lines(caplog: pytest.LogCaptureFixture) -> None:
    """Report lines are indented past the counters and logged as errors."""
    context = TestContext(identity=TestIdentityFactory.build(), counters_width=3)

    context.report(["first", "second"])
    context.report("third")

    assert caplog.messages == [
        "    [   .    ] first",
        "    [   .    ] second",
        "    [   .    ] third",
    ]
    assert {record.levelname for record in caplog.records} == {"ERROR"}
