"""Sequential execution of registered tests."""

import logging
import time
from dataclasses import dataclass, field

from chaintest.chains.naming import TypeNamer, qualified_type_name
from chaintest.chains.renderer import render_chain
from chaintest.chains.walker import walk_chain
from chaintest.config import RunnerConfig
from chaintest.context import TestContext, flush_output
from chaintest.errors import InfrastructureError, InterruptTest
from chaintest.models.identity import TestIdentity, TestRecord
from chaintest.models.result import RunSummary
from chaintest.registry import TestBody, TestRegistry

log = logging.getLogger(__name__)

RUN_STATUS = "[ run    ]"
OK_STATUS = "[     OK ]"
FAIL_STATUS = "[   FAIL ]"
FILE_STATUS = "[ file   ]"


@dataclass(frozen=True, kw_only=True)
class TestRunner:
    """Runs every test of a registry, one at a time, in identity order."""

    __test__ = False

    registry: TestRegistry
    config: RunnerConfig = field(default_factory=RunnerConfig)
    type_namer: TypeNamer = qualified_type_name

    def run(self) -> RunSummary:
        """Run all tests and log progress and a summary.

        Returns:
            Summary of the run. Its exit code is 1 when there are no tests.

        Raises:
            InfrastructureError: If the harness can't continue, e.g. an error
                chain is too deep. No summary is logged in that case.

        """
        records = list(self.registry)
        total = len(records)
        if not records:
            log.error("No tests to run.")
            return RunSummary(total=0)

        failed: list[TestIdentity] = []
        durations: dict[TestIdentity, float] = {}
        current_file: str | None = None

        for index, record in enumerate(records, start=1):
            identity = record.identity
            counters = f"{index}/{total}"
            failed_counter = format_failed_counter(len(failed))
            width = max(len(counters), len(failed_counter))

            if identity.file != current_file:
                current_file = identity.file
                log.info("%s %s --- %s", "#" * width, FILE_STATUS, current_file)
            log.info("%-*s %s %s", width, counters, RUN_STATUS, identity.name)

            context = TestContext(
                identity=identity,
                config=self.config,
                type_namer=self.type_namer,
                counters_width=width,
            )
            elapsed = self._run_one(record, context)
            durations[identity] = elapsed

            flush_output()
            if context.failed:
                failed.append(identity)
                failed_counter = format_failed_counter(len(failed))
                log.info(
                    "%-*s %s %s (%.1f ms)   at:  %s",
                    width,
                    failed_counter,
                    FAIL_STATUS,
                    identity.name,
                    elapsed * 1000,
                    identity.location,
                )
            else:
                log.info(
                    "%-*s %s %s (%.1f ms)",
                    width,
                    failed_counter,
                    OK_STATUS,
                    identity.name,
                    elapsed * 1000,
                )
            flush_output()

        summary = RunSummary(total=total, failed=tuple(failed), durations=durations)
        log_summary(summary)
        return summary

    def _run_one(self, record: TestRecord, context: TestContext) -> float:
        """Run a test body in its context and return the elapsed seconds."""
        with context.activate():
            start = time.perf_counter()
            error = _call_isolated(record.body)
            elapsed = time.perf_counter() - start

            if error is not None:
                context.fail()
                flush_output()
                context.report("    Uncaught exception:")
                chain = walk_chain(
                    error,
                    type_namer=self.type_namer,
                    follow_context=self.config.follow_context,
                    max_depth=self.config.max_chain_depth,
                )
                context.report([f"        {line}" for line in render_chain(chain)])

        return elapsed


def _call_isolated(body: TestBody) -> BaseException | None:
    """Call a test body, returning the error that escaped it, if any.

    Anything the body raises is contained, ``SystemExit`` included.
    Infrastructure errors and keyboard interrupts abort the run.
    """
    try:
        body()
    except InterruptTest:
        return None
    except (InfrastructureError, KeyboardInterrupt):
        raise
    except BaseException as error:  # noqa: BLE001
        return error
    return None


def format_failed_counter(failed: int) -> str:
    """Return the counter shown after a test, e.g. ``"  1 failed"``."""
    if not failed:
        return " " * len(f"{0:>3} failed")
    return f"{failed:>3} failed"


def log_summary(summary: RunSummary) -> None:
    """Log the list of failed tests or that all passed."""
    plural = "" if summary.total == 1 else "s"

    if not summary.failed:
        log.info("")
        log.info("All %d test%s passed", summary.total, plural)
        return

    name_width = max(len(identity.name) for identity in summary.failed)
    log.info("")
    log.info("Failed tests:")
    for identity in summary.failed:
        log.info("    %-*s   at:  %s", name_width, identity.name, identity.location)

    log.info("")
    log.info(
        "Ran %d test%s, %d passed, %d FAILED",
        summary.total,
        plural,
        summary.passed,
        len(summary.failed),
    )
