"""CLI entry point for running chaintest suites."""

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from chaintest.chains.loading import load_type_namer
from chaintest.config import DEFAULT_MAX_CHAIN_DEPTH, RunnerConfig
from chaintest.errors import EXIT_INTERNAL_ERROR, InfrastructureError
from chaintest.loader import load_test_targets
from chaintest.models.result import RunSummary
from chaintest.registry import TestRegistry, default_registry
from chaintest.runner import TestRunner


def run(
    targets: Sequence[str],
    config: RunnerConfig,
    *,
    json_output: bool = False,
    registry: TestRegistry | None = None,
) -> int:
    """Load the test targets, run them and return the exit code."""
    log = logging.getLogger("chaintest")
    registry = registry if registry is not None else default_registry()

    try:
        log.debug("Loading test targets: %s", ", ".join(targets))
        load_test_targets(targets)

        runner = TestRunner(
            registry=registry,
            config=config,
            type_namer=load_type_namer(config.type_namer),
        )
        summary = runner.run()
    except InfrastructureError as e:
        log.critical("chaintest: Internal error: %s", e)
        return EXIT_INTERNAL_ERROR

    if json_output:
        print(json.dumps(format_output(summary), indent=2))

    return summary.exit_code


def format_output(summary: RunSummary) -> dict[str, Any]:
    """Format a run summary for JSON output."""
    failed = set(summary.failed)
    results: list[dict[str, Any]] = [
        {
            "name": identity.name,
            "file": identity.file,
            "line": identity.line,
            "status": "failure" if identity in failed else "success",
            "duration_ms": round(duration * 1000, 3),
        }
        for identity, duration in summary.durations.items()
    ]

    return {
        "total": summary.total,
        "passed": summary.passed,
        "failed": len(summary.failed),
        "results": results,
    }


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="chaintest", description="Run chaintest test suites"
    )
    parser.add_argument(
        "targets",
        nargs="*",
        default=["tests"],
        help="Test files, directories of test files or module names (default: tests)",
    )
    parser.add_argument(
        "--type-namer",
        default="qualified",
        help="Key of the type namer used for error type tags (qualified, short)",
    )
    parser.add_argument(
        "--follow-context",
        action="store_true",
        help="Also follow implicit exception context when walking error chains",
    )
    parser.add_argument(
        "--max-chain-depth",
        type=int,
        default=DEFAULT_MAX_CHAIN_DEPTH,
        help="Maximum number of links in an error chain",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print a JSON report of the run to stdout",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    args = parser.parse_args(argv)

    try:
        config = RunnerConfig(
            type_namer=args.type_namer,
            follow_context=args.follow_context,
            max_chain_depth=args.max_chain_depth,
        )
    except ValidationError as e:
        parser.error(str(e))

    logging.basicConfig(
        level=args.log_level,
        format="%(message)s",
        stream=sys.stderr,
    )

    sys.exit(run(args.targets, config, json_output=args.json))


if __name__ == "__main__":  # pragma: no cover
    main()
