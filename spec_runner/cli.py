"""CLI entry point for the spec runner."""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from spec_runner.config import Config, RunSettings, TestRootError
from spec_runner.conflicts import resolve_conflicts
from spec_runner.discovery import DiscoveryError, load_config
from spec_runner.executors.loading import ExecutorNotFoundError, load_executor_manifest
from spec_runner.models.unit import TestUnit
from spec_runner.orchestrator import TestOrchestrator
from spec_runner.paths import PathError
from spec_runner.reporting.console import ConsoleReporter
from spec_runner.reporting.summary import write_json_report

EXIT_FAILED = 1
EXIT_FATAL = 2


def log_plan(log: logging.Logger, config: Config, units: Sequence[TestUnit]) -> None:
    """Log where each test unit is generated."""
    log.info("Run %s: %d test package(s)", config.run_id, len(units))
    for unit in units:
        log.info("  %s -> %s", unit.relative_path, unit.import_path)
        if unit.alias:
            log.info("    imported as %s", unit.alias)


def format_plan(units: Sequence[TestUnit]) -> list[str]:
    """Describe each unit on one line for dry runs."""
    return [
        f"{unit.name}\t{unit.import_path}\t{unit.output_path}" for unit in units
    ]


async def run(
    settings: RunSettings,
    executor_key: str,
    executor_config_json: str = "{}",
) -> int:
    """Discover, execute and report test units, and return exit code."""
    log = logging.getLogger("spec_runner")

    log.info("Loading executor: %s", executor_key)
    try:
        manifest = load_executor_manifest(executor_key)
    except ExecutorNotFoundError as exc:
        log.error("%s", exc)
        return EXIT_FATAL

    try:
        executor_config = manifest.config_cls(**json.loads(executor_config_json))
    except (json.JSONDecodeError, TypeError, ValidationError) as exc:
        log.error("Invalid executor configuration: %s", exc)
        return EXIT_FATAL

    log.info("Discovering test packages in %s", settings.root)
    try:
        config = load_config(settings)
    except (TestRootError, DiscoveryError, PathError) as exc:
        log.error("%s", exc)
        return EXIT_FATAL

    resolve_conflicts(config.test_units)
    log_plan(log, config, config.test_units)

    if settings.dry:
        for line in format_plan(config.test_units):
            print(line)
        return 0

    async with manifest.executor_factory(executor_config) as executor:
        orchestrator = TestOrchestrator(executor=executor)
        unit_results = await orchestrator.run_units(config, config.test_units)

    reporter = ConsoleReporter(verbose=settings.verbose)
    for unit_result in unit_results:
        reporter.handle(unit_result.result)
    totals = reporter.done()

    if settings.json_report is not None:
        write_json_report(settings.json_report, unit_results)
        log.info("JSON report written to %s", settings.json_report)

    return EXIT_FAILED if totals.failed else 0


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Run generated test packages and report their results"
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=Path("."),
        help="Root path of the project under test",
    )
    parser.add_argument(
        "--test-dir",
        default="tests",
        help="Relative path to the tests directory",
    )
    parser.add_argument(
        "--output-dir",
        default="madness",
        help="Relative path to the generated tests directory",
    )
    parser.add_argument(
        "--import-path",
        default=None,
        help="Import path of the project root (defaults to its directory name)",
    )
    parser.add_argument(
        "--executor",
        default="filesystem",
        help="Executor key (filesystem, http)",
    )
    parser.add_argument(
        "--executor-config",
        default="{}",
        help="JSON configuration for the executor",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print every result tree, not only failing ones",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Seconds to wait for each test package",
    )
    parser.add_argument(
        "--poll-interval",
        type=float,
        default=1.0,
        help="Seconds between result polls",
    )
    parser.add_argument(
        "--run",
        default="Test.*",
        help="Regular expression for spec functions to run",
    )
    parser.add_argument(
        "--dry",
        action="store_true",
        help="Only print the discovered packages",
    )
    parser.add_argument(
        "--json",
        type=Path,
        default=None,
        help="Write a JSON summary of the run to this file",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        settings = RunSettings(
            root=args.root,
            test_dir_name=args.test_dir,
            output_dir_name=args.output_dir,
            import_path=args.import_path,
            verbose=args.verbose,
            timeout=args.timeout,
            poll_interval=args.poll_interval,
            run=args.run,
            dry=args.dry,
            json_report=args.json,
        )
    except ValidationError as exc:
        parser.error(str(exc))

    exit_code = asyncio.run(
        run(
            settings=settings,
            executor_key=args.executor,
            executor_config_json=args.executor_config,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
