"""Test orchestrator for coordinating execution of test units."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from spec_runner.aggregator import aggregate
from spec_runner.config import Config
from spec_runner.executors.base import SpecExecutor
from spec_runner.models.result import ResultNode, failed_result
from spec_runner.models.unit import TestUnit

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class UnitResult:
    """Result container for a test unit's execution."""

    unit: TestUnit
    result: ResultNode


@dataclass(frozen=True, kw_only=True)
class TestOrchestrator[T]:
    """Orchestrates execution of test units on a single executor."""

    __test__ = False

    executor: SpecExecutor[T]

    async def run_units(
        self, config: Config, units: Sequence[TestUnit]
    ) -> Sequence[UnitResult]:
        """Run all units concurrently and collect their results.

        Args:
            config: Configuration of the current run
            units: Units to execute

        Returns:
            One result per unit, in the order of units

        """
        if not units:
            log.info("No test units provided")
            return []

        log.info("Dispatching %d test unit(s)...", len(units))
        tasks = [self._run_unit(unit, config) for unit in units]

        results = await asyncio.gather(*tasks, return_exceptions=True)
        log.info("Test execution completed")

        return self._process_results(units, results)

    def _process_results(
        self,
        units: Sequence[TestUnit],
        results: Sequence[ResultNode | BaseException],
    ) -> Sequence[UnitResult]:
        """Pair results with their units, turning exceptions into failures."""
        final_results: list[UnitResult] = []

        for unit, result in zip(units, results, strict=True):
            if isinstance(result, ResultNode):
                stats = aggregate(result)
                log.info(
                    "Unit completed: package=%s passed=%d failed=%d duration=%.2fs",
                    unit.name,
                    stats.passed,
                    stats.failed,
                    result.duration,
                )
            elif isinstance(result, TimeoutError):
                log.error("Unit %s timed out: %s", unit.name, result)
                result = failed_result(unit.import_path, str(result))
            elif isinstance(result, Exception):
                log.error("Unit %s failed: %s", unit.name, result, exc_info=result)
                result = failed_result(unit.import_path, str(result))
            else:
                raise result
            final_results.append(UnitResult(unit=unit, result=result))

        return final_results

    async def _run_unit(self, unit: TestUnit, config: Config) -> ResultNode:
        """Run one unit and wait for completion."""
        dispatch_state = await self.executor.dispatch(unit, config)
        log.info("Unit %s dispatched, waiting for completion...", unit.name)

        return await self.executor.wait_for_completion(
            dispatch_state,
            timeout=config.settings.timeout,
            poll_interval=config.settings.poll_interval,
        )
