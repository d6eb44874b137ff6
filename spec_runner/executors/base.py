"""Abstract base class for spec executors."""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass

from spec_runner.config import Config
from spec_runner.models.result import ResultNode
from spec_runner.models.unit import TestUnit


@dataclass(frozen=True, kw_only=True)
class SpecExecutor[T](ABC):
    """Abstract base for executors running generated test packages.

    Generic type T represents the dispatch state - whatever data the executor
    needs to pass from dispatch to poll.
    """

    @abstractmethod
    async def dispatch(self, unit: TestUnit, config: Config) -> T:
        """Start executing a test unit and return dispatch state.

        Args:
            unit: Test unit to execute
            config: Configuration of the current run

        Returns:
            Dispatch state to pass to poll

        """

    @abstractmethod
    async def poll(self, dispatch_state: T) -> ResultNode | None:
        """Check if the unit finished and get its result.

        Args:
            dispatch_state: State returned from dispatch

        Returns:
            Result tree if complete, None if still running

        """

    async def wait_for_completion(
        self,
        dispatch_state: T,
        timeout: float = 30,
        poll_interval: float = 1,
    ) -> ResultNode:
        """Wait for a unit to complete.

        Args:
            dispatch_state: State returned from dispatch
            timeout: Maximum wait time in seconds
            poll_interval: Seconds between polls

        Returns:
            Result tree of the unit

        Raises:
            TimeoutError: If the unit does not complete within timeout

        """
        deadline = asyncio.get_running_loop().time() + timeout

        while True:
            if (result := await self.poll(dispatch_state)) is not None:
                return result

            if asyncio.get_running_loop().time() >= deadline:
                raise TimeoutError(f"timed out after {timeout:g}s")

            await asyncio.sleep(poll_interval)
