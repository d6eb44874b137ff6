"""Executor collecting results written next to the generated packages."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from spec_runner.config import Config
from spec_runner.executors.base import SpecExecutor
from spec_runner.executors.filesystem.config import FilesystemExecutorConfig
from spec_runner.models.result import ResultNode
from spec_runner.models.unit import TestUnit

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class FilesystemExecutor(SpecExecutor[Path]):
    """Waits for an external runtime to write each unit's result file."""

    config: FilesystemExecutorConfig

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: FilesystemExecutorConfig
    ) -> AsyncGenerator["FilesystemExecutor", None]:
        """Create executor."""
        yield cls(config=config)

    async def dispatch(self, unit: TestUnit, config: Config) -> Path:
        """Clear any result left by an earlier run and return the result path."""
        results_file = unit.output_path / self.config.results_file_name
        if results_file.exists():
            log.info("Removing stale results %s", results_file)
            results_file.unlink()
        log.info("Waiting for results of %s in %s", unit.import_path, results_file)
        return results_file

    async def poll(self, dispatch_state: Path) -> ResultNode | None:
        """Parse the result file once it exists and holds complete JSON.

        A file that is not valid JSON yet is still being written. Complete
        JSON that does not describe a result tree is a structural error.
        """
        if not dispatch_state.is_file():
            return None
        try:
            return ResultNode.model_validate_json(dispatch_state.read_text())
        except ValidationError as exc:
            if any(error["type"] == "json_invalid" for error in exc.errors()):
                log.debug("Results in %s are incomplete", dispatch_state)
                return None
            raise
