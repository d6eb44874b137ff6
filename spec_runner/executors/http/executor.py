"""Executor delegating to a remote test runner service over HTTP."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

import aiohttp

from spec_runner.config import Config
from spec_runner.executors.base import SpecExecutor
from spec_runner.executors.http.config import HttpExecutorConfig
from spec_runner.models.result import ResultNode
from spec_runner.models.unit import TestUnit

log = logging.getLogger(__name__)

PENDING_STATUSES = frozenset({202, 404})


@dataclass(frozen=True, kw_only=True)
class DispatchState:
    """State returned from dispatch for polling."""

    run_id: str
    import_path: str


@dataclass(frozen=True, kw_only=True)
class HttpExecutor(SpecExecutor[DispatchState]):
    """Runs test units through a test runner service."""

    config: HttpExecutorConfig
    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: HttpExecutorConfig
    ) -> AsyncGenerator["HttpExecutor", None]:
        """Create executor with managed session lifecycle."""
        headers = {"Accept": "application/json"}
        if config.token is not None:
            headers["Authorization"] = f"Bearer {config.token.get_secret_value()}"
        async with aiohttp.ClientSession(
            base_url=config.server_url,
            headers=headers,
        ) as session:
            yield cls(config=config, session=session)

    async def dispatch(self, unit: TestUnit, config: Config) -> DispatchState:
        """Ask the service to run the unit's generated package."""
        payload = {
            "run_id": config.run_id,
            "package": unit.import_path,
            "name": unit.name,
            "output_path": str(unit.output_path),
            "run": config.run_pattern.pattern,
        }

        log.info(
            "Dispatching package: server_url=%s, run_id=%s, package=%s",
            self.config.server_url,
            config.run_id,
            unit.import_path,
        )

        async with self.session.post("/runs", json=payload) as response:
            if response.status not in (201, 202):
                text = await response.text()
                raise RuntimeError(
                    f"Failed to dispatch package: {response.status} {text}"
                )

        return DispatchState(run_id=config.run_id, import_path=unit.import_path)

    async def poll(self, dispatch_state: DispatchState) -> ResultNode | None:
        """Fetch the result of the package if the service has it."""
        url = f"/runs/{dispatch_state.run_id}/results"
        params = {"package": dispatch_state.import_path}

        async with self.session.get(url, params=params) as response:
            if response.status in PENDING_STATUSES:
                log.debug("Package %s still running", dispatch_state.import_path)
                return None
            if response.status != 200:
                text = await response.text()
                raise RuntimeError(
                    f"Failed to fetch results: {response.status} {text}"
                )
            data = await response.json()

        return ResultNode.model_validate(data)
