"""Executor manifest definition for the plugin system."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass

from pydantic import BaseModel

from spec_runner.executors.base import SpecExecutor


@dataclass(frozen=True, kw_only=True)
class ExecutorManifest[ConfigT: BaseModel, StateT]:
    """Manifest describing an executor plugin.

    Holds the configuration class and the factory building the executor, so
    executors are only imported when selected by key.
    """

    config_cls: type[ConfigT]
    executor_factory: Callable[
        [ConfigT], AbstractAsyncContextManager[SpecExecutor[StateT]]
    ]
