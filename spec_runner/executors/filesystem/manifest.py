"""Filesystem executor manifest."""

from spec_runner.executors.filesystem.config import FilesystemExecutorConfig
from spec_runner.executors.filesystem.executor import FilesystemExecutor
from spec_runner.executors.manifest import ExecutorManifest

filesystem_manifest = ExecutorManifest(
    config_cls=FilesystemExecutorConfig,
    executor_factory=FilesystemExecutor.from_config,
)
