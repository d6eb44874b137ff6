"""Filesystem executor module."""

from spec_runner.executors.filesystem.config import FilesystemExecutorConfig
from spec_runner.executors.filesystem.executor import FilesystemExecutor
from spec_runner.executors.filesystem.manifest import filesystem_manifest

__all__ = ["FilesystemExecutor", "FilesystemExecutorConfig", "filesystem_manifest"]
