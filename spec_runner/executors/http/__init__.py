"""HTTP executor module."""

from spec_runner.executors.http.config import HttpExecutorConfig
from spec_runner.executors.http.executor import HttpExecutor
from spec_runner.executors.http.manifest import http_manifest

__all__ = ["HttpExecutor", "HttpExecutorConfig", "http_manifest"]
