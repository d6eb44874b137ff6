"""HTTP executor manifest."""

from spec_runner.executors.http.config import HttpExecutorConfig
from spec_runner.executors.http.executor import HttpExecutor
from spec_runner.executors.manifest import ExecutorManifest

http_manifest = ExecutorManifest(
    config_cls=HttpExecutorConfig,
    executor_factory=HttpExecutor.from_config,
)
