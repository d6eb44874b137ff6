"""Lookup of installed spec executors.

Executors register an ``ExecutorManifest`` under the ``spec_runner.executors``
entry point group; the CLI selects one with ``--executor``.
"""

from importlib.metadata import entry_points
from typing import Any

from spec_runner.executors.manifest import ExecutorManifest

ENTRY_POINT_GROUP = "spec_runner.executors"


class ExecutorNotFoundError(Exception):
    """Raised when no installed executor is registered under a key."""


def load_executor_manifest(key: str) -> ExecutorManifest[Any, Any]:
    """Return the manifest of the executor that runs generated test packages.

    Only the selected entry point is imported, so executors with heavy
    dependencies cost nothing unless chosen.

    Args:
        key: Executor key passed to --executor ("filesystem", "http", or the
             key of a third-party executor)

    Raises:
        ExecutorNotFoundError: If no installed executor uses the key

    """
    entries = entry_points(group=ENTRY_POINT_GROUP)

    if key in entries.names:
        manifest: ExecutorManifest[Any, Any] = entries[key].load()
        return manifest

    available = sorted(entries.names)
    raise ExecutorNotFoundError(
        f"Executor '{key}' not found. Available executors: {available}"
    )
