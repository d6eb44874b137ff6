"""Shared fixtures."""

import re
import uuid
from collections.abc import Generator
from pathlib import Path
from typing import Protocol

import pytest
from aioresponses import aioresponses as aioresponses_cls

from spec_runner.config import Config, RunSettings


class MakeConfigFn(Protocol):
    """Protocol for config creation function."""

    def __call__(self, root: Path, *, import_path: str = "project") -> Config:
        """Create a config rooted at root without touching the filesystem."""


@pytest.fixture
def make_config() -> MakeConfigFn:
    """Return a function building a Config for a given root."""

    def _make(root: Path, *, import_path: str = "project") -> Config:
        settings = RunSettings(root=root, import_path=import_path)
        output_path = root / settings.output_dir_name
        return Config(
            settings=settings,
            root=root,
            test_dir_name=settings.test_dir_name,
            output_dir_name=settings.output_dir_name,
            test_path=root / settings.test_dir_name,
            output_path=output_path,
            generated_test_path=output_path / settings.test_dir_name,
            generated_test_pkg=f"{import_path}/madness/tests",
            output_main_pkg=f"{import_path}/madness",
            run_id=str(uuid.uuid4()),
            run_pattern=re.compile(settings.run),
        )

    return _make


@pytest.fixture
def aioresponses() -> Generator[aioresponses_cls]:
    """Mock aiohttp requests."""
    with aioresponses_cls() as mocked:
        yield mocked
