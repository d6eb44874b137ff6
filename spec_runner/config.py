"""Run configuration: user settings and the paths derived from them."""

import logging
import re
import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from spec_runner.models.unit import TestUnit

log = logging.getLogger(__name__)


class TestRootError(Exception):
    """Raised when the test directory is missing or is not a directory."""

    __test__ = False


class RunSettings(BaseModel):
    """Parameters of a single run, as given on the command line."""

    model_config = ConfigDict(frozen=True)

    root: Path = Field(default=Path("."), description="Root of the tested project")
    test_dir_name: str = Field(default="tests", description="Directory with tests")
    output_dir_name: str = Field(
        default="madness", description="Directory receiving generated packages"
    )
    # Defaults to the base name of the root directory
    import_path: str | None = None
    verbose: bool = False
    timeout: float = Field(default=30.0, gt=0, description="Seconds per test unit")
    poll_interval: float = Field(default=1.0, gt=0)
    run: str = Field(default="Test.*", description="Pattern of spec functions to run")
    dry: bool = False
    json_report: Path | None = None

    @field_validator("run")
    @classmethod
    def check_run_pattern(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(f"invalid run pattern {value!r}: {exc}") from exc
        return value


@dataclass(frozen=True, kw_only=True)
class Config:
    """Resolved configuration for one run."""

    settings: RunSettings
    # Absolute path to the root of the tested project.
    root: Path
    test_dir_name: str
    output_dir_name: str
    # Absolute path to the directory containing the tests.
    test_path: Path
    # Absolute path to the directory generated packages are written to.
    output_path: Path
    # Absolute path of the generated copy of the test directory.
    generated_test_path: Path
    # Import path of the generated test package, e.g. project/madness/tests
    generated_test_pkg: str
    # Import path of the generated main package, e.g. project/madness
    output_main_pkg: str
    run_id: str
    run_pattern: re.Pattern[str]
    test_units: Sequence[TestUnit] = field(default_factory=list)

    @classmethod
    def from_settings(cls, settings: RunSettings) -> "Config":
        """Derive paths and identifiers, checking that the test root exists.

        Raises:
            TestRootError: If the test directory is missing or not a directory

        """
        root = settings.root.absolute()
        import_path = settings.import_path or root.name
        output_path = root / settings.output_dir_name
        config = cls(
            settings=settings,
            root=root,
            test_dir_name=settings.test_dir_name,
            output_dir_name=settings.output_dir_name,
            test_path=root / settings.test_dir_name,
            output_path=output_path,
            generated_test_path=output_path / settings.test_dir_name,
            generated_test_pkg=(
                f"{import_path}/{settings.output_dir_name}/{settings.test_dir_name}"
            ),
            output_main_pkg=f"{import_path}/{settings.output_dir_name}",
            run_id=str(uuid.uuid4()),
            run_pattern=re.compile(settings.run),
        )

        if not config.test_path.exists():
            raise TestRootError(f"{config.test_path} does not exist")
        if not config.test_path.is_dir():
            raise TestRootError(f"{config.test_path} is not a directory")

        log.debug("Run %s: test root %s", config.run_id, config.test_path)
        return config

