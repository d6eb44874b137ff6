"""Discovery of test packages under the test root."""

import dataclasses
import logging
from collections.abc import Sequence
from pathlib import Path

from spec_runner.config import Config, RunSettings
from spec_runner.models.unit import TestUnit
from spec_runner.packages import ManifestResolver, NotAPackageError, PackageResolver
from spec_runner.paths import map_output_info

log = logging.getLogger(__name__)


class DiscoveryError(Exception):
    """Raised when the test directory cannot be scanned."""


class NoTestPackagesError(DiscoveryError):
    """Raised when no directory under the test root is a test package."""

    def __init__(self, searched: Sequence[Path]) -> None:
        super().__init__(
            "Couldn't find test packages in any of the directories: "
            + ", ".join(str(path) for path in searched)
        )
        self.searched = searched


def _raise_walk_error(exc: OSError) -> None:
    raise DiscoveryError(f"Cannot scan {exc.filename}: {exc.strerror}") from exc


def walk_test_dirs(test_path: Path) -> Sequence[Path]:
    """List test_path and every directory below it.

    Directories are returned in pre-order with siblings sorted by name.
    """
    test_dirs: list[Path] = []
    for dir_path, dir_names, _ in test_path.walk(on_error=_raise_walk_error):
        dir_names.sort()
        test_dirs.append(dir_path)
    return test_dirs


def discover(
    config: Config, resolver: PackageResolver | None = None
) -> list[TestUnit]:
    """Find every test package under the configured test root.

    Directories that are not packages are skipped.

    Raises:
        DiscoveryError: If a directory cannot be read
        NoTestPackagesError: If no package was found

    """
    resolver = resolver or ManifestResolver()
    test_dirs = walk_test_dirs(config.test_path)

    units: list[TestUnit] = []
    for test_dir in test_dirs:
        try:
            package_name = resolver.resolve(test_dir)
        except NotAPackageError as exc:
            log.debug("Skipping %s: %s", test_dir, exc)
            continue

        info = map_output_info(config, test_dir, package_name)
        log.debug("Found package %s at %s", package_name, info.relative_path)
        units.append(
            TestUnit(
                output_path=info.output_path,
                relative_path=info.relative_path,
                import_path=info.import_path,
                package_name=package_name,
                package_dir=test_dir,
            )
        )

    if not units:
        raise NoTestPackagesError(test_dirs)

    log.info("Discovered %d test package(s) in %s", len(units), config.test_path)
    return units


def load_config(
    settings: RunSettings, resolver: PackageResolver | None = None
) -> Config:
    """Build the run configuration and discover its test packages."""
    config = Config.from_settings(settings)
    return dataclasses.replace(config, test_units=discover(config, resolver))
