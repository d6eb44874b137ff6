"""Integration tests for discovery using real directory trees."""

import os
from pathlib import Path

import pytest

from spec_runner.config import Config, RunSettings, TestRootError
from spec_runner.conflicts import resolve_conflicts
from spec_runner.discovery import (
    DiscoveryError,
    NoTestPackagesError,
    discover,
    load_config,
    walk_test_dirs,
)


def create_package(directory: Path, name: str) -> Path:
    """Create a test package declaring name in directory."""
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "package.yaml").write_text(f"name: {name}\n")
    return directory


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Create a project root with an empty tests directory."""
    root = tmp_path / "project"
    (root / "tests").mkdir(parents=True)
    return root


@pytest.fixture
def config(project: Path) -> Config:
    """Create config for the project."""
    return Config.from_settings(RunSettings(root=project))


class TestWalkTestDirs:
    """Tests for walk_test_dirs."""

    def test_walks_in_pre_order_with_sorted_siblings(self, project: Path) -> None:
        """Parents come before children, siblings sorted by name."""
        tests = project / "tests"
        for name in ("zeta/inner", "alpha", "mid/b", "mid/a"):
            (tests / name).mkdir(parents=True)

        result = walk_test_dirs(tests)

        assert [p.relative_to(tests).as_posix() for p in result] == [
            ".",
            "alpha",
            "mid",
            "mid/a",
            "mid/b",
            "zeta",
            "zeta/inner",
        ]

    def test_raises_on_missing_directory(self, tmp_path: Path) -> None:
        """A directory that cannot be listed aborts discovery."""
        with pytest.raises(DiscoveryError) as exc_info:
            walk_test_dirs(tmp_path / "missing")

        assert "missing" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_raises_when_listing_a_file(self, tmp_path: Path) -> None:
        """Listing a regular file fails the walk."""
        not_a_dir = tmp_path / "tests"
        not_a_dir.write_text("")

        with pytest.raises(DiscoveryError) as exc_info:
            walk_test_dirs(not_a_dir)

        assert isinstance(exc_info.value.__cause__, NotADirectoryError)

    @pytest.mark.skipif(
        os.name != "posix" or os.geteuid() == 0,
        reason="needs a non-root POSIX user to make directories unreadable",
    )
    def test_raises_on_unreadable_directory(self, project: Path) -> None:
        """I/O errors while walking abort discovery."""
        locked = project / "tests" / "locked"
        locked.mkdir()
        locked.chmod(0)
        try:
            with pytest.raises(DiscoveryError):
                walk_test_dirs(project / "tests")
        finally:
            locked.chmod(0o755)


class TestDiscover:
    """Tests for discover."""

    def test_discovers_root_and_nested_packages(
        self, project: Path, config: Config
    ) -> None:
        """Finds packages at the root and below it."""
        tests = project / "tests"
        create_package(tests, "tests")
        create_package(tests / "sub" / "dir", "dir")

        units = discover(config)

        assert [u.package_name for u in units] == ["tests", "dir"]
        assert units[0].import_path == "project/madness/tests"
        assert units[0].output_path == project / "madness" / "tests"
        assert units[1].import_path == "project/madness/tests/sub/dir"
        assert units[1].relative_path == Path("tests/sub/dir")
        assert units[1].output_path == project / "madness" / "tests" / "sub" / "dir"
        assert units[1].package_dir == tests / "sub" / "dir"

    def test_skips_directories_without_packages(
        self, project: Path, config: Config
    ) -> None:
        """Non package directories are skipped without aborting the walk."""
        tests = project / "tests"
        (tests / "fixtures").mkdir()
        (tests / "broken").mkdir()
        (tests / "broken" / "package.yaml").write_text("name: [\n")
        create_package(tests / "zz", "zz")

        units = discover(config)

        assert [u.package_name for u in units] == ["zz"]

    def test_order_is_deterministic(self, project: Path, config: Config) -> None:
        """Units follow the sorted pre-order walk."""
        tests = project / "tests"
        for name in ("c", "a", "b/inner", "b"):
            create_package(tests / name, name.replace("/", "_"))

        units = discover(config)

        assert [u.import_path.rsplit("tests/", 1)[-1] for u in units] == [
            "a",
            "b",
            "b/inner",
            "c",
        ]

    def test_raises_when_no_packages(self, project: Path, config: Config) -> None:
        """Fails when no directory holds a package."""
        (project / "tests" / "empty").mkdir()

        with pytest.raises(NoTestPackagesError) as exc_info:
            discover(config)

        assert exc_info.value.searched == [
            project / "tests",
            project / "tests" / "empty",
        ]
        assert "Couldn't find test packages" in str(exc_info.value)

    def test_uses_custom_resolver(self, project: Path, config: Config) -> None:
        """Any resolver can decide what a package is."""
        (project / "tests" / "one").mkdir()

        class DirNameResolver:
            def resolve(self, directory: Path) -> str:
                return directory.name

        units = discover(config, DirNameResolver())

        assert [u.package_name for u in units] == ["tests", "one"]


class TestLoadConfig:
    """Tests for load_config."""

    def test_loads_units(self, project: Path) -> None:
        """Populates the config with discovered units."""
        create_package(project / "tests" / "a", "a")

        config = load_config(RunSettings(root=project))

        assert [u.package_name for u in config.test_units] == ["a"]

    def test_fails_before_discovery_without_test_root(self, tmp_path: Path) -> None:
        """Missing test root is reported before scanning."""
        with pytest.raises(TestRootError):
            load_config(RunSettings(root=tmp_path))

    def test_resolves_collisions_after_loading(self, project: Path) -> None:
        """Packages with equal names under different leaves get aliases."""
        create_package(project / "tests" / "a" / "pkg1", "foo")
        create_package(project / "tests" / "a" / "pkg2", "foo")

        config = load_config(RunSettings(root=project))
        resolve_conflicts(config.test_units)

        first, second = config.test_units
        assert first.name == "foo"
        assert second.name == "2foo"
