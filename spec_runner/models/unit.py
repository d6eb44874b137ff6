"""Model for a discovered test package."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(kw_only=True)
class TestUnit:
    """A test package found under the test root.

    Everything except ``alias`` is fixed at discovery time. ``alias`` is
    assigned at most once, when the package name collides with another unit.
    """

    __test__ = False

    # Absolute path of the generated package.
    output_path: Path
    # Path relative to the generated directory, e.g. tests/pkg.
    relative_path: Path
    import_path: str
    package_name: str
    package_dir: Path
    alias: str | None = None

    @property
    def name(self) -> str:
        """Name the generated package is imported under."""
        return self.alias or self.package_name

    def describe(self, test_name: str) -> str:
        """Qualify a spec function name with the package name."""
        return f"{self.name}.{test_name}"
