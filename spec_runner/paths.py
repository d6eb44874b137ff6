"""Mapping of test directories to their generated package locations."""

from dataclasses import dataclass
from pathlib import Path

from spec_runner.config import Config


class PathError(Exception):
    """Raised when a directory does not lie under the test root."""


@dataclass(frozen=True, kw_only=True)
class OutputInfo:
    """Where a test package is generated and how it is imported."""

    output_path: Path
    relative_path: Path
    import_path: str


def map_output_info(config: Config, test_dir: Path, package_name: str) -> OutputInfo:
    """Compute output path, relative path and import path for test_dir.

    The test root itself is generated as its own package under the output
    directory; any other directory keeps its position relative to the root.

    Raises:
        PathError: If test_dir is not the test root or one of its descendants

    """
    if test_dir == config.test_path:
        return OutputInfo(
            output_path=config.output_path / package_name,
            relative_path=Path(config.test_dir_name),
            import_path=config.generated_test_pkg,
        )

    try:
        rel = test_dir.relative_to(config.test_path)
    except ValueError as exc:
        raise PathError(f"{test_dir} is outside of {config.test_path}") from exc

    return OutputInfo(
        output_path=config.output_path / config.test_dir_name / rel,
        relative_path=Path(config.test_path.name) / rel,
        import_path=f"{config.generated_test_pkg}/{rel.as_posix()}",
    )
