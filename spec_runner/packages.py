"""Recognition of test package directories."""

from pathlib import Path
from typing import Protocol

import yaml
from pydantic import Field, ValidationError, field_validator

from spec_runner.models.base import Model

MANIFEST_FILE_NAME = "package.yaml"


class NotAPackageError(Exception):
    """Raised when a directory does not hold a test package."""


class PackageManifest(Model):
    """Contents of a package.yaml manifest."""

    name: str = Field(..., description="Declared package name")
    description: str | None = Field(default=None)

    @field_validator("name")
    @classmethod
    def check_identifier(cls, value: str) -> str:
        if not value.isidentifier():
            raise ValueError(f"package name {value!r} is not a valid identifier")
        return value


class PackageResolver(Protocol):
    """Resolves the declared package name of a directory."""

    def resolve(self, directory: Path) -> str:
        """Return the package name, or raise NotAPackageError."""


class ManifestResolver:
    """Treats directories containing a package.yaml manifest as packages."""

    def __init__(self, file_name: str = MANIFEST_FILE_NAME) -> None:
        self.file_name = file_name

    def resolve(self, directory: Path) -> str:
        """Load the manifest in directory and return its declared name.

        Raises:
            NotAPackageError: If the manifest is missing, unreadable or invalid

        """
        return self.load_manifest(directory).name

    def load_manifest(self, directory: Path) -> PackageManifest:
        """Load and validate the manifest of directory."""
        manifest_file = directory / self.file_name
        if not manifest_file.is_file():
            raise NotAPackageError(f"{directory} has no {self.file_name}")

        try:
            data = yaml.safe_load(manifest_file.read_text())
        except (OSError, yaml.YAMLError) as exc:
            raise NotAPackageError(f"Cannot read {manifest_file}: {exc}") from exc

        if not isinstance(data, dict):
            raise NotAPackageError(f"{manifest_file} is not a mapping")

        try:
            return PackageManifest.model_validate(data)
        except ValidationError as exc:
            raise NotAPackageError(f"Invalid manifest {manifest_file}: {exc}") from exc
