"""Configuration for the filesystem executor."""

from pydantic import BaseModel


class FilesystemExecutorConfig(BaseModel):
    """Configuration for the filesystem executor."""

    # Written by the runtime next to the generated package
    results_file_name: str = "results.json"
