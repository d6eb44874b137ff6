"""Configuration for the HTTP executor."""

from pydantic import BaseModel, SecretStr


class HttpExecutorConfig(BaseModel):
    """Configuration for the HTTP executor."""

    server_url: str = "http://localhost:1955"
    token: SecretStr | None = None
