"""Configuration for the HTTP publisher."""

from pydantic import BaseModel, Field, SecretStr


class HttpPublisherConfig(BaseModel):
    """Configuration for the HTTP publisher."""

    api_base_url: str
    endpoint: str = "test-runs"
    token: SecretStr | None = None
    timeout: float = Field(default=30.0, gt=0, description="Seconds per request")
