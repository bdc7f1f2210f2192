"""Configuration for the stdout publisher."""

from pydantic import BaseModel, Field


class StdoutPublisherConfig(BaseModel):
    """Configuration for the stdout publisher."""

    indent: int | None = Field(
        default=None, ge=0, description="Indentation of the JSON documents"
    )
