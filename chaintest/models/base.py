"""Base model configuration for validated settings."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Base model with standard configuration.

    Models are immutable and reject unknown fields.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")
