"""Runner configuration."""

from pydantic import Field

from chaintest.models.base import Model

DEFAULT_MAX_CHAIN_DEPTH = 128


class RunnerConfig(Model):
    """Configuration for a test run."""

    type_namer: str = Field(
        default="qualified", description="Key of the type namer entry point"
    )
    follow_context: bool = Field(
        default=False,
        description="Also walk implicit exception context, not only explicit causes",
    )
    max_chain_depth: int = Field(
        default=DEFAULT_MAX_CHAIN_DEPTH,
        gt=0,
        description="Maximum number of links in an error chain",
    )
