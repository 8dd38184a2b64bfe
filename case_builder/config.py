"""Configuration for building tests."""

from typing import Literal

from pydantic import BaseModel, ConfigDict


class BuilderConfig(BaseModel):
    """Configuration for TestCaseBuilder."""

    model_config = ConfigDict(frozen=True)

    # Unresolved case sources contribute no cases unless strict
    strict_sources: bool = False
    # "always" constructs the source type even for static members
    construct_sources: Literal["on_demand", "always"] = "on_demand"
