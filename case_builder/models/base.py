"""Base model configuration for declarative metadata."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Base model with standard configuration.

    Markers carry arbitrary user values (case arguments, exception types),
    so arbitrary types are allowed.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
