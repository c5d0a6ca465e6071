from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from poolguard.models.base import SourceLocation
from poolguard.models.expressions import Expression


class PositionalArgument(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["positional"] = "positional"
    value: Expression


class NamedArgument(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["named"] = "named"
    name: str = Field(..., description="Parameter name the argument binds to")
    value: Expression


Argument = Annotated[PositionalArgument | NamedArgument, Field(discriminator="kind")]


class CallSite(BaseModel):
    """Represents a function or constructor invocation."""

    model_config = ConfigDict(frozen=True)

    callee: str = Field(..., description="Callee expression as written in source")
    arguments: tuple[Argument, ...] = Field(
        default=(), description="Arguments in source order"
    )
    location: SourceLocation
