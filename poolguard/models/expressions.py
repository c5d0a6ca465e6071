"""Closed expression model lowered from the host syntax tree.

Only the shapes the pool checks care about get their own variant; every other
expression collapses into ``OtherExpr`` and is treated as statically unknown.
"""

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from poolguard.models.base import SourceLocation


class ExpressionKind(StrEnum):
    LITERAL = "literal"
    UNARY = "unary"
    RECORD = "record"
    OTHER = "other"


class LiteralKind(StrEnum):
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    BOOLEAN = "boolean"
    NONE = "none"


class BaseExpression(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Source snippet of the expression")
    location: SourceLocation


class LiteralExpr(BaseExpression):
    """A single literal token such as ``5``, ``30.5`` or ``"abc"``."""

    kind: Literal[ExpressionKind.LITERAL] = ExpressionKind.LITERAL
    literal_kind: LiteralKind


class UnaryExpr(BaseExpression):
    """Prefix operator applied to an operand, e.g. ``-1``."""

    kind: Literal[ExpressionKind.UNARY] = ExpressionKind.UNARY
    operator: str
    operand: "Expression"


class RecordField(BaseModel):
    """One ``key: value`` entry of a record literal.

    ``key`` is the raw key token as written in source (quotes included) or
    ``None`` when the entry has no static key (``**other``, computed keys).
    """

    model_config = ConfigDict(frozen=True)

    key: str | None
    value: "Expression"
    location: SourceLocation


class RecordLiteralExpr(BaseExpression):
    kind: Literal[ExpressionKind.RECORD] = ExpressionKind.RECORD
    fields: tuple[RecordField, ...] = ()


class OtherExpr(BaseExpression):
    """Any expression that cannot be read without evaluating code."""

    kind: Literal[ExpressionKind.OTHER] = ExpressionKind.OTHER
    node_type: str = Field(default="", description="Grammar type of the node")


Expression = Annotated[
    LiteralExpr | UnaryExpr | RecordLiteralExpr | OtherExpr,
    Field(discriminator="kind"),
]

UnaryExpr.model_rebuild()
RecordField.model_rebuild()
RecordLiteralExpr.model_rebuild()
