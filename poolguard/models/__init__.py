from .base import SourceLocation
from .call_site import Argument, CallSite, NamedArgument, PositionalArgument
from .diagnostic import Diagnostic, DiagnosticCode, DiagnosticSeverity
from .expressions import (
    Expression,
    ExpressionKind,
    LiteralExpr,
    LiteralKind,
    OtherExpr,
    RecordField,
    RecordLiteralExpr,
    UnaryExpr,
)
from .rules import VALIDATION_RULES, PoolKey, ValidationRule, ValueKind, lookup_key

__all__ = [
    "SourceLocation",
    "Argument",
    "CallSite",
    "NamedArgument",
    "PositionalArgument",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticSeverity",
    "Expression",
    "ExpressionKind",
    "LiteralExpr",
    "LiteralKind",
    "OtherExpr",
    "RecordField",
    "RecordLiteralExpr",
    "UnaryExpr",
    "VALIDATION_RULES",
    "PoolKey",
    "ValidationRule",
    "ValueKind",
    "lookup_key",
]
