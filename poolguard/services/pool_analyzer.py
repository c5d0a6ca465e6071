"""Validation of connection pool settings passed to client constructors.

For each call that builds a database client the analyzer locates the
``connectionPool`` argument, reads the literal values of the recognized pool
fields and reports the ones below their minimum. Anything that cannot be read
without evaluating code (variables, calls, arithmetic) is skipped.
"""

import logging
import re
from collections.abc import Callable, Sequence
from typing import Final, assert_never

from pydantic import BaseModel, ConfigDict, Field

from poolguard.config import RuleConfig
from poolguard.models.base import SourceLocation
from poolguard.models.call_site import Argument, CallSite, NamedArgument, PositionalArgument
from poolguard.models.diagnostic import Diagnostic, DiagnosticSeverity
from poolguard.models.expressions import (
    Expression,
    LiteralExpr,
    OtherExpr,
    RecordLiteralExpr,
    UnaryExpr,
)
from poolguard.models.rules import VALIDATION_RULES, PoolKey, ValueKind, lookup_key
from poolguard.services.context import AnalysisContext

logger = logging.getLogger(__name__)

UNNECESSARY_CHARS: Final[re.Pattern[str]] = re.compile(r"[\"'\n]")


def normalize_token(raw: str) -> str:
    """Trim a key or value token and drop quoting and line breaks."""

    return UNNECESSARY_CHARS.sub("", raw.strip())


def should_analyze(
    prior_diagnostics: Sequence[Diagnostic],
    call_site: CallSite,
    is_target_constructor: Callable[[CallSite], bool],
) -> bool:
    if any(d.severity == DiagnosticSeverity.ERROR for d in prior_diagnostics):
        return False
    return is_target_constructor(call_site)


def resolve_config_argument(
    arguments: Sequence[Argument],
    param_names: Sequence[str],
    total_param_count: int,
    config_param_index: int,
) -> Expression | None:
    """Find the expression bound to the pool parameter.

    A named argument always wins. Without one, the pool is only known when
    every parameter was supplied, in which case it sits at
    ``config_param_index``.
    """

    for argument in arguments:
        if isinstance(argument, NamedArgument) and argument.name in param_names:
            return argument.value

    if len(arguments) != total_param_count:
        return None

    match arguments[config_param_index]:
        case PositionalArgument(value=value):
            return value
        case NamedArgument():
            return None
        case unexpected:
            assert_never(unexpected)


def extract_fields(config_expr: Expression) -> list[tuple[str, Expression]] | None:
    """Return ``(key, value)`` pairs of a record literal in source order.

    Returns None when the configuration is not a record literal, e.g. a
    variable or ``None``.
    """

    match config_expr:
        case RecordLiteralExpr(fields=fields):
            return [
                (normalize_token(field.key), field.value)
                for field in fields
                if field.key is not None
            ]
        case LiteralExpr() | UnaryExpr() | OtherExpr():
            return None
        case unexpected:
            assert_never(unexpected)


def read_literal_text(value_expr: Expression, default_text: str) -> str:
    match value_expr:
        case LiteralExpr(text=text):
            return normalize_token(text)
        case UnaryExpr(operator=operator, operand=LiteralExpr(text=text)):
            return normalize_token(operator + text)
        case UnaryExpr() | RecordLiteralExpr() | OtherExpr():
            # Values from variables need data-flow analysis.
            return default_text
        case unexpected:
            assert_never(unexpected)


def _parse_value(text: str, kind: ValueKind) -> int | float | None:
    try:
        match kind:
            case ValueKind.INTEGER:
                return int(text, 0)
            case ValueKind.FLOAT:
                return float(text)
            case unexpected:
                assert_never(unexpected)
    except ValueError:
        logger.debug("Cannot read %r as %s, skipping field", text, kind)
        return None


def validate(key: PoolKey, raw_value_text: str, location: SourceLocation) -> Diagnostic | None:
    rule = VALIDATION_RULES[key]
    value = _parse_value(raw_value_text, rule.value_kind)
    if value is None or value >= rule.minimum:
        return None
    return Diagnostic.create(rule.code, location)


class PoolConfigAnalyzer(BaseModel):
    """Checks the pool settings of one client construction at a time.

    The analyzer holds only its configuration, so one instance can serve
    any number of files and threads.
    """

    model_config = ConfigDict(frozen=True)

    config: RuleConfig = Field(default_factory=RuleConfig)

    def perform(self, ctx: AnalysisContext) -> None:
        call_site: CallSite = ctx.call_site
        if not should_analyze(
            ctx.prior_diagnostics(), call_site, ctx.is_target_constructor
        ):
            return

        config_expr = resolve_config_argument(
            call_site.arguments,
            self.config.pool_param_names,
            self.config.total_param_count,
            self.config.config_param_index,
        )
        if config_expr is None:
            return

        fields = extract_fields(config_expr)
        if fields is None:
            logger.debug(
                "Connection pool at %s is not a record literal", config_expr.location
            )
            return

        for name, value_expr in fields:
            key = lookup_key(name)
            if key is None:
                # Can ignore all other fields
                continue
            rule = VALIDATION_RULES[key]
            raw_value: str = read_literal_text(value_expr, rule.default_text)
            diagnostic = validate(key, raw_value, value_expr.location)
            if diagnostic is not None:
                ctx.report_diagnostic(diagnostic)
