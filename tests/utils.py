from dataclasses import dataclass, field
from pathlib import Path

import tree_sitter_python as tspython
from tree_sitter import Language, Parser, Tree

from poolguard.models import (
    Argument,
    CallSite,
    Diagnostic,
    Expression,
    LiteralExpr,
    LiteralKind,
    NamedArgument,
    OtherExpr,
    PositionalArgument,
    RecordField,
    RecordLiteralExpr,
    SourceLocation,
    UnaryExpr,
)

FAKE_PATH = Path("app.py")


def position_of(source: str, needle: str, start: int = 0) -> tuple[int, int]:
    """1-based (line, column) of the first `needle` at or after `start`."""
    index: int = source.index(needle, start)
    line: int = source.count("\n", 0, index) + 1
    column: int = index - (source.rfind("\n", 0, index) + 1) + 1
    return line, column


def parse_source(source: str) -> Tree:
    parser = Parser(Language(tspython.language()))
    return parser.parse(source.encode("utf-8"))


def loc(line: int = 1, column: int = 1) -> SourceLocation:
    return SourceLocation(
        file_path=FAKE_PATH,
        line_start=line,
        column_start=column,
        line_end=line,
        column_end=column + 1,
    )


def lit(text: str, kind: LiteralKind = LiteralKind.INTEGER, line: int = 1) -> LiteralExpr:
    return LiteralExpr(text=text, location=loc(line), literal_kind=kind)


def neg(text: str, line: int = 1) -> UnaryExpr:
    return UnaryExpr(
        text=f"-{text}", location=loc(line), operator="-", operand=lit(text, line=line)
    )


def var(name: str, line: int = 1) -> OtherExpr:
    return OtherExpr(text=name, location=loc(line), node_type="identifier")


def record(*fields: tuple[str | None, Expression]) -> RecordLiteralExpr:
    return RecordLiteralExpr(
        text="{...}",
        location=loc(),
        fields=tuple(
            RecordField(
                key=None if key is None else f'"{key}"',
                value=value,
                location=value.location,
            )
            for key, value in fields
        ),
    )


def pos(value: Expression) -> PositionalArgument:
    return PositionalArgument(value=value)


def named(name: str, value: Expression) -> NamedArgument:
    return NamedArgument(name=name, value=value)


def client_call(*arguments: Argument) -> CallSite:
    return CallSite(callee="jdbc.Client", arguments=arguments, location=loc())


@dataclass
class FakeAnalysisContext:
    """Analysis context backed by canned answers instead of a parsed file."""

    call_site: CallSite
    prior: list[Diagnostic] = field(default_factory=list)
    is_target: bool = True
    reported: list[Diagnostic] = field(default_factory=list)

    def prior_diagnostics(self) -> list[Diagnostic]:
        return self.prior

    def is_target_constructor(self, call_site: CallSite) -> bool:
        return self.is_target

    def report_diagnostic(self, diagnostic: Diagnostic) -> None:
        self.reported.append(diagnostic)
