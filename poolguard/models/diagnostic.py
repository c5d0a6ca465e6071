from enum import Enum, StrEnum

from pydantic import BaseModel, ConfigDict, Field

from poolguard.models.base import SourceLocation


class DiagnosticSeverity(StrEnum):
    """Severity levels for diagnostics."""

    ERROR = "error"
    WARNING = "warning"
    HINT = "hint"


class DiagnosticCode(Enum):
    """Diagnostics this project can produce, with their fixed message and severity."""

    SQL_101 = (
        "SQL_101",
        "invalid value: expected value is greater than one",
        DiagnosticSeverity.ERROR,
    )
    SQL_102 = (
        "SQL_102",
        "invalid value: expected value is greater than zero",
        DiagnosticSeverity.ERROR,
    )
    SQL_103 = (
        "SQL_103",
        "invalid value: expected value is greater than or equal to 30",
        DiagnosticSeverity.ERROR,
    )
    SYNTAX_ERROR = ("SYNTAX_ERROR", "invalid syntax", DiagnosticSeverity.ERROR)

    def __init__(self, code: str, message: str, severity: DiagnosticSeverity) -> None:
        self.code = code
        self.message = message
        self.severity = severity


class Diagnostic(BaseModel):
    """A single finding anchored at a source location."""

    model_config = ConfigDict(frozen=True)

    code: str = Field(..., description="Stable rule code, e.g. SQL_101")
    message: str = Field(..., description="Human-readable description of the issue")
    severity: DiagnosticSeverity
    location: SourceLocation

    @classmethod
    def create(cls, code: DiagnosticCode, location: SourceLocation) -> "Diagnostic":
        return cls(
            code=code.code,
            message=code.message,
            severity=code.severity,
            location=location,
        )
