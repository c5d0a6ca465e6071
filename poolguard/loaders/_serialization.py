from collections.abc import Sequence

from poolguard.models.diagnostic import Diagnostic


def diagnostic_rows(diagnostics: Sequence[Diagnostic]) -> list[dict[str, object]]:
    """Flatten diagnostics into plain rows shared by the JSON and YAML reports."""

    rows: list[dict[str, object]] = []
    for diagnostic in diagnostics:
        location = diagnostic.location
        rows.append(
            {
                "code": diagnostic.code,
                "message": diagnostic.message,
                "severity": str(diagnostic.severity),
                "file": location.file_path.as_posix(),
                "line": location.line_start,
                "column": location.column_start,
                "end_line": location.line_end,
                "end_column": location.column_end,
            }
        )
    return rows


def format_text(diagnostic: Diagnostic) -> str:
    """Render a diagnostic as ``<path>:<line>:<col>: <code> <message>``."""

    return f"{diagnostic.location}: {diagnostic.code} {diagnostic.message}"
