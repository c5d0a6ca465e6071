from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import TypedDict

from poolguard.loaders._serialization import diagnostic_rows
from poolguard.models.diagnostic import Diagnostic

logger = logging.getLogger(__name__)


class ReportJSON(TypedDict):
    count: int
    diagnostics: list[dict[str, object]]


class JsonReportLoader:
    """Persist diagnostics as JSON.

    The output is a single object:
    {
      "count": 1,
      "diagnostics": [{"code": "SQL_101", "file": "app.py", "line": 3, ...}]
    }
    """

    def __init__(self, output_path: str | Path, indent: int = 2) -> None:
        """Create a JSON report loader.

        Args:
            output_path: Target file path to write the report into.
            indent: Indentation level for pretty-printing JSON.
        """
        self.output_path: Path = Path(output_path)
        self.indent: int = indent

    def load(self, diagnostics: Sequence[Diagnostic]) -> None:
        """Write diagnostics to the configured JSON file."""
        if self.output_path.parent and not self.output_path.parent.exists():
            self.output_path.parent.mkdir(parents=True, exist_ok=True)

        payload: ReportJSON = {
            "count": len(diagnostics),
            "diagnostics": diagnostic_rows(diagnostics),
        }

        try:
            with self.output_path.open("w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=self.indent)
        except OSError:
            logger.exception("Failed to write JSON report to %s", self.output_path)
            raise
