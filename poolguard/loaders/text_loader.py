from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from poolguard.loaders._serialization import format_text
from poolguard.models.diagnostic import Diagnostic

logger = logging.getLogger(__name__)


class TextReportLoader:
    """Persist diagnostics as flake8-style lines, one per diagnostic."""

    def __init__(self, output_path: str | Path) -> None:
        self.output_path: Path = Path(output_path)

    def load(self, diagnostics: Sequence[Diagnostic]) -> None:
        if self.output_path.parent and not self.output_path.parent.exists():
            self.output_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with self.output_path.open("w", encoding="utf-8") as f:
                for diagnostic in diagnostics:
                    f.write(format_text(diagnostic) + "\n")
        except OSError:
            logger.exception("Failed to write text report to %s", self.output_path)
            raise
