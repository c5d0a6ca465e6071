from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import yaml

from poolguard.loaders._serialization import diagnostic_rows
from poolguard.models.diagnostic import Diagnostic

logger = logging.getLogger(__name__)


class YamlReportLoader:
    """Persist diagnostics as YAML.

    The schema mirrors the JSON report: a ``count`` and a ``diagnostics`` list.
    """

    def __init__(self, output_path: str | Path, indent: int = 2) -> None:
        self.output_path: Path = Path(output_path)
        self.indent: int = indent

    def load(self, diagnostics: Sequence[Diagnostic]) -> None:
        if self.output_path.parent and not self.output_path.parent.exists():
            self.output_path.parent.mkdir(parents=True, exist_ok=True)

        payload: dict[str, object] = {
            "count": len(diagnostics),
            "diagnostics": diagnostic_rows(diagnostics),
        }

        try:
            with self.output_path.open("w", encoding="utf-8") as f:
                yaml.safe_dump(
                    payload,
                    f,
                    allow_unicode=True,
                    sort_keys=False,
                    default_flow_style=False,
                    indent=self.indent,
                    width=4096,
                )
        except OSError:
            logger.exception("Failed to write YAML report to %s", self.output_path)
            raise
