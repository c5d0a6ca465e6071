import logging
import os
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

import tree_sitter_python as tspython
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr
from tree_sitter import Language, Parser

from poolguard.config import RuleConfig
from poolguard.models.call_site import CallSite
from poolguard.models.diagnostic import Diagnostic
from poolguard.services.pool_analyzer import PoolConfigAnalyzer
from poolguard.services.reporter import DiagnosticCollector
from poolguard.services.ts_parser.call_site_builder import CallSiteBuilder
from poolguard.services.ts_parser.semantic_model import SemanticModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileAnalysisContext:
    """Analysis context for one call site of a parsed file."""

    call_site: CallSite
    semantic_model: SemanticModel
    collector: DiagnosticCollector

    def prior_diagnostics(self) -> Sequence[Diagnostic]:
        return self.semantic_model.diagnostics()

    def is_target_constructor(self, call_site: CallSite) -> bool:
        return self.semantic_model.is_target_constructor(call_site)

    def report_diagnostic(self, diagnostic: Diagnostic) -> None:
        self.collector.report(diagnostic)


class FileScanner(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    path: Path
    root: Path | None = None
    config: RuleConfig = Field(default_factory=RuleConfig)
    __parser: Parser = PrivateAttr(default_factory=lambda: Parser(Language(tspython.language())))
    __display_path: Path = PrivateAttr()

    def model_post_init(self, context: Any) -> None:
        self.__display_path = self._display_path_for(self.path, self.path.resolve())
        return super().model_post_init(context)

    def _display_path_for(self, raw_path: Path, absolute_path: Path) -> Path:
        """Normalize file paths relative to the scan root.

        Args:
            raw_path: Original path provided to the scanner.
            absolute_path: Absolute file system path for the source file.

        Returns:
            Path to store in diagnostic locations.
        """

        if self.root is None:
            if not raw_path.is_absolute():
                return Path(raw_path.as_posix())
            return absolute_path

        root_path: Path = self.root.resolve()
        try:
            relative_path: Path = absolute_path.relative_to(root_path)
            return Path(relative_path.as_posix())
        except ValueError:
            rel_str: str = os.path.relpath(absolute_path.as_posix(), root_path.as_posix())
            return Path(rel_str)

    def scan(self, collector: DiagnosticCollector | None = None) -> list[Diagnostic]:
        """Run the pool checks over every call in the file.

        Args:
            collector: Reporting channel to append to; a private one is used
                when omitted.

        Returns:
            Diagnostics reported for this file, in source order.
        """

        source: bytes = self.path.resolve().read_bytes()
        # Sources must be UTF-8
        source.decode("utf-8")
        tree = self.__parser.parse(source)

        semantic_model = SemanticModel(
            path=self.__display_path,
            tree=tree,
            source=source,
            target_constructors=frozenset(self.config.target_constructors),
        )
        if semantic_model.diagnostics():
            logger.warning(
                "Skipping pool checks for %s: file has syntax errors", self.__display_path
            )

        file_collector = DiagnosticCollector()
        analyzer = PoolConfigAnalyzer(config=self.config)
        call_sites = CallSiteBuilder(path=self.__display_path).build(tree.root_node)
        for call_site in call_sites:
            analyzer.perform(
                FileAnalysisContext(
                    call_site=call_site,
                    semantic_model=semantic_model,
                    collector=file_collector,
                )
            )

        diagnostics = file_collector.diagnostics
        if collector is not None:
            for diagnostic in diagnostics:
                collector.report(diagnostic)
        return diagnostics


class DirectoryScanner(BaseModel):
    """Scan all Python files under a directory.

    Files are scanned independently; an import in one module does not make a
    client class visible in another.
    """

    root: Path
    config: RuleConfig = Field(default_factory=RuleConfig)
    recursive: bool = True
    follow_symlinks: bool = False
    exclude_dir_names: set[str] = Field(
        default_factory=lambda: {
            "__pycache__",
            ".git",
            ".venv",
            "venv",
            ".mypy_cache",
            ".pytest_cache",
        }
    )
    on_error: Literal["raise", "skip"] = "raise"

    def scan(self, collector: DiagnosticCollector | None = None) -> list[Diagnostic]:
        """Scan every discovered file and merge the results in path order.

        Raises:
            ValueError: If `root` does not exist or is not a directory.
            Exception: Re-raises any per-file failure if `on_error="raise"`.
        """

        diagnostics: list[Diagnostic] = []
        for file_path in self._collect_python_files():
            try:
                file_diagnostics = FileScanner(
                    path=file_path, root=self.root, config=self.config
                ).scan(collector)
            except Exception:
                if self.on_error == "raise":
                    raise
                logger.exception("Failed to scan Python file: %s", file_path)
                continue
            diagnostics.extend(file_diagnostics)
        return diagnostics

    def _collect_python_files(self) -> list[Path]:
        if not self.root.exists():
            raise ValueError(f"Root path does not exist: {self.root}")
        if not self.root.is_dir():
            raise ValueError(f"Root path must be a directory: {self.root}")

        files: list[Path] = []

        if self.recursive:
            for dirpath, dirnames, filenames in os.walk(
                self.root, followlinks=self.follow_symlinks
            ):
                dirnames[:] = [name for name in dirnames if name not in self.exclude_dir_names]
                for filename in filenames:
                    if not filename.endswith(".py"):
                        continue
                    candidate = Path(dirpath) / filename
                    if candidate.is_file():
                        files.append(candidate)
        else:
            for candidate in self.root.iterdir():
                if candidate.is_file() and candidate.name.endswith(".py"):
                    files.append(candidate)

        return sorted(files)


def scan_paths(
    paths: Iterable[Path],
    config: RuleConfig | None = None,
    *,
    on_error: Literal["raise", "skip"] = "raise",
    collector: DiagnosticCollector | None = None,
) -> list[Diagnostic]:
    """Scan a mix of files and directories.

    Raises:
        ValueError: If a path cannot be resolved or does not exist.
    """

    cfg = config or RuleConfig()
    diagnostics: list[Diagnostic] = []
    for path in paths:
        try:
            resolved_path = path.resolve()
        except (OSError, RuntimeError) as e:
            raise ValueError(f"Invalid path: {path} - {e}") from e

        if resolved_path.is_dir():
            diagnostics.extend(
                DirectoryScanner(root=path, config=cfg, on_error=on_error).scan(collector)
            )
        elif resolved_path.is_file():
            diagnostics.extend(FileScanner(path=path, config=cfg).scan(collector))
        else:
            raise ValueError(f"Path does not exist: {path}")
    return diagnostics
