import logging
import warnings
from collections.abc import Iterator
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, PrivateAttr
from tree_sitter import Node as TSNode
from tree_sitter import Tree

from poolguard.models.base import SourceLocation
from poolguard.models.call_site import CallSite
from poolguard.models.diagnostic import Diagnostic, DiagnosticCode
from poolguard.utils.treesitter_helpers import (
    iter_nodes,
    location_for,
    node_text,
    normalize_name,
)

logger = logging.getLogger(__name__)

IMPORT_TYPES: Final[set[str]] = {"import_statement", "import_from_statement"}


class SemanticModel(BaseModel):
    """File-level facts the rules rely on: syntax errors and imported names.

    Imports are collected from the whole file regardless of the scope they
    appear in. When `source` is given, a file the grammar accepts is
    also compiled, since CPython rejects some calls Tree-sitter parses
    cleanly (a positional argument after a keyword one, a repeated keyword).
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    path: Path
    tree: Tree
    target_constructors: frozenset[str]
    source: bytes | None = None

    __imports: dict[str, str] = PrivateAttr(default_factory=dict)
    __diagnostics: list[Diagnostic] = PrivateAttr(default_factory=list)

    def model_post_init(self, context: Any) -> None:
        root: TSNode = self.tree.root_node
        if root.has_error:
            self.__diagnostics = [
                Diagnostic.create(DiagnosticCode.SYNTAX_ERROR, location_for(node, self.path))
                for node in self.__iter_error_nodes(root)
            ]
        elif self.source is not None:
            self.__diagnostics = self.__compile_errors(self.source)
        self.__collect_imports(root)
        return super().model_post_init(context)

    def __iter_error_nodes(self, root: TSNode) -> Iterator[TSNode]:
        def descend(node: TSNode) -> bool:
            return node.has_error and not (node.is_error or node.is_missing)

        for node in iter_nodes(root, descend):
            if node.is_error or node.is_missing:
                yield node

    def __compile_errors(self, source: bytes) -> list[Diagnostic]:
        try:
            with warnings.catch_warnings():
                warnings.simplefilter("ignore")
                compile(source, str(self.path), "exec", dont_inherit=True)
        except SyntaxError as e:
            logger.debug("%s does not compile: %s", self.path, e)
            return [Diagnostic.create(DiagnosticCode.SYNTAX_ERROR, self.__location_of(e))]
        return []

    def __location_of(self, error: SyntaxError) -> SourceLocation:
        line: int = error.lineno or 1
        column: int = max(error.offset or 1, 1)
        line_end: int = max(error.end_lineno or line, line)
        column_end: int = max(error.end_offset or column, 1)
        return SourceLocation(
            file_path=self.path,
            line_start=line,
            column_start=column,
            line_end=line_end,
            column_end=column_end,
        )

    def __bind(self, local_name: str, qualified_name: str) -> None:
        self.__imports[normalize_name(local_name)] = normalize_name(qualified_name)

    def __collect_imports(self, root: TSNode) -> None:
        for node in iter_nodes(root, lambda n: n.type not in IMPORT_TYPES):
            if node.type == "import_statement":
                self.__collect_import(node)
            elif node.type == "import_from_statement":
                self.__collect_import_from(node)

    def __collect_import(self, node: TSNode) -> None:
        for name_node in node.children_by_field_name("name"):
            if name_node.type == "aliased_import":
                original = name_node.child_by_field_name("name")
                alias = name_node.child_by_field_name("alias")
                if original is not None and alias is not None:
                    self.__bind(node_text(alias), node_text(original))
                continue
            # `import a.b` binds `a`
            head = node_text(name_node).split(".")[0]
            self.__bind(head, head)

    def __collect_import_from(self, node: TSNode) -> None:
        module_node = node.child_by_field_name("module_name")
        if module_node is None:
            return
        module: str = normalize_name(node_text(module_node))
        separator: str = "" if module.endswith(".") else "."
        for name_node in node.children_by_field_name("name"):
            if name_node.type == "aliased_import":
                original = name_node.child_by_field_name("name")
                alias = name_node.child_by_field_name("alias")
                if original is not None and alias is not None:
                    self.__bind(node_text(alias), f"{module}{separator}{node_text(original)}")
                continue
            name: str = node_text(name_node)
            self.__bind(name.split(".")[0], f"{module}{separator}{name}")

    @property
    def imports(self) -> dict[str, str]:
        return dict(self.__imports)

    def diagnostics(self) -> list[Diagnostic]:
        return list(self.__diagnostics)

    def resolve_callee(self, callee: str) -> str:
        """Expand the first segment of a dotted callee through the file's imports."""

        name = normalize_name(callee)
        head, dot, rest = name.partition(".")
        qualified = self.__imports.get(head)
        if qualified is None:
            return name
        return f"{qualified}{dot}{rest}"

    def is_target_constructor(self, call_site: CallSite) -> bool:
        return self.resolve_callee(call_site.callee) in self.target_constructors
