from pathlib import Path

import pytest

from poolguard.models import DiagnosticSeverity
from poolguard.services.ts_parser import CallSiteBuilder, SemanticModel
from tests.utils import parse_source

PATH = Path("app.py")
TARGETS = frozenset({"jdbc.Client"})


def _model(source: str) -> SemanticModel:
    return SemanticModel(path=PATH, tree=parse_source(source), target_constructors=TARGETS)


def test_semantic_model__collects_import_bindings() -> None:
    model = _model(
        "import os.path\n"
        "import jdbc as j\n"
        "from jdbc import Client as DbClient\n"
        "from sql.drivers import jdbc\n"
        "from . import local\n"
        "def f():\n"
        "    from jdbc import Client\n"
    )

    assert model.imports == {
        "os": "os",
        "j": "jdbc",
        "DbClient": "jdbc.Client",
        "jdbc": "sql.drivers.jdbc",
        "local": ".local",
        "Client": "jdbc.Client",
    }


@pytest.mark.parametrize(
    ("source", "callee", "expected"),
    [
        ("import jdbc\n", "jdbc.Client", "jdbc.Client"),
        ("import jdbc as j\n", "j.Client", "jdbc.Client"),
        ("from jdbc import Client\n", "Client", "jdbc.Client"),
        ("from jdbc import Client as C\n", "C", "jdbc.Client"),
        ("", "Client", "Client"),
        ("import jdbc\n", "jdbc . Client", "jdbc.Client"),
    ],
)
def test_resolve_callee(source: str, callee: str, expected: str) -> None:
    assert _model(source).resolve_callee(callee) == expected


def test_is_target_constructor__through_alias() -> None:
    source = "from jdbc import Client as DbClient\nDbClient(url)\nClient(url)\n"
    model = _model(source)
    call_sites = CallSiteBuilder(path=PATH).build(model.tree.root_node)

    assert [model.is_target_constructor(c) for c in call_sites] == [True, False]


def test_diagnostics__on_valid_source__is_empty() -> None:
    assert _model("import jdbc\njdbc.Client(url)\n").diagnostics() == []


def test_diagnostics__on_syntax_error__reports_error_severity() -> None:
    diagnostics = _model("def broken(:\n    pass\n").diagnostics()

    assert diagnostics
    assert all(d.severity == DiagnosticSeverity.ERROR for d in diagnostics)
    assert all(d.code == "SYNTAX_ERROR" for d in diagnostics)


@pytest.mark.parametrize(
    "source",
    [
        "import jdbc\njdbc.Client(url, connectionPool={}, user)\n",
        "import jdbc\njdbc.Client(url, connectionPool={}, connectionPool={})\n",
    ],
)
def test_diagnostics__on_source_rejected_by_compiler__reports_error(source: str) -> None:
    tree = parse_source(source)
    model = SemanticModel(
        path=PATH, tree=tree, source=source.encode("utf-8"), target_constructors=TARGETS
    )

    assert not tree.root_node.has_error
    (diagnostic,) = model.diagnostics()
    assert diagnostic.code == "SYNTAX_ERROR"
    assert diagnostic.severity == DiagnosticSeverity.ERROR
    assert diagnostic.location.line_start == 2


def test_diagnostics__without_source__only_reports_tree_errors() -> None:
    source = "import jdbc\njdbc.Client(url, connectionPool={}, user)\n"

    assert _model(source).diagnostics() == []


def test_semantic_model__on_deeply_nested_expression__walks_without_recursion() -> None:
    source = "import jdbc as j\nx = " + " + ".join(["1"] * 3000) + "\n"

    model = _model(source)

    assert model.imports == {"j": "jdbc"}
    assert model.diagnostics() == []
