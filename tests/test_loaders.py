import json
from pathlib import Path
from typing import Any

import yaml

from poolguard.loaders import JsonReportLoader, TextReportLoader, YamlReportLoader, format_text
from poolguard.services.scanner import FileScanner
from tests.consts import VIOLATIONS_FILE


def test_json_loader_writes_file(tmp_path: Path):
    diagnostics = FileScanner(path=VIOLATIONS_FILE, root=VIOLATIONS_FILE.parent).scan()

    out = tmp_path / "reports" / "pool.json"
    JsonReportLoader(out).load(diagnostics)

    assert out.exists(), "Output JSON file should be created"
    raw_obj: Any = json.loads(out.read_text(encoding="utf-8"))
    assert raw_obj["count"] == 3
    assert [row["code"] for row in raw_obj["diagnostics"]] == ["SQL_101", "SQL_102", "SQL_103"]
    first = raw_obj["diagnostics"][0]
    assert first["file"] == "violations.py"
    assert first["severity"] == "error"
    assert first["message"] == "invalid value: expected value is greater than one"
    assert {"line", "column", "end_line", "end_column"} <= first.keys()


def test_yaml_loader_writes_file(tmp_path: Path):
    diagnostics = FileScanner(path=VIOLATIONS_FILE, root=VIOLATIONS_FILE.parent).scan()

    out = tmp_path / "pool.yaml"
    YamlReportLoader(out).load(diagnostics)

    raw_obj: Any = yaml.safe_load(out.read_text(encoding="utf-8"))
    assert raw_obj["count"] == 3
    assert [row["code"] for row in raw_obj["diagnostics"]] == ["SQL_101", "SQL_102", "SQL_103"]


def test_yaml_loader_writes_empty_report(tmp_path: Path):
    out = tmp_path / "empty.yaml"
    YamlReportLoader(out).load([])

    assert yaml.safe_load(out.read_text(encoding="utf-8")) == {"count": 0, "diagnostics": []}


def test_format_text_uses_flake8_layout():
    (diagnostic, *_rest) = FileScanner(
        path=VIOLATIONS_FILE, root=VIOLATIONS_FILE.parent
    ).scan()

    line = format_text(diagnostic)

    assert line.startswith("violations.py:")
    assert line.endswith(": SQL_101 invalid value: expected value is greater than one")


def test_text_loader_writes_one_line_per_diagnostic(tmp_path: Path):
    diagnostics = FileScanner(path=VIOLATIONS_FILE, root=VIOLATIONS_FILE.parent).scan()

    out = tmp_path / "reports" / "pool.txt"
    TextReportLoader(out).load(diagnostics)

    assert out.read_text(encoding="utf-8").splitlines() == [format_text(d) for d in diagnostics]
