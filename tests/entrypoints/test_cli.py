from pathlib import Path

from typer.testing import CliRunner

from poolguard.entrypoints.cli import app
from tests.consts import COMPLIANT_FILE, POOLS_DATA_DIR, VIOLATIONS_FILE

runner = CliRunner()


def test_check__with_violations__prints_and_fails() -> None:
    result = runner.invoke(app, ["check", str(VIOLATIONS_FILE)])

    assert result.exit_code == 1
    assert "SQL_101" in result.stdout
    assert "SQL_102" in result.stdout
    assert "SQL_103" in result.stdout


def test_check__exit_zero() -> None:
    result = runner.invoke(app, ["check", "--exit-zero", str(VIOLATIONS_FILE)])

    assert result.exit_code == 0


def test_check__on_compliant_file__succeeds() -> None:
    result = runner.invoke(app, ["check", str(COMPLIANT_FILE)])

    assert result.exit_code == 0
    assert "SQL_" not in result.stdout


def test_check__with_other_target__ignores_jdbc() -> None:
    result = runner.invoke(app, ["check", "--target", "other.Client", str(VIOLATIONS_FILE)])

    assert result.exit_code == 0


def test_check__json_report(tmp_path: Path) -> None:
    out = tmp_path / "report.json"

    result = runner.invoke(
        app, ["check", "--format", "json", "--output", str(out), str(POOLS_DATA_DIR)]
    )

    assert result.exit_code == 1
    assert out.exists()
    assert str(out) in result.stdout


def test_rules__lists_every_rule() -> None:
    result = runner.invoke(app, ["rules"])

    assert result.exit_code == 0
    for code in ("SQL_101", "SQL_102", "SQL_103"):
        assert code in result.stdout
    assert "maxConnectionLifeTime (float) >= 30" in result.stdout


def test_check__text_report_with_output__writes_file(tmp_path: Path) -> None:
    out = tmp_path / "report.txt"

    result = runner.invoke(app, ["check", "--output", str(out), str(VIOLATIONS_FILE)])

    assert result.exit_code == 1
    assert "SQL_101" not in result.stdout
    lines = out.read_text(encoding="utf-8").splitlines()
    assert [line.split(": ", 1)[1].split(" ", 1)[0] for line in lines] == [
        "SQL_101",
        "SQL_102",
        "SQL_103",
    ]
