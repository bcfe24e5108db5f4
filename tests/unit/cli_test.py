"""Tests for the jsstyle command line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from jsstyle.cli.app import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)


@pytest.mark.parametrize(
    "args",
    [
        [],
        ["check"],
        ["rules"],
        ["watch"],
        ["serve"],
        ["serve", "api"],
        ["serve", "mcp"],
    ],
    ids=["root", "check", "rules", "watch", "serve", "serve-api", "serve-mcp"],
)
def test_short_help_flag(args: list[str]) -> None:
    result = runner.invoke(app, [*args, "-h"])
    assert result.exit_code == 0
    assert "Usage" in result.output


class TestCheckCode:
    def test_clean_snippet(self) -> None:
        result = runner.invoke(app, ["check", "--code", "const answer = 42;\n"])
        assert result.exit_code == 0
        assert "No problems found in 1 file." in result.output

    def test_snippet_with_errors(self) -> None:
        result = runner.invoke(app, ["check", "--code", 'const a = "x";\n'])
        assert result.exit_code == 1
        assert "Strings must use singlequote." in result.output
        assert "1 problem (1 error, 0 warnings)" in result.output

    def test_select_and_ignore(self) -> None:
        code = 'const a = "x"\n'
        assert runner.invoke(app, ["check", "--code", code, "--select", "eqeqeq"]).exit_code == 0
        assert runner.invoke(app, ["check", "--code", code, "--ignore", "quotes", "--ignore", "semi"]).exit_code == 0
        assert runner.invoke(app, ["check", "--code", code, "--ignore", "quotes"]).exit_code == 1

    def test_unknown_rule(self) -> None:
        result = runner.invoke(app, ["check", "--code", "a();\n", "--select", "nope"])
        assert result.exit_code == 2
        assert "Unknown rule 'nope'" in result.output

    def test_verbose_flag_on_root(self) -> None:
        result = runner.invoke(app, ["-vv", "check", "--code", "a();\n"])
        assert result.exit_code == 0


class TestCheckPaths:
    def test_defaults_to_current_directory(self, tmp_path: Path) -> None:
        (tmp_path / "app.js").write_text("const a = 1\n")
        result = runner.invoke(app, ["check", "--format", "json"])
        assert result.exit_code == 1
        payload = json.loads(result.stdout)
        assert payload["error_count"] == 1
        assert payload["files"][0]["path"].endswith("app.js")
        assert payload["files"][0]["violations"][0]["rule_id"] == "semi"

    def test_table_format(self, tmp_path: Path) -> None:
        (tmp_path / "app.js").write_text("a();\n")
        result = runner.invoke(app, ["check", str(tmp_path), "-f", "table"])
        assert result.exit_code == 0
        assert "(0 rows)" in result.output

    def test_missing_path(self) -> None:
        result = runner.invoke(app, ["check", "missing.js"])
        assert result.exit_code == 2
        assert "Path not found" in result.output

    def test_unknown_format(self) -> None:
        result = runner.invoke(app, ["check", "--code", "a();\n", "--format", "xml"])
        assert result.exit_code == 2
        assert "Unknown output format" in result.output

    def test_config_option(self, tmp_path: Path) -> None:
        config = tmp_path / "strict.toml"
        config.write_text('[quotes]\nprefer = "double"\n')
        result = runner.invoke(app, ["check", "--code", 'const a = "x";\n', "--config", str(config)])
        assert result.exit_code == 0

    def test_config_discovered_from_cwd(self, tmp_path: Path) -> None:
        (tmp_path / "jsstyle.toml").write_text('[severity]\nsemi = "warning"\n')
        (tmp_path / "app.js").write_text("const a = 1\n")
        result = runner.invoke(app, ["check"])
        assert result.exit_code == 0
        assert "1 problem (0 errors, 1 warning)" in result.output

    def test_invalid_config(self, tmp_path: Path) -> None:
        (tmp_path / "jsstyle.toml").write_text("indent = 4\n")
        result = runner.invoke(app, ["check", "--code", "a();\n"])
        assert result.exit_code == 2
        assert "Invalid configuration" in result.output


def test_rules_command() -> None:
    result = runner.invoke(app, ["rules"])
    assert result.exit_code == 0
    for rule_id in ("semi", "quotes", "indent", "naming", "eqeqeq", "syntax-error"):
        assert rule_id in result.output


def test_watch_missing_directory() -> None:
    result = runner.invoke(app, ["watch", "missing"])
    assert result.exit_code == 2
    assert "Path not found" in result.output
