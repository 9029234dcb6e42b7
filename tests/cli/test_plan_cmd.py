"""Tests for the ``plan``, ``classpath`` and ``kinds`` commands.

Verifies:
    - A valid document plans with exit code 0 and a summary table.
    - ``--json`` and ``--output`` emit the action graph.
    - Resolution errors are all listed and exit with code 1.
    - ``classpath`` prints the resolved lists of one module.
"""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from classforge import __version__
from classforge.cli.main import cli


class TestPlanCommand:
    """Tests for ``classforge plan``."""

    def test_summary(self, runner: CliRunner, modules_file: Path) -> None:
        """A valid document prints the summary table."""
        result = runner.invoke(cli, ["plan", str(modules_file)])
        assert result.exit_code == 0, result.output
        assert "classforge Build Plan" in result.output
        assert "module variants" in result.output

    def test_json(self, runner: CliRunner, modules_file: Path) -> None:
        result = runner.invoke(cli, ["plan", str(modules_file), "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["build_root"] == "out"
        foo = next(
            m for m in data["modules"]
            if m["module"] == "foo" and m["variant"] == "android_common"
        )
        assert [a["rule"] for a in foo["actions"]] == ["javac", "combineJar"]
        assert "baz.jar" in foo["classpath"]
        assert foo["actions"][1]["inputs"][-1] == "baz.jar"

    def test_host_variant_planned(self, runner: CliRunner, modules_file: Path) -> None:
        """host_supported modules appear once per variant."""
        result = runner.invoke(cli, ["plan", str(modules_file), "--json"])
        variants = [
            m["variant"] for m in json.loads(result.output)["modules"] if m["module"] == "bar"
        ]
        assert sorted(variants) == ["android_common", "linux_common"]

    def test_build_root_override(self, runner: CliRunner, modules_file: Path) -> None:
        result = runner.invoke(
            cli, ["plan", str(modules_file), "--json", "--build-root", "elsewhere"]
        )
        assert json.loads(result.output)["build_root"] == "elsewhere"

    def test_output_file(self, runner: CliRunner, modules_file: Path, tmp_path: Path) -> None:
        """--output writes the same graph that --json prints."""
        target = tmp_path / "plan.json"
        result = runner.invoke(cli, ["plan", str(modules_file), "-o", str(target)])
        assert result.exit_code == 0, result.output
        assert "Action graph written to" in result.output
        printed = runner.invoke(cli, ["plan", str(modules_file), "--json"]).output
        assert json.loads(target.read_text()) == json.loads(printed)

    def test_jobs_gives_same_plan(self, runner: CliRunner, modules_file: Path) -> None:
        sequential = runner.invoke(cli, ["plan", str(modules_file), "--json"]).output
        parallel = runner.invoke(cli, ["plan", str(modules_file), "--json", "-j", "4"]).output
        assert sequential == parallel

    def test_errors_exit_1(self, runner: CliRunner, broken_file: Path) -> None:
        """Every resolution error is listed before exiting."""
        result = runner.invoke(cli, ["plan", str(broken_file)])
        assert result.exit_code == 1
        assert "2 errors" in result.output
        assert "missing" in result.output
        assert "sdk_v99" in result.output

    def test_invalid_yaml(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("modules: [unclosed\n", encoding="utf-8")
        result = runner.invoke(cli, ["plan", str(path)])
        assert result.exit_code == 1
        assert "Invalid YAML" in result.output

    def test_unknown_kind(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "kind.yaml"
        path.write_text("- {kind: cc_library, name: x}\n", encoding="utf-8")
        result = runner.invoke(cli, ["plan", str(path)])
        assert result.exit_code == 1
        assert "cc_library" in result.output

    def test_bad_config_key(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "cfg.yaml"
        path.write_text("config: {bogus: 1}\nmodules: []\n", encoding="utf-8")
        result = runner.invoke(cli, ["plan", str(path)])
        assert result.exit_code == 1
        assert "bogus" in result.output

    def test_empty_document(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        result = runner.invoke(cli, ["plan", str(path)])
        assert result.exit_code == 0
        assert "No modules to plan" in result.output

    def test_missing_file_is_usage_error(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["plan", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 2


class TestClasspathCommand:
    """Tests for ``classforge classpath``."""

    def test_prints_sections(self, runner: CliRunner, modules_file: Path) -> None:
        result = runner.invoke(cli, ["classpath", str(modules_file), "foo"])
        assert result.exit_code == 0, result.output
        for section in ("bootclasspath", "classpath", "implicits", "artifacts"):
            assert section in result.output
        assert "baz.jar" in result.output

    def test_host_variant(self, runner: CliRunner, modules_file: Path) -> None:
        """Host variants have empty standard-library lists."""
        result = runner.invoke(
            cli, ["classpath", str(modules_file), "bar", "--variant", "linux_common"]
        )
        assert result.exit_code == 0, result.output
        assert "(empty)" in result.output

    def test_prebuilt_shows_artifacts(self, runner: CliRunner, modules_file: Path) -> None:
        result = runner.invoke(cli, ["classpath", str(modules_file), "baz"])
        assert result.exit_code == 0
        assert "baz.jar" in result.output

    def test_unknown_module(self, runner: CliRunner, modules_file: Path) -> None:
        result = runner.invoke(cli, ["classpath", str(modules_file), "nope"])
        assert result.exit_code == 1
        assert "No module 'nope'" in result.output


class TestMiscCommands:
    """Tests for ``kinds`` and the group options."""

    def test_kinds(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["kinds"])
        assert result.exit_code == 0
        for tag in ("java_library", "java_library_host", "java_import", "java_defaults"):
            assert tag in result.output

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])
        for command in ("plan", "classpath", "kinds"):
            assert command in result.output
