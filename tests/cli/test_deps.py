"""Tests for tsdet deps command."""

from __future__ import annotations

import json
from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from tsdetective.cli.main import cli

runner = CliRunner()


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Empty project directory used as the working directory."""
    monkeypatch.chdir(tmp_path)
    with patch("tsdetective.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "global.yaml"):
        yield tmp_path


@pytest.fixture
def mixed_source(project: Path) -> Path:
    path = project / "app.ts"
    path.write_text(
        'import type { T } from "./types";\n'
        'import { a } from "./a";\n'
        'const b = require("./b");\n'
        'const c = await import("./c");\n'
    )
    return path


class TestDepsCommand:
    """Tests for deps command."""

    def test_given_file_when_deps_then_prints_specifiers(self, mixed_source: Path) -> None:
        """Specifiers printed one per line in document order."""
        result = runner.invoke(cli, ["deps", str(mixed_source)])

        assert result.exit_code == 0, result.output
        assert result.stdout.splitlines() == ["./types", "./a", "./c"]

    def test_given_flags_when_deps_then_options_applied(self, mixed_source: Path) -> None:
        """Command-line flags change the extraction options."""
        result = runner.invoke(
            cli,
            [
                "deps",
                "--skip-type-imports",
                "--skip-async-imports",
                "--mixed-imports",
                str(mixed_source),
            ],
        )

        assert result.exit_code == 0, result.output
        assert result.stdout.splitlines() == ["./a", "./b"]

    def test_given_json_flag_when_deps_then_prints_records(self, mixed_source: Path) -> None:
        """JSON output maps each file to its records."""
        result = runner.invoke(cli, ["deps", "--json", str(mixed_source)])

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload[str(mixed_source)] == [
            {"specifier": "./types", "importedNames": ["T"]},
            {"specifier": "./a", "importedNames": ["a"]},
            {"specifier": "./c"},
        ]

    def test_given_verbose_json_when_deps_then_logs_stay_off_stdout(
        self, mixed_source: Path
    ) -> None:
        """Debug logging goes to stderr and leaves the JSON payload intact."""
        result = runner.invoke(cli, ["-v", "deps", "--json", str(mixed_source)])

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert [r["specifier"] for r in payload[str(mixed_source)]] == ["./types", "./a", "./c"]
        assert "dependencies extracted" in result.stderr

    def test_given_multiple_files_when_deps_then_prefixes_names(self, project: Path) -> None:
        """Each line names its file when more than one file is given."""
        first = project / "one.js"
        second = project / "two.js"
        first.write_text('import "./x";\n')
        second.write_text('export * from "./y";\n')

        result = runner.invoke(cli, ["deps", "--parser", "javascript", str(first), str(second)])

        assert result.exit_code == 0, result.output
        assert result.stdout.splitlines() == [f"{first}: ./x", f"{second}: ./y"]

    def test_given_tsx_file_when_deps_then_jsx_enabled(self, project: Path) -> None:
        """A .tsx file is parsed with JSX support without --jsx."""
        path = project / "view.tsx"
        path.write_text('import React from "react";\nconst el = <div className="x" />;\n')

        result = runner.invoke(cli, ["deps", str(path)])

        assert result.exit_code == 0, result.output
        assert result.stdout.splitlines() == ["react"]


class TestDepsFailures:
    """Tests for error reporting."""

    def test_given_syntax_error_when_deps_then_exit_one(self, project: Path) -> None:
        """A file that fails to parse yields exit code 1."""
        path = project / "broken.ts"
        path.write_text("import { from ;\n")

        result = runner.invoke(cli, ["deps", str(path)])

        assert result.exit_code == 1
        assert "broken.ts" in result.stderr
        assert result.stdout == ""

    def test_given_one_bad_file_when_deps_then_others_still_listed(self, project: Path) -> None:
        """Good files are still reported when another file fails."""
        good = project / "good.ts"
        bad = project / "bad.ts"
        good.write_text('import "./ok";\n')
        bad.write_text("const = ;\n")

        result = runner.invoke(cli, ["deps", str(good), str(bad)])

        assert result.exit_code == 1
        assert result.stdout.splitlines() == [f"{good}: ./ok"]
        assert "bad.ts" in result.stderr

    def test_given_missing_file_when_deps_then_usage_error(self, project: Path) -> None:
        """Nonexistent paths are rejected by click."""
        result = runner.invoke(cli, ["deps", str(project / "nope.ts")])

        assert result.exit_code == 2


class TestDepsConfig:
    """Tests for config defaults."""

    def test_given_project_config_when_deps_then_defaults_used(
        self, project: Path, mixed_source: Path
    ) -> None:
        """The extract section of the project config supplies defaults."""
        config_dir = project / ".tsdetective"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("extract:\n  mixed_imports: true\n")

        result = runner.invoke(cli, ["deps", str(mixed_source)])

        assert result.exit_code == 0, result.output
        assert "./b" in result.stdout.splitlines()

    def test_given_flag_when_config_set_then_flag_wins(
        self, project: Path, mixed_source: Path
    ) -> None:
        """An explicit --no- flag overrides the configured default."""
        config_dir = project / ".tsdetective"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("extract:\n  mixed_imports: true\n")

        result = runner.invoke(cli, ["deps", "--no-mixed-imports", str(mixed_source)])

        assert result.exit_code == 0, result.output
        assert "./b" not in result.stdout.splitlines()

    def test_given_invalid_config_when_deps_then_click_error(
        self, project: Path, mixed_source: Path
    ) -> None:
        """A bad config value is reported as a CLI error."""
        config_dir = project / ".tsdetective"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("extract:\n  parser: babel\n")

        result = runner.invoke(cli, ["deps", str(mixed_source)])

        assert result.exit_code == 1
        assert "CONFIG_INVALID_VALUE" in result.stderr


class TestVersion:
    def test_version(self) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "tsdet" in result.stdout
