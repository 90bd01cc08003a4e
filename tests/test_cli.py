"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from tern2dts.cli import main
from tern2dts.utils.file_handlers import save_json


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def source_file(temp_dir, sample_document):
    """Sample document written to disk."""
    path = temp_dir / "scriptable.json"
    save_json(sample_document, path)
    return path


class TestBuildCommand:
    """Tests for `tern2dts build`."""

    def test_build_to_file(self, runner, source_file, temp_dir):
        output = temp_dir / "dist" / "scriptable.d.ts"
        lint = temp_dir / ".eslintrc.json"
        result = runner.invoke(main, [
            "build", str(source_file), "-o", str(output), "--lint-config", str(lint),
        ])
        assert result.exit_code == 0, result.output
        text = output.read_text(encoding="utf-8")
        assert "declare class Alert {" in text
        assert "declare function log(message: any): void" in text
        assert json.loads(lint.read_text(encoding="utf-8"))["globals"]["await"] == "readonly"

    def test_build_to_stdout(self, runner, source_file):
        result = runner.invoke(main, ["build", str(source_file)])
        assert result.exit_code == 0
        assert "declare var console: {" in result.output

    def test_build_with_config_overlay(self, runner, source_file, temp_dir):
        config = temp_dir / "config.json"
        save_json({"header": "// custom\n", "globals": {}}, config)
        result = runner.invoke(main, ["build", str(source_file), "--config", str(config)])
        assert result.exit_code == 0
        assert "// custom\n" in result.output
        assert "iOS-Scriptable" not in result.output
        assert "declare function log" not in result.output

    def test_fatal_error_writes_nothing(self, runner, temp_dir, sample_document):
        sample_document["Alert"]["title"]["!scriptable.description"] = "<p>on the following form:</p>"
        source = temp_dir / "broken.json"
        save_json(sample_document, source)
        output = temp_dir / "out.d.ts"
        result = runner.invoke(main, ["build", str(source), "-o", str(output)])
        assert result.exit_code != 0
        assert "Error" in result.output
        assert not output.exists()

    def test_unknown_config_key(self, runner, source_file, temp_dir):
        config = temp_dir / "config.json"
        save_json({"colour": "red"}, config)
        result = runner.invoke(main, ["build", str(source_file), "--config", str(config)])
        assert result.exit_code != 0
        assert "colour" in result.output


class TestTranslateCommand:
    """Tests for `tern2dts translate`."""

    def test_translate(self, runner):
        result = runner.invoke(main, ["translate", "fn(x: number) -> bool", "--name", "check"])
        assert result.exit_code == 0
        assert result.output.strip() == "check(x: number): boolean"

    def test_translate_static(self, runner):
        result = runner.invoke(main, [
            "translate", "fn() -> +Color", "--name", "black", "--static", "--owner", "Color",
        ])
        assert result.output.strip() == "static black(): Color"

    def test_translate_constructor(self, runner):
        result = runner.invoke(main, [
            "translate", "fn(hex: string) -> +Color", "--name", "Color", "--constructor",
        ])
        assert result.output.strip() == "constructor(hex: string)"


class TestCheckUrlsCommand:
    """Tests for `tern2dts check-urls`."""

    def test_reports_non_http_links(self, runner, temp_dir):
        source = temp_dir / "doc.json"
        save_json({"Alert": {"!url": "scriptable://docs?bridgeName=Alert"}}, source)
        result = runner.invoke(main, ["check-urls", str(source)])
        assert result.exit_code == 1
        assert "not an http(s) link" in result.output

    def test_all_links_valid(self, runner, temp_dir):
        source = temp_dir / "doc.json"
        save_json({"Alert": {"!doc": "No links."}}, source)
        result = runner.invoke(main, ["check-urls", str(source)])
        assert result.exit_code == 0
        assert "All links" in result.output
