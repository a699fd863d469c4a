"""Tests for cli.py — Click CLI commands."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from textprompt.cli import EXIT_ALTERNATE, EXIT_CANCEL, main
from textprompt.prompt import PromptOutcome
from textprompt.ui.app import PromptApp, PromptResult


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def _no_user_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    for var in ("TEXTPROMPT_LOG_LEVEL", "TEXTPROMPT_LOG_FILE", "TEXTPROMPT_CANCEL_LABEL"):
        monkeypatch.delenv(var, raising=False)


def _fake_run(result: PromptResult | None, seen: list[PromptApp] | None = None):
    def _run(app: PromptApp) -> PromptResult | None:
        if seen is not None:
            seen.append(app)
        return result

    return _run


# --- Help / Version ---


def test_help(runner):
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "textprompt" in result.output


def test_version(runner):
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "version" in result.output.lower()


# --- ask ---


class TestAsk:
    def test_primary_prints_text(self, runner):
        with patch("textprompt.cli._run_prompt", _fake_run(PromptResult(PromptOutcome.PRIMARY, "new"))):
            result = runner.invoke(main, ["ask", "Rename"])
        assert result.exit_code == 0
        assert result.output == "new\n"

    def test_alternate_exit_code(self, runner):
        with patch(
            "textprompt.cli._run_prompt", _fake_run(PromptResult(PromptOutcome.ALTERNATE, "a.txt"))
        ):
            result = runner.invoke(main, ["ask", "Save", "--alternate", "Open"])
        assert result.exit_code == EXIT_ALTERNATE
        assert result.output == "a.txt\n"

    def test_cancel_prints_nothing(self, runner):
        with patch("textprompt.cli._run_prompt", _fake_run(PromptResult(PromptOutcome.CANCEL, "x"))):
            result = runner.invoke(main, ["ask", "Rename"])
        assert result.exit_code == EXIT_CANCEL
        assert result.output == ""

    def test_no_result_counts_as_dismissed(self, runner):
        with patch("textprompt.cli._run_prompt", _fake_run(None)):
            result = runner.invoke(main, ["ask", "Rename", "--json"])
        assert result.exit_code == EXIT_CANCEL
        assert json.loads(result.output) == {"outcome": "dismissed", "text": ""}

    def test_json_output(self, runner):
        with patch("textprompt.cli._run_prompt", _fake_run(PromptResult(PromptOutcome.PRIMARY, "v"))):
            result = runner.invoke(main, ["ask", "Rename", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"outcome": "primary", "text": "v"}

    def test_options_reach_the_app(self, runner):
        seen: list[PromptApp] = []
        with patch(
            "textprompt.cli._run_prompt",
            _fake_run(PromptResult(PromptOutcome.PRIMARY, ""), seen),
        ):
            runner.invoke(
                main,
                ["ask", "Save file", "-i", "a.txt", "-p", "Save", "-a", "Open", "--cancel", "Skip"],
            )
        req = seen[0].request
        assert req.title == "Save file"
        assert req.initial_value == "a.txt"
        assert req.primary_label == "Save"
        assert req.alternate_label == "Open"
        assert req.has_alternate
        assert req.cancel_label == "Skip"

    def test_config_default_cancel_label(self, runner, tmp_path):
        cfg = tmp_path / "custom.yaml"
        cfg.write_text("default_cancel_label: Back\n")
        seen: list[PromptApp] = []
        with patch(
            "textprompt.cli._run_prompt",
            _fake_run(PromptResult(PromptOutcome.PRIMARY, ""), seen),
        ):
            runner.invoke(main, ["ask", "Rename", "-c", str(cfg)])
        assert seen[0].config.default_cancel_label == "Back"

    def test_logging_configured_from_loaded_config(self, runner, tmp_path):
        cfg = tmp_path / "custom.yaml"
        cfg.write_text("log_level: DEBUG\n")
        with (
            patch("textprompt.cli._run_prompt", _fake_run(PromptResult(PromptOutcome.PRIMARY, ""))),
            patch("textprompt.cli.setup_logging") as setup,
        ):
            runner.invoke(main, ["--log-file", str(tmp_path / "x.log"), "ask", "T", "-c", str(cfg)])
        (config,), kwargs = setup.call_args
        assert config.log_level == "DEBUG"
        assert kwargs == {"level": None, "log_file": str(tmp_path / "x.log")}

    def test_bad_config_is_click_error(self, runner, tmp_path):
        cfg = tmp_path / "bad.yaml"
        cfg.write_text("- just\n- a list\n")
        result = runner.invoke(main, ["ask", "Rename", "-c", str(cfg)])
        assert result.exit_code == 1
        assert "mapping" in result.output


# --- validate ---


class TestValidate:
    def test_valid_config(self, runner, tmp_path):
        cfg = tmp_path / "ok.yaml"
        cfg.write_text("default_cancel_label: Close\n")
        result = runner.invoke(main, ["validate", "-c", str(cfg)])
        assert result.exit_code == 0
        assert "Config OK" in result.output

    def test_defaults_are_valid(self, runner):
        result = runner.invoke(main, ["validate"])
        assert result.exit_code == 0
        assert "built-in defaults" in result.output

    def test_invalid_config(self, runner, tmp_path):
        cfg = tmp_path / "bad.yaml"
        cfg.write_text("log_level: LOUD\n")
        result = runner.invoke(main, ["validate", "-c", str(cfg)])
        assert result.exit_code == 1
        assert "log_level" in result.output
