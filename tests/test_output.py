"""Tests for output, prompt and progress utilities."""

import json
from unittest.mock import patch

import click
import pytest
import yaml

from lnr.core.exceptions import PromptCancelledError, ValidationError
from lnr.core.output import OutputFormat, OutputFormatter, mask_secret
from lnr.core.progress import spinner, spinners_enabled
from lnr.core.prompt import ConsolePrompt


class TestMaskSecret:
    """Tests for mask_secret utility."""

    def test_masks_all_but_last_four(self):
        assert mask_secret("lin_api_1234") == "********1234"

    def test_short_value(self):
        assert mask_secret("abc") == "***"

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty(self, value):
        assert mask_secret(value) == ""


class TestOutputFormatter:
    """Tests for OutputFormatter class."""

    def test_json(self, capsys):
        OutputFormatter(format=OutputFormat.JSON, color=False).print_data({"created": 2})
        assert json.loads(capsys.readouterr().out) == {"created": 2}

    def test_yaml(self, capsys):
        OutputFormatter(format=OutputFormat.YAML, color=False).print_data([{"name": "acme"}])
        assert yaml.safe_load(capsys.readouterr().out) == [{"name": "acme"}]

    def test_plain_table(self, capsys):
        OutputFormatter(color=False).print_data([{"name": "acme", "token": "***1"}])
        out = capsys.readouterr().out
        assert "name" in out
        assert "acme" in out

    def test_table_cells_are_not_markup(self, capsys):
        OutputFormatter(color=True).print_data([{"title": "[API] Fix [bold]login"}], title="Issues")
        assert "[API] Fix [bold]login" in capsys.readouterr().out

    def test_plain_empty(self, capsys):
        OutputFormatter(color=False).print_data([])
        assert "No data to display" in capsys.readouterr().out

    def test_quiet_suppresses_messages(self, capsys):
        formatter = OutputFormatter(color=False, quiet=True)
        formatter.print("hello")
        formatter.print_success("done")
        assert capsys.readouterr().out == ""

    def test_error_goes_to_stderr(self, capsys):
        OutputFormatter(color=False, quiet=True).print_error("broken")
        captured = capsys.readouterr()
        assert "broken" in captured.err
        assert captured.out == ""


class TestConsolePrompt:
    """Tests for ConsolePrompt."""

    @patch("lnr.core.prompt.click.prompt")
    def test_select(self, mock_prompt):
        mock_prompt.return_value = 2
        prompt = ConsolePrompt()
        assert prompt.select("Select state", ["Backlog", "Todo"]) == "Todo"
        assert mock_prompt.call_args.kwargs["default"] == 1

    @patch("lnr.core.prompt.click.prompt")
    def test_select_with_label(self, mock_prompt, capsys):
        mock_prompt.return_value = 1
        options = [None, "Roadmap"]
        assert ConsolePrompt().select("Select project", options, label=lambda p: p or "None") is None
        assert "1. None" in capsys.readouterr().out

    def test_select_without_options(self):
        with pytest.raises(ValidationError, match="no options"):
            ConsolePrompt().select("Select a team", [])

    @patch("lnr.core.prompt.click.prompt", side_effect=click.Abort())
    def test_abort(self, mock_prompt):
        with pytest.raises(PromptCancelledError, match="cancelled"):
            ConsolePrompt().select("Select priority", [1, 2])

    @patch("lnr.core.prompt.click.prompt")
    def test_text_is_stripped(self, mock_prompt):
        mock_prompt.return_value = "  templates/  "
        assert ConsolePrompt().text("Enter path") == "templates/"


class TestSpinner:
    """Tests for spinner helpers."""

    def test_disable_spinner_env(self, monkeypatch):
        monkeypatch.setenv("DISABLE_SPINNER", "1")
        assert spinners_enabled(True) is False

    def test_enabled_by_config(self, monkeypatch):
        monkeypatch.delenv("DISABLE_SPINNER", raising=False)
        assert spinners_enabled(True) is True
        assert spinners_enabled(False) is False

    def test_disabled_spinner_runs_block(self):
        ran = []
        with spinner(enabled=False):
            ran.append(True)
        assert ran == [True]

    def test_exception_propagates(self):
        with pytest.raises(RuntimeError):
            with spinner(enabled=True):
                raise RuntimeError("boom")
