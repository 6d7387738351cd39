"""Tests for the standalone console runner and Rich UI."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

from rich.console import Console

from main import CommandHost, main
from ui import ConsoleUI


def _console():
    return Console(record=True, width=120, force_terminal=False)


class TestConsoleUI:
    def test_widget_shown_and_cleared(self):
        ui = ConsoleUI(_console())

        ui.set_widget("limits", ["Gemini (free):", "  [model] 10.0%"], {"placement": "belowEditor"})
        output = ui.console.export_text()

        assert "Gemini (free):" in output
        assert "[model]" in output
        assert ui.widgets["limits"] == ["Gemini (free):", "  [model] 10.0%"]

        ui.set_widget("limits", None)
        assert "limits" not in ui.widgets

    def test_notify(self):
        ui = ConsoleUI(_console())
        ui.notify("No subscriptions found in auth.json", "warning")
        assert "Warning: No subscriptions found in auth.json" in ui.console.export_text()

    def test_status(self):
        ui = ConsoleUI(_console())
        ui.set_status("limits", "Fetching limits...")
        assert ui.status == {"limits": "Fetching limits..."}
        ui.set_status("limits", None)
        assert ui.status == {}


class TestCommandHost:
    def test_run_dispatches(self):
        host = CommandHost()
        handler = MagicMock(return_value="done")
        host.register_command("limits", "desc", handler)

        assert host.run("limits", "ctx") == "done"
        handler.assert_called_once_with("", "ctx")


class TestMain:
    def test_no_credentials(self, tmp_path):
        console = _console()

        lines = main(command="usage", auth_path=str(tmp_path / "auth.json"), console=console)

        assert lines == []
        assert "No subscriptions found in auth.json" in console.export_text()

    @patch("reporter.threading.Timer")
    @patch("requests.Session.get")
    def test_copilot_report(self, mock_get, mock_timer, tmp_path):
        path = tmp_path / "auth.json"
        path.write_text(json.dumps({"github-copilot": {"type": "oauth", "refresh": "ghu_r"}}), encoding="utf-8")
        mock_get.return_value = MagicMock(
            ok=True,
            status_code=200,
            json=MagicMock(return_value={"copilot_plan": "individual"}),
        )
        console = _console()

        lines = main(command="limits", auth_path=str(path), console=console)

        assert lines == ["GitHub Copilot (individual):", "  Quota info not available"]
        assert "Quota info not available" in console.export_text()
        mock_timer.return_value.start.assert_called_once()
