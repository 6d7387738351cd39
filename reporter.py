"""Usage reporter behind the /limits and /usage commands."""

from __future__ import annotations

import threading
from typing import Any, Dict, List, Optional, Sequence

from base import BaseProbe
from config import CLEAR_DELAY_SECONDS, DEFAULT_TIMEOUT, WIDGET_KEY, WIDGET_PLACEMENT
from copilot import CopilotProbe
from credentials import AuthRecord, CredentialsError, CredentialsReader
from gemini import GeminiProbe
from ui import HostUI
from utils import log

COMMAND_DESCRIPTION = "Show AI subscription limits and usage"


class UsageReporter:
    """Collects quota lines from every configured provider and shows them in the host UI."""

    def __init__(
        self,
        reader: Optional[CredentialsReader] = None,
        probes: Optional[Sequence[BaseProbe]] = None,
        clear_delay: float = CLEAR_DELAY_SECONDS,
        timeout: float = DEFAULT_TIMEOUT,
        verbose: bool = False,
    ) -> None:
        self.reader = reader or CredentialsReader()
        if probes is None:
            probes = [
                GeminiProbe(timeout=timeout, verbose=verbose),
                CopilotProbe(timeout=timeout, verbose=verbose),
            ]
        self.probes = list(probes)
        self.clear_delay = clear_delay
        self.verbose = verbose

    def load_credentials(self, ui: HostUI) -> Dict[str, AuthRecord]:
        """Read the credentials store; a broken file is reported and treated as empty."""
        try:
            return self.reader.load()
        except CredentialsError as e:
            log(f"[limits] {e}", self.verbose)
            ui.notify("Failed to read auth.json", "error")
            return {}

    def collect(self, auth: Dict[str, AuthRecord]) -> List[str]:
        """Query each provider with credentials, in declaration order."""
        results: List[str] = []
        for probe in self.probes:
            record = auth.get(probe.key)
            if record is None:
                continue
            token = probe.token_for(record)
            if not token:
                log(f"[limits] {probe.key}: no usable token", self.verbose)
                continue
            try:
                lines = probe.fetch(token)
            except Exception as e:
                log(f"[limits] {probe.key}: {e}", self.verbose)
                lines = probe.error_lines()
            if lines:
                results.extend(lines)
        return results

    def _schedule_clear(self, ui: HostUI) -> threading.Timer:
        timer = threading.Timer(self.clear_delay, ui.set_widget, args=(WIDGET_KEY, None))
        timer.daemon = True
        timer.start()
        return timer

    def run(self, ui: HostUI) -> List[str]:
        """
        Build the usage report and display it.

        The widget is cleared automatically after ``clear_delay`` seconds. When
        no provider produced anything, a warning notice is shown instead.
        """
        auth = self.load_credentials(ui)
        ui.set_status(WIDGET_KEY, "Fetching limits...")

        results = self.collect(auth)
        if not results:
            ui.notify("No subscriptions found in auth.json", "warning")
        else:
            ui.set_widget(WIDGET_KEY, results, {"placement": WIDGET_PLACEMENT})
            self._schedule_clear(ui)

        ui.set_status(WIDGET_KEY, None)
        return results


def register(host: Any, reporter: Optional[UsageReporter] = None) -> UsageReporter:
    """
    Register the /limits and /usage commands on a host.

    Args:
        host: Object exposing ``register_command(name, description, handler)``.
        reporter: Reporter to run, a default one is built if omitted.
    """
    reporter = reporter or UsageReporter()

    def handler(args: str, ctx: Any) -> List[str]:
        return reporter.run(ctx.ui)

    host.register_command("limits", COMMAND_DESCRIPTION, handler)
    host.register_command("usage", f"{COMMAND_DESCRIPTION} (alias for /limits)", handler)
    return reporter
