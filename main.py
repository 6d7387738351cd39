#!/usr/bin/env python3
"""Standalone entry point: runs the limits plugin against a Rich console."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from rich.console import Console

from credentials import CredentialsReader
from reporter import UsageReporter, register
from ui import ConsoleUI, HostUI

Handler = Callable[[str, Any], Any]


@dataclass
class CommandContext:
    """Context passed to command handlers."""
    ui: HostUI


class CommandHost:
    """Minimal in-process command host."""

    def __init__(self) -> None:
        self.commands: Dict[str, Tuple[str, Handler]] = {}

    def register_command(self, name: str, description: str, handler: Handler) -> None:
        self.commands[name] = (description, handler)

    def run(self, name: str, ctx: CommandContext, args: str = "") -> Any:
        _, handler = self.commands[name]
        return handler(args, ctx)


def main(
    command: str = "limits",
    auth_path: Optional[str] = None,
    verbose: bool = False,
    console: Optional[Console] = None,
) -> List[str]:
    """
    Run one of the plugin's commands.

    Args:
        command: "limits" or "usage".
        auth_path: Optional credentials file, defaults to ~/.pi/agent/auth.json.
        verbose: Print probe diagnostics.
    """
    host = CommandHost()
    reporter = UsageReporter(reader=CredentialsReader(auth_path), verbose=verbose)
    register(host, reporter)
    return host.run(command, CommandContext(ui=ConsoleUI(console)))


def cli() -> None:
    parser = argparse.ArgumentParser(
        description="Show AI subscription limits and usage (Gemini, GitHub Copilot)"
    )
    parser.add_argument(
        "command",
        nargs="?",
        choices=["limits", "usage"],
        default="limits",
        help="Command to run (usage is an alias for limits)",
    )
    parser.add_argument("--auth-path", default=None, help="Path to auth.json (default: ~/.pi/agent/auth.json)")
    parser.add_argument("--verbose", action="store_true", help="Print probe diagnostics")
    args = parser.parse_args()
    main(command=args.command, auth_path=args.auth_path, verbose=args.verbose)


if __name__ == "__main__":
    cli()
