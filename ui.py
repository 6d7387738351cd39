"""Host UI interface and a Rich console implementation of it."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text


class HostUI(ABC):
    """UI services the host agent exposes to command handlers."""

    @abstractmethod
    def notify(self, message: str, level: str = "info") -> None:
        """Show a one-off notice. Level is "info", "warning" or "error"."""

    @abstractmethod
    def set_status(self, key: str, value: Optional[str]) -> None:
        """Set or clear (None) a named status entry."""

    @abstractmethod
    def set_widget(self, key: str, lines: Optional[List[str]], options: Optional[Dict[str, Any]] = None) -> None:
        """Show or clear (None) a named widget of text lines."""


def get_color_for_level(level: str) -> str:
    """Get Rich color for a notice level."""
    if level == "error":
        return "red"
    if level == "warning":
        return "yellow"
    return "cyan"


class ConsoleUI(HostUI):
    """Renders host UI calls to a Rich console."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()
        self.status: Dict[str, str] = {}
        self.widgets: Dict[str, List[str]] = {}

    def notify(self, message: str, level: str = "info") -> None:
        color = get_color_for_level(level)
        self.console.print(f"[bold {color}]{level.capitalize()}:[/bold {color}] {message}")

    def set_status(self, key: str, value: Optional[str]) -> None:
        if value is None:
            self.status.pop(key, None)
            return
        self.status[key] = value
        self.console.print(f"[dim]{value}[/dim]")

    def set_widget(self, key: str, lines: Optional[List[str]], options: Optional[Dict[str, Any]] = None) -> None:
        if lines is None:
            self.widgets.pop(key, None)
            return
        self.widgets[key] = list(lines)
        # Text keeps provider output from being parsed as Rich markup.
        body = Text("\n".join(lines))
        self.console.print(Panel(body, title=f"[bold blue]{key}[/bold blue]", expand=False, border_style="blue"))
