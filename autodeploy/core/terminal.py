"""Terminal access for the deploy confirmation prompt."""
import sys
from typing import Optional, Protocol

from rich.console import Console

from autodeploy.core.errors import PromptUnavailableError


class Terminal(Protocol):
    """What the confirmation gate needs from the operator's terminal."""

    def is_interactive(self) -> bool:
        ...

    def prompt_line(self, message: str) -> str:
        ...


class ConsoleTerminal:
    """Terminal backed by the process's standard streams."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def is_interactive(self) -> bool:
        return sys.stdin.isatty() and sys.stdout.isatty()

    def prompt_line(self, message: str) -> str:
        try:
            return self.console.input(message)
        except EOFError as e:
            raise PromptUnavailableError("Input stream closed before an answer was read") from e
