"""
Default user input/output channels backed by rich.

Modules never print directly; they hand messages to whatever output
channel the harness attached, and these are the console defaults.
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt


class ConsoleOutput:
    """Status-line output in the [*]/[+]/[-]/[!] convention."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False)

    def print_status(self, msg: str = "") -> None:
        self.console.print(f"[bold blue]\\[*][/bold blue] {escape(msg)}")

    def print_good(self, msg: str = "") -> None:
        self.console.print(f"[bold green]\\[+][/bold green] {escape(msg)}")

    def print_error(self, msg: str = "") -> None:
        self.console.print(f"[bold red]\\[-][/bold red] {escape(msg)}")

    def print_warning(self, msg: str = "") -> None:
        self.console.print(f"[bold yellow]\\[!][/bold yellow] {escape(msg)}")

    def print_line(self, msg: str = "") -> None:
        self.console.print(escape(msg))


class ConsoleInput:
    """Interactive prompts."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False)

    def prompt(self, question: str, default: Optional[str] = None) -> str:
        if default is None:
            return Prompt.ask(question, console=self.console)
        return Prompt.ask(question, console=self.console, default=default)

    def confirm(self, question: str, default: bool = False) -> bool:
        return Confirm.ask(question, console=self.console, default=default)
