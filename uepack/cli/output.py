"""Terminal output for the CLI.

Data meant for scripts (``--json``, ``--expose``) goes to stdout; banners,
progress and errors go to stderr through Rich.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

console = Console(stderr=True, soft_wrap=True)
stdout = Console(highlight=False, soft_wrap=True)


def configure_logging(verbose: bool = False) -> None:
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)
    handler = RichHandler(console=console, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger("uepack.uat.output").setLevel(logging.INFO)


def banner(text: str) -> None:
    console.print(Panel(text, expand=False, padding=1, border_style="bright_green"))


def info(message: str) -> None:
    console.print(message)


def success(message: str) -> None:
    console.print(f"[green]{message}[/green]")


def error(message: str) -> None:
    console.print(f"[bold red]Error:[/bold red] {message}")


def data(text: str) -> None:
    stdout.print(text, markup=False)
