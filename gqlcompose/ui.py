"""Central UI handler for gqlcompose.

Single source of truth for Rich console styling. Import this instead of
instantiating Console() in every module.

Usage:
    from gqlcompose.ui import console, print_header, print_failure_panel

    console.print("[success]Schema written[/success]")
    print_header("BUILD")
    print_failure_panel("DiscoveryError", ["Source directory not found"])
"""

import sys

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

COMPOSE_THEME = Theme({
    "error": "bold red",
    "success": "bold green",
    "path": "bold cyan",
    "step": "italic",
    "dim": "dim white",
})

# Single console instance; document names and paths are styled explicitly
console = Console(theme=COMPOSE_THEME, highlight=False, force_terminal=sys.stdout.isatty())


def print_header(title: str) -> None:
    """Print a styled section header with horizontal rules."""
    console.rule(f"[bold]{title}[/bold]")


def print_success(msg: str) -> None:
    """Print a success message in green."""
    console.print(f"[success]OK:[/success] {escape(msg)}")


def print_failure_panel(error_name: str, messages: list[str]) -> None:
    """Print a failed build: every message inside one red panel.

    Args:
        error_name: Class name of the error that aborted the build
        messages: One line per problem, e.g. each validation violation
    """
    body = Text()
    body.append(f"{error_name}\n", style="error")
    for message in messages:
        body.append("- ", style="error")
        body.append(f"{message}\n")
    body.append("Nothing was written.", style="dim")

    console.print(Panel(
        body,
        title="[error]BUILD FAILED[/error]",
        title_align="left",
        border_style="red",
        expand=False,
    ))


def print_merge_order(order: list[str]) -> None:
    """Print the merge order as a numbered table."""
    table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    table.add_column("#", style="dim", justify="right")
    table.add_column("Document", style="path")
    table.add_column("Step", style="step")

    for index, name in enumerate(order):
        table.add_row(str(index + 1), escape(name), "build" if index == 0 else "extend")

    console.print(table)
