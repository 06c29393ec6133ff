"""Central UI handler for bundlesqueeze.

Single source of truth for Rich console styling. Import this instead of
instantiating Console() in every command file.

Usage:
    from bundlesqueeze.pipeline.ui import console, print_header, print_warning

    console.print("[size]12.00 KB[/size]")
    print_header("ENTRY POINTS")
"""

import sys

from rich.console import Console
from rich.theme import Theme

SQUEEZE_THEME = Theme({
    "info": "bold cyan",
    "warning": "bold yellow",
    "error": "bold red",
    "success": "bold green",
    "path": "bold cyan",
    "size": "bold white",
    "unique": "bold magenta",
    "ignored": "dim strike",
    "dim": "dim white",
})

# Single console instance - import this, don't create your own
console = Console(
    theme=SQUEEZE_THEME,
    force_terminal=sys.stdout.isatty(),
)


def print_header(title: str) -> None:
    """Print a styled section header with horizontal rules."""
    console.rule(f"[bold]{title}[/bold]")


def print_error(msg: str) -> None:
    console.print(f"[error]ERROR:[/error] {msg}")


def print_warning(msg: str) -> None:
    console.print(f"[warning]WARNING:[/warning] {msg}")


def print_success(msg: str) -> None:
    console.print(f"[success]OK:[/success] {msg}")
