"""Rich rendering helpers for wa command output."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markup import escape


def _safe_text(value: Any) -> str:
    """Escape Rich markup tokens in user-visible text values."""
    return escape(str(value))


def print_step(console: Console, message: str) -> None:
    """Announce a step before its external operation starts."""
    console.print(f"[cyan]>>[/cyan] {_safe_text(message)}")


def print_success(console: Console, message: str) -> None:
    """Print a completed milestone."""
    console.print(f"[green]OK[/green] {_safe_text(message)}")


def print_branch(console: Console, branch: str) -> None:
    """Print the active branch extracted after creation."""
    console.print(f"[green]OK[/green] Active branch: [bold]{_safe_text(branch)}[/bold]")


def print_error(console: Console, message: Any) -> None:
    """Print a terminal error message."""
    console.print(f"[red]Error:[/red] {_safe_text(message)}")
