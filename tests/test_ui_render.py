"""Tests for Rich rendering helpers."""

from __future__ import annotations

from rich.console import Console

from wa.ui.render import print_branch, print_error, print_step, print_success


def _console() -> Console:
    return Console(record=True, width=120, force_terminal=False, color_system=None)


def test_render_helpers_prefix_messages() -> None:
    """Each helper should emit its distinguishing prefix."""
    console = _console()
    print_step(console, "Creating branch")
    print_success(console, "Lint passed")
    print_branch(console, "feature_x")
    print_error(console, "Step 'deploy' failed with exit status 1.")
    lines = console.export_text().splitlines()
    assert lines == [
        ">> Creating branch",
        "OK Lint passed",
        "OK Active branch: feature_x",
        "Error: Step 'deploy' failed with exit status 1.",
    ]


def test_render_helpers_escape_markup() -> None:
    """Branch names with Rich markup should render literally."""
    console = _console()
    print_branch(console, "[bold]feature[/bold]")
    assert "[bold]feature[/bold]" in console.export_text()
