"""Typer CLI entrypoint for wa."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import click
import typer
from rich.console import Console

from wa.config import load_runtime_config
from wa.errors import UsageError, WaError
from wa.logging import configure_logging, get_logger
from wa.models import Command, Invocation
from wa.resolver import resolve_branch, resolve_test
from wa.runner import OperationRunner
from wa.services.workflows import WorkflowEngine
from wa.storage.descriptor import read_active_branch_name
from wa.ui.render import print_error

app = typer.Typer(
    help=(
        "wa: data-platform branching workflow orchestrator.\n\n"
        "External operations run from WA_HOME (default: the directory holding "
        "the wa package), using scripts/ or the commands mapped in wa.toml."
    ),
    invoke_without_command=True,
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
branch_app = typer.Typer(
    help="Create a branch, or remove it with `wa branch delete`.",
    invoke_without_command=True,
)
app.add_typer(branch_app, name="branch")
console = Console()
logger = get_logger(__name__)

EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130
_RESOLVE_ONLY = "resolve_only"
_INVOCATION = "invocation"


def _engine() -> WorkflowEngine:
    """Return a workflow engine wired to the configured operations."""
    config = load_runtime_config()
    runner = OperationRunner(config.operations, cwd=config.paths.base_dir)
    descriptor_path = config.paths.descriptor_path
    return WorkflowEngine(
        runner,
        read_branch=lambda: read_active_branch_name(descriptor_path),
        console=console,
    )


def _resolve_only(ctx: typer.Context) -> bool:
    return isinstance(ctx.obj, dict) and bool(ctx.obj.get(_RESOLVE_ONLY))


def _show_help(ctx: click.Context) -> None:
    """Print help for ``ctx``; Rich-formatted help prints itself."""
    help_text = ctx.get_help()
    if help_text:
        typer.echo(help_text)


def _dispatch(ctx: typer.Context, invocation: Invocation) -> None:
    """Record the invocation when resolving, otherwise run it."""
    if _resolve_only(ctx):
        ctx.obj[_INVOCATION] = invocation
        return
    if invocation.command is Command.HELP:
        _show_help(ctx.find_root())
        return
    _engine().run(invocation)


@app.callback()
def root_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every step at debug level."),
) -> None:
    """Create, verify, deploy and delete data-platform branches."""
    if verbose and not _resolve_only(ctx):
        configure_logging("DEBUG", force=True)
    if ctx.invoked_subcommand is None:
        if not _resolve_only(ctx):
            _show_help(ctx)
        raise UsageError("Missing command.")


@app.command("test")
def test_command(
    ctx: typer.Context,
    name: str | None = typer.Option(None, "--name", "-n", help="Run a single named test."),
    update: bool = typer.Option(False, "--update", "-u", help="Regenerate test snapshots."),
) -> None:
    """Run the test suite, a single test, or regenerate snapshots."""
    _dispatch(ctx, resolve_test(name, update))


@app.command("lint")
def lint_command(ctx: typer.Context) -> None:
    """Lint schema and pipe definition files."""
    _dispatch(ctx, Invocation(Command.LINT))


@app.command("help")
def help_command(ctx: typer.Context) -> None:
    """Show this help and exit."""
    _dispatch(ctx, Invocation(Command.HELP))


@branch_app.callback()
def branch_callback(
    ctx: typer.Context,
    append: bool = typer.Option(False, "--append", "-a", help="Append fixtures after creation."),
    deploy: bool = typer.Option(False, "--deploy", "-d", help="Deploy the project to the new branch."),
) -> None:
    """Default `wa branch` behavior: create a branch and run the safety check."""
    invocation = resolve_branch(append, deploy, ctx.invoked_subcommand)
    if invocation is not None:
        _dispatch(ctx, invocation)


@branch_app.command("delete")
def branch_delete_command(ctx: typer.Context) -> None:
    """Delete the active branch (the delete tool asks for confirmation)."""
    _dispatch(ctx, Invocation(Command.BRANCH_DELETE))


def resolve(argv: Sequence[str]) -> Invocation:
    """Parse and validate ``argv`` without running any external operation.

    Raises:
        UsageError: For unknown commands, options or extra arguments.
        ConflictError: For mutually exclusive options.
    """
    state: dict[str, Any] = {_RESOLVE_ONLY: True}
    try:
        app(args=list(argv), prog_name="wa", standalone_mode=False, obj=state)
    except click.UsageError as err:
        raise UsageError(err.format_message(), token=getattr(err, "option_name", None)) from err
    # --help exits early without reaching a command.
    return state.get(_INVOCATION) or Invocation(Command.HELP)


def main(argv: Sequence[str] | None = None) -> None:
    """CLI process entrypoint."""
    try:
        exit_code = app(
            args=list(argv) if argv is not None else None,
            prog_name="wa",
            standalone_mode=False,
        )
    except WaError as err:
        logger.debug("cli.failed", error_type=type(err).__name__)
        print_error(console, err)
        raise SystemExit(EXIT_FAILURE) from err
    except click.UsageError as err:
        if err.ctx is not None:
            _show_help(err.ctx)
        print_error(console, err.format_message())
        raise SystemExit(EXIT_FAILURE) from err
    except click.ClickException as err:
        err.show()
        raise SystemExit(EXIT_FAILURE) from err
    except click.Abort as err:
        print_error(console, "Interrupted.")
        raise SystemExit(EXIT_INTERRUPTED) from err
    except click.exceptions.Exit as err:
        raise SystemExit(err.exit_code) from err
    # Typer turns an interrupt into a returned exit code when not standalone.
    if exit_code == EXIT_INTERRUPTED:
        print_error(console, "Interrupted.")
    if exit_code:
        raise SystemExit(exit_code)


# Register aliases with identical signatures.
branch_app.command("rm", hidden=True)(branch_delete_command)


if __name__ == "__main__":
    main()
