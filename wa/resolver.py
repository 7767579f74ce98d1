"""Validation of parsed command options into resolved invocations.

Click/Typer handles tokenizing and unknown-token rejection; the helpers here
enforce the rules Click cannot express (flag-like option values, mutually
exclusive options, options mixed with subcommands). Nothing here runs an
external operation.
"""

from __future__ import annotations

from wa.errors import ConflictError, UsageError
from wa.models import BranchCreateOptions, Command, Invocation, TestOptions


def validate_test_name(name: str | None) -> str | None:
    """Reject blank names and values that look like another flag."""
    if name is None:
        return None
    if name.startswith("-"):
        raise UsageError(f"Option -n/--name expects a test name, got flag '{name}'.", token=name)
    if not name.strip():
        raise UsageError("Option -n/--name expects a non-empty test name.", token=name)
    return name


def resolve_test(name: str | None, update: bool) -> Invocation:
    """Build the `test` invocation.

    Raises:
        UsageError: If the name is blank or flag-like.
        ConflictError: If a name and --update are both given.
    """
    test_name = validate_test_name(name)
    if test_name is not None and update:
        raise ConflictError("Options -n/--name and -u/--update cannot be used together.")
    return Invocation(Command.TEST, TestOptions(test_name=test_name, update_snapshots=update))


def resolve_branch(append: bool, deploy: bool, subcommand: str | None) -> Invocation | None:
    """Build the branch-create invocation, or None when a subcommand follows.

    Raises:
        UsageError: If create flags are combined with a subcommand.
    """
    if subcommand is not None:
        if append or deploy:
            raise UsageError(
                f"Branch subcommand '{subcommand}' does not accept -a/--append or -d/--deploy.",
                token=subcommand,
            )
        return None
    return Invocation(
        Command.BRANCH_CREATE,
        BranchCreateOptions(append_fixtures=append, deploy=deploy),
    )
