"""Utilities for executing external operations."""

from __future__ import annotations

import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Protocol

from wa.errors import ConfigError
from wa.logging import get_logger
from wa.models import Operation, OperationResult

logger = get_logger(__name__)

# Shell convention for a command that could not be found or executed.
EXIT_NOT_EXECUTABLE = 127


class Invoker(Protocol):
    """Callable contract shared by the real runner and test doubles."""

    def __call__(self, operation: Operation, args: Sequence[str] = ()) -> OperationResult: ...


def build_argv(base_argv: Sequence[str], args: Sequence[str], cwd: Path) -> list[str]:
    """Return the full argv for an operation.

    A relative executable containing a path separator is resolved against
    ``cwd``; bare names are left for PATH lookup.
    """
    executable, *rest = base_argv
    candidate = Path(executable)
    if not candidate.is_absolute() and len(candidate.parts) > 1:
        executable = str(cwd / candidate)
    return [executable, *rest, *args]


class OperationRunner:
    """Run external operations as blocking child processes.

    The child inherits this process's stdin, stdout and stderr, so output
    streams live and interactive prompts work. Only the exit status is read.
    """

    def __init__(self, operations: Mapping[Operation, Sequence[str]], cwd: str | Path) -> None:
        self.operations = dict(operations)
        self.cwd = Path(cwd)

    def __call__(self, operation: Operation, args: Sequence[str] = ()) -> OperationResult:
        base_argv = self.operations.get(operation)
        if not base_argv:
            raise ConfigError(f"No command configured for operation: {operation.value}")
        argv = build_argv(base_argv, args, self.cwd)
        logger.debug("operation.start", operation=operation.value, argv=argv)
        try:
            completed = subprocess.run(argv, cwd=str(self.cwd), check=False)
        except (FileNotFoundError, PermissionError) as exc:
            logger.error("operation.not_executable", operation=operation.value, error=str(exc))
            return OperationResult(operation=operation, exit_status=EXIT_NOT_EXECUTABLE)
        logger.debug("operation.exit", operation=operation.value, exit_status=completed.returncode)
        return OperationResult(operation=operation, exit_status=completed.returncode)
