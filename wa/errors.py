"""Custom exceptions for wa."""

from __future__ import annotations

from pathlib import Path


class WaError(Exception):
    """Base exception type for wa command errors."""


class ConfigError(WaError):
    """Raised when wa.toml or the operation setup cannot be used."""


class UsageError(WaError):
    """Raised when an argument is unknown or malformed."""

    def __init__(self, message: str, token: str | None = None) -> None:
        super().__init__(message)
        self.token = token


class ConflictError(WaError):
    """Raised when mutually exclusive options are combined."""


class ExternalOperationFailure(WaError):
    """Raised when a delegated operation exits non-zero."""

    def __init__(self, operation: str, exit_status: int) -> None:
        super().__init__(f"Step '{operation}' failed with exit status {exit_status}.")
        self.operation = operation
        self.exit_status = exit_status


class StateError(WaError):
    """Base type for workspace descriptor problems."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class MissingStateError(StateError):
    """Raised when the workspace descriptor is absent after branch creation."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Workspace descriptor not found: {path}", path)


class MalformedStateError(StateError):
    """Raised when the workspace descriptor carries no usable branch name."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Workspace descriptor has no branch name: {path}", path)


class UnsafeBranchError(WaError):
    """Raised when the safety check rejects the active branch."""

    def __init__(self, branch: str) -> None:
        super().__init__(
            f"Safety check rejected branch '{branch}'; deploy and fixtures were skipped."
        )
        self.branch = branch
