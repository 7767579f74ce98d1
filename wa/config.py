"""Configuration and path resolution for wa."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

from wa.errors import ConfigError
from wa.models import Operation

DEFAULT_DESCRIPTOR_NAME = ".workspace.json"
CONFIG_FILE_NAME = "wa.toml"


@dataclass(slots=True)
class WaPaths:
    """Resolved filesystem paths used by wa.

    Attributes:
        base_dir: Orchestrator root; external operations run from here.
        scripts_dir: Directory holding the default operation scripts.
        descriptor_path: Workspace descriptor written by branch creation.
        config_path: Optional wa.toml configuration path.
    """

    base_dir: Path
    scripts_dir: Path
    descriptor_path: Path
    config_path: Path


@dataclass(slots=True)
class WaRuntimeConfig:
    """Runtime configuration used by the workflows and CLI."""

    paths: WaPaths
    operations: dict[Operation, list[str]]


def default_base_dir() -> Path:
    """Return the orchestrator root, honoring the WA_HOME override."""
    override = os.environ.get("WA_HOME")
    if override:
        return Path(override).expanduser().resolve()
    return Path(__file__).resolve().parent.parent


def resolve_paths(base_dir: Path | None = None) -> WaPaths:
    """Resolve wa paths relative to the orchestrator root."""
    base = base_dir or default_base_dir()
    return WaPaths(
        base_dir=base,
        scripts_dir=base / "scripts",
        descriptor_path=base / DEFAULT_DESCRIPTOR_NAME,
        config_path=base / CONFIG_FILE_NAME,
    )


_DEFAULT_SCRIPTS: dict[Operation, str] = {
    Operation.CREATE_BRANCH: "branch_create.sh",
    Operation.DELETE_BRANCH: "branch_delete.sh",
    Operation.SAFETY_CHECK: "branch_check.sh",
    Operation.DEPLOY: "deploy.sh",
    Operation.APPEND_FIXTURES: "append_fixtures.sh",
    Operation.RUN_TESTS: "run_tests.sh",
    Operation.UPDATE_SNAPSHOTS: "update_snapshots.sh",
    Operation.LINT: "lint.sh",
}


def default_operations(scripts_dir: Path) -> dict[Operation, list[str]]:
    """Return the default argv for every external operation."""
    return {operation: [str(scripts_dir / script)] for operation, script in _DEFAULT_SCRIPTS.items()}


def load_runtime_config(paths: WaPaths | None = None) -> WaRuntimeConfig:
    """Load runtime configuration from wa.toml when available.

    Args:
        paths: Optional pre-resolved wa paths.

    Returns:
        Runtime configuration with defaults and overrides applied.

    Raises:
        ConfigError: If the config file is invalid, or an operation falls
            back to a default script while the scripts directory is missing.
    """
    resolved = paths or resolve_paths()
    overrides = _load_operation_overrides(resolved)
    operations = default_operations(resolved.scripts_dir)
    operations.update(overrides)

    defaulted = [operation.value for operation in Operation if operation not in overrides]
    if defaulted and not resolved.scripts_dir.is_dir():
        raise ConfigError(
            f"Scripts directory not found: {resolved.scripts_dir}. Set WA_HOME to the project "
            f"root or map these operations in {CONFIG_FILE_NAME}: {', '.join(defaulted)}."
        )
    return WaRuntimeConfig(paths=resolved, operations=operations)


def _load_operation_overrides(resolved: WaPaths) -> dict[Operation, list[str]]:
    """Read wa.toml, applying [workspace] and returning [operations] overrides."""
    if not resolved.config_path.exists():
        return {}

    raw = resolved.config_path.read_text(encoding="utf-8")
    try:
        parsed = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid config TOML: {resolved.config_path}") from exc

    workspace = parsed.get("workspace")
    if workspace is not None:
        if not isinstance(workspace, dict):
            raise ConfigError("Config section [workspace] must be a table.")
        descriptor = workspace.get("descriptor")
        if descriptor is not None:
            if not isinstance(descriptor, str) or not descriptor.strip():
                raise ConfigError("Config field workspace.descriptor must be a non-empty string.")
            resolved.descriptor_path = resolved.base_dir / descriptor.strip()

    operations = parsed.get("operations")
    if operations is None:
        return {}
    if not isinstance(operations, dict):
        raise ConfigError("Config section [operations] must be a table.")
    return {
        _parse_operation_name(name): _parse_argv(value, field_name=f"operations.{name}")
        for name, value in operations.items()
    }


def _parse_operation_name(name: str) -> Operation:
    """Map a config key onto a known external operation."""
    try:
        return Operation(name)
    except ValueError as exc:
        known = ", ".join(op.value for op in Operation)
        raise ConfigError(f"Unknown operation '{name}' in [operations]; expected one of: {known}.") from exc


def _parse_argv(value, field_name: str) -> list[str]:
    """Parse a non-empty array-of-strings argv config value."""
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"Config field {field_name} must be an array of strings.")
    if not value or not value[0].strip():
        raise ConfigError(f"Config field {field_name} must name an executable.")
    return value
