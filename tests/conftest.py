"""Test fixtures for wa."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console

from wa.errors import MissingStateError
from wa.models import Operation
from wa.services.workflows import WorkflowEngine

from tests.doubles import READ_DESCRIPTOR, SpyInvoker, write_script


@pytest.fixture()
def events() -> list[str]:
    """Shared ordered log of external calls and descriptor reads."""
    return []


@pytest.fixture()
def spy_factory(events: list[str]) -> Callable[..., SpyInvoker]:
    """Build spy invokers that append to the shared event log."""

    def _factory(**exit_statuses: int) -> SpyInvoker:
        mapped = {Operation(name.replace("_", "-")): code for name, code in exit_statuses.items()}
        return SpyInvoker(events, mapped)

    return _factory


@pytest.fixture()
def branch_reader(events: list[str]) -> Callable[..., Callable[[], str]]:
    """Build descriptor readers that log each read.

    Pass ``None`` to simulate a descriptor that was never written.
    """

    def _factory(name: str | None = "feature_x") -> Callable[[], str]:
        def _read() -> str:
            events.append(READ_DESCRIPTOR)
            if name is None:
                raise MissingStateError(Path(".workspace.json"))
            return name

        return _read

    return _factory


@pytest.fixture()
def quiet_console() -> Console:
    """Console that renders into memory."""
    return Console(quiet=True)


@pytest.fixture()
def make_engine(spy_factory, branch_reader, quiet_console) -> Callable[..., tuple[WorkflowEngine, SpyInvoker]]:
    """Build an engine around a spy invoker and a fake descriptor reader."""

    def _factory(branch: str | None = "feature_x", **exit_statuses: int) -> tuple[WorkflowEngine, SpyInvoker]:
        spy = spy_factory(**exit_statuses)
        engine = WorkflowEngine(spy, read_branch=branch_reader(branch), console=quiet_console)
        return engine, spy

    return _factory


@pytest.fixture()
def script_writer() -> Callable[[Path, str], Path]:
    """Expose the executable script helper to tests."""
    return write_script
