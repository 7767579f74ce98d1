"""Tests for wa domain models."""

from __future__ import annotations

import dataclasses

import pytest

from wa.models import BranchCreateOptions, Command, Invocation, Operation, OperationResult, TestOptions


def test_operation_result_succeeds_only_on_zero() -> None:
    """Only exit status 0 counts as success."""
    assert OperationResult(Operation.LINT, 0).succeeded is True
    assert OperationResult(Operation.LINT, 1).succeeded is False
    assert OperationResult(Operation.LINT, -15).succeeded is False


def test_invocation_is_immutable() -> None:
    """Resolved invocations should not be mutable."""
    invocation = Invocation(Command.BRANCH_CREATE, BranchCreateOptions(deploy=True))
    with pytest.raises(dataclasses.FrozenInstanceError):
        invocation.command = Command.LINT  # type: ignore[misc]


def test_option_defaults_request_nothing() -> None:
    """Default options should run the plain workflow."""
    assert TestOptions() == TestOptions(test_name=None, update_snapshots=False)
    assert BranchCreateOptions() == BranchCreateOptions(append_fixtures=False, deploy=False)


def test_operation_names_match_config_keys() -> None:
    """Operation values double as wa.toml [operations] keys."""
    assert Operation("safety-check") is Operation.SAFETY_CHECK
    assert Operation("append-fixtures") is Operation.APPEND_FIXTURES
