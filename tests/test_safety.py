"""Tests for the branch safety gate."""

from __future__ import annotations

import pytest

from wa.errors import UnsafeBranchError, WaError
from wa.models import Operation
from wa.services.safety import ensure_branch_is_safe


def test_safety_gate_passes_on_zero_exit(spy_factory) -> None:
    """A passing check should return quietly after one invocation."""
    spy = spy_factory()
    ensure_branch_is_safe(spy, "feature_x")
    assert spy.calls == [(Operation.SAFETY_CHECK, ())]


@pytest.mark.parametrize("exit_status", [1, 2, 127])
def test_safety_gate_rejects_any_nonzero_exit(spy_factory, exit_status: int) -> None:
    """Every non-zero check result should be fatal."""
    spy = spy_factory(safety_check=exit_status)
    with pytest.raises(UnsafeBranchError) as excinfo:
        ensure_branch_is_safe(spy, "main")
    assert excinfo.value.branch == "main"
    assert isinstance(excinfo.value, WaError)
