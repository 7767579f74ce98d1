"""Domain models for wa invocations and workflow steps."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Command(str, Enum):
    """Top-level commands a resolved invocation can run."""

    TEST = "test"
    BRANCH_CREATE = "branch-create"
    BRANCH_DELETE = "branch-delete"
    LINT = "lint"
    HELP = "help"


class Operation(str, Enum):
    """External operations delegated to scripts or the control-plane tool."""

    CREATE_BRANCH = "create-branch"
    DELETE_BRANCH = "delete-branch"
    SAFETY_CHECK = "safety-check"
    DEPLOY = "deploy"
    APPEND_FIXTURES = "append-fixtures"
    RUN_TESTS = "run-tests"
    UPDATE_SNAPSHOTS = "update-snapshots"
    LINT = "lint"


class BranchState(str, Enum):
    """States of the branch-create pipeline."""

    PENDING = "pending"
    CREATED = "created"
    VERIFIED = "verified"
    DEPLOYED = "deployed"
    FIXTURES_APPENDED = "fixtures_appended"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class TestOptions:
    """Options for `wa test`.

    Attributes:
        test_name: Single test to run, or None for the full suite.
        update_snapshots: Regenerate snapshots instead of running tests.
    """

    __test__ = False

    test_name: str | None = None
    update_snapshots: bool = False


@dataclass(frozen=True, slots=True)
class BranchCreateOptions:
    """Options for `wa branch`.

    Attributes:
        append_fixtures: Load fixtures into the new branch.
        deploy: Deploy the project to the new branch.
    """

    append_fixtures: bool = False
    deploy: bool = False


@dataclass(frozen=True, slots=True)
class Invocation:
    """Resolved command plus its validated options."""

    command: Command
    options: TestOptions | BranchCreateOptions | None = None


@dataclass(frozen=True, slots=True)
class OperationResult:
    """Exit status of one external operation."""

    operation: Operation
    exit_status: int

    @property
    def succeeded(self) -> bool:
        """Return True when the operation exited with status 0."""
        return self.exit_status == 0
