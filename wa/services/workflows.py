"""Workflow sequencing for wa commands.

Every workflow runs its external operations one at a time and stops at the
first failure by raising a ``WaError`` subclass. Branch creation is modelled
as an explicit state machine so that deploy and fixture steps can only be
reached from the ``verified`` state.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from rich.console import Console

from wa.errors import ExternalOperationFailure, WaError
from wa.logging import get_logger
from wa.models import (
    BranchCreateOptions,
    BranchState,
    Command,
    Invocation,
    Operation,
    OperationResult,
    TestOptions,
)
from wa.runner import Invoker
from wa.services.safety import ensure_branch_is_safe
from wa.ui.render import print_branch, print_step, print_success

logger = get_logger(__name__)

_TRANSITIONS: dict[BranchState, frozenset[BranchState]] = {
    BranchState.PENDING: frozenset({BranchState.CREATED}),
    BranchState.CREATED: frozenset({BranchState.VERIFIED}),
    BranchState.VERIFIED: frozenset({BranchState.DEPLOYED, BranchState.FIXTURES_APPENDED}),
    BranchState.DEPLOYED: frozenset({BranchState.FIXTURES_APPENDED}),
    BranchState.FIXTURES_APPENDED: frozenset(),
    BranchState.FAILED: frozenset(),
}


def run_operation(invoke: Invoker, operation: Operation, args: Sequence[str] = ()) -> OperationResult:
    """Invoke one operation and raise if it exits non-zero."""
    result = invoke(operation, args)
    if not result.succeeded:
        raise ExternalOperationFailure(operation.value, result.exit_status)
    return result


class BranchCreateWorkflow:
    """Create a branch, gate it, then optionally deploy and append fixtures.

    Attributes:
        state: Current pipeline state.
        branch: Active branch name once read from the descriptor.
        failure: Error that moved the pipeline to ``failed``, if any.
    """

    def __init__(
        self,
        invoke: Invoker,
        read_branch: Callable[[], str],
        options: BranchCreateOptions,
        console: Console,
    ) -> None:
        self.invoke = invoke
        self.read_branch = read_branch
        self.options = options
        self.console = console
        self.state = BranchState.PENDING
        self.branch: str | None = None
        self.failure: WaError | None = None

    def _advance(self, target: BranchState) -> None:
        if target not in _TRANSITIONS[self.state]:
            raise RuntimeError(f"Illegal branch transition: {self.state.value} -> {target.value}")
        logger.debug("branch.transition", source=self.state.value, target=target.value)
        self.state = target

    def run(self) -> str:
        """Run the pipeline and return the active branch name."""
        try:
            return self._run()
        except WaError as err:
            logger.debug("branch.transition", source=self.state.value, target=BranchState.FAILED.value)
            self.state = BranchState.FAILED
            self.failure = err
            raise

    def _run(self) -> str:
        print_step(self.console, "Creating branch")
        run_operation(self.invoke, Operation.CREATE_BRANCH)
        self._advance(BranchState.CREATED)

        self.branch = self.read_branch()
        print_branch(self.console, self.branch)

        print_step(self.console, "Running safety check")
        ensure_branch_is_safe(self.invoke, self.branch)
        self._advance(BranchState.VERIFIED)
        print_success(self.console, f"Branch '{self.branch}' passed the safety check")

        if self.options.deploy:
            print_step(self.console, f"Deploying to '{self.branch}'")
            run_operation(self.invoke, Operation.DEPLOY, [self.branch])
            self._advance(BranchState.DEPLOYED)
            print_success(self.console, f"Deployed to '{self.branch}'")

        if self.options.append_fixtures:
            print_step(self.console, "Appending fixtures")
            run_operation(self.invoke, Operation.APPEND_FIXTURES)
            self._advance(BranchState.FIXTURES_APPENDED)
            print_success(self.console, "Fixtures appended")

        print_success(self.console, f"Branch '{self.branch}' is ready")
        return self.branch


class WorkflowEngine:
    """Dispatch a resolved invocation to its workflow."""

    def __init__(self, invoke: Invoker, read_branch: Callable[[], str], console: Console) -> None:
        self.invoke = invoke
        self.read_branch = read_branch
        self.console = console

    def run(self, invocation: Invocation) -> None:
        """Run the workflow for ``invocation``.

        Raises:
            WaError: On the first failing step.
        """
        logger.debug("workflow.start", command=invocation.command.value)
        if invocation.command is Command.TEST:
            self.run_tests(invocation.options or TestOptions())
        elif invocation.command is Command.BRANCH_CREATE:
            self.create_branch(invocation.options or BranchCreateOptions())
        elif invocation.command is Command.BRANCH_DELETE:
            self.delete_branch()
        elif invocation.command is Command.LINT:
            self.lint()
        else:
            raise ValueError(f"No workflow for command: {invocation.command.value}")
        logger.debug("workflow.done", command=invocation.command.value)

    def run_tests(self, options: TestOptions) -> None:
        """Regenerate snapshots, run one test, or run the whole suite."""
        if options.update_snapshots:
            print_step(self.console, "Regenerating test snapshots")
            run_operation(self.invoke, Operation.UPDATE_SNAPSHOTS)
            print_success(self.console, "Snapshots regenerated")
        elif options.test_name:
            print_step(self.console, f"Running test '{options.test_name}'")
            run_operation(self.invoke, Operation.RUN_TESTS, [options.test_name])
            print_success(self.console, f"Test '{options.test_name}' passed")
        else:
            print_step(self.console, "Running test suite")
            run_operation(self.invoke, Operation.RUN_TESTS)
            print_success(self.console, "All tests passed")

    def create_branch(self, options: BranchCreateOptions) -> str:
        """Run the branch-create pipeline and return the active branch."""
        return BranchCreateWorkflow(self.invoke, self.read_branch, options, self.console).run()

    def delete_branch(self) -> None:
        """Run the interactive delete operation.

        A declined confirmation and a genuine failure both surface as a
        non-zero exit and are reported the same way.
        """
        print_step(self.console, "Deleting branch")
        run_operation(self.invoke, Operation.DELETE_BRANCH)
        print_success(self.console, "Branch deleted")

    def lint(self) -> None:
        """Lint schema and pipe definition files."""
        print_step(self.console, "Linting definitions")
        run_operation(self.invoke, Operation.LINT)
        print_success(self.console, "Lint passed")
