"""Safety gate run between branch creation and any mutating step."""

from __future__ import annotations

from wa.errors import UnsafeBranchError
from wa.logging import get_logger
from wa.models import Operation
from wa.runner import Invoker

logger = get_logger(__name__)


def ensure_branch_is_safe(invoke: Invoker, branch: str) -> None:
    """Run the external safety check for the active branch.

    The check reads the same workspace state the creation step just wrote,
    so it takes no arguments. There is no override for a failed check.

    Raises:
        UnsafeBranchError: If the check exits non-zero.
    """
    result = invoke(Operation.SAFETY_CHECK)
    if not result.succeeded:
        logger.warning("safety.rejected", branch=branch, exit_status=result.exit_status)
        raise UnsafeBranchError(branch)
    logger.debug("safety.passed", branch=branch)
