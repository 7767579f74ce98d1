"""Read the active branch name from the workspace descriptor.

The descriptor is written by the external branch-creation tool. Its schema
is not fixed, so parsing is lenient: a strict JSON parse is tried first and,
when the file is not valid JSON, a key scan looks for the ``"name"`` field.
Only a missing file or a missing/blank name is an error.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from wa.errors import MalformedStateError, MissingStateError
from wa.logging import get_logger

logger = get_logger(__name__)

_NAME_PATTERN = re.compile(r'"name"\s*:\s*"((?:[^"\\]|\\.)*)"')


def read_active_branch_name(path: Path) -> str:
    """Return the branch name recorded in the descriptor at ``path``.

    Raises:
        MissingStateError: If the descriptor file does not exist.
        MalformedStateError: If no non-blank name can be extracted.
    """
    if not path.is_file():
        raise MissingStateError(path)
    raw = path.read_text(encoding="utf-8", errors="replace")
    try:
        parsed: Any = json.loads(raw)
    except json.JSONDecodeError:
        logger.debug("descriptor.lenient_scan", path=str(path))
        name = _name_from_scan(raw)
    else:
        name = _name_from_mapping(parsed)
    if name is None or not name.strip():
        raise MalformedStateError(path)
    return name.strip()


def _name_from_mapping(parsed: Any) -> str | None:
    """Return the top-level string name of a parsed descriptor."""
    if not isinstance(parsed, dict):
        return None
    value = parsed.get("name")
    return value if isinstance(value, str) else None


def _name_from_scan(raw: str) -> str | None:
    """Find the first ``"name": "..."`` pair in loosely structured text."""
    match = _NAME_PATTERN.search(raw)
    if not match:
        return None
    try:
        return json.loads(f'"{match.group(1)}"')
    except json.JSONDecodeError:
        return match.group(1)
