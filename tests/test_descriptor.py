"""Tests for workspace descriptor reading."""

from __future__ import annotations

from pathlib import Path

import pytest

from wa.errors import MalformedStateError, MissingStateError
from wa.storage.descriptor import read_active_branch_name


def _descriptor(tmp_path: Path, content: str) -> Path:
    path = tmp_path / ".workspace.json"
    path.write_text(content, encoding="utf-8")
    return path


def test_read_active_branch_name_from_json(tmp_path: Path) -> None:
    """Strict JSON descriptors should yield their name field."""
    path = _descriptor(tmp_path, '{"id": "abc", "name": "feature_x", "host": "https://api"}')
    assert read_active_branch_name(path) == "feature_x"


def test_read_active_branch_name_missing_file_raises(tmp_path: Path) -> None:
    """An absent descriptor should raise MissingStateError."""
    path = tmp_path / ".workspace.json"
    with pytest.raises(MissingStateError) as excinfo:
        read_active_branch_name(path)
    assert excinfo.value.path == path


def test_read_active_branch_name_tolerates_malformed_unrelated_fields(tmp_path: Path) -> None:
    """Broken JSON elsewhere in the file should not hide a usable name."""
    path = _descriptor(
        tmp_path,
        '{\n  "token": "p.eyJ",\n  "name": "feature_y",\n  "scopes": [1, 2,],\n}\n',
    )
    assert read_active_branch_name(path) == "feature_y"


def test_read_active_branch_name_decodes_escapes_in_lenient_scan(tmp_path: Path) -> None:
    """Escaped characters should be decoded when scanning non-JSON text."""
    path = _descriptor(tmp_path, '{"name": "feat\\u005fz", broken')
    assert read_active_branch_name(path) == "feat_z"


def test_read_active_branch_name_strips_surrounding_whitespace(tmp_path: Path) -> None:
    """Whitespace around the recorded name should be dropped."""
    path = _descriptor(tmp_path, '{"name": "  feature_x  "}')
    assert read_active_branch_name(path) == "feature_x"


def test_read_active_branch_name_ignores_nested_name_in_valid_json(tmp_path: Path) -> None:
    """Only the top-level name of a valid descriptor counts."""
    path = _descriptor(tmp_path, '{"workspace": {"name": "main"}}')
    with pytest.raises(MalformedStateError):
        read_active_branch_name(path)


@pytest.mark.parametrize(
    "content",
    [
        '{"name": ""}',
        '{"name": "   "}',
        '{"name": null}',
        '{"name": 42}',
        '{"id": "abc"}',
        '["name", "feature_x"]',
        "",
        "not json at all",
        '{"name": , "id": "x"',
    ],
)
def test_read_active_branch_name_rejects_unusable_names(tmp_path: Path, content: str) -> None:
    """Missing, blank or non-string names should raise MalformedStateError."""
    path = _descriptor(tmp_path, content)
    with pytest.raises(MalformedStateError):
        read_active_branch_name(path)
