"""TOML reading utilities.

Uses tomlkit to read pyproject.toml files, the manifest format for
workspace members and for the repository root.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import tomlkit
from packaging.utils import canonicalize_name
from tomlkit.exceptions import TOMLKitError

from .errors import WorkspaceError

TOOL_TABLE = "commit-rulekit"
PRIVATE_CLASSIFIER = "Private :: Do Not Upload"


def load_pyproject(path: Path) -> tomlkit.TOMLDocument:
    """Load and parse a pyproject.toml file.

    Raises:
        WorkspaceError: If the file cannot be read or is not valid TOML.
    """
    try:
        return tomlkit.parse(path.read_text())
    except (OSError, TOMLKitError) as exc:
        raise WorkspaceError(f"Could not read {path}: {exc}") from exc


def _get_table(doc: Mapping[str, Any], *keys: str) -> Mapping[str, Any]:
    """Walk nested tables, returning an empty mapping for a missing key.

    Raises:
        WorkspaceError: If a key along the way holds a non-table value.
    """
    table: Any = doc
    for depth, key in enumerate(keys, start=1):
        table = table.get(key, {})
        if not isinstance(table, Mapping):
            dotted = ".".join(keys[:depth])
            raise WorkspaceError(f"[{dotted}] must be a table, got {type(table).__name__}")
    return table


def get_project_name(doc: tomlkit.TOMLDocument, fallback: str | None) -> str | None:
    """Extract the canonical package name from [project].name.

    Names are normalized per PEP 503 (lowercase, hyphens instead of
    underscores) for consistent comparison.

    Args:
        doc: Parsed pyproject.toml document.
        fallback: Value to return if name is not specified.

    Raises:
        WorkspaceError: If [project] is not a table.
    """
    name = _get_table(doc, "project").get("name")
    if not name:
        return fallback
    return canonicalize_name(str(name))


def get_project_version(doc: tomlkit.TOMLDocument) -> str:
    """Extract version from [project].version, defaulting to '0.0.0'."""
    return str(_get_table(doc, "project").get("version", "0.0.0"))


def get_workspace_member_globs(doc: tomlkit.TOMLDocument) -> list[str]:
    """Extract workspace member glob patterns from [tool.uv.workspace].

    Returns an empty list when the document does not define a workspace,
    which marks a single-package repository.

    Raises:
        WorkspaceError: If the workspace tables or ``members`` are malformed.
    """
    members = _get_table(doc, "tool", "uv", "workspace").get("members")
    if not members:
        return []
    if not isinstance(members, list):
        raise WorkspaceError("[tool.uv.workspace].members must be a list of globs")
    return [str(m) for m in members]


def get_tool_table(doc: tomlkit.TOMLDocument) -> Mapping[str, Any]:
    """Return the [tool.commit-rulekit] table, or an empty mapping."""
    return _get_table(doc, "tool", TOOL_TABLE)


def is_marked_private(doc: tomlkit.TOMLDocument) -> bool:
    """Check whether a manifest opts out of publishing.

    A package is private if it carries the ``Private :: Do Not Upload``
    classifier or sets ``private = true`` in [tool.commit-rulekit].
    """
    classifiers = _get_table(doc, "project").get("classifiers", [])
    if not isinstance(classifiers, list):
        raise WorkspaceError("[project].classifiers must be a list")
    if PRIVATE_CLASSIFIER in [str(c) for c in classifiers]:
        return True
    return bool(get_tool_table(doc).get("private", False))


def get_publish_config(doc: tomlkit.TOMLDocument) -> tuple[str | None, int]:
    """Extract (access, target_count) from [tool.commit-rulekit.publish].

    ``target_count`` is the length of ``targets`` when it is a list,
    otherwise 1 when ``access`` is set and 0 when nothing is configured.
    """
    publish = _get_table(doc, "tool", TOOL_TABLE, "publish")
    access = publish.get("access")
    access = str(access) if access is not None else None
    targets = publish.get("targets")
    if isinstance(targets, list):
        return access, len(targets)
    return access, 1 if access is not None else 0
