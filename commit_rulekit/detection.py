"""Soft repository detectors: DCO requirement and workspace scopes.

These detectors are advisory. A commit hook must never fail because of
detection plumbing, so every failure degrades to a conservative default.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import DetectionError
from .shell import safely_find_project_root
from .workspace import discover_packages

logger = logging.getLogger(__name__)

DCO_FILENAME = "DCO"


def detect_dco(cwd: Path | str | None = None) -> bool:
    """Detect whether DCO signoff should be required.

    Checks for a file named exactly ``DCO`` at the repository root (not the
    working directory, since git commit can run from any subdirectory).
    The name comparison is case-sensitive even on case-insensitive
    filesystems.

    Returns:
        True if the DCO file exists at the root, False otherwise or when
        no root can be resolved.
    """
    root = safely_find_project_root(cwd)
    if root is None:
        logger.debug("No project root for %s; DCO not required", cwd)
        return False
    try:
        return any(p.name == DCO_FILENAME and p.is_file() for p in root.iterdir())
    except OSError as exc:
        logger.debug("Could not list %s: %s", root, exc)
        return False


def _scope_name(name: str) -> str | None:
    if name.startswith("@"):
        _, _, rest = name.partition("/")
        return rest or None
    return name


def detect_scopes(cwd: Path | str | None = None) -> list[str]:
    """Detect commit scopes from workspace package names.

    Scoped names like ``@scope/package-name`` contribute only the part
    after the slash.

    Returns:
        Sorted scope names, or an empty list when the root or workspace
        cannot be read.
    """
    root = safely_find_project_root(cwd)
    if root is None:
        return []
    try:
        packages = discover_packages(root)
    except DetectionError as exc:
        logger.debug("Scope detection skipped: %s", exc)
        return []

    scopes: set[str] = set()
    for pkg in packages:
        scope = _scope_name(pkg.name)
        if scope:
            scopes.add(scope)
    return sorted(scopes)
