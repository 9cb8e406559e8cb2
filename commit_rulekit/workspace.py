"""Workspace and changeset readers.

Discovers the packages of a uv workspace (or the single root project)
together with their publishing metadata, and reads changeset groupings
of packages that must version together.
"""

from __future__ import annotations

import glob
import json
import logging
from collections.abc import Mapping
from pathlib import Path

from packaging.utils import canonicalize_name

from .errors import WorkspaceError
from .models import ChangesetConfig, WorkspacePackageInfo
from .toml import (
    get_project_name,
    get_project_version,
    get_publish_config,
    get_tool_table,
    get_workspace_member_globs,
    is_marked_private,
    load_pyproject,
)

logger = logging.getLogger(__name__)

CHANGESET_CONFIG_PATH = Path(".changeset") / "config.json"


def _package_info(root: Path, pkg_dir: Path) -> WorkspacePackageInfo | None:
    manifest = pkg_dir / "pyproject.toml"
    doc = load_pyproject(manifest)
    try:
        name = get_project_name(doc, None)
        if not name:
            # Virtual members without [project].name are not packages
            return None
        access, target_count = get_publish_config(doc)
        version = get_project_version(doc)
        private = is_marked_private(doc)
    except WorkspaceError as exc:
        raise WorkspaceError(f"Invalid manifest {manifest}: {exc}") from exc
    if access not in (None, "public", "restricted"):
        raise WorkspaceError(f"Invalid publish access {access!r} in {manifest}")
    return WorkspacePackageInfo(
        name=name,
        version=version,
        path=pkg_dir.relative_to(root).as_posix(),
        private=private,
        has_publish_config=access is not None,
        access=access,
        publish_target_count=target_count,
    )


def discover_packages(root: Path) -> list[WorkspacePackageInfo]:
    """Scan the project and return every package with publish metadata.

    Reads [tool.uv.workspace].members from the root pyproject.toml to find
    package directories. Without a workspace table the root project itself
    is the only package. A missing root pyproject.toml yields no packages.

    Raises:
        WorkspaceError: If a manifest exists but cannot be parsed.
    """
    root_manifest = root / "pyproject.toml"
    if not root_manifest.exists():
        logger.debug("No pyproject.toml at %s", root)
        return []

    root_doc = load_pyproject(root_manifest)
    member_globs = get_workspace_member_globs(root_doc)

    if not member_globs:
        info = _package_info(root, root)
        return [info] if info else []

    # Expand globs to find all package directories
    member_dirs: list[Path] = []
    for pattern in member_globs:
        for match in sorted(glob.glob(str(root / pattern))):
            p = Path(match)
            if (p / "pyproject.toml").exists() and p not in member_dirs:
                member_dirs.append(p)

    packages: list[WorkspacePackageInfo] = []
    for d in member_dirs:
        info = _package_info(root, d)
        if info is not None:
            packages.append(info)

    for info in packages:
        flags = "private" if info.private else "public"
        logger.debug("  %s %s (%s) %s", info.name, info.version, info.path, flags)

    return packages


def is_root_private(root: Path) -> bool:
    """Check whether the root manifest opts out of publishing."""
    root_manifest = root / "pyproject.toml"
    if not root_manifest.exists():
        return False
    return is_marked_private(load_pyproject(root_manifest))


def _parse_groups(raw: object, key: str, source: Path) -> list[frozenset[str]]:
    if raw is None:
        return []
    if not isinstance(raw, list) or not all(isinstance(g, list) for g in raw):
        raise WorkspaceError(f"'{key}' in {source} must be a list of package-name lists")
    return [frozenset(canonicalize_name(str(name)) for name in group) for group in raw]


def read_changeset_config(root: Path) -> ChangesetConfig | None:
    """Read changeset version groupings for the project.

    Looks for .changeset/config.json first, then for a
    [tool.commit-rulekit.changesets] table in the root pyproject.toml.
    Package names are canonicalized the same way discovered names are.

    Returns:
        The changeset config, or None when no changeset tooling is configured.

    Raises:
        WorkspaceError: If a changeset file exists but is malformed.
    """
    config_path = root / CHANGESET_CONFIG_PATH
    if config_path.exists():
        try:
            data = json.loads(config_path.read_text())
        except (OSError, json.JSONDecodeError) as exc:
            raise WorkspaceError(f"Could not read {config_path}: {exc}") from exc
        if not isinstance(data, dict):
            raise WorkspaceError(f"{config_path} must contain a JSON object")
        source = config_path
    else:
        root_manifest = root / "pyproject.toml"
        if not root_manifest.exists():
            return None
        table = get_tool_table(load_pyproject(root_manifest)).get("changesets")
        if table is None:
            return None
        if not isinstance(table, Mapping):
            raise WorkspaceError(
                f"[tool.commit-rulekit.changesets] in {root_manifest} must be a table"
            )
        data = table
        source = root_manifest

    return ChangesetConfig(
        fixed=_parse_groups(data.get("fixed"), "fixed", source),
        linked=_parse_groups(data.get("linked"), "linked", source),
    )
