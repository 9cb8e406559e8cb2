"""Versioning strategy and release format detection.

Classifies a repository by how its publishable packages are versioned:

1. **single**: zero or one publishable package. Tag format ``v1.0.0``.
2. **fixed-group**: every publishable package belongs to one changeset
   ``fixed`` group, so they share a version. Tag format ``v1.0.0``.
3. **independent**: several publishable packages versioned separately.
   Tag format ``@scope/pkg@1.0.0`` or ``pkg@v1.0.0``.

The classifier itself is pure; filesystem access happens in the
``probe``/``detect`` entry points.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from .errors import DetectionError
from .models import (
    ChangesetConfig,
    Detected,
    ReleaseFormat,
    Unknown,
    VersioningStrategy,
    VersioningStrategyType,
    WorkspacePackageInfo,
)
from .shell import find_project_root
from .workspace import discover_packages, is_root_private, read_changeset_config

logger = logging.getLogger(__name__)

STRATEGY_TO_FORMAT: dict[VersioningStrategyType, ReleaseFormat] = {
    "single": "semver",
    "fixed-group": "semver",
    "independent": "packages",
}


def is_package_publishable(pkg: WorkspacePackageInfo) -> bool:
    """Check if a package is eligible for publishing.

    A package is publishable if it has a publish access level configured,
    has at least one publish target, or is not marked private.
    """
    return pkg.is_publishable


def find_containing_fixed_group(
    names: Iterable[str], config: ChangesetConfig | None
) -> frozenset[str] | None:
    """Return the first fixed group containing every name, or None.

    The group may contain extra names (private or not-yet-created packages).
    """
    if config is None:
        return None
    wanted = set(names)
    for group in config.fixed:
        if wanted <= group:
            return group
    return None


def classify(
    all_packages: list[WorkspacePackageInfo],
    changeset_config: ChangesetConfig | None,
    *,
    is_root_private: bool = False,
) -> VersioningStrategy:
    """Classify a set of workspace packages into a versioning strategy.

    Args:
        all_packages: Every package found in the workspace.
        changeset_config: Changeset groupings, or None if not configured.
        is_root_private: Whether the root manifest is private. Reported on
            the result only; it does not affect the classification.

    Returns:
        The versioning strategy for the packages.
    """
    publishable = [p for p in all_packages if is_package_publishable(p)]
    common = {
        "all_packages": all_packages,
        "publishable_packages": publishable,
        "changeset_config": changeset_config,
        "is_monorepo": len(all_packages) > 1,
        "is_root_private": is_root_private,
    }

    if len(publishable) <= 1:
        explanation = (
            "No publishable packages found"
            if not publishable
            else f"Single publishable package: {publishable[0].name}"
        )
        return VersioningStrategy(
            type="single", needs_per_package_tags=False, explanation=explanation, **common
        )

    fixed_group = find_containing_fixed_group((p.name for p in publishable), changeset_config)
    if fixed_group is not None:
        return VersioningStrategy(
            type="fixed-group",
            needs_per_package_tags=False,
            fixed_group=fixed_group,
            explanation=(
                f"All {len(publishable)} publishable packages are in a fixed version group"
            ),
            **common,
        )

    return VersioningStrategy(
        type="independent",
        needs_per_package_tags=True,
        explanation=(
            f"{len(publishable)} publishable packages with independent/linked versioning"
        ),
        **common,
    )


def no_project_root_strategy() -> VersioningStrategy:
    """The strategy used when no project root can be located."""
    return VersioningStrategy(
        type="single", needs_per_package_tags=False, explanation="No project root found"
    )


def detect_versioning_strategy(cwd: Path | str | None = None) -> VersioningStrategy:
    """Detect the versioning strategy of the repository containing ``cwd``.

    Raises:
        ProjectRootNotFoundError: If ``cwd`` is not inside a repository.
        WorkspaceError: If a manifest or changeset file is malformed.
    """
    root = find_project_root(cwd)
    strategy = classify(
        discover_packages(root),
        read_changeset_config(root),
        is_root_private=is_root_private(root),
    )
    logger.debug("Versioning strategy for %s: %s (%s)", root, strategy.type, strategy.explanation)
    return strategy


def probe_versioning_strategy(
    cwd: Path | str | None = None,
) -> Detected[VersioningStrategy] | Unknown:
    """Detect the versioning strategy without raising on detection faults.

    Callers decide whether an Unknown outcome degrades or aborts.
    """
    try:
        return Detected[VersioningStrategy](value=detect_versioning_strategy(cwd))
    except DetectionError as exc:
        logger.debug("Versioning strategy unknown: %s", exc)
        return Unknown(reason=str(exc))


def get_package_tag(package_name: str, version: str, strategy: VersioningStrategy) -> str:
    """Get the git tag for a package release.

    Examples:
        single / fixed-group: ``v1.0.0``
        independent, scoped: ``@scope/pkg@1.0.0``
        independent, unscoped: ``pkg@v1.0.0``
    """
    if not strategy.needs_per_package_tags:
        return f"v{version}"
    if package_name.startswith("@"):
        return f"{package_name}@{version}"
    return f"{package_name}@v{version}"


def release_format_for(strategy_type: VersioningStrategyType) -> ReleaseFormat:
    """Map a versioning strategy type to its release commit format.

    ``semver`` release commits look like ``release: v1.2.3``;
    ``packages`` release commits look like ``release: version packages``.
    """
    return STRATEGY_TO_FORMAT[strategy_type]


def detect_release_format(cwd: Path | str | None = None) -> ReleaseFormat:
    """Detect the release commit format for the repository containing ``cwd``.

    Raises:
        ProjectRootNotFoundError: If ``cwd`` is not inside a repository.
        WorkspaceError: If a manifest or changeset file is malformed.
    """
    return release_format_for(detect_versioning_strategy(cwd).type)
