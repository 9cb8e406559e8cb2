"""Data models for commit-rulekit.

These Pydantic models represent the workspace, changeset, versioning and
commit data flowing between the detectors, the config synthesizer and the
rule evaluators. Result models are frozen so they can be shared freely.
"""

from __future__ import annotations

from typing import Generic, Literal, NamedTuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

PackageAccess = Literal["public", "restricted"]
VersioningStrategyType = Literal["single", "fixed-group", "independent"]
ReleaseFormat = Literal["semver", "packages", "scoped"]

T = TypeVar("T")


class WorkspacePackageInfo(BaseModel):
    """Publishing metadata for a single package in the workspace.

    Attributes:
        name: Canonical package name.
        version: Version string from the package manifest.
        path: Path of the package directory relative to the project root.
        private: Whether the package opts out of publishing.
        has_publish_config: Whether a publish ``access`` level is configured.
        access: The configured access level, if any.
        publish_target_count: Number of configured publish targets.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    version: str = "0.0.0"
    path: str = "."
    private: bool = False
    has_publish_config: bool = False
    access: PackageAccess | None = None
    publish_target_count: int = 0

    @property
    def is_publishable(self) -> bool:
        return self.has_publish_config or self.publish_target_count > 0 or not self.private


class ChangesetConfig(BaseModel):
    """Groups of package names that must version together.

    Attributes:
        fixed: Groups whose members always share one released version.
        linked: Groups whose members bump together but keep their own versions.
    """

    model_config = ConfigDict(frozen=True)

    fixed: list[frozenset[str]] = Field(default_factory=list)
    linked: list[frozenset[str]] = Field(default_factory=list)


class VersioningStrategy(BaseModel):
    """How a repository's packages are versioned and tagged.

    Construction validates the relationships between the fields, so a
    strategy can never claim per-package tags for a single-version repo
    or carry a fixed group without being of type ``fixed-group``.
    """

    model_config = ConfigDict(frozen=True)

    type: VersioningStrategyType
    needs_per_package_tags: bool
    all_packages: list[WorkspacePackageInfo] = Field(default_factory=list)
    publishable_packages: list[WorkspacePackageInfo] = Field(default_factory=list)
    changeset_config: ChangesetConfig | None = None
    fixed_group: frozenset[str] | None = None
    is_monorepo: bool = False
    is_root_private: bool = False
    explanation: str = ""

    @model_validator(mode="after")
    def _check_invariants(self) -> VersioningStrategy:
        if self.needs_per_package_tags != (self.type == "independent"):
            raise ValueError("needs_per_package_tags must be true exactly for 'independent'")
        if (self.fixed_group is not None) != (self.type == "fixed-group"):
            raise ValueError("fixed_group must be set exactly for 'fixed-group'")
        if len(self.publishable_packages) <= 1 and self.type != "single":
            raise ValueError("at most one publishable package requires type 'single'")
        missing = [p.name for p in self.publishable_packages if p not in self.all_packages]
        if missing:
            raise ValueError(f"publishable packages not in all_packages: {missing}")
        return self


class Detected(BaseModel, Generic[T]):
    """A detector outcome carrying the detected value."""

    model_config = ConfigDict(frozen=True)

    value: T


class Unknown(BaseModel):
    """A detector outcome recording why nothing could be detected."""

    model_config = ConfigDict(frozen=True)

    reason: str


class ParsedCommit(BaseModel):
    """A commit message already split into its conventional-commit parts.

    Every field may be missing; parsers often emit extra keys (notes,
    references, mentions) that are ignored here.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    raw: str | None = None
    header: str | None = None
    type: str | None = None
    scope: str | None = None
    subject: str | None = None
    body: str | None = None
    footer: str | None = None


class RuleResult(NamedTuple):
    """Outcome of evaluating one rule against one commit."""

    valid: bool
    message: str = ""
