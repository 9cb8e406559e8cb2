"""Commit type definitions and shared rule constants."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

RuleSeverity = Literal[0, 1, 2]
RuleApplicability = Literal["always", "never"]
RuleConfigTuple = (
    tuple[RuleSeverity]
    | tuple[RuleSeverity, RuleApplicability]
    | tuple[RuleSeverity, RuleApplicability, Any]
)

BASE_PRESET = "@commitlint/config-conventional"
RULE_NAMESPACE = "rulekit"
DEFAULT_BODY_MAX_LINE_LENGTH = 300
DCO_SIGNOFF_TEXT = "Signed-off-by:"


class CommitTypeDefinition(BaseModel):
    """A commit type with the metadata shown in prompts and changelogs."""

    model_config = ConfigDict(frozen=True)

    type: str
    description: str
    title: str


COMMIT_TYPE_DEFINITIONS: tuple[CommitTypeDefinition, ...] = (
    CommitTypeDefinition(
        type="ai",
        description="Changes to AI agent instructions, prompts or tooling",
        title="AI",
    ),
    CommitTypeDefinition(type="feat", description="A new feature", title="Features"),
    CommitTypeDefinition(type="fix", description="A bug fix", title="Bug Fixes"),
    CommitTypeDefinition(
        type="docs", description="Documentation only changes", title="Documentation"
    ),
    CommitTypeDefinition(
        type="style",
        description="Changes that do not affect the meaning of the code (formatting, whitespace)",
        title="Styles",
    ),
    CommitTypeDefinition(
        type="refactor",
        description="A code change that neither fixes a bug nor adds a feature",
        title="Code Refactoring",
    ),
    CommitTypeDefinition(
        type="perf", description="A code change that improves performance", title="Performance"
    ),
    CommitTypeDefinition(
        type="test", description="Adding missing tests or correcting existing tests", title="Tests"
    ),
    CommitTypeDefinition(
        type="build",
        description="Changes to the build system or external dependencies",
        title="Builds",
    ),
    CommitTypeDefinition(
        type="ci",
        description="Changes to CI configuration files and scripts",
        title="Continuous Integration",
    ),
    CommitTypeDefinition(
        type="chore",
        description="Other changes that don't modify source or test files",
        title="Chores",
    ),
    CommitTypeDefinition(type="revert", description="Reverts a previous commit", title="Reverts"),
    CommitTypeDefinition(
        type="release", description="Release commits and version bumps", title="Releases"
    ),
)

COMMIT_TYPES: tuple[str, ...] = tuple(d.type for d in COMMIT_TYPE_DEFINITIONS)
