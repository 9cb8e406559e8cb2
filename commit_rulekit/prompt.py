"""Prompt configuration for interactive commit tools.

Builds the ``prompt`` section of the lint configuration: scope settings,
prompt messages and question definitions, including the commit type
choices with optional emojis.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .rules import COMMIT_TYPE_DEFINITIONS

# GitHub/GitLab compatible shortcodes
TYPE_EMOJIS: dict[str, str] = {
    "ai": ":robot:",
    "feat": ":sparkles:",
    "fix": ":bug:",
    "docs": ":memo:",
    "style": ":lipstick:",
    "refactor": ":recycle:",
    "perf": ":zap:",
    "test": ":white_check_mark:",
    "build": ":package:",
    "ci": ":construction_worker:",
    "chore": ":wrench:",
    "revert": ":rewind:",
    "release": ":bookmark:",
}

TYPE_EMOJIS_UNICODE: dict[str, str] = {
    "ai": "\U0001F916",
    "feat": "✨",
    "fix": "\U0001F41B",
    "docs": "\U0001F4DD",
    "style": "\U0001F484",
    "refactor": "♻️",
    "perf": "⚡",
    "test": "✅",
    "build": "\U0001F4E6",
    "ci": "\U0001F477",
    "chore": "\U0001F527",
    "revert": "⏪",
    "release": "\U0001F516",
}

SCOPE_ENUM_SEPARATOR = ","


def get_emoji(commit_type: str, *, unicode: bool = False) -> str:
    """Return the emoji for a commit type, or '' for unknown types."""
    table = TYPE_EMOJIS_UNICODE if unicode else TYPE_EMOJIS
    return table.get(commit_type, "")


class TypeEnumEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: str
    title: str
    emoji: str = ""


class PromptQuestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: str
    enum: dict[str, TypeEnumEntry] | list[str] | None = None


class PromptSettings(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    enable_multiple_scopes: bool = Field(default=True, alias="enableMultipleScopes")
    scope_enum_separator: str = Field(default=SCOPE_ENUM_SEPARATOR, alias="scopeEnumSeparator")


class PromptConfig(BaseModel):
    """The ``prompt`` section of a lint configuration."""

    model_config = ConfigDict(frozen=True)

    settings: PromptSettings = Field(default_factory=PromptSettings)
    messages: dict[str, str] = Field(default_factory=dict)
    questions: dict[str, PromptQuestion] = Field(default_factory=dict)


DEFAULT_MESSAGES: dict[str, str] = {
    "skip": "(press enter to skip)",
    "max": "(max %d chars)",
    "min": "(min %d chars)",
    "emptyWarning": "cannot be empty",
    "upperLimitWarning": "over the limit",
    "lowerLimitWarning": "below the limit",
}


def create_type_enum(emojis: bool) -> dict[str, TypeEnumEntry]:
    """Build the commit type choices, keyed by type, in definition order."""
    return {
        d.type: TypeEnumEntry(
            description=d.description,
            title=d.title,
            emoji=get_emoji(d.type) if emojis else "",
        )
        for d in COMMIT_TYPE_DEFINITIONS
    }


def create_prompt_config(*, emojis: bool = False, scopes: list[str] | None = None) -> PromptConfig:
    """Create the prompt configuration.

    Args:
        emojis: Include emoji shortcodes in the commit type choices.
        scopes: Scopes offered by the scope question. When empty or None
            the scope question accepts free text.
    """
    return PromptConfig(
        settings=PromptSettings(),
        messages=dict(DEFAULT_MESSAGES),
        questions={
            "type": PromptQuestion(
                description="Select the type of change you're committing:",
                enum=create_type_enum(emojis),
            ),
            "scope": PromptQuestion(
                description="What is the scope of this change (e.g., component name):",
                enum=list(scopes) if scopes else None,
            ),
            "subject": PromptQuestion(
                description="Write a short, imperative description of the change:"
            ),
            "body": PromptQuestion(
                description="Provide a longer description of the change (optional):"
            ),
            "isBreaking": PromptQuestion(description="Are there any breaking changes?"),
            "breakingBody": PromptQuestion(description="Describe the breaking changes:"),
            "isIssueAffected": PromptQuestion(
                description="Does this change affect any open issues?"
            ),
            "issuesBody": PromptQuestion(
                description="Add issue references (e.g., 'fix #123', 'close #456'):"
            ),
        },
    )
