"""commit-rulekit: commit lint configuration with repository auto-detection.

Detects the DCO signoff requirement and the release/versioning topology of
a repository and merges them with user overrides into a lint configuration.
Also provides plain-text commit message rules and an interactive commit
prompter.

Example:
    >>> from commit_rulekit import build_config
    >>> config = build_config({"scopes": ["api", "cli"]})
    >>> engine_config = config.to_dict()
"""

from __future__ import annotations

from .config import (
    SKIP_DCO_ENV,
    ConfigOptions,
    LintConfig,
    ResolvedConfigOptions,
    build_config,
    resolve_options,
    skip_dco_from_env,
    static_config,
    synthesize,
)
from .detection import detect_dco, detect_scopes
from .errors import (
    ConfigError,
    DetectionError,
    ProjectRootNotFoundError,
    RulekitError,
    WorkspaceError,
)
from .models import (
    ChangesetConfig,
    Detected,
    ParsedCommit,
    ReleaseFormat,
    RuleResult,
    Unknown,
    VersioningStrategy,
    VersioningStrategyType,
    WorkspacePackageInfo,
)
from .plugins import RULES, RuleEvaluator, RuleRegistry, detect_markdown, rulekit_plugin
from .prompt import create_prompt_config
from .prompter import (
    CommitAnswers,
    PrompterOptions,
    Question,
    ask_in_terminal,
    format_commit_message,
    prompter,
)
from .rules import (
    COMMIT_TYPE_DEFINITIONS,
    COMMIT_TYPES,
    DCO_SIGNOFF_TEXT,
    DEFAULT_BODY_MAX_LINE_LENGTH,
)
from .versioning import (
    classify,
    detect_release_format,
    detect_versioning_strategy,
    get_package_tag,
    is_package_publishable,
    probe_versioning_strategy,
    release_format_for,
)

__all__ = [
    "COMMIT_TYPES",
    "COMMIT_TYPE_DEFINITIONS",
    "DCO_SIGNOFF_TEXT",
    "DEFAULT_BODY_MAX_LINE_LENGTH",
    "RULES",
    "SKIP_DCO_ENV",
    "ChangesetConfig",
    "CommitAnswers",
    "ConfigError",
    "ConfigOptions",
    "Detected",
    "DetectionError",
    "LintConfig",
    "ParsedCommit",
    "ProjectRootNotFoundError",
    "PrompterOptions",
    "Question",
    "ReleaseFormat",
    "ResolvedConfigOptions",
    "RuleEvaluator",
    "RuleRegistry",
    "RuleResult",
    "RulekitError",
    "Unknown",
    "VersioningStrategy",
    "VersioningStrategyType",
    "WorkspaceError",
    "WorkspacePackageInfo",
    "ask_in_terminal",
    "build_config",
    "classify",
    "create_prompt_config",
    "detect_dco",
    "detect_markdown",
    "detect_release_format",
    "detect_scopes",
    "detect_versioning_strategy",
    "format_commit_message",
    "get_package_tag",
    "is_package_publishable",
    "probe_versioning_strategy",
    "prompter",
    "release_format_for",
    "resolve_options",
    "rulekit_plugin",
    "skip_dco_from_env",
    "static_config",
    "synthesize",
]
