"""Exception types raised by commit-rulekit.

Detection errors are raised by the hard detectors (versioning strategy,
release format) and swallowed by the soft ones (DCO, scopes). Rule
violations are never exceptions; they are returned as RuleResult values.
"""

from __future__ import annotations


class RulekitError(Exception):
    """Base class for all commit-rulekit errors."""


class ConfigError(RulekitError, ValueError):
    """Raised when user-supplied configuration options are invalid."""


class DetectionError(RulekitError):
    """Raised when a repository signal cannot be detected."""


class ProjectRootNotFoundError(DetectionError):
    """Raised when no project root can be located from a working directory."""

    def __init__(self, cwd: str) -> None:
        super().__init__(f"Not inside a git repository: {cwd}")
        self.cwd = cwd


class WorkspaceError(DetectionError):
    """Raised when workspace or changeset files exist but cannot be read."""
