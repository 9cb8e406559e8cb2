"""Commit message rules enforcing plain-text messages.

These rules reject the markdown formatting that AI agents tend to put in
commit messages, and provide a case-insensitive DCO signoff check. Every
rule is a pure function of a parsed commit returning a RuleResult; a rule
violation is a result, never an exception.

Rules are registered by name in a RuleRegistry, and the registry is handed
to the lint engine as a plugin whose rule ids are namespaced ``rulekit/``.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from .models import ParsedCommit, RuleResult
from .rules import RULE_NAMESPACE

RuleFunction = Callable[[ParsedCommit], RuleResult]

# (label, pattern) in reporting order. Simple "- item" and "* item" lists
# are permitted and have no pattern here.
MARKDOWN_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("headers (#)", re.compile(r"^#{1,6}\s", re.MULTILINE)),
    ("numbered lists (1.)", re.compile(r"^[\t ]*\d+\.\s", re.MULTILINE)),
    ("code fences (```)", re.compile(r"```")),
    ("bold (**text**)", re.compile(r"(\*\*|__)[^*_]+(\*\*|__)")),
    ("links ([text](url))", re.compile(r"\[.+?\]\(.+?\)")),
    ("horizontal rules (---)", re.compile(r"^[-*_]{3,}$", re.MULTILINE)),
)
INLINE_CODE_PATTERN = re.compile(r"`[^`]+`")
INLINE_CODE_LABEL = "excessive inline code (`code`)"
# A couple of `identifier` mentions are fine; more reads as markdown.
MAX_INLINE_CODE_SPANS = 2

LIST_LINE_PATTERN = re.compile(r"^[\t ]*(?:[-*•]|\d+[.):])\s", re.MULTILINE)
SIGNOFF_PATTERN = re.compile(r"^signed-off-by:\s*.+$", re.MULTILINE | re.IGNORECASE)


def detect_markdown(text: str) -> list[str]:
    """Return the labels of every markdown construct found in ``text``."""
    detected = [label for label, pattern in MARKDOWN_PATTERNS if pattern.search(text)]
    if len(INLINE_CODE_PATTERN.findall(text)) > MAX_INLINE_CODE_SPANS:
        detected.append(INLINE_CODE_LABEL)
    return detected


def body_no_markdown(commit: ParsedCommit) -> RuleResult:
    """Reject commit bodies containing markdown formatting.

    Example:
        Invalid::

            feat: add feature

            ## Summary
            1. Added new feature

        Valid::

            feat: add feature

            Added new feature and fixed the related bug.
    """
    if not commit.body:
        return RuleResult(True, "")
    patterns = detect_markdown(commit.body)
    if patterns:
        return RuleResult(False, f"body contains markdown formatting: {', '.join(patterns)}")
    return RuleResult(True, "")


def subject_no_markdown(commit: ParsedCommit) -> RuleResult:
    """Reject commit subjects containing markdown formatting."""
    if not commit.subject:
        return RuleResult(True, "")
    patterns = detect_markdown(commit.subject)
    if patterns:
        return RuleResult(False, f"subject contains markdown formatting: {', '.join(patterns)}")
    return RuleResult(True, "")


def body_prose_only(commit: ParsedCommit) -> RuleResult:
    """Require commit bodies to be prose paragraphs.

    Stricter than body_no_markdown: any list-like line fails, including
    plain dash, asterisk and bullet lists.
    """
    if not commit.body:
        return RuleResult(True, "")
    if LIST_LINE_PATTERN.search(commit.body):
        return RuleResult(False, "body should be prose paragraphs, not lists")
    return RuleResult(True, "")


def signed_off_by(commit: ParsedCommit) -> RuleResult:
    """Require a DCO signoff trailer, matching the trailer key in any case."""
    if not commit.raw:
        return RuleResult(False, "message must be signed off")
    if SIGNOFF_PATTERN.search(commit.raw):
        return RuleResult(True, "")
    return RuleResult(False, "message must be signed off")


def _as_commit(commit: ParsedCommit | Mapping[str, Any]) -> ParsedCommit:
    if isinstance(commit, ParsedCommit):
        return commit
    # Host parsers may hand over non-string values; rules only read text
    fields = {
        key: value if value is None or isinstance(value, str) else str(value)
        for key, value in commit.items()
        if key in ParsedCommit.model_fields
    }
    return ParsedCommit.model_validate(fields)


class RuleEvaluator:
    """A named rule that can be evaluated synchronously or awaited."""

    def __init__(self, name: str, func: RuleFunction, description: str = "") -> None:
        self.name = name
        self.func = func
        doc_lines = (func.__doc__ or "").strip().splitlines()
        self.description = description or (doc_lines[0] if doc_lines else "")

    def evaluate(self, commit: ParsedCommit | Mapping[str, Any]) -> RuleResult:
        return self.func(_as_commit(commit))

    async def aevaluate(self, commit: ParsedCommit | Mapping[str, Any]) -> RuleResult:
        return self.evaluate(commit)

    def __call__(self, commit: ParsedCommit | Mapping[str, Any]) -> RuleResult:
        return self.evaluate(commit)

    def __repr__(self) -> str:
        return f"RuleEvaluator({self.name!r})"


class RuleRegistry:
    """Registry of rule evaluators keyed by namespaced rule id."""

    def __init__(self, namespace: str) -> None:
        self.namespace = namespace
        self._rules: dict[str, RuleEvaluator] = {}

    def rule_id(self, name: str) -> str:
        return f"{self.namespace}/{name}"

    def register(self, name: str, func: RuleFunction, description: str = "") -> RuleEvaluator:
        """Register ``func`` under ``<namespace>/<name>``.

        Raises:
            ValueError: If the rule id is already registered.
        """
        rule_id = self.rule_id(name)
        if rule_id in self._rules:
            raise ValueError(f"Rule already registered: {rule_id}")
        evaluator = RuleEvaluator(rule_id, func, description)
        self._rules[rule_id] = evaluator
        return evaluator

    def get(self, rule_id: str) -> RuleEvaluator:
        """Look up a rule by id.

        Raises:
            KeyError: If no rule is registered under ``rule_id``.
        """
        try:
            return self._rules[rule_id]
        except KeyError:
            raise KeyError(f"Unknown rule: {rule_id}") from None

    def evaluate(self, rule_id: str, commit: ParsedCommit | Mapping[str, Any]) -> RuleResult:
        return self.get(rule_id).evaluate(commit)

    def names(self) -> list[str]:
        return list(self._rules)

    def as_plugin(self) -> Mapping[str, Mapping[str, RuleEvaluator]]:
        """Return a read-only ``{"rules": {rule_id: evaluator}}`` plugin mapping.

        The mapping is a snapshot: rules registered later are not included.
        """
        return MappingProxyType({"rules": MappingProxyType(dict(self._rules))})

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules

    def __iter__(self) -> Iterator[RuleEvaluator]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)


RULES = RuleRegistry(RULE_NAMESPACE)
BODY_NO_MARKDOWN = RULES.register("body-no-markdown", body_no_markdown).name
SUBJECT_NO_MARKDOWN = RULES.register("subject-no-markdown", subject_no_markdown).name
BODY_PROSE_ONLY = RULES.register("body-prose-only", body_prose_only).name
SIGNED_OFF_BY = RULES.register("signed-off-by", signed_off_by).name

rulekit_plugin = RULES.as_plugin()
