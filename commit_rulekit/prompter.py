"""Interactive commit prompting.

Builds the question list for an interactive commit session, runs it
through an injected ``ask`` callable (an inquirer-style prompt library, or
the bundled terminal asker), and formats the answers into a conventional
commit message.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .prompt import get_emoji
from .rules import COMMIT_TYPE_DEFINITIONS, DEFAULT_BODY_MAX_LINE_LENGTH

logger = logging.getLogger(__name__)

DEFAULT_MAX_SUBJECT_LENGTH = 100
NO_SCOPE_LABEL = "(none)"

Answers = Mapping[str, Any]


class Choice(BaseModel):
    """One selectable entry of a list question."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: str


class Question(BaseModel):
    """A single prompt question.

    Attributes:
        type: ``list`` (pick a choice), ``input`` (free text) or ``confirm``.
        name: Answer key.
        message: Text shown to the user.
        choices: Choices of a ``list`` question.
        default: Default answer.
        when: Predicate over the answers so far; the question is skipped
            when it returns False.
        validator: Returns True for valid input, or an error message.
        transform: Normalizes the raw input before it is stored.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["list", "input", "confirm"]
    name: str
    message: str
    choices: tuple[Choice, ...] = ()
    default: str | bool | None = None
    when: Callable[[Answers], bool] | None = None
    validator: Callable[[str], bool | str] | None = None
    transform: Callable[[str], str] | None = None

    def is_asked(self, answers: Answers) -> bool:
        return self.when is None or self.when(answers)


class PrompterOptions(BaseModel):
    """Options for the commit prompter.

    Attributes:
        emojis: Prefix type choices with unicode emojis.
        scopes: Scopes offered as a list. When empty the scope is free text.
        max_subject_length: Maximum subject length.
        max_body_length: Maximum length of each body line.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    emojis: bool = True
    scopes: list[str] = Field(default_factory=list)
    max_subject_length: int = Field(default=DEFAULT_MAX_SUBJECT_LENGTH, gt=0)
    max_body_length: int = Field(default=DEFAULT_BODY_MAX_LINE_LENGTH, gt=0)


class CommitAnswers(BaseModel):
    """Answers collected by the prompter."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    type: str
    scope: str = ""
    subject: str
    body: str = ""
    is_breaking: bool = Field(default=False, alias="isBreaking")
    breaking_body: str = Field(default="", alias="breakingBody")
    is_issue_affected: bool = Field(default=False, alias="isIssueAffected")
    issues: str = ""


def build_type_choices(emojis: bool) -> list[Choice]:
    """Build the commit type choices, in definition order."""
    choices = []
    for d in COMMIT_TYPE_DEFINITIONS:
        emoji = get_emoji(d.type, unicode=True) if emojis else ""
        prefix = f"{emoji}  " if emoji else ""
        choices.append(Choice(name=f"{prefix}{d.type}: {d.description}", value=d.type))
    return choices


def build_scope_choices(scopes: Sequence[str]) -> list[Choice]:
    """Build scope choices, led by an empty "(none)" choice."""
    return [Choice(name=NO_SCOPE_LABEL, value="")] + [Choice(name=s, value=s) for s in scopes]


def format_commit_message(answers: CommitAnswers | Answers) -> str:
    """Format prompt answers into a commit message.

    The header is ``type(scope)!: subject``, followed by blank-line
    separated body, ``BREAKING CHANGE:`` footer and issue references.

    Example:
        >>> format_commit_message({"type": "feat", "scope": "api", "subject": "add x"})
        'feat(api): add x'
    """
    if not isinstance(answers, CommitAnswers):
        answers = CommitAnswers.model_validate(dict(answers))

    scope_part = f"({answers.scope})" if answers.scope else ""
    breaking_mark = "!" if answers.is_breaking else ""
    parts = [f"{answers.type}{scope_part}{breaking_mark}: {answers.subject}"]

    if answers.body:
        parts += ["", answers.body]
    if answers.is_breaking and answers.breaking_body:
        parts += ["", f"BREAKING CHANGE: {answers.breaking_body}"]
    if answers.is_issue_affected and answers.issues:
        parts += ["", answers.issues]

    return "\n".join(parts)


def _lower_first(text: str) -> str:
    trimmed = text.strip()
    return trimmed[:1].lower() + trimmed[1:]


def build_questions(options: PrompterOptions | None = None) -> list[Question]:
    """Build the commit questions for the given options."""
    opts = options or PrompterOptions()
    max_subject = opts.max_subject_length
    max_body = opts.max_body_length

    def validate_subject(text: str) -> bool | str:
        if not text.strip():
            return "Subject is required"
        if len(text) > max_subject:
            return f"Subject must be {max_subject} characters or less (currently {len(text)})"
        return True

    def validate_body(text: str) -> bool | str:
        for line in text.splitlines():
            if len(line) > max_body:
                return f"Body lines must be {max_body} characters or less"
        return True

    if opts.scopes:
        scope_question = Question(
            type="list",
            name="scope",
            message="Select the scope of this change:",
            choices=tuple(build_scope_choices(opts.scopes)),
        )
    else:
        scope_question = Question(
            type="input",
            name="scope",
            message="Scope of this change (press enter to skip):",
            transform=lambda text: text.strip().lower(),
        )

    return [
        Question(
            type="list",
            name="type",
            message="Select the type of change you're committing:",
            choices=tuple(build_type_choices(opts.emojis)),
        ),
        scope_question,
        Question(
            type="input",
            name="subject",
            message=f"Short description (max {max_subject} chars):",
            validator=validate_subject,
            transform=_lower_first,
        ),
        Question(
            type="input",
            name="body",
            message="Longer description (press enter to skip):",
            validator=validate_body,
        ),
        Question(
            type="confirm",
            name="isBreaking",
            message="Are there any breaking changes?",
            default=False,
        ),
        Question(
            type="input",
            name="breakingBody",
            message="Describe the breaking changes:",
            when=lambda answers: answers.get("isBreaking") is True,
        ),
        Question(
            type="confirm",
            name="isIssueAffected",
            message="Does this change affect any open issues?",
            default=False,
        ),
        Question(
            type="input",
            name="issues",
            message="Issue references (e.g., 'fix #123', 'closes #456'):",
            when=lambda answers: answers.get("isIssueAffected") is True,
        ),
    ]


def prompter(
    ask: Callable[[list[Question]], Answers],
    commit: Callable[[str], None],
    options: PrompterOptions | Mapping[str, Any] | None = None,
) -> str | None:
    """Prompt for commit details and hand the formatted message to ``commit``.

    Args:
        ask: Runs the questions and returns the answers keyed by name.
        commit: Called with the formatted commit message.
        options: Prompter options, as PrompterOptions or a mapping.

    Returns:
        The commit message, or None if the user cancelled the prompt.
    """
    opts = (
        options
        if isinstance(options, PrompterOptions)
        else PrompterOptions.model_validate(dict(options or {}))
    )
    try:
        answers = ask(build_questions(opts))
    except (KeyboardInterrupt, EOFError):
        logger.debug("Commit prompt cancelled")
        return None

    message = format_commit_message(answers)
    commit(message)
    return message


def ask_in_terminal(
    questions: list[Question],
    *,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> dict[str, Any]:
    """Ask ``questions`` one by one on the terminal.

    List questions take the number of a choice, confirm questions take
    y/n, and input questions are re-asked until their validator passes.
    """
    answers: dict[str, Any] = {}
    for question in questions:
        if not question.is_asked(answers):
            continue
        if question.type == "list":
            answers[question.name] = _ask_choice(question, read, write)
        elif question.type == "confirm":
            answers[question.name] = _ask_confirm(question, read)
        else:
            answers[question.name] = _ask_input(question, read, write)
    return answers


def _numbered(choices: Sequence[Choice]) -> Iterator[str]:
    for i, choice in enumerate(choices, start=1):
        yield f"  {i}) {choice.name}"


def _ask_choice(
    question: Question, read: Callable[[str], str], write: Callable[[str], None]
) -> str:
    write(question.message)
    for line in _numbered(question.choices):
        write(line)
    while True:
        raw = read("> ").strip()
        if raw.isdigit() and 1 <= int(raw) <= len(question.choices):
            return question.choices[int(raw) - 1].value
        write(f"Enter a number between 1 and {len(question.choices)}")


def _ask_confirm(question: Question, read: Callable[[str], str]) -> bool:
    hint = "Y/n" if question.default is True else "y/N"
    raw = read(f"{question.message} ({hint}) ").strip().lower()
    if not raw:
        return bool(question.default)
    return raw in ("y", "yes")


def _ask_input(
    question: Question, read: Callable[[str], str], write: Callable[[str], None]
) -> str:
    while True:
        raw = read(f"{question.message} ")
        if question.validator is not None:
            verdict = question.validator(raw)
            if verdict is not True:
                write(str(verdict))
                continue
        return question.transform(raw) if question.transform else raw
