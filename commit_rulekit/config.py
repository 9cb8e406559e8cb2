"""Lint configuration synthesis.

Merges detected repository signals with user overrides into the final rule
and prompt configuration:

1. Validate user options (fail fast with the offending option named)
2. Read the environment signal and run the detectors (build_config only)
3. Synthesize rules and prompt settings from the resolved inputs

Step 3 (synthesize) is pure: all filesystem and environment access happens
in build_config before it is called.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from .detection import detect_dco
from .errors import ConfigError
from .models import ReleaseFormat, Unknown
from .plugins import (
    BODY_NO_MARKDOWN,
    RULES,
    SIGNED_OFF_BY,
    SUBJECT_NO_MARKDOWN,
    RuleEvaluator,
)
from .prompt import PromptConfig, PromptSettings, create_prompt_config
from .rules import BASE_PRESET, COMMIT_TYPES, DEFAULT_BODY_MAX_LINE_LENGTH, RuleConfigTuple
from .versioning import no_project_root_strategy, probe_versioning_strategy, release_format_for

logger = logging.getLogger(__name__)

SKIP_DCO_ENV = "COMMIT_RULEKIT_SKIP_DCO"
TRUTHY = {"1", "true", "yes", "on"}

ScopeName = Annotated[str, Field(min_length=1)]
_RULES_ADAPTER = TypeAdapter(dict[str, RuleConfigTuple])


class ConfigOptions(BaseModel):
    """User-supplied configuration overrides.

    Attributes:
        dco: Require signoff. None means detect from a DCO file.
        scopes: Allowed commit scopes. None means any scope is accepted.
        additional_scopes: Extra allowed scopes merged with ``scopes``.
        release_format: Release commit format. None means detect from the
            versioning strategy.
        emojis: Show emojis in prompt type choices.
        body_max_line_length: Maximum length of a body line.
        no_markdown: Reject markdown in commit subjects and bodies.
        cwd: Directory detection starts from. Defaults to the process cwd.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    dco: StrictBool | None = None
    scopes: list[ScopeName] | None = None
    additional_scopes: list[ScopeName] | None = None
    release_format: ReleaseFormat | None = None
    emojis: StrictBool = False
    body_max_line_length: StrictInt = Field(default=DEFAULT_BODY_MAX_LINE_LENGTH, gt=0)
    no_markdown: StrictBool = True
    cwd: Path | None = None


# Options after validation and defaulting share the same shape.
ResolvedConfigOptions = ConfigOptions


class LintConfig(BaseModel):
    """A synthesized lint configuration.

    ``rules`` and ``plugins`` are read-only mappings, and every instance
    gets its own plugin snapshot. ``to_dict()`` gives the mapping handed to
    the lint engine. ``release_format`` is carried for release tooling and
    is not a rule.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    extends: tuple[str, ...] = (BASE_PRESET,)
    plugins: tuple[Mapping[str, Mapping[str, RuleEvaluator]], ...] = Field(
        default_factory=lambda: (RULES.as_plugin(),)
    )
    rules: Mapping[str, RuleConfigTuple]
    prompt: PromptConfig
    release_format: ReleaseFormat = "semver"

    @field_validator("plugins", mode="after")
    @classmethod
    def _freeze_plugins(
        cls, plugins: tuple[Mapping[str, Mapping[str, RuleEvaluator]], ...]
    ) -> tuple[Mapping[str, Mapping[str, RuleEvaluator]], ...]:
        return tuple(
            MappingProxyType({key: MappingProxyType(dict(value)) for key, value in p.items()})
            for p in plugins
        )

    @field_validator("rules", mode="after")
    @classmethod
    def _freeze_rules(cls, rules: Mapping[str, RuleConfigTuple]) -> Mapping[str, RuleConfigTuple]:
        return MappingProxyType(dict(rules))

    def to_dict(self) -> dict[str, Any]:
        """Return a fresh engine-facing mapping (lists, camelCase prompt keys)."""
        return {
            "extends": list(self.extends),
            "plugins": [{"rules": dict(p["rules"])} for p in self.plugins],
            "rules": _RULES_ADAPTER.dump_python(dict(self.rules), mode="json"),
            "prompt": self.prompt.model_dump(mode="json", by_alias=True, exclude_none=True),
        }


def _format_validation_error(exc: ValidationError) -> str:
    lines = []
    for err in exc.errors():
        option = ".".join(str(part) for part in err["loc"]) or "<options>"
        lines.append(f"  {option}: {err['msg']}")
    return "Invalid commit-rulekit options:\n" + "\n".join(lines)


def resolve_options(
    options: ConfigOptions | Mapping[str, Any] | None = None,
) -> ResolvedConfigOptions:
    """Validate user options and apply defaults.

    Raises:
        ConfigError: If any option is unknown or has an invalid value.
    """
    if options is None:
        return ConfigOptions()
    if isinstance(options, ConfigOptions):
        return options
    if not isinstance(options, Mapping):
        raise ConfigError(
            f"Options must be a mapping or ConfigOptions, got {type(options).__name__}"
        )
    try:
        return ConfigOptions.model_validate(dict(options))
    except ValidationError as exc:
        raise ConfigError(_format_validation_error(exc)) from exc


def skip_dco_from_env(environ: Mapping[str, str]) -> bool:
    """Read the skip-signoff signal from an environment mapping."""
    return environ.get(SKIP_DCO_ENV, "").strip().lower() in TRUTHY


def synthesize(
    resolved: ResolvedConfigOptions,
    detected_dco: bool,
    skip_dco: bool,
    *,
    release_format: ReleaseFormat | None = None,
) -> LintConfig:
    """Build the lint configuration from already-resolved inputs.

    Args:
        resolved: Validated user options.
        detected_dco: Whether a DCO file was detected.
        skip_dco: Force signoff off (CI title validation).
        release_format: Detected release format, used when the user did
            not set one.

    Returns:
        An immutable lint configuration.
    """
    if skip_dco:
        dco = False
    elif resolved.dco is not None:
        dco = resolved.dco
    else:
        dco = detected_dco

    # Scopes are unrestricted unless the user lists some
    scope_set = sorted(set(resolved.scopes or []) | set(resolved.additional_scopes or []))

    rules: dict[str, RuleConfigTuple] = {
        "body-max-line-length": (2, "always", resolved.body_max_line_length),
        "type-enum": (2, "always", COMMIT_TYPES),
        # Any subject case: AI tools often capitalize subjects
        "subject-case": (0,),
    }
    if scope_set:
        rules["scope-enum"] = (2, "always", tuple(scope_set))
    if dco:
        rules[SIGNED_OFF_BY] = (2, "always")
    if resolved.no_markdown:
        rules[BODY_NO_MARKDOWN] = (2, "always")
        rules[SUBJECT_NO_MARKDOWN] = (2, "always")

    return LintConfig(
        rules=rules,
        prompt=create_prompt_config(emojis=resolved.emojis, scopes=scope_set),
        release_format=resolved.release_format or release_format or "semver",
    )


def build_config(
    options: ConfigOptions | Mapping[str, Any] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> LintConfig:
    """Create a lint configuration with auto-detection.

    Detects whatever the user did not override: DCO signoff from a DCO
    file at the project root, and the release format from the versioning
    strategy. When the strategy cannot be detected (for example outside a
    repository) the release format degrades to the single-package format.

    Args:
        options: User overrides, as ConfigOptions or a mapping.
        environ: Environment to read the skip-signoff signal from.
            Defaults to os.environ.

    Raises:
        ConfigError: If the options are invalid.

    Example:
        >>> config = build_config({"dco": True, "scopes": ["api", "cli"]})
        >>> config.rules["scope-enum"]
        (2, 'always', ('api', 'cli'))
    """
    resolved = resolve_options(options)
    cwd = resolved.cwd or Path.cwd()
    skip_dco = skip_dco_from_env(os.environ if environ is None else environ)

    detected_dco = False
    if resolved.dco is None and not skip_dco:
        detected_dco = detect_dco(cwd)

    release_format = resolved.release_format
    if release_format is None:
        outcome = probe_versioning_strategy(cwd)
        if isinstance(outcome, Unknown):
            logger.warning(
                "Versioning strategy unknown (%s); assuming a single package", outcome.reason
            )
            strategy = no_project_root_strategy()
        else:
            strategy = outcome.value
        release_format = release_format_for(strategy.type)

    logger.debug(
        "Resolved signals: dco=%s skip_dco=%s release_format=%s",
        resolved.dco if resolved.dco is not None else detected_dco,
        skip_dco,
        release_format,
    )
    return synthesize(resolved, detected_dco, skip_dco, release_format=release_format)


def static_config() -> LintConfig:
    """Return a configuration that performs no detection.

    Signoff is always required, scopes are unrestricted and markdown
    rules are off.
    """
    return LintConfig(
        rules={
            "body-max-line-length": (2, "always", DEFAULT_BODY_MAX_LINE_LENGTH),
            "type-enum": (2, "always", COMMIT_TYPES),
            SIGNED_OFF_BY: (2, "always"),
            "subject-case": (0,),
        },
        prompt=PromptConfig(settings=PromptSettings()),
    )
