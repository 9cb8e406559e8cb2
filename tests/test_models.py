"""Tests for commit_rulekit.models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from commit_rulekit.models import (
    ChangesetConfig,
    ParsedCommit,
    RuleResult,
    VersioningStrategy,
    WorkspacePackageInfo,
)


class TestWorkspacePackageInfo:
    def test_create_with_required_fields(self) -> None:
        pkg = WorkspacePackageInfo(name="foo")
        assert pkg.version == "0.0.0"
        assert pkg.private is False
        assert pkg.publish_target_count == 0

    def test_public_package_is_publishable(self) -> None:
        assert WorkspacePackageInfo(name="foo").is_publishable is True

    def test_private_package_is_not_publishable(self) -> None:
        assert WorkspacePackageInfo(name="foo", private=True).is_publishable is False

    def test_private_with_publish_config_is_publishable(self) -> None:
        pkg = WorkspacePackageInfo(name="foo", private=True, has_publish_config=True)
        assert pkg.is_publishable is True

    def test_private_with_targets_is_publishable(self) -> None:
        pkg = WorkspacePackageInfo(name="foo", private=True, publish_target_count=2)
        assert pkg.is_publishable is True

    def test_is_frozen(self) -> None:
        pkg = WorkspacePackageInfo(name="foo")
        with pytest.raises(ValidationError):
            pkg.version = "2.0.0"  # type: ignore[misc]

    def test_rejects_unknown_access(self) -> None:
        with pytest.raises(ValidationError):
            WorkspacePackageInfo(name="foo", access="everyone")  # type: ignore[arg-type]


class TestChangesetConfig:
    def test_groups_are_sets(self) -> None:
        config = ChangesetConfig(fixed=[["a", "b", "a"]])  # type: ignore[list-item]
        assert config.fixed == [frozenset({"a", "b"})]
        assert config.linked == []


class TestVersioningStrategy:
    @pytest.fixture
    def two_packages(self) -> list[WorkspacePackageInfo]:
        return [WorkspacePackageInfo(name="a"), WorkspacePackageInfo(name="b")]

    def test_independent_requires_per_package_tags(
        self, two_packages: list[WorkspacePackageInfo]
    ) -> None:
        with pytest.raises(ValidationError, match="needs_per_package_tags"):
            VersioningStrategy(
                type="independent",
                needs_per_package_tags=False,
                all_packages=two_packages,
                publishable_packages=two_packages,
            )

    def test_fixed_group_requires_group(
        self, two_packages: list[WorkspacePackageInfo]
    ) -> None:
        with pytest.raises(ValidationError, match="fixed_group"):
            VersioningStrategy(
                type="fixed-group",
                needs_per_package_tags=False,
                all_packages=two_packages,
                publishable_packages=two_packages,
            )

    def test_group_only_for_fixed_group(self) -> None:
        with pytest.raises(ValidationError, match="fixed_group"):
            VersioningStrategy(
                type="single", needs_per_package_tags=False, fixed_group=frozenset({"a"})
            )

    def test_single_publishable_must_be_single(self) -> None:
        pkg = WorkspacePackageInfo(name="a")
        with pytest.raises(ValidationError, match="single"):
            VersioningStrategy(
                type="independent",
                needs_per_package_tags=True,
                all_packages=[pkg],
                publishable_packages=[pkg],
            )

    def test_publishable_must_be_subset(
        self, two_packages: list[WorkspacePackageInfo]
    ) -> None:
        with pytest.raises(ValidationError, match="not in all_packages"):
            VersioningStrategy(
                type="independent",
                needs_per_package_tags=True,
                all_packages=two_packages[:1],
                publishable_packages=two_packages,
            )


class TestParsedCommit:
    def test_all_fields_optional(self) -> None:
        commit = ParsedCommit()
        assert commit.raw is None
        assert commit.body is None

    def test_ignores_extra_parser_fields(self) -> None:
        commit = ParsedCommit.model_validate({"subject": "x", "notes": [], "mentions": []})
        assert commit.subject == "x"


class TestRuleResult:
    def test_behaves_like_tuple(self) -> None:
        valid, message = RuleResult(False, "nope")
        assert valid is False
        assert message == "nope"
        assert RuleResult(True) == (True, "")
