"""Tests for commit_rulekit.toml."""

from __future__ import annotations

from pathlib import Path

import pytest
import tomlkit

from commit_rulekit.errors import WorkspaceError
from commit_rulekit.toml import (
    get_project_name,
    get_project_version,
    get_publish_config,
    get_workspace_member_globs,
    is_marked_private,
    load_pyproject,
)


class TestLoadPyproject:
    def test_load(self, tmp_path: Path) -> None:
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "test-package"\n')
        doc = load_pyproject(path)
        assert get_project_name(doc, None) == "test-package"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(WorkspaceError, match="Could not read"):
            load_pyproject(tmp_path / "pyproject.toml")

    def test_invalid_toml_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "pyproject.toml"
        path.write_text("[project\nname = ")
        with pytest.raises(WorkspaceError):
            load_pyproject(path)


class TestGetProjectName:
    def test_normalizes_name(self, sample_toml_doc: tomlkit.TOMLDocument) -> None:
        assert get_project_name(sample_toml_doc, "fallback") == "my-package"

    def test_returns_fallback_when_missing(self) -> None:
        doc = tomlkit.parse("[project]")
        assert get_project_name(doc, "my-fallback") == "my-fallback"

    def test_returns_fallback_when_no_project(self) -> None:
        doc = tomlkit.parse("")
        assert get_project_name(doc, None) is None


class TestGetProjectVersion:
    def test_returns_version(self, sample_toml_doc: tomlkit.TOMLDocument) -> None:
        assert get_project_version(sample_toml_doc) == "2.0.0"

    def test_returns_default_when_missing(self) -> None:
        doc = tomlkit.parse("[project]")
        assert get_project_version(doc) == "0.0.0"


class TestGetWorkspaceMemberGlobs:
    def test_returns_members(self, sample_toml_doc: tomlkit.TOMLDocument) -> None:
        assert get_workspace_member_globs(sample_toml_doc) == ["packages/*", "libs/*"]

    def test_empty_without_workspace(self) -> None:
        doc = tomlkit.parse("[project]\nname = 'foo'")
        assert get_workspace_member_globs(doc) == []


class TestIsMarkedPrivate:
    def test_public_by_default(self, sample_toml_doc: tomlkit.TOMLDocument) -> None:
        assert is_marked_private(sample_toml_doc) is False

    def test_private_classifier(self) -> None:
        doc = tomlkit.parse('[project]\nclassifiers = ["Private :: Do Not Upload"]')
        assert is_marked_private(doc) is True

    def test_tool_table_flag(self) -> None:
        doc = tomlkit.parse("[tool.commit-rulekit]\nprivate = true")
        assert is_marked_private(doc) is True

    def test_tool_table_flag_false(self) -> None:
        doc = tomlkit.parse("[tool.commit-rulekit]\nprivate = false")
        assert is_marked_private(doc) is False


class TestGetPublishConfig:
    def test_access_and_targets(self, sample_toml_doc: tomlkit.TOMLDocument) -> None:
        assert get_publish_config(sample_toml_doc) == ("restricted", 2)

    def test_access_without_targets_counts_one(self) -> None:
        doc = tomlkit.parse('[tool.commit-rulekit.publish]\naccess = "public"')
        assert get_publish_config(doc) == ("public", 1)

    def test_targets_without_access(self) -> None:
        doc = tomlkit.parse('[tool.commit-rulekit.publish]\ntargets = ["pypi"]')
        assert get_publish_config(doc) == (None, 1)

    def test_nothing_configured(self) -> None:
        assert get_publish_config(tomlkit.parse("[project]")) == (None, 0)


class TestMalformedTables:
    def test_project_string_raises(self) -> None:
        doc = tomlkit.parse('project = "oops"')
        with pytest.raises(WorkspaceError, match=r"\[project\] must be a table, got String"):
            get_project_name(doc, None)

    @pytest.mark.parametrize(
        ("content", "table"),
        [
            ('tool = "oops"', "[tool]"),
            ("[tool]\nuv = 3", "[tool.uv]"),
            ('[tool.uv]\nworkspace = ["a"]', "[tool.uv.workspace]"),
        ],
    )
    def test_non_table_workspace_levels(self, content: str, table: str) -> None:
        with pytest.raises(WorkspaceError) as exc_info:
            get_workspace_member_globs(tomlkit.parse(content))
        assert str(exc_info.value).startswith(f"{table} must be a table")

    def test_project_string_fails_every_project_accessor(self) -> None:
        doc = tomlkit.parse('project = "oops"')
        with pytest.raises(WorkspaceError, match="must be a table"):
            get_project_version(doc)
        with pytest.raises(WorkspaceError, match="must be a table"):
            is_marked_private(doc)

    def test_publish_must_be_table(self) -> None:
        doc = tomlkit.parse('[tool.commit-rulekit]\npublish = "pypi"')
        with pytest.raises(WorkspaceError, match=r"\[tool.commit-rulekit.publish\]"):
            get_publish_config(doc)

    def test_members_must_be_list(self) -> None:
        doc = tomlkit.parse('[tool.uv.workspace]\nmembers = "packages/*"')
        with pytest.raises(WorkspaceError, match="members must be a list"):
            get_workspace_member_globs(doc)

    def test_classifiers_must_be_list(self) -> None:
        doc = tomlkit.parse('[project]\nclassifiers = "Private :: Do Not Upload"')
        with pytest.raises(WorkspaceError, match="classifiers must be a list"):
            is_marked_private(doc)
