"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
import tomlkit


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    """Create an empty repository root (a directory with .git)."""
    (tmp_path / ".git").mkdir()
    return tmp_path


@pytest.fixture
def write_package() -> Callable[..., Path]:
    """Return a helper writing a package pyproject.toml under a directory."""

    def _write(
        pkg_dir: Path,
        name: str | None,
        version: str = "1.0.0",
        *,
        private: bool = False,
        access: str | None = None,
        targets: list[str] | None = None,
    ) -> Path:
        pkg_dir.mkdir(parents=True, exist_ok=True)
        lines = ["[project]"]
        if name is not None:
            lines.append(f'name = "{name}"')
        lines.append(f'version = "{version}"')
        if private:
            lines.append('classifiers = ["Private :: Do Not Upload"]')
        if access is not None or targets is not None:
            lines.append("")
            lines.append("[tool.commit-rulekit.publish]")
            if access is not None:
                lines.append(f'access = "{access}"')
            if targets is not None:
                lines.append(f"targets = {targets!r}".replace("'", '"'))
        path = pkg_dir / "pyproject.toml"
        path.write_text("\n".join(lines) + "\n")
        return path

    return _write


@pytest.fixture
def workspace(repo: Path, write_package: Callable[..., Path]) -> Path:
    """A uv workspace with two public packages and one private package."""
    (repo / "pyproject.toml").write_text(
        '[tool.uv.workspace]\nmembers = ["packages/*"]\n'
    )
    write_package(repo / "packages" / "alpha", "pkg-alpha", "1.2.0")
    write_package(repo / "packages" / "beta", "pkg_beta", "0.3.1")
    write_package(repo / "packages" / "internal", "internal-tools", private=True)
    return repo


@pytest.fixture
def sample_toml_doc() -> tomlkit.TOMLDocument:
    """Create a sample TOML document."""
    content = """\
[project]
name = "My_Package"
version = "2.0.0"
classifiers = ["Programming Language :: Python :: 3"]

[tool.uv.workspace]
members = ["packages/*", "libs/*"]

[tool.commit-rulekit.publish]
access = "restricted"
targets = ["pypi", "internal"]
"""
    return tomlkit.parse(content)
