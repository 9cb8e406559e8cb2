"""Git and project-root utilities.

Provides a thin wrapper around git subprocess calls and the project-root
lookup used by every detector. Root lookup asks git first and falls back
to walking up the directory tree looking for a .git entry.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from .errors import ProjectRootNotFoundError

logger = logging.getLogger(__name__)


def git(*args: str, cwd: Path | str | None = None, check: bool = True) -> str:
    """Run a git command and return stdout.

    Args:
        *args: Arguments to pass to git (e.g., "rev-parse", "--show-toplevel").
        cwd: Directory to run git in (passed as ``git -C``). Defaults to
             the process working directory.
        check: If True (default), raise on non-zero exit.

    Returns:
        Stripped stdout from the git command.
    """
    cmd = ["git"]
    if cwd is not None:
        cmd.extend(["-C", str(cwd)])
    result = subprocess.run([*cmd, *args], capture_output=True, text=True, check=check)
    return result.stdout.strip()


def find_project_root(cwd: Path | str | None = None) -> Path:
    """Locate the repository root containing ``cwd``.

    Git commit hooks can run from any subdirectory, so detectors always
    resolve the root rather than trusting the working directory.

    Raises:
        ProjectRootNotFoundError: If ``cwd`` is not inside a repository.
    """
    start = Path(cwd) if cwd is not None else Path.cwd()

    try:
        toplevel = git("rev-parse", "--show-toplevel", cwd=start)
        if toplevel:
            return Path(toplevel)
    except (subprocess.CalledProcessError, FileNotFoundError, NotADirectoryError):
        logger.debug("git could not resolve a toplevel for %s", start)

    # Fallback: walk up looking for .git (file for worktrees, dir otherwise)
    d = start.resolve()
    for candidate in (d, *d.parents):
        if (candidate / ".git").exists():
            return candidate

    raise ProjectRootNotFoundError(str(start))


def safely_find_project_root(cwd: Path | str | None = None) -> Path | None:
    """Like find_project_root(), but return None instead of raising."""
    try:
        return find_project_root(cwd)
    except ProjectRootNotFoundError:
        return None
