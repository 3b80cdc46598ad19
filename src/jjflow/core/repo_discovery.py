"""Repository discovery functionality.

Locates the jj workspace containing the current directory before any command
sequence runs.
"""

from dataclasses import dataclass
from pathlib import Path

from jjflow.core.jj.abc import Jj


@dataclass(frozen=True)
class RepoContext:
    """Represents a jj workspace root."""

    root: Path


@dataclass(frozen=True)
class NoRepoSentinel:
    """Sentinel value indicating execution outside a jj repository.

    Commands that require a repository check for this sentinel and fail fast.
    """

    message: str = "Not inside a jj repository"


def discover_repo_or_sentinel(cwd: Path, jj: Jj) -> RepoContext | NoRepoSentinel:
    """Ask jj for the workspace root containing ``cwd``.

    Falls back to walking up the tree looking for a ``.jj`` directory when jj
    itself cannot answer (e.g. a stale working copy makes ``jj root`` fail).

    Args:
        cwd: Current working directory to start from
        jj: jj process interface

    Returns:
        RepoContext if inside a jj repository, NoRepoSentinel otherwise
    """
    if not cwd.exists():
        return NoRepoSentinel(message=f"Start path '{cwd}' does not exist")

    root = jj.get_repo_root(cwd)
    if root is not None:
        return RepoContext(root=root)

    cur = cwd.resolve()
    for parent in [cur, *cur.parents]:
        if (parent / ".jj").is_dir():
            return RepoContext(root=parent)

    return NoRepoSentinel(message="Not inside a jj repository (no .jj found up the tree)")
