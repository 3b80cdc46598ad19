"""No-op wrapper for mutating jj commands."""

from collections.abc import Sequence
from pathlib import Path

import click

from jjflow.cli.output import user_output
from jjflow.core.jj.abc import Jj, is_read_only, with_global_flags
from jjflow.core.jj.types import ColoredOutput, CommandResult


class DryRunJj(Jj):
    """No-op wrapper for jj operations.

    Read-only queries are delegated to the wrapped implementation.
    Mutating commands print what would run and return empty successful output.
    """

    def __init__(self, wrapped: Jj) -> None:
        """Initialize dry-run wrapper with a real implementation.

        Args:
            wrapped: The jj implementation to wrap
        """
        self._wrapped = wrapped

    def run(self, cwd: Path, args: Sequence[str]) -> CommandResult:
        """Delegate queries; print and skip mutations."""
        if is_read_only(args):
            return self._wrapped.run(cwd, args)

        user_output(click.style("[DRY RUN] ", fg="yellow") + "jj " + " ".join(args))
        return CommandResult(args=with_global_flags(args, color=False), stdout="", exit_status=0)

    def query(self, cwd: Path, args: Sequence[str]) -> CommandResult:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.query(cwd, args)

    def run_colored(self, cwd: Path, args: Sequence[str]) -> ColoredOutput:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.run_colored(cwd, args)

    def get_version(self) -> str | None:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.get_version()

    def get_repo_root(self, cwd: Path) -> Path | None:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.get_repo_root(cwd)
