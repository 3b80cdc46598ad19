"""Production Jj implementation using subprocess.

This module provides the real Jj implementation that executes actual jj
commands via subprocess.
"""

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from jjflow.core.ansi import decode_ansi
from jjflow.core.jj.abc import Jj, with_global_flags
from jjflow.core.jj.types import ColoredOutput, CommandResult
from jjflow.core.subprocess import run_subprocess_with_context

logger = logging.getLogger(__name__)


class RealJj(Jj):
    """Production implementation using subprocess.

    No timeout is applied: a hung jj process blocks the caller indefinitely.
    """

    def __init__(self, executable: str = "jj") -> None:
        self._executable = executable

    def run(self, cwd: Path, args: Sequence[str]) -> CommandResult:
        """Run jj and block until it exits."""
        full_args = with_global_flags(args, color=False)
        logger.debug("Running jj in %s: %s", cwd, " ".join(full_args))
        result = run_subprocess_with_context(
            [self._executable, *full_args],
            operation_context=f"run jj {args[0] if args else ''}".rstrip(),
            cwd=cwd,
        )
        logger.debug("jj exited with status %d", result.returncode)
        return CommandResult(args=full_args, stdout=result.stdout, exit_status=result.returncode)

    def query(self, cwd: Path, args: Sequence[str]) -> CommandResult:
        """Run a read-only jj command with stderr captured separately."""
        full_args = with_global_flags(args, color=False)
        logger.debug("Querying jj in %s: %s", cwd, " ".join(full_args))
        result = run_subprocess_with_context(
            [self._executable, *full_args],
            operation_context=f"query jj {args[0] if args else ''}".rstrip(),
            cwd=cwd,
            merge_stderr=False,
        )
        if result.stderr:
            logger.debug("jj stderr: %s", result.stderr.strip())
        return CommandResult(
            args=full_args,
            stdout=result.stdout,
            exit_status=result.returncode,
            stderr=result.stderr or "",
        )

    def run_colored(self, cwd: Path, args: Sequence[str]) -> ColoredOutput:
        """Run jj with forced color and decode the escapes into style spans."""
        full_args = with_global_flags(args, color=True)
        logger.debug("Running colored jj in %s: %s", cwd, " ".join(full_args))
        result = run_subprocess_with_context(
            [self._executable, *full_args],
            operation_context=f"run jj {args[0] if args else ''}".rstrip(),
            cwd=cwd,
        )
        return decode_ansi(result.stdout, exit_status=result.returncode)

    def get_version(self) -> str | None:
        """Return the output of ``jj --version``, or None if jj is unavailable."""
        try:
            result = subprocess.run(
                [self._executable, "--version"],
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError:
            return None
        if result.returncode != 0:
            return None
        return result.stdout.strip()

    def get_repo_root(self, cwd: Path) -> Path | None:
        """Return the workspace root containing ``cwd``, or None outside a repository."""
        try:
            result = subprocess.run(
                [self._executable, "root", "--no-pager", "--color=never"],
                cwd=cwd,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError:
            return None
        if result.returncode != 0:
            return None

        root = result.stdout.strip()
        if not root:
            return None
        return Path(root)
