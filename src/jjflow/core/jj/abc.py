"""High-level jj process interface.

This module provides a clean abstraction over jj subprocess calls, making the
codebase testable without patching subprocess.

Architecture:
- Jj: Abstract base class defining the interface
- RealJj: Production implementation using subprocess
- FakeJj: In-memory implementation with canned output for tests
- DryRunJj: Wrapper that skips mutating commands
"""

import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from pathlib import Path

from jjflow.core.jj.types import ColoredOutput, CommandResult

# Argument prefixes that only read repository state. Everything else may rewrite history.
READ_ONLY_PREFIXES: tuple[tuple[str, ...], ...] = (
    ("log",),
    ("diff",),
    ("show",),
    ("root",),
    ("status",),
    ("--version",),
    ("bookmark", "list"),
    ("git", "remote", "list"),
)


def with_global_flags(args: Sequence[str], *, color: bool) -> tuple[str, ...]:
    """Append the flags every jj invocation carries.

    Args:
        args: Subcommand and its arguments
        color: Force ANSI color output instead of disabling it

    Returns:
        Arguments with no-pager, color and quiet flags appended
    """
    color_flag = "--color=always" if color else "--color=never"
    return (*args, "--no-pager", color_flag, "--quiet")


def is_read_only(args: Sequence[str]) -> bool:
    """Return True if the jj arguments describe a query rather than a mutation."""
    if not args:
        return True
    return any(tuple(args[: len(prefix)]) == prefix for prefix in READ_ONLY_PREFIXES)


class Jj(ABC):
    """Abstract interface for invoking the jj executable.

    All implementations (real and fake) must implement this interface.
    """

    @abstractmethod
    def run(self, cwd: Path, args: Sequence[str]) -> CommandResult:
        """Run jj and block until it exits.

        Args:
            cwd: Directory to run in (inside the repository)
            args: Subcommand and arguments, without global flags

        Returns:
            CommandResult with interleaved output and exit status
        """
        ...

    @abstractmethod
    def query(self, cwd: Path, args: Sequence[str]) -> CommandResult:
        """Run a read-only jj command whose stdout is parsed as data.

        Unlike run(), stderr is captured separately so warnings never mix
        into the parsed output.

        Args:
            cwd: Directory to run in (inside the repository)
            args: Subcommand and arguments, without global flags

        Returns:
            CommandResult with stdout and stderr kept apart
        """
        ...

    @abstractmethod
    def run_colored(self, cwd: Path, args: Sequence[str]) -> ColoredOutput:
        """Run jj with forced color and decode the escapes into style spans.

        Args:
            cwd: Directory to run in (inside the repository)
            args: Subcommand and arguments, without global flags

        Returns:
            ColoredOutput with plain text and style spans
        """
        ...

    @abstractmethod
    def get_version(self) -> str | None:
        """Return the output of ``jj --version``, or None if jj is unavailable."""
        ...

    @abstractmethod
    def get_repo_root(self, cwd: Path) -> Path | None:
        """Return the workspace root containing ``cwd``, or None outside a repository."""
        ...

    def run_async(
        self,
        cwd: Path,
        args: Sequence[str],
        on_complete: Callable[[CommandResult], None],
    ) -> threading.Thread:
        """Run jj on a background thread and invoke ``on_complete`` once it exits.

        Invocations are neither ordered nor deduplicated against each other;
        keeping one in flight per workflow is up to the caller.

        Args:
            cwd: Directory to run in
            args: Subcommand and arguments, without global flags
            on_complete: Callback receiving the CommandResult, called exactly once

        Returns:
            The started thread (join it to wait for completion)
        """

        def _worker() -> None:
            on_complete(self.run(cwd, args))

        thread = threading.Thread(target=_worker, daemon=True)
        thread.start()
        return thread
