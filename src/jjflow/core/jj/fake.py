"""In-memory fake implementation of Jj for testing.

Output is configured up front by matching on the leading arguments of an
invocation; every call is recorded for assertions.
"""

from collections.abc import Mapping, Sequence
from pathlib import Path

from jjflow.core.ansi import decode_ansi
from jjflow.core.jj.abc import Jj, with_global_flags
from jjflow.core.jj.types import ColoredOutput, CommandResult


class FakeJj(Jj):
    """Fake jj executor with canned responses.

    Constructor Injection:
    - responses maps an argument prefix to (output, exit_status). The longest
      matching prefix wins; unmatched calls return empty output and status 0.
    - stderr maps an argument prefix to text jj writes to stderr. run() puts it
      ahead of the output, as the real process interleaves it; query() keeps
      it apart.

    Examples:
        >>> jj = FakeJj(responses={("git", "push"): ("Refusing to push", 1)})
        >>> jj.run(Path("/repo"), ["git", "push"]).exit_status
        1
    """

    def __init__(
        self,
        *,
        responses: Mapping[tuple[str, ...], tuple[str, int]] | None = None,
        stderr: Mapping[tuple[str, ...], str] | None = None,
        version: str | None = "jj 0.30.0",
        repo_root: Path | None = None,
    ) -> None:
        self._responses = dict(responses or {})
        self._stderr = dict(stderr or {})
        self._version = version
        self._repo_root = repo_root
        self._calls: list[tuple[str, ...]] = []

    @property
    def calls(self) -> list[tuple[str, ...]]:
        """Arguments of every run, without global flags, in call order."""
        return list(self._calls)

    def set_response(self, prefix: tuple[str, ...], output: str, exit_status: int = 0) -> None:
        """Configure the response for invocations starting with ``prefix``."""
        self._responses[prefix] = (output, exit_status)

    def _longest_prefix(
        self, table: Mapping[tuple[str, ...], object], args: Sequence[str]
    ) -> tuple[str, ...] | None:
        best: tuple[str, ...] | None = None
        for prefix in table:
            if tuple(args[: len(prefix)]) != prefix:
                continue
            if best is None or len(prefix) > len(best):
                best = prefix
        return best

    def _lookup(self, args: Sequence[str]) -> tuple[str, int]:
        best = self._longest_prefix(self._responses, args)
        if best is None:
            return ("", 0)
        return self._responses[best]

    def _lookup_stderr(self, args: Sequence[str]) -> str:
        best = self._longest_prefix(self._stderr, args)
        if best is None:
            return ""
        return self._stderr[best]

    def run(self, cwd: Path, args: Sequence[str]) -> CommandResult:
        """Record the call and return the configured output."""
        self._calls.append(tuple(args))
        output, status = self._lookup(args)
        return CommandResult(
            args=with_global_flags(args, color=False),
            stdout=self._lookup_stderr(args) + output,
            exit_status=status,
        )

    def query(self, cwd: Path, args: Sequence[str]) -> CommandResult:
        """Record the call and return the configured output and stderr separately."""
        self._calls.append(tuple(args))
        output, status = self._lookup(args)
        return CommandResult(
            args=with_global_flags(args, color=False),
            stdout=output,
            exit_status=status,
            stderr=self._lookup_stderr(args),
        )

    def run_colored(self, cwd: Path, args: Sequence[str]) -> ColoredOutput:
        """Record the call and decode the configured (possibly ANSI) output."""
        self._calls.append(tuple(args))
        output, status = self._lookup(args)
        return decode_ansi(output, exit_status=status)

    def get_version(self) -> str | None:
        """Return the configured version string."""
        return self._version

    def get_repo_root(self, cwd: Path) -> Path | None:
        """Return the configured repository root."""
        return self._repo_root
