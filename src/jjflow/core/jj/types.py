"""Type definitions for jj process execution."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CommandResult:
    """Result from running a jj command.

    Attributes:
        args: Arguments passed to jj (global flags included)
        stdout: Captured output; for run() it has stderr interleaved
        exit_status: Process exit code
        stderr: Separately captured stderr (query() only, empty otherwise)
    """

    args: tuple[str, ...]
    stdout: str
    exit_status: int
    stderr: str = ""

    @property
    def text(self) -> str:
        """Output with surrounding whitespace removed."""
        return self.stdout.strip()


@dataclass(frozen=True)
class StyleSpan:
    """A styled region of plain text, as decoded from ANSI escapes."""

    start: int
    end: int
    style: str


@dataclass(frozen=True)
class ColoredOutput:
    """Output of a colorized jj invocation with escapes stripped into spans."""

    plain: str
    spans: tuple[StyleSpan, ...] = field(default_factory=tuple)
    exit_status: int = 0

    def spans_within(self, end: int) -> tuple[StyleSpan, ...]:
        """Return spans clipped to the first ``end`` characters of plain text."""
        clipped: list[StyleSpan] = []
        for span in self.spans:
            if span.start >= end:
                continue
            clipped.append(StyleSpan(start=span.start, end=min(span.end, end), style=span.style))
        return tuple(clipped)
