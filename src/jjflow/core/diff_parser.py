"""Unified diff parsing for jjflow.

The parser converts ``jj diff --git`` output into file sections, each holding
its hunks. It is a line-driven state machine over three states (outside any
file, inside a file header, inside a hunk). Header metadata such as index and
mode lines is discarded; hunk content lines are kept verbatim, markers included.

Hunk headers carry line counts; while a hunk still expects lines, every line is
content, even one that looks like a ``---`` header. Parsing never raises.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

_FILE_HEADER_PREFIX = "diff --git "

_HUNK_HEADER_RE = re.compile(
    r"^(?P<header>@@ -(?P<old_start>\d+)(?:,(?P<old_count>\d+))?"
    r" \+(?P<new_start>\d+)(?:,(?P<new_count>\d+))? @@)(?P<context>.*)$"
)

# Loose form for headers whose ranges we cannot interpret.
_LOOSE_HUNK_HEADER_RE = re.compile(r"^(?P<header>@@ .*? @@)(?P<context>.*)$")

_IGNORED_HEADER_PREFIXES = ("index ", "--- ", "+++ ", "new file", "deleted file")

_NO_NEWLINE_MARKER = "\\ No newline at end of file"


class _State(Enum):
    OUTSIDE = "outside"
    IN_FILE = "in_file"
    IN_HUNK = "in_hunk"


@dataclass(frozen=True)
class HunkSection:
    """One hunk of a file diff."""

    header: str
    context_line: str
    lines: tuple[str, ...]
    old_start: int | None = None
    new_start: int | None = None

    @property
    def added(self) -> int:
        return sum(1 for line in self.lines if line.startswith("+"))

    @property
    def removed(self) -> int:
        return sum(1 for line in self.lines if line.startswith("-"))


@dataclass(frozen=True)
class FileDiffSection:
    """All hunks of one file, in input order. May hold no hunks (rename-only)."""

    path: str
    hunks: tuple[HunkSection, ...]


@dataclass
class _OpenHunk:
    header: str
    context_line: str
    old_start: int | None
    new_start: int | None
    old_remaining: int | None
    new_remaining: int | None
    lines: list[str] = field(default_factory=list)

    @property
    def expects_more(self) -> bool:
        if self.old_remaining is None or self.new_remaining is None:
            return False
        return self.old_remaining > 0 or self.new_remaining > 0

    def append(self, line: str) -> None:
        self.lines.append(line)
        if self.old_remaining is None or self.new_remaining is None:
            return
        if line.startswith("+"):
            self.new_remaining -= 1
        elif line.startswith("-"):
            self.old_remaining -= 1
        elif line.startswith("\\"):
            return
        else:
            self.old_remaining -= 1
            self.new_remaining -= 1

    def close(self) -> HunkSection:
        return HunkSection(
            header=self.header,
            context_line=self.context_line,
            lines=tuple(self.lines),
            old_start=self.old_start,
            new_start=self.new_start,
        )


def _parse_file_path(line: str) -> str:
    """Return the ``b`` path of a ``diff --git`` line, falling back to ``a``.

    When both paths are equal the line is split at its midpoint, so paths that
    contain " b/" themselves survive.
    """
    rest = line[len(_FILE_HEADER_PREFIX) :]
    half = (len(rest) - 1) // 2
    a_part, separator, b_part = rest[:half], rest[half : half + 1], rest[half + 1 :]
    if separator == " " and a_part.startswith("a/") and b_part.startswith("b/"):
        if a_part[2:] == b_part[2:]:
            return b_part[2:]
    if " b/" in rest:
        a_part, b_part = rest.rsplit(" b/", 1)
        if b_part:
            return b_part
        rest = a_part
    if rest.startswith("a/"):
        return rest[2:]
    return rest


def _open_hunk(line: str) -> _OpenHunk | None:
    match = _HUNK_HEADER_RE.match(line)
    if match is not None:
        old_count = match.group("old_count")
        new_count = match.group("new_count")
        return _OpenHunk(
            header=match.group("header"),
            context_line=match.group("context").strip(),
            old_start=int(match.group("old_start")),
            new_start=int(match.group("new_start")),
            old_remaining=int(old_count) if old_count is not None else 1,
            new_remaining=int(new_count) if new_count is not None else 1,
        )

    loose = _LOOSE_HUNK_HEADER_RE.match(line)
    if loose is None:
        return None
    return _OpenHunk(
        header=loose.group("header"),
        context_line=loose.group("context").strip(),
        old_start=None,
        new_start=None,
        old_remaining=None,
        new_remaining=None,
    )


class _DiffBuilder:
    def __init__(self) -> None:
        self.files: list[FileDiffSection] = []
        self.state = _State.OUTSIDE
        self._path: str | None = None
        self._hunks: list[HunkSection] = []
        self._hunk: _OpenHunk | None = None

    def close_hunk(self) -> None:
        if self._hunk is not None:
            self._hunks.append(self._hunk.close())
            self._hunk = None

    def close_file(self) -> None:
        self.close_hunk()
        if self._path is not None:
            self.files.append(FileDiffSection(path=self._path, hunks=tuple(self._hunks)))
        self._path = None
        self._hunks = []

    def feed(self, line: str) -> None:
        # Content lines always carry a marker, so this is never hunk content.
        if line.startswith(_FILE_HEADER_PREFIX):
            self.close_file()
            self._path = _parse_file_path(line)
            self.state = _State.IN_FILE
            return

        hunk = self._hunk
        if self.state is _State.IN_HUNK and hunk is not None and hunk.expects_more:
            hunk.append(line)
            return
        if self.state is _State.IN_HUNK and hunk is not None and line == _NO_NEWLINE_MARKER:
            hunk.append(line)
            return

        if self.state is _State.OUTSIDE:
            return

        if line.startswith("@@"):
            opened = _open_hunk(line)
            if opened is not None:
                self.close_hunk()
                self._hunk = opened
                self.state = _State.IN_HUNK
                return

        if line.startswith(_IGNORED_HEADER_PREFIXES):
            return

        if self.state is _State.IN_HUNK and self._hunk is not None:
            self._hunk.append(line)


def parse_diff(text: str) -> list[FileDiffSection]:
    """Parse unified diff text into file sections.

    Args:
        text: Output of ``jj diff --git`` (or any git-style unified diff)

    Returns:
        File sections in input order, each with its hunks in input order
    """
    builder = _DiffBuilder()
    for line in text.splitlines():
        builder.feed(line)
    builder.close_file()
    return builder.files


def parse_name_only(text: str) -> list[str]:
    """Parse ``jj diff --name-only`` output into a list of paths."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def hunk_new_line_numbers(hunk: HunkSection) -> list[int | None]:
    """Map each hunk line to its line number in the new file.

    Removed lines (and the no-newline marker) have no new-file line and map to
    None. Returns all None when the hunk header carried no ranges.
    """
    numbers: list[int | None] = []
    current = hunk.new_start
    for line in hunk.lines:
        if current is None or line.startswith("-") or line.startswith("\\"):
            numbers.append(None)
            continue
        numbers.append(current)
        current += 1
    return numbers
