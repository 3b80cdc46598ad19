"""Text rendering of the structured model for terminal output.

The log is printed one line per entry, in jj's emission order. Changeset lines
keep their graph prefix and gain markers for the staged selections:

    [src]  rebase source        [dst]  rebase destination
    [from] squash from          [into] squash into
"""

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from jjflow.core.ansi import to_rich_text
from jjflow.core.bookmarks import BookmarkInfo
from jjflow.core.diff_parser import FileDiffSection
from jjflow.core.jj.types import ColoredOutput
from jjflow.core.log_parser import ChangesetRecord, LogEntry
from jjflow.core.session import ViewSession

NO_DESCRIPTION = "(no description set)"


def selection_markers(change_id: str, session: ViewSession) -> list[str]:
    markers: list[str] = []
    if session.rebase.source == change_id:
        markers.append("[src]")
    if change_id in session.rebase.destinations:
        markers.append("[dst]")
    if session.squash.from_id == change_id:
        markers.append("[from]")
    if session.squash.into_id == change_id:
        markers.append("[into]")
    return markers


def format_record(record: ChangesetRecord, session: ViewSession) -> str:
    parts = [
        click.style(record.change_id, fg="magenta", bold=True),
        click.style(record.commit_id, fg="blue"),
        record.author,
        click.style(record.timestamp_display, fg="cyan"),
    ]
    if record.bookmarks:
        parts.append(click.style(" ".join(record.bookmarks), fg="green"))
    if record.is_conflicted:
        parts.append(click.style("conflict", fg="red", bold=True))
    if record.is_empty:
        parts.append(click.style("(empty)", fg="bright_black"))
    if record.diff_stat is not None:
        parts.append(str(record.diff_stat))

    description = record.description_first_line or click.style(NO_DESCRIPTION, fg="yellow")
    parts.append(description)
    for marker in selection_markers(record.change_id, session):
        parts.append(click.style(marker, fg="yellow", bold=True))
    return record.graph_prefix + " ".join(parts)


def format_log_entry(entry: LogEntry, session: ViewSession) -> str:
    """Render one log entry, prefixed with a cursor mark if it has the focus."""
    if not isinstance(entry, ChangesetRecord):
        return "  " + entry.text

    cursor = "> " if entry.change_id == session.focused_id else "  "
    return cursor + format_record(entry, session)


def format_file_diff(section: FileDiffSection) -> list[str]:
    lines = [click.style(section.path, bold=True)]
    for hunk in section.hunks:
        header = click.style(hunk.header, fg="cyan")
        if hunk.context_line:
            header += " " + hunk.context_line
        lines.append(header)
        for line in hunk.lines:
            if line.startswith("+"):
                lines.append(click.style(line, fg="green"))
            elif line.startswith("-"):
                lines.append(click.style(line, fg="red"))
            else:
                lines.append(line)
    return lines


def print_colored(output: ColoredOutput) -> None:
    """Print decoded jj output with its original styling to stdout."""
    console = Console(highlight=False, soft_wrap=True)
    console.print(to_rich_text(output), end="")
    if output.plain and not output.plain.endswith("\n"):
        console.print()


def print_bookmark_table(bookmarks: list[BookmarkInfo]) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("bookmark", style="cyan", no_wrap=True)
    table.add_column("change", no_wrap=True)
    table.add_column("commit", no_wrap=True)
    table.add_column("state", no_wrap=True)
    table.add_column("description", no_wrap=True)

    for bookmark in bookmarks:
        state = Text()
        if bookmark.is_tracked:
            state.append("tracked ")
        if bookmark.is_conflicted:
            state.append("conflict", style="red")
        table.add_row(
            Text(bookmark.display_name),
            Text(bookmark.change_id or "-"),
            Text(bookmark.commit_id or "-"),
            state,
            Text(bookmark.description),
        )

    console = Console(stderr=True, width=200, force_terminal=True)
    console.print(table)
    console.print()
