"""Decoding of ``jj log -T`` output into changeset records.

Lines with more than one FIELD_DELIMITER-separated field are records whose last
field is a JSON metadata object; a record whose JSON tail does not decode is
dropped without affecting its neighbours. Lines with at most one field are
graph decoration (connector rows, elided markers) and are kept verbatim.
The order of entries is exactly the order jj emitted them.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any

from jjflow.core.templates import FIELD_DELIMITER, RECORD_MARKER, LogTemplate

logger = logging.getLogger(__name__)

_DIFF_STAT_RE = re.compile(r"^\+(?P<added>\d+)\s+-(?P<removed>\d+)$")


@dataclass(frozen=True)
class DiffStat:
    """Lines added and removed by a changeset."""

    added: int
    removed: int

    def __str__(self) -> str:
        return f"+{self.added} -{self.removed}"


@dataclass(frozen=True)
class ChangesetRecord:
    """One changeset row of the log graph."""

    change_id: str
    commit_id: str
    author: str
    timestamp_display: str
    bookmarks: tuple[str, ...]
    description_first_line: str
    long_description: str | None
    is_conflicted: bool
    is_empty: bool
    is_current_working_copy: bool
    is_trunk: bool
    diff_stat: DiffStat | None
    graph_prefix: str


@dataclass(frozen=True)
class DecorationLine:
    """A display-only line of the log graph with no changeset identity."""

    text: str


LogEntry = ChangesetRecord | DecorationLine


def parse_diff_stat(value: str) -> DiffStat | None:
    """Parse a ``+N -M`` diff stat summary.

    Examples:
        >>> parse_diff_stat("+12 -3")
        DiffStat(added=12, removed=3)
        >>> parse_diff_stat("") is None
        True
    """
    match = _DIFF_STAT_RE.match(value.strip())
    if match is None:
        return None
    return DiffStat(added=int(match.group("added")), removed=int(match.group("removed")))


def _split_graph_prefix(first_field: str) -> tuple[str, str]:
    prefix, marker, rest = first_field.partition(RECORD_MARKER)
    if not marker:
        return "", first_field.strip()
    return prefix, rest.strip()


def _decode_metadata(tail: str) -> dict[str, Any] | None:
    try:
        metadata = json.loads(tail)
    except json.JSONDecodeError:
        return None
    if not isinstance(metadata, dict):
        return None
    return metadata


def _build_record(
    values: dict[str, str], metadata: dict[str, Any], graph_prefix: str
) -> ChangesetRecord | None:
    change_id_text = values.get("change_id", "")
    if not change_id_text:
        return None
    # The divergence-aware formatter may append markers after the id.
    change_id = change_id_text.split()[0]

    long_desc = metadata.get("long-desc")
    long_description: str | None = None
    if isinstance(long_desc, str) and long_desc.strip():
        long_description = long_desc.rstrip("\n")

    diff_stat_value = metadata.get("diff-stat")
    diff_stat = parse_diff_stat(diff_stat_value) if isinstance(diff_stat_value, str) else None

    return ChangesetRecord(
        change_id=change_id,
        commit_id=values.get("commit_id", "").strip(),
        author=values.get("author", "").strip(),
        timestamp_display=values.get("timestamp", "").strip(),
        bookmarks=tuple(values.get("bookmarks", "").split()),
        description_first_line=values.get("description", "").strip(),
        long_description=long_description,
        is_conflicted=bool(values.get("conflict", "").strip()),
        is_empty=bool(values.get("empty", "").strip()),
        is_current_working_copy=metadata.get("current-working-copy") is True,
        is_trunk=metadata.get("trunk") is True,
        diff_stat=diff_stat,
        graph_prefix=graph_prefix,
    )


def parse_log_line(line: str, template: LogTemplate) -> LogEntry | None:
    """Decode a single line of log output.

    Returns:
        ChangesetRecord for a record line, DecorationLine for a decoration line,
        or None when the record's metadata is malformed
    """
    fields = line.split(FIELD_DELIMITER)
    if len(fields) <= 1:
        return DecorationLine(text=line)

    metadata = _decode_metadata(fields[-1])
    if metadata is None:
        logger.debug("Skipping log line with undecodable metadata: %r", line)
        return None

    graph_prefix, change_id_text = _split_graph_prefix(fields[0])
    positional = [change_id_text, *fields[1:-1]]
    names = [name for name in template.fields if name != "metadata"]
    values = dict(zip(names, positional, strict=False))

    record = _build_record(values, metadata, graph_prefix)
    if record is None:
        logger.debug("Skipping log line without a change id: %r", line)
    return record


def parse_log_output(text: str, template: LogTemplate) -> list[LogEntry]:
    """Decode full ``jj log`` output into an ordered list of entries.

    Args:
        text: Raw output of ``jj log -T <template.text>``
        template: The template that produced the output

    Returns:
        Records and decoration lines in emission order
    """
    entries: list[LogEntry] = []
    for line in text.splitlines():
        entry = parse_log_line(line, template)
        if entry is not None:
            entries.append(entry)
    return entries


def changeset_records(entries: list[LogEntry]) -> list[ChangesetRecord]:
    """Return only the changeset records, in order."""
    return [entry for entry in entries if isinstance(entry, ChangesetRecord)]


def find_record(entries: list[LogEntry], change_id: str) -> ChangesetRecord | None:
    """Find the record whose change id matches ``change_id``.

    Prefix matches are accepted so that a longer id typed by the user still
    locates the shortest-unique id jj displays, and vice versa.
    """
    for record in changeset_records(entries):
        if record.change_id == change_id:
            return record
    for record in changeset_records(entries):
        if record.change_id.startswith(change_id) or change_id.startswith(record.change_id):
            return record
    return None


def relocate_cursor(entries: list[LogEntry], prior_id: str | None) -> int | None:
    """Return the entry index of the previously focused changeset after a refresh.

    Falls back to the current working copy, then to the first record, when the
    prior changeset is gone (or no prior focus existed).
    """
    if prior_id is not None:
        for index, entry in enumerate(entries):
            if isinstance(entry, ChangesetRecord) and entry.change_id == prior_id:
                return index

    for index, entry in enumerate(entries):
        if isinstance(entry, ChangesetRecord) and entry.is_current_working_copy:
            return index

    for index, entry in enumerate(entries):
        if isinstance(entry, ChangesetRecord):
            return index
    return None
