"""Read-only jj queries decoded into the structured model."""

import logging
from dataclasses import dataclass
from pathlib import Path

from jjflow.core.bookmarks import (
    BOOKMARK_LIST_TEMPLATE,
    BookmarkInfo,
    RemoteInfo,
    parse_bookmark_list,
    parse_remote_list,
)
from jjflow.core.diff_parser import FileDiffSection, parse_diff, parse_name_only
from jjflow.core.jj.abc import Jj
from jjflow.core.jj.types import ColoredOutput
from jjflow.core.log_parser import LogEntry, parse_log_output
from jjflow.core.templates import LogTemplate

logger = logging.getLogger(__name__)

_DIFF_HEADER_PREFIX = "diff --git "


@dataclass(frozen=True)
class ShowOutput:
    """A single changeset as shown by ``jj show``.

    Attributes:
        header: Commit metadata above the diff, with its color spans kept
        files: Parsed diff of the changeset (colors stripped)
    """

    header: ColoredOutput
    files: list[FileDiffSection]


def log_args(template: LogTemplate, revset: str | None = None) -> list[str]:
    args = ["log", "-T", template.text]
    if revset is not None:
        args.extend(["-r", revset])
    return args


def list_changesets(
    jj: Jj, repo_root: Path, template: LogTemplate, revset: str | None = None
) -> list[LogEntry]:
    """Run the log query and decode it.

    Args:
        jj: jj process interface
        repo_root: Repository root
        template: Template built for the session's capability
        revset: Optional revset restricting the listing

    Returns:
        Ordered changeset records and decoration lines
    """
    result = jj.query(repo_root, log_args(template, revset))
    entries = parse_log_output(result.stdout, template)
    logger.debug("Parsed %d log entries", len(entries))
    return entries


def get_diff(jj: Jj, repo_root: Path, revision: str | None = None) -> list[FileDiffSection]:
    """Return the parsed unified diff of ``revision`` (working copy by default)."""
    args = ["diff", "--git"]
    if revision is not None:
        args.extend(["-r", revision])
    result = jj.query(repo_root, args)
    return parse_diff(result.stdout)


def get_changed_paths(jj: Jj, repo_root: Path, revision: str | None = None) -> list[str]:
    """Return the paths touched by ``revision`` (working copy by default)."""
    args = ["diff", "--name-only"]
    if revision is not None:
        args.extend(["-r", revision])
    result = jj.query(repo_root, args)
    return parse_name_only(result.stdout)


def split_show_output(output: ColoredOutput) -> ShowOutput:
    """Keep color for the header; strip it after the first diff header line."""
    boundary = len(output.plain)
    offset = 0
    for line in output.plain.splitlines(keepends=True):
        if line.startswith(_DIFF_HEADER_PREFIX):
            boundary = offset
            break
        offset += len(line)

    header = ColoredOutput(
        plain=output.plain[:boundary],
        spans=output.spans_within(boundary),
        exit_status=output.exit_status,
    )
    return ShowOutput(header=header, files=parse_diff(output.plain[boundary:]))


def show_changeset(jj: Jj, repo_root: Path, change_id: str) -> ShowOutput:
    """Show one changeset: colored metadata header plus its parsed diff."""
    output = jj.run_colored(repo_root, ["show", "-r", change_id, "--git"])
    return split_show_output(output)


def get_description(jj: Jj, repo_root: Path, revset: str) -> str:
    """Return the full description of the first revision in ``revset``.

    Returns an empty string when the revision has no description or the
    revset does not resolve.
    """
    result = jj.query(
        repo_root,
        ["log", "--no-graph", "--limit", "1", "-r", revset, "-T", "description"],
    )
    if result.exit_status != 0:
        logger.debug("Description lookup for %s failed: %s", revset, result.stderr.strip())
        return ""
    return result.stdout.strip()


def list_bookmarks(jj: Jj, repo_root: Path, *, all_remotes: bool = True) -> list[BookmarkInfo]:
    args = ["bookmark", "list", "-T", BOOKMARK_LIST_TEMPLATE]
    if all_remotes:
        args.append("--all-remotes")
    result = jj.query(repo_root, args)
    return parse_bookmark_list(result.stdout)


def list_remotes(jj: Jj, repo_root: Path) -> list[RemoteInfo]:
    result = jj.query(repo_root, ["git", "remote", "list"])
    return parse_remote_list(result.stdout)
