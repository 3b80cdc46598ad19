"""Mutating jj commands: argument builders and classified execution.

Every mutation is classified from its output text (see classifier) rather than
trusted by exit status alone.
"""

import logging
from collections.abc import Sequence
from pathlib import Path

from jjflow.core.classifier import Classification, classify
from jjflow.core.jj.abc import Jj

logger = logging.getLogger(__name__)


def run_classified(
    jj: Jj,
    repo_root: Path,
    args: Sequence[str],
    *,
    success_message: str | None = None,
) -> Classification:
    """Run a jj command and classify its output.

    A non-zero exit with output that matches no failure rule is still reported
    as a generic error.

    Args:
        jj: jj process interface
        repo_root: Repository root
        args: Subcommand and arguments
        success_message: Message reported when the command succeeds silently

    Returns:
        Classification of the outcome
    """
    command_name = args[0] if args else "jj"
    result = jj.run(repo_root, args)
    classification = classify(command_name, result.stdout, success_message=success_message)

    if classification.is_success and result.exit_status != 0:
        detail = result.text or f"{command_name} exited with status {result.exit_status}"
        classification = classify(command_name, f"Error: {detail}")

    logger.debug(
        "jj %s classified as %s (exit %d)",
        command_name,
        classification.category.value,
        result.exit_status,
    )
    return classification


def new_args(revisions: Sequence[str] = ()) -> list[str]:
    return ["new", *revisions]


def edit_args(change_id: str) -> list[str]:
    return ["edit", change_id]


def abandon_args(change_id: str) -> list[str]:
    return ["abandon", "-r", change_id]


def commit_args(message: str) -> list[str]:
    return ["commit", "-m", message]


def describe_args(change_id: str, message: str) -> list[str]:
    return ["describe", "-r", change_id, "-m", message]


def undo_args() -> list[str]:
    return ["undo"]


def bookmark_create_args(name: str, revision: str | None = None) -> list[str]:
    args = ["bookmark", "create", name]
    if revision is not None:
        args.extend(["-r", revision])
    return args


def bookmark_delete_args(names: Sequence[str]) -> list[str]:
    return ["bookmark", "delete", *names]


def bookmark_forget_args(names: Sequence[str]) -> list[str]:
    return ["bookmark", "forget", *names]


def bookmark_track_args(remote_bookmarks: Sequence[str]) -> list[str]:
    return ["bookmark", "track", *remote_bookmarks]


def bookmark_untrack_args(remote_bookmarks: Sequence[str]) -> list[str]:
    return ["bookmark", "untrack", *remote_bookmarks]


def bookmark_move_args(
    names: Sequence[str], to: str, *, allow_backwards: bool = False
) -> list[str]:
    args = ["bookmark", "move", *names, "--to", to]
    if allow_backwards:
        args.append("--allow-backwards")
    return args


def bookmark_rename_args(old: str, new: str) -> list[str]:
    return ["bookmark", "rename", old, new]


def bookmark_set_args(name: str, revision: str, *, allow_backwards: bool = False) -> list[str]:
    args = ["bookmark", "set", name, "-r", revision]
    if allow_backwards:
        args.append("--allow-backwards")
    return args


def git_push_args(
    *,
    bookmarks: Sequence[str] = (),
    change: str | None = None,
    all_bookmarks: bool = False,
    allow_new: bool = False,
) -> list[str]:
    args = ["git", "push"]
    for bookmark in bookmarks:
        args.extend(["--bookmark", bookmark])
    if change is not None:
        args.extend(["--change", change])
    if all_bookmarks:
        args.append("--all")
    if allow_new:
        args.append("--allow-new")
    return args


def git_fetch_args(remote: str | None = None) -> list[str]:
    args = ["git", "fetch"]
    if remote is not None:
        args.extend(["--remote", remote])
    return args
