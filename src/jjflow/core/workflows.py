"""Composite operations run against a view session.

Each operation takes the context, the repository and the ViewSession
explicitly. Outcomes are classified from jj's output; only a SUCCESS clears the
selection that produced the command, so a failed attempt can be retried or
adjusted without re-selecting.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from jjflow.core.capability import TemplateCapability, negotiate_capability
from jjflow.core.classifier import Classification
from jjflow.core.commands import commit_args, describe_args, run_classified
from jjflow.core.context import JjflowContext
from jjflow.core.log_parser import ChangesetRecord, LogEntry, relocate_cursor
from jjflow.core.message import MessageOutcome, MessageRequest, MessageStatus, MessageWorkflow
from jjflow.core.queries import get_description, list_changesets
from jjflow.core.repo_discovery import RepoContext
from jjflow.core.selection import SquashPlan
from jjflow.core.session import ViewSession
from jjflow.core.templates import LogTemplate, build_log_template

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogView:
    """A refreshed log listing with the cursor relocated."""

    entries: list[LogEntry]
    cursor: int | None

    @property
    def focused(self) -> ChangesetRecord | None:
        if self.cursor is None:
            return None
        entry = self.entries[self.cursor]
        if isinstance(entry, ChangesetRecord):
            return entry
        return None


def ensure_capability(ctx: JjflowContext, session: ViewSession) -> TemplateCapability:
    """Negotiate the template capability once per session."""
    if session.capability is None:
        version = ctx.jj.get_version()
        session.capability = negotiate_capability(version)
        session.jj_version = version
        logger.debug("Negotiated %s templates for %r", session.capability.value, version)
    return session.capability


def session_template(ctx: JjflowContext, session: ViewSession) -> LogTemplate:
    return build_log_template(
        ensure_capability(ctx, session),
        show_diff_stat=ctx.global_config.show_diff_stat,
    )


def refresh_log(
    ctx: JjflowContext,
    repo: RepoContext,
    session: ViewSession,
    revset: str | None = None,
) -> LogView:
    """Rebuild the log listing and move the focus to where it was.

    The prior focused change id is looked up in the fresh entries; if it is
    gone the working copy (or the first record) becomes the focus.
    """
    if revset is None:
        revset = ctx.global_config.default_revset
    entries = list_changesets(ctx.jj, repo.root, session_template(ctx, session), revset)
    cursor = relocate_cursor(entries, session.focused_id)

    view = LogView(entries=entries, cursor=cursor)
    focused = view.focused
    session.focus(focused.change_id if focused is not None else None)
    return view


def execute_rebase(ctx: JjflowContext, repo: RepoContext, session: ViewSession) -> Classification:
    """Run the staged rebase.

    Raises:
        SelectionNotReadyError: If no source or no destination is staged
    """
    args = session.rebase.build_args()
    classification = run_classified(
        ctx.jj,
        repo.root,
        args,
        success_message=f"Rebased {session.rebase.source} onto {len(session.rebase.destinations)} "
        "destination(s)",
    )
    if classification.is_success:
        session.rebase.clear()
    return classification


def squash_seed_description(ctx: JjflowContext, repo: RepoContext, plan: SquashPlan) -> str:
    """Initial squash description: the target's if it has one, else the source's."""
    into_description = get_description(ctx.jj, repo.root, plan.into_rev)
    if into_description:
        return into_description
    return get_description(ctx.jj, repo.root, plan.from_rev)


def execute_squash(
    ctx: JjflowContext,
    repo: RepoContext,
    session: ViewSession,
    *,
    keep_emptied: bool | None = None,
) -> MessageOutcome:
    """Edit the combined description, then run the staged squash.

    Returns:
        The message outcome; when FINISHED its ``result`` is the Classification
        of the squash command
    """
    if keep_emptied is None:
        keep_emptied = ctx.global_config.keep_emptied

    plan = session.squash.resolve_plan(session.focused_id)

    def _run_squash(message: str, params: Mapping[str, Any]) -> Classification:
        squash_plan: SquashPlan = params["plan"]
        return run_classified(
            ctx.jj,
            repo.root,
            squash_plan.build_args(message, keep_emptied=params["keep_emptied"]),
            success_message=f"Squashed {squash_plan.from_rev} into {squash_plan.into_rev}",
        )

    request = MessageRequest(
        purpose="squash",
        initial_description=squash_seed_description(ctx, repo, plan),
        on_finish=_run_squash,
        params={"plan": plan, "keep_emptied": keep_emptied},
        details=(f"Squashing {plan.from_rev} into {plan.into_rev}",),
    )
    outcome = MessageWorkflow(ctx.editor, ctx.prompter).run(session, request)

    # The workflow restores the selection on exit, so clearing happens after it.
    if outcome.status is MessageStatus.FINISHED and outcome.result.is_success:
        session.squash.clear()
    return outcome


def commit_with_message(
    ctx: JjflowContext, repo: RepoContext, session: ViewSession
) -> MessageOutcome:
    """Describe the working copy through the editor and start a new change on top."""

    def _run_commit(message: str, params: Mapping[str, Any]) -> Classification:
        return run_classified(
            ctx.jj, repo.root, commit_args(message), success_message="Committed working copy"
        )

    request = MessageRequest(
        purpose="commit",
        initial_description=get_description(ctx.jj, repo.root, "@"),
        on_finish=_run_commit,
    )
    return MessageWorkflow(ctx.editor, ctx.prompter).run(session, request)


def describe_with_message(
    ctx: JjflowContext, repo: RepoContext, session: ViewSession, change_id: str
) -> MessageOutcome:
    """Replace the description of ``change_id`` through the editor."""

    def _run_describe(message: str, params: Mapping[str, Any]) -> Classification:
        return run_classified(
            ctx.jj,
            repo.root,
            describe_args(params["change_id"], message),
            success_message=f"Described {params['change_id']}",
        )

    request = MessageRequest(
        purpose="describe",
        initial_description=get_description(ctx.jj, repo.root, change_id),
        on_finish=_run_describe,
        params={"change_id": change_id},
        details=(f"Describing {change_id}",),
    )
    return MessageWorkflow(ctx.editor, ctx.prompter).run(session, request)
