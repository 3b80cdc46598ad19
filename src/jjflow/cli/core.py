"""Helpers shared by repository commands."""

from collections.abc import Iterator
from contextlib import contextmanager

from jjflow.cli.ensure import Ensure
from jjflow.core.classifier import Category, Classification
from jjflow.core.context import JjflowContext
from jjflow.core.message import EMPTY_MESSAGE_NOTICE, MessageOutcome, MessageStatus
from jjflow.core.repo_discovery import RepoContext
from jjflow.core.session import ViewSession


def discover_repo_context(ctx: JjflowContext) -> RepoContext:
    """Return the repository of the invocation, exiting with an error outside one."""
    return Ensure.in_repository(ctx.repo)


@contextmanager
def view_session(ctx: JjflowContext, repo: RepoContext) -> Iterator[ViewSession]:
    """Load the view session and store it back when the command finishes.

    The session is stored even when the command exits with an error, so staged
    selections survive failed attempts.
    """
    session = ctx.session_store.load(repo.root)
    try:
        yield session
    finally:
        ctx.session_store.save(repo.root, session)


def report(ctx: JjflowContext, classification: Classification) -> None:
    """Print a successful outcome, or exit with the failure and its suggestion.

    A command that had nothing to do is reported as a notice and does not fail.
    """
    if classification.category is Category.NOTHING_TO_DO:
        ctx.feedback.info(classification.message)
        return
    Ensure.succeeded(classification)
    if classification.message:
        ctx.feedback.success(classification.message)


def report_message_outcome(ctx: JjflowContext, outcome: MessageOutcome) -> None:
    """Report how a message edit completed."""
    if outcome.status is MessageStatus.FINISHED:
        report(ctx, outcome.result)
    elif outcome.status is MessageStatus.EMPTY:
        ctx.feedback.info(outcome.notice or EMPTY_MESSAGE_NOTICE)
    else:
        ctx.feedback.info("Aborted: description discarded")


def target_revision(session: ViewSession, change_id: str | None) -> str:
    """Explicit id, else the focused changeset, else the working copy."""
    if change_id is not None:
        return change_id
    if session.focused_id is not None:
        return session.focused_id
    return "@"
