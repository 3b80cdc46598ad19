"""Staged squash: optional from and into revisions, then run through the editor."""

import click

from jjflow.cli.core import (
    discover_repo_context,
    report_message_outcome,
    target_revision,
    view_session,
)
from jjflow.cli.output import machine_output
from jjflow.core.context import JjflowContext
from jjflow.core.workflows import execute_squash


@click.group("squash")
def squash_group() -> None:
    """Stage and run a squash."""


@squash_group.command("from")
@click.argument("change_id", required=False)
@click.pass_obj
def squash_from(ctx: JjflowContext, change_id: str | None) -> None:
    """Set the revision whose changes are moved."""
    repo = discover_repo_context(ctx)
    with view_session(ctx, repo) as session:
        revision = target_revision(session, change_id)
        session.squash.set_from(revision)
        ctx.feedback.info(f"Squash from: {revision}")


@squash_group.command("into")
@click.argument("change_id", required=False)
@click.pass_obj
def squash_into(ctx: JjflowContext, change_id: str | None) -> None:
    """Set the revision receiving the changes."""
    repo = discover_repo_context(ctx)
    with view_session(ctx, repo) as session:
        revision = target_revision(session, change_id)
        session.squash.set_into(revision)
        ctx.feedback.info(f"Squash into: {revision}")


@squash_group.command("status")
@click.pass_obj
def squash_status(ctx: JjflowContext) -> None:
    """Show the staged squash and the command it resolves to."""
    repo = discover_repo_context(ctx)
    session = ctx.session_store.load(repo.root)
    plan = session.squash.resolve_plan(session.focused_id)
    machine_output(f"from: {session.squash.from_id or '(none)'}")
    machine_output(f"into: {session.squash.into_id or '(none)'}")
    machine_output(f"plan: {plan.from_rev} -> {plan.into_rev}")


@squash_group.command("clear")
@click.pass_obj
def squash_clear(ctx: JjflowContext) -> None:
    """Drop the staged squash."""
    repo = discover_repo_context(ctx)
    with view_session(ctx, repo) as session:
        session.squash.clear()
        ctx.feedback.info("Squash selection cleared")


@squash_group.command("run")
@click.option(
    "--keep-emptied/--no-keep-emptied",
    default=None,
    help="Keep the source revision even if it becomes empty (default from config).",
)
@click.pass_obj
def squash_run(ctx: JjflowContext, keep_emptied: bool | None) -> None:
    """Edit the combined description, then run the staged squash.

    With nothing staged the focused changeset is squashed into its parent.
    """
    repo = discover_repo_context(ctx)
    with view_session(ctx, repo) as session:
        outcome = execute_squash(ctx, repo, session, keep_emptied=keep_emptied)
        report_message_outcome(ctx, outcome)
