"""Staged rebase: pick one source and any number of destinations, then run."""

import click

from jjflow.cli.core import discover_repo_context, report, target_revision, view_session
from jjflow.cli.ensure import Ensure
from jjflow.cli.output import machine_output
from jjflow.core.context import JjflowContext
from jjflow.core.selection import RebaseSelection
from jjflow.core.workflows import execute_rebase


def _describe_selection(selection: RebaseSelection) -> list[str]:
    source = selection.source or "(none)"
    destinations = ", ".join(sorted(selection.destinations)) or "(none)"
    return [f"source: {source}", f"destinations: {destinations}"]


@click.group("rebase")
def rebase_group() -> None:
    """Stage and run a multi-destination rebase."""


@rebase_group.command("source")
@click.argument("change_id", required=False)
@click.pass_obj
def rebase_source(ctx: JjflowContext, change_id: str | None) -> None:
    """Set the rebase source (replaces any previous source)."""
    repo = discover_repo_context(ctx)
    with view_session(ctx, repo) as session:
        revision = target_revision(session, change_id)
        session.rebase.set_source(revision)
        ctx.feedback.info(f"Rebase source: {revision}")


@rebase_group.command("dest")
@click.argument("change_id", required=False)
@click.pass_obj
def rebase_dest(ctx: JjflowContext, change_id: str | None) -> None:
    """Toggle CHANGE_ID as a rebase destination."""
    repo = discover_repo_context(ctx)
    with view_session(ctx, repo) as session:
        revision = target_revision(session, change_id)
        if session.rebase.toggle_destination(revision):
            ctx.feedback.info(f"Added rebase destination: {revision}")
        else:
            ctx.feedback.info(f"Removed rebase destination: {revision}")


@rebase_group.command("status")
@click.pass_obj
def rebase_status(ctx: JjflowContext) -> None:
    """Show the staged rebase."""
    repo = discover_repo_context(ctx)
    session = ctx.session_store.load(repo.root)
    for line in _describe_selection(session.rebase):
        machine_output(line)


@rebase_group.command("clear")
@click.pass_obj
def rebase_clear(ctx: JjflowContext) -> None:
    """Drop the staged rebase."""
    repo = discover_repo_context(ctx)
    with view_session(ctx, repo) as session:
        session.rebase.clear()
        ctx.feedback.info("Rebase selection cleared")


@rebase_group.command("run")
@click.pass_obj
def rebase_run(ctx: JjflowContext) -> None:
    """Run the staged rebase.

    On success the selection is cleared; on failure it is kept so it can be
    adjusted and run again.
    """
    repo = discover_repo_context(ctx)
    with view_session(ctx, repo) as session:
        Ensure.invariant(session.rebase.source is not None, "No rebase source selected")
        Ensure.invariant(
            bool(session.rebase.destinations), "No rebase destination selected"
        )
        report(ctx, execute_rebase(ctx, repo, session))
