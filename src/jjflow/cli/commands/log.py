import click

from jjflow.cli.core import discover_repo_context, view_session
from jjflow.cli.ensure import Ensure
from jjflow.cli.output import machine_output
from jjflow.cli.rendering import format_log_entry
from jjflow.core.context import JjflowContext
from jjflow.core.log_parser import find_record
from jjflow.core.workflows import refresh_log


@click.command("log")
@click.option("-r", "--revisions", "revset", default=None, help="Revset to list.")
@click.pass_obj
def log_cmd(ctx: JjflowContext, revset: str | None) -> None:
    """Show the changeset graph with staged selections marked.

    The focused changeset (marked with ">") is kept across refreshes by change
    id; when it disappears the working copy takes the focus.
    """
    repo = discover_repo_context(ctx)
    with view_session(ctx, repo) as session:
        view = refresh_log(ctx, repo, session, revset)
        for entry in view.entries:
            machine_output(format_log_entry(entry, session))


@click.command("focus")
@click.argument("change_id")
@click.pass_obj
def focus_cmd(ctx: JjflowContext, change_id: str) -> None:
    """Move the focus to CHANGE_ID (a prefix of a listed change id)."""
    repo = discover_repo_context(ctx)
    with view_session(ctx, repo) as session:
        view = refresh_log(ctx, repo, session)
        record = Ensure.not_none(
            find_record(view.entries, change_id),
            f"Change '{change_id}' is not in the current log",
        )
        session.focus(record.change_id)
        ctx.feedback.info(f"Focused {record.change_id}")
