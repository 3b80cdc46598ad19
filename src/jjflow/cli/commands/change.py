"""Single-changeset commands: new, edit, abandon, commit, describe, undo."""

import click

from jjflow.cli.core import (
    discover_repo_context,
    report,
    report_message_outcome,
    target_revision,
    view_session,
)
from jjflow.core.commands import (
    abandon_args,
    commit_args,
    describe_args,
    edit_args,
    new_args,
    run_classified,
    undo_args,
)
from jjflow.core.context import JjflowContext
from jjflow.core.workflows import commit_with_message, describe_with_message


@click.command("new")
@click.argument("revisions", nargs=-1)
@click.pass_obj
def new_cmd(ctx: JjflowContext, revisions: tuple[str, ...]) -> None:
    """Create a new empty change on top of REVISIONS (default: working copy)."""
    repo = discover_repo_context(ctx)
    report(
        ctx,
        run_classified(ctx.jj, repo.root, new_args(revisions), success_message="Created new change"),
    )


@click.command("edit")
@click.argument("change_id", required=False)
@click.pass_obj
def edit_cmd(ctx: JjflowContext, change_id: str | None) -> None:
    """Make CHANGE_ID (default: focused changeset) the working copy."""
    repo = discover_repo_context(ctx)
    with view_session(ctx, repo) as session:
        revision = target_revision(session, change_id)
        report(
            ctx,
            run_classified(
                ctx.jj, repo.root, edit_args(revision), success_message=f"Editing {revision}"
            ),
        )


@click.command("abandon")
@click.argument("change_id", required=False)
@click.option("-y", "--yes", is_flag=True, help="Do not ask for confirmation.")
@click.pass_obj
def abandon_cmd(ctx: JjflowContext, change_id: str | None, yes: bool) -> None:
    """Abandon CHANGE_ID (default: focused changeset)."""
    repo = discover_repo_context(ctx)
    with view_session(ctx, repo) as session:
        revision = target_revision(session, change_id)
        if not yes and not ctx.prompter.confirm(f"Abandon {revision}?"):
            ctx.feedback.info("Nothing abandoned")
            return

        report(
            ctx,
            run_classified(
                ctx.jj, repo.root, abandon_args(revision), success_message=f"Abandoned {revision}"
            ),
        )


@click.command("commit")
@click.option("-m", "--message", default=None, help="Description to use instead of the editor.")
@click.pass_obj
def commit_cmd(ctx: JjflowContext, message: str | None) -> None:
    """Describe the working copy and start a new change on top of it."""
    repo = discover_repo_context(ctx)
    if message is not None:
        report(
            ctx,
            run_classified(
                ctx.jj, repo.root, commit_args(message), success_message="Committed working copy"
            ),
        )
        return

    with view_session(ctx, repo) as session:
        report_message_outcome(ctx, commit_with_message(ctx, repo, session))


@click.command("describe")
@click.argument("change_id", required=False)
@click.option("-m", "--message", default=None, help="Description to use instead of the editor.")
@click.pass_obj
def describe_cmd(ctx: JjflowContext, change_id: str | None, message: str | None) -> None:
    """Update the description of CHANGE_ID (default: focused changeset)."""
    repo = discover_repo_context(ctx)
    with view_session(ctx, repo) as session:
        revision = target_revision(session, change_id)
        if message is not None:
            report(
                ctx,
                run_classified(
                    ctx.jj,
                    repo.root,
                    describe_args(revision, message),
                    success_message=f"Described {revision}",
                ),
            )
            return

        report_message_outcome(ctx, describe_with_message(ctx, repo, session, revision))


@click.command("undo")
@click.pass_obj
def undo_cmd(ctx: JjflowContext) -> None:
    """Undo the last jj operation."""
    repo = discover_repo_context(ctx)
    report(
        ctx,
        run_classified(ctx.jj, repo.root, undo_args(), success_message="Undid last operation"),
    )
