import click

from jjflow.cli.core import discover_repo_context, target_revision
from jjflow.cli.output import machine_output
from jjflow.cli.rendering import format_file_diff, print_colored
from jjflow.core.context import JjflowContext
from jjflow.core.queries import get_changed_paths, get_diff, show_changeset


@click.command("show")
@click.argument("change_id", required=False)
@click.pass_obj
def show_cmd(ctx: JjflowContext, change_id: str | None) -> None:
    """Show a changeset: its metadata header and diff.

    Defaults to the focused changeset, or the working copy.
    """
    repo = discover_repo_context(ctx)
    revision = target_revision(ctx.session_store.load(repo.root), change_id)

    shown = show_changeset(ctx.jj, repo.root, revision)
    print_colored(shown.header)
    for section in shown.files:
        for line in format_file_diff(section):
            machine_output(line)


@click.command("diff")
@click.option("-r", "--revision", default=None, help="Revision to diff (default: working copy).")
@click.option("--name-only", is_flag=True, help="Only list the changed paths.")
@click.pass_obj
def diff_cmd(ctx: JjflowContext, revision: str | None, name_only: bool) -> None:
    """Show the changes of a revision grouped by file and hunk."""
    repo = discover_repo_context(ctx)

    if name_only:
        for path in get_changed_paths(ctx.jj, repo.root, revision):
            machine_output(path)
        return

    sections = get_diff(ctx.jj, repo.root, revision)
    if not sections:
        ctx.feedback.info("No changes")
        return

    for section in sections:
        for line in format_file_diff(section):
            machine_output(line)
