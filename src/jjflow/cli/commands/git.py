import click

from jjflow.cli.core import discover_repo_context, report
from jjflow.cli.output import machine_output
from jjflow.core.commands import git_fetch_args, git_push_args, run_classified
from jjflow.core.context import JjflowContext
from jjflow.core.queries import list_remotes


@click.group("git")
def git_group() -> None:
    """Exchange changes with git remotes."""


@git_group.command("push")
@click.option("-b", "--bookmark", "bookmarks", multiple=True, help="Bookmark to push.")
@click.option("-c", "--change", default=None, help="Push a bookmark generated for this change.")
@click.option("--all", "all_bookmarks", is_flag=True, help="Push all bookmarks.")
@click.option("--allow-new", is_flag=True, help="Allow pushing bookmarks new to the remote.")
@click.pass_obj
def git_push(
    ctx: JjflowContext,
    bookmarks: tuple[str, ...],
    change: str | None,
    all_bookmarks: bool,
    allow_new: bool,
) -> None:
    """Push bookmarks to the remote.

    A rejected push names the affected bookmarks in its suggestion.
    """
    repo = discover_repo_context(ctx)
    args = git_push_args(
        bookmarks=bookmarks, change=change, all_bookmarks=all_bookmarks, allow_new=allow_new
    )
    report(ctx, run_classified(ctx.jj, repo.root, args, success_message="Pushed"))


@git_group.command("fetch")
@click.option("--remote", default=None, help="Remote to fetch from.")
@click.pass_obj
def git_fetch(ctx: JjflowContext, remote: str | None) -> None:
    """Fetch from a git remote."""
    repo = discover_repo_context(ctx)
    report(
        ctx,
        run_classified(ctx.jj, repo.root, git_fetch_args(remote), success_message="Fetched"),
    )


@git_group.command("remotes")
@click.pass_obj
def git_remotes(ctx: JjflowContext) -> None:
    """List git remotes."""
    repo = discover_repo_context(ctx)
    for remote in list_remotes(ctx.jj, repo.root):
        machine_output(f"{remote.name}\t{remote.url}")
