import click

from jjflow.cli.core import discover_repo_context, report, target_revision
from jjflow.cli.output import machine_output
from jjflow.cli.rendering import print_bookmark_table
from jjflow.core.commands import (
    bookmark_create_args,
    bookmark_delete_args,
    bookmark_forget_args,
    bookmark_move_args,
    bookmark_rename_args,
    bookmark_set_args,
    bookmark_track_args,
    bookmark_untrack_args,
    run_classified,
)
from jjflow.core.context import JjflowContext
from jjflow.core.queries import list_bookmarks


@click.group("bookmark")
def bookmark_group() -> None:
    """Manage bookmarks."""


@bookmark_group.command("list")
@click.option("--local", "local_only", is_flag=True, help="Hide remote bookmarks.")
@click.option("--names", is_flag=True, help="Print only bookmark names, one per line.")
@click.pass_obj
def bookmark_list(ctx: JjflowContext, local_only: bool, names: bool) -> None:
    """List bookmarks and where they point."""
    repo = discover_repo_context(ctx)
    bookmarks = list_bookmarks(ctx.jj, repo.root, all_remotes=not local_only)

    if names:
        for bookmark in bookmarks:
            machine_output(bookmark.display_name)
        return

    if not bookmarks:
        ctx.feedback.info("No bookmarks")
        return
    print_bookmark_table(bookmarks)


@bookmark_group.command("create")
@click.argument("name")
@click.option("-r", "--revision", default=None, help="Target revision (default: focused).")
@click.pass_obj
def bookmark_create(ctx: JjflowContext, name: str, revision: str | None) -> None:
    """Create bookmark NAME."""
    repo = discover_repo_context(ctx)
    target = target_revision(ctx.session_store.load(repo.root), revision)
    report(
        ctx,
        run_classified(
            ctx.jj,
            repo.root,
            bookmark_create_args(name, target),
            success_message=f"Created bookmark {name} at {target}",
        ),
    )


@bookmark_group.command("delete")
@click.argument("names", nargs=-1, required=True)
@click.pass_obj
def bookmark_delete(ctx: JjflowContext, names: tuple[str, ...]) -> None:
    """Delete bookmarks (the deletion is pushed on the next push)."""
    repo = discover_repo_context(ctx)
    report(
        ctx,
        run_classified(
            ctx.jj,
            repo.root,
            bookmark_delete_args(names),
            success_message=f"Deleted {', '.join(names)}",
        ),
    )


@bookmark_group.command("forget")
@click.argument("names", nargs=-1, required=True)
@click.pass_obj
def bookmark_forget(ctx: JjflowContext, names: tuple[str, ...]) -> None:
    """Forget bookmarks locally without marking them for deletion."""
    repo = discover_repo_context(ctx)
    report(
        ctx,
        run_classified(
            ctx.jj,
            repo.root,
            bookmark_forget_args(names),
            success_message=f"Forgot {', '.join(names)}",
        ),
    )


@bookmark_group.command("track")
@click.argument("remote_bookmarks", nargs=-1, required=True)
@click.pass_obj
def bookmark_track(ctx: JjflowContext, remote_bookmarks: tuple[str, ...]) -> None:
    """Start tracking remote bookmarks (NAME@REMOTE)."""
    repo = discover_repo_context(ctx)
    report(
        ctx,
        run_classified(
            ctx.jj,
            repo.root,
            bookmark_track_args(remote_bookmarks),
            success_message=f"Tracking {', '.join(remote_bookmarks)}",
        ),
    )


@bookmark_group.command("untrack")
@click.argument("remote_bookmarks", nargs=-1, required=True)
@click.pass_obj
def bookmark_untrack(ctx: JjflowContext, remote_bookmarks: tuple[str, ...]) -> None:
    """Stop tracking remote bookmarks (NAME@REMOTE)."""
    repo = discover_repo_context(ctx)
    report(
        ctx,
        run_classified(
            ctx.jj,
            repo.root,
            bookmark_untrack_args(remote_bookmarks),
            success_message=f"Stopped tracking {', '.join(remote_bookmarks)}",
        ),
    )


@bookmark_group.command("move")
@click.argument("names", nargs=-1, required=True)
@click.option("--to", "to", default=None, help="Destination revision (default: focused).")
@click.option("-B", "--allow-backwards", is_flag=True, help="Allow moving backwards or sideways.")
@click.pass_obj
def bookmark_move(
    ctx: JjflowContext, names: tuple[str, ...], to: str | None, allow_backwards: bool
) -> None:
    """Move bookmarks to another revision."""
    repo = discover_repo_context(ctx)
    target = target_revision(ctx.session_store.load(repo.root), to)
    report(
        ctx,
        run_classified(
            ctx.jj,
            repo.root,
            bookmark_move_args(names, target, allow_backwards=allow_backwards),
            success_message=f"Moved {', '.join(names)} to {target}",
        ),
    )


@bookmark_group.command("rename")
@click.argument("old")
@click.argument("new")
@click.pass_obj
def bookmark_rename(ctx: JjflowContext, old: str, new: str) -> None:
    """Rename bookmark OLD to NEW."""
    repo = discover_repo_context(ctx)
    report(
        ctx,
        run_classified(
            ctx.jj,
            repo.root,
            bookmark_rename_args(old, new),
            success_message=f"Renamed {old} to {new}",
        ),
    )


@bookmark_group.command("set")
@click.argument("name")
@click.option("-r", "--revision", default=None, help="Target revision (default: focused).")
@click.option("-B", "--allow-backwards", is_flag=True, help="Allow moving backwards or sideways.")
@click.pass_obj
def bookmark_set(
    ctx: JjflowContext, name: str, revision: str | None, allow_backwards: bool
) -> None:
    """Create or update bookmark NAME to point at a revision."""
    repo = discover_repo_context(ctx)
    target = target_revision(ctx.session_store.load(repo.root), revision)
    report(
        ctx,
        run_classified(
            ctx.jj,
            repo.root,
            bookmark_set_args(name, target, allow_backwards=allow_backwards),
            success_message=f"Set {name} to {target}",
        ),
    )
