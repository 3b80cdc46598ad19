import click

from jjflow.cli.core import discover_repo_context
from jjflow.cli.output import machine_output
from jjflow.core.context import JjflowContext


@click.group("view")
def view_group() -> None:
    """Inspect or close the current view session."""


@view_group.command("status")
@click.pass_obj
def view_status(ctx: JjflowContext) -> None:
    """Show the focus, both selections and the negotiated template capability."""
    repo = discover_repo_context(ctx)
    session = ctx.session_store.load(repo.root)
    capability = session.capability.value if session.capability is not None else "(not negotiated)"

    machine_output(f"focused: {session.focused_id or '(none)'}")
    machine_output(f"rebase source: {session.rebase.source or '(none)'}")
    machine_output(
        f"rebase destinations: {', '.join(sorted(session.rebase.destinations)) or '(none)'}"
    )
    machine_output(f"squash from: {session.squash.from_id or '(none)'}")
    machine_output(f"squash into: {session.squash.into_id or '(none)'}")
    machine_output(f"templates: {capability}")
    if session.jj_version is not None:
        machine_output(f"jj version: {session.jj_version}")


@view_group.command("close")
@click.pass_obj
def view_close(ctx: JjflowContext) -> None:
    """Tear down the view: forget the focus and every staged selection."""
    repo = discover_repo_context(ctx)
    session = ctx.session_store.load(repo.root)
    session.teardown()
    ctx.session_store.delete(repo.root)
    ctx.feedback.info("View closed")
