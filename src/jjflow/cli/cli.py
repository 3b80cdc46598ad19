import logging
import os

import click

from jjflow.cli.commands.bookmark import bookmark_group
from jjflow.cli.commands.change import (
    abandon_cmd,
    commit_cmd,
    describe_cmd,
    edit_cmd,
    new_cmd,
    undo_cmd,
)
from jjflow.cli.commands.config import config_group
from jjflow.cli.commands.git import git_group
from jjflow.cli.commands.log import focus_cmd, log_cmd
from jjflow.cli.commands.rebase import rebase_group
from jjflow.cli.commands.show import diff_cmd, show_cmd
from jjflow.cli.commands.squash import squash_group
from jjflow.cli.commands.view import view_group
from jjflow.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

# Enable debug logging if JJFLOW_DEBUG environment variable is set
if os.getenv("JJFLOW_DEBUG"):
    logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="jjflow")
@click.option("--dry-run", is_flag=True, help="Print mutating jj commands instead of running them.")
@click.option("-q", "--quiet", is_flag=True, help="Only print errors and data.")
@click.pass_context
def cli(ctx: click.Context, dry_run: bool, quiet: bool) -> None:
    """Drive Jujutsu (jj): browse the log, stage rebases and squashes, push."""
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context(dry_run=dry_run, quiet=quiet)


# Register all commands
cli.add_command(log_cmd)
cli.add_command(focus_cmd)
cli.add_command(show_cmd)
cli.add_command(diff_cmd)
cli.add_command(new_cmd)
cli.add_command(edit_cmd)
cli.add_command(abandon_cmd)
cli.add_command(commit_cmd)
cli.add_command(describe_cmd)
cli.add_command(undo_cmd)
cli.add_command(rebase_group)
cli.add_command(squash_group)
cli.add_command(bookmark_group)
cli.add_command(git_group)
cli.add_command(view_group)
cli.add_command(config_group)


def main() -> None:
    """CLI entry point used by the `jjflow` console script."""
    cli()
