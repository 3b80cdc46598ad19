"""Output utilities for CLI commands with clear intent.

user_output: diagnostics and notices for the person at the terminal (stderr)
machine_output: data meant for stdout (log rows, diffs, paths)
"""

from typing import Any

import click


def user_output(message: Any = "", nl: bool = True) -> None:
    """Write a user-facing message to stderr."""
    click.echo(message, err=True, nl=nl)


def machine_output(message: Any = "", nl: bool = True) -> None:
    """Write data output to stdout."""
    click.echo(message, nl=nl)
