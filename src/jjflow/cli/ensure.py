"""CLI error handling utilities with styled output.

This module provides the Ensure class for asserting invariants in CLI commands
with consistent, user-friendly error messages. All errors use red "Error:" prefix
for visual consistency.
"""

from typing import TypeVar

import click

from jjflow.cli.output import user_output
from jjflow.core.classifier import Classification
from jjflow.core.repo_discovery import NoRepoSentinel, RepoContext

T = TypeVar("T")


class Ensure:
    """Helper class for asserting invariants with consistent error handling."""

    @staticmethod
    def invariant(condition: bool, error_message: str) -> None:
        """Ensure condition is true, otherwise output styled error and exit.

        Args:
            condition: Boolean condition to check
            error_message: Error message to display if condition is false.
                          "Error: " prefix will be added automatically in red.

        Raises:
            SystemExit: If condition is false (with exit code 1)
        """
        if not condition:
            user_output(click.style("Error: ", fg="red") + error_message)
            raise SystemExit(1)

    @staticmethod
    def not_none(value: T | None, error_message: str) -> T:
        """Ensure value is not None, otherwise output styled error and exit.

        Returns:
            The value unchanged if not None (with narrowed type T)

        Raises:
            SystemExit: If value is None (with exit code 1)
        """
        if value is None:
            user_output(click.style("Error: ", fg="red") + error_message)
            raise SystemExit(1)
        return value

    @staticmethod
    def in_repository(repo: RepoContext | NoRepoSentinel) -> RepoContext:
        """Ensure the command runs inside a jj repository.

        Raises:
            SystemExit: If repo is the NoRepoSentinel
        """
        if isinstance(repo, NoRepoSentinel):
            user_output(click.style("Error: ", fg="red") + repo.message)
            raise SystemExit(1)
        return repo

    @staticmethod
    def succeeded(classification: Classification) -> Classification:
        """Ensure a classified jj command succeeded.

        Prints the command output with a red "Error:" prefix and the
        remediation suggestion, then exits, for any failure category.

        Raises:
            SystemExit: If the classification is not SUCCESS
        """
        if not classification.is_success:
            user_output(
                click.style("Error: ", fg="red")
                + f"[{classification.category.value}] {classification.message}"
            )
            if classification.suggestion:
                user_output(click.style("Hint: ", fg="yellow") + classification.suggestion)
            raise SystemExit(1)
        return classification
