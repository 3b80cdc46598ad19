"""Tests for Ensure invariant helpers."""

from pathlib import Path

import pytest

from jjflow.cli.ensure import Ensure
from jjflow.core.classifier import Category, Classification
from jjflow.core.repo_discovery import NoRepoSentinel, RepoContext


def test_invariant_passes_silently(capsys: pytest.CaptureFixture[str]) -> None:
    Ensure.invariant(True, "never shown")

    assert capsys.readouterr().err == ""


def test_invariant_exits_with_error(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        Ensure.invariant(False, "Something is off")

    assert exc_info.value.code == 1
    assert "Error: Something is off" in capsys.readouterr().err


def test_not_none_returns_value() -> None:
    assert Ensure.not_none("abc", "missing") == "abc"

    with pytest.raises(SystemExit):
        Ensure.not_none(None, "missing")


def test_in_repository() -> None:
    repo = RepoContext(root=Path("/repo"))

    assert Ensure.in_repository(repo) is repo

    with pytest.raises(SystemExit):
        Ensure.in_repository(NoRepoSentinel())


def test_succeeded_prints_hint(capsys: pytest.CaptureFixture[str]) -> None:
    failure = Classification(
        category=Category.AUTH_FAILURE,
        message="Error: Permission denied (publickey)",
        suggestion="Check your credentials or SSH key for the remote.",
    )

    with pytest.raises(SystemExit):
        Ensure.succeeded(failure)

    err = capsys.readouterr().err
    assert "Error: [auth-failure] Error: Permission denied (publickey)" in err
    assert "Hint: Check your credentials" in err


def test_succeeded_passes_success_through() -> None:
    success = Classification(category=Category.SUCCESS, message="done")

    assert Ensure.succeeded(success) is success
