"""Tests for the git push, fetch and remotes commands."""

from click.testing import CliRunner

from jjflow.cli.cli import cli
from jjflow.core.jj.fake import FakeJj
from tests.test_utils.env_helpers import PureJjflowEnv


def test_push_builds_arguments() -> None:
    env = PureJjflowEnv()

    result = CliRunner().invoke(
        cli, ["git", "push", "-b", "feature-x", "--allow-new"], obj=env.build_context()
    )

    assert result.exit_code == 0, result.output
    assert env.jj.calls == [("git", "push", "--bookmark", "feature-x", "--allow-new")]
    assert ("success", "Pushed") in env.feedback.messages


def test_rejected_push_names_bookmark_in_hint() -> None:
    """A rejection is reported even though jj exited successfully."""
    output = "Refusing to push: remote rejected bookmark: feature-x"
    env = PureJjflowEnv(jj=FakeJj(responses={("git", "push"): (output, 0)}))

    result = CliRunner().invoke(cli, ["git", "push", "-b", "feature-x"], obj=env.build_context())

    assert result.exit_code == 1
    assert "[push-rejected]" in result.output
    assert "rebase feature-x onto the remote bookmark" in result.output


def test_fetch_network_failure() -> None:
    output = "Error: failed to connect to github.com: Connection refused"
    env = PureJjflowEnv(jj=FakeJj(responses={("git", "fetch"): (output, 1)}))

    result = CliRunner().invoke(
        cli, ["git", "fetch", "--remote", "origin"], obj=env.build_context()
    )

    assert result.exit_code == 1
    assert "[network-failure]" in result.output
    assert env.jj.calls == [("git", "fetch", "--remote", "origin")]


def test_remotes() -> None:
    remotes = "origin git@example.com:me/repo.git\nupstream https://example.com/up.git\n"
    env = PureJjflowEnv(jj=FakeJj(responses={("git", "remote", "list"): (remotes, 0)}))

    result = CliRunner().invoke(cli, ["git", "remotes"], obj=env.build_context())

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == [
        "origin\tgit@example.com:me/repo.git",
        "upstream\thttps://example.com/up.git",
    ]
