"""Tests for view status and teardown."""

from click.testing import CliRunner

from jjflow.cli.cli import cli
from jjflow.core.capability import TemplateCapability
from jjflow.core.selection import RebaseSelection, SquashSelection
from jjflow.core.session import ViewSession
from tests.test_utils.env_helpers import TEST_ROOT, PureJjflowEnv


def test_status_of_fresh_view() -> None:
    env = PureJjflowEnv()

    result = CliRunner().invoke(cli, ["view", "status"], obj=env.build_context())

    assert result.exit_code == 0, result.output
    assert "focused: (none)" in result.output
    assert "templates: (not negotiated)" in result.output
    assert "jj version" not in result.output


def test_status_shows_staged_state() -> None:
    session = ViewSession(
        focused_id="qpvuntsm",
        rebase=RebaseSelection(source="a", destinations={"c", "b"}),
        squash=SquashSelection(into_id="d"),
        capability=TemplateCapability.LEGACY,
        jj_version="jj 0.22.0",
    )
    env = PureJjflowEnv.with_session(session)

    result = CliRunner().invoke(cli, ["view", "status"], obj=env.build_context())

    assert result.output.splitlines() == [
        "focused: qpvuntsm",
        "rebase source: a",
        "rebase destinations: b, c",
        "squash from: (none)",
        "squash into: d",
        "templates: legacy",
        "jj version: jj 0.22.0",
    ]


def test_close_forgets_session() -> None:
    env = PureJjflowEnv.with_session(
        ViewSession(focused_id="a", rebase=RebaseSelection(source="a"))
    )

    result = CliRunner().invoke(cli, ["view", "close"], obj=env.build_context())

    assert result.exit_code == 0, result.output
    assert env.session_store.stored(TEST_ROOT) is None
    assert ("info", "View closed") in env.feedback.messages
