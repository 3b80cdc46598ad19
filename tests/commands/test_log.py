"""Tests for the log and focus commands."""

from click.testing import CliRunner

from jjflow.cli.cli import cli
from jjflow.core.jj.fake import FakeJj
from jjflow.core.repo_discovery import NoRepoSentinel
from jjflow.core.selection import RebaseSelection, SquashSelection
from jjflow.core.session import ViewSession
from tests.test_utils.env_helpers import PureJjflowEnv
from tests.test_utils.jj_output import SAMPLE_LOG


def _log_jj() -> FakeJj:
    return FakeJj(responses={("log", "-T"): (SAMPLE_LOG, 0)})


def _line_for(output: str, change_id: str) -> str:
    return next(line for line in output.splitlines() if change_id in line)


def test_log_prints_entries_in_order() -> None:
    env = PureJjflowEnv(jj=_log_jj())

    result = CliRunner().invoke(cli, ["log"], obj=env.build_context())

    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0].startswith("> @  qpvuntsm")
    assert "add parser" in lines[0]
    assert "feature-x" in lines[2]
    assert "(elided revisions)" in result.output


def test_log_focuses_working_copy_and_stores_session() -> None:
    env = PureJjflowEnv(jj=_log_jj())

    CliRunner().invoke(cli, ["log"], obj=env.build_context())

    session = env.stored_session()
    assert session.focused_id == "qpvuntsm"
    assert session.jj_version == "jj 0.30.0"


def test_log_marks_staged_selections() -> None:
    """Selected revisions carry their markers on their log line."""
    session = ViewSession(
        rebase=RebaseSelection(source="kkmpptxz", destinations={"rlvkpnrz"}),
        squash=SquashSelection(from_id="qpvuntsm"),
    )
    env = PureJjflowEnv.with_session(session, jj=_log_jj())

    result = CliRunner().invoke(cli, ["log"], obj=env.build_context())

    assert result.exit_code == 0, result.output
    assert "[src]" in _line_for(result.output, "kkmpptxz")
    assert "[dst]" in _line_for(result.output, "rlvkpnrz")
    assert "[from]" in _line_for(result.output, "qpvuntsm")
    assert "[into]" not in result.output


def test_log_passes_revset() -> None:
    env = PureJjflowEnv(jj=_log_jj())

    CliRunner().invoke(cli, ["log", "-r", "trunk()..@"], obj=env.build_context())

    assert env.jj.calls[0][-2:] == ("-r", "trunk()..@")


def test_log_outside_repository_fails() -> None:
    env = PureJjflowEnv()

    result = CliRunner().invoke(cli, ["log"], obj=env.build_context(repo=NoRepoSentinel()))

    assert result.exit_code == 1
    assert "Not inside a jj repository" in result.output
    assert env.jj.calls == []


def test_focus_accepts_change_id_prefix() -> None:
    env = PureJjflowEnv(jj=_log_jj())

    result = CliRunner().invoke(cli, ["focus", "kkm"], obj=env.build_context())

    assert result.exit_code == 0, result.output
    assert env.stored_session().focused_id == "kkmpptxz"
    assert ("info", "Focused kkmpptxz") in env.feedback.messages


def test_focus_unknown_change_fails() -> None:
    env = PureJjflowEnv(jj=_log_jj())

    result = CliRunner().invoke(cli, ["focus", "xyz"], obj=env.build_context())

    assert result.exit_code == 1
    assert "Change 'xyz' is not in the current log" in result.output
