"""Tests for the show and diff commands."""

from click.testing import CliRunner

from jjflow.cli.cli import cli
from jjflow.core.jj.fake import FakeJj
from jjflow.core.session import ViewSession
from tests.test_utils.env_helpers import PureJjflowEnv
from tests.test_utils.jj_output import SAMPLE_DIFF

SHOW_HEADER = (
    "Commit ID: \x1b[34m230dd059\x1b[0m\n"
    "Change ID: \x1b[35mqpvuntsm\x1b[0m\n"
    "Author   : Alice\n"
    "\n"
    "    add parser\n"
    "\n"
)


def test_show_prints_header_and_diff() -> None:
    env = PureJjflowEnv(jj=FakeJj(responses={("show",): (SHOW_HEADER + SAMPLE_DIFF, 0)}))

    result = CliRunner().invoke(cli, ["show", "qpvuntsm"], obj=env.build_context())

    assert result.exit_code == 0, result.output
    assert "Commit ID: 230dd059" in result.output
    assert "add parser" in result.output
    assert "src/app.py" in result.output
    assert '+print("hello, world")' in result.output
    assert "diff --git" not in result.output
    assert env.jj.calls == [("show", "-r", "qpvuntsm", "--git")]


def test_show_defaults_to_focused_changeset() -> None:
    env = PureJjflowEnv.with_session(ViewSession(focused_id="kkmpptxz"))

    CliRunner().invoke(cli, ["show"], obj=env.build_context())

    assert env.jj.calls == [("show", "-r", "kkmpptxz", "--git")]


def test_show_defaults_to_working_copy_without_focus() -> None:
    env = PureJjflowEnv()

    CliRunner().invoke(cli, ["show"], obj=env.build_context())

    assert env.jj.calls == [("show", "-r", "@", "--git")]


def test_diff_groups_by_file_and_hunk() -> None:
    env = PureJjflowEnv(jj=FakeJj(responses={("diff", "--git"): (SAMPLE_DIFF, 0)}))

    result = CliRunner().invoke(cli, ["diff", "-r", "kkmpptxz"], obj=env.build_context())

    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0] == "src/app.py"
    assert lines[1] == "@@ -1,3 +1,4 @@ def main():"
    assert "docs/new.md" in lines
    assert "+# New docs" in lines
    assert env.jj.calls == [("diff", "--git", "-r", "kkmpptxz")]


def test_diff_name_only() -> None:
    env = PureJjflowEnv(
        jj=FakeJj(responses={("diff", "--name-only"): ("src/app.py\ndocs/new.md\n", 0)})
    )

    result = CliRunner().invoke(cli, ["diff", "--name-only"], obj=env.build_context())

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ["src/app.py", "docs/new.md"]


def test_diff_without_changes() -> None:
    env = PureJjflowEnv()

    result = CliRunner().invoke(cli, ["diff"], obj=env.build_context())

    assert result.exit_code == 0, result.output
    assert ("info", "No changes") in env.feedback.messages
