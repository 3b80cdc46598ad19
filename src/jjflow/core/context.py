"""Application context with dependency injection."""

from dataclasses import dataclass
from pathlib import Path

import click

from jjflow.cli.output import user_output
from jjflow.core.config_store import ConfigStore, GlobalConfig, RealConfigStore
from jjflow.core.jj.abc import Jj
from jjflow.core.jj.dry_run import DryRunJj
from jjflow.core.jj.real import RealJj
from jjflow.core.message import ClickEditor, ClickPrompter, Editor, Prompter
from jjflow.core.repo_discovery import NoRepoSentinel, RepoContext, discover_repo_or_sentinel
from jjflow.core.session import RealSessionStore, SessionStore
from jjflow.core.user_feedback import InteractiveFeedback, SuppressedFeedback, UserFeedback


@dataclass(frozen=True)
class JjflowContext:
    """Immutable context holding all dependencies for jjflow operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    jj: Jj
    editor: Editor
    prompter: Prompter
    feedback: UserFeedback
    config_store: ConfigStore
    global_config: GlobalConfig
    session_store: SessionStore
    cwd: Path  # Current working directory at CLI invocation
    repo: RepoContext | NoRepoSentinel
    dry_run: bool

    @staticmethod
    def for_test(
        jj: Jj | None = None,
        editor: Editor | None = None,
        prompter: Prompter | None = None,
        feedback: UserFeedback | None = None,
        config_store: ConfigStore | None = None,
        global_config: GlobalConfig | None = None,
        session_store: SessionStore | None = None,
        cwd: Path | None = None,
        repo: RepoContext | NoRepoSentinel | None = None,
        dry_run: bool = False,
    ) -> "JjflowContext":
        """Create test context with optional pre-configured fakes.

        Args:
            jj: Optional Jj implementation. If None, creates empty FakeJj.
            editor: Optional Editor. If None, creates a FakeEditor with no replies.
            prompter: Optional Prompter. If None, creates FakePrompter answering yes.
            feedback: Optional UserFeedback. If None, creates FakeUserFeedback.
            config_store: Optional ConfigStore. If None, wraps global_config in
                FakeConfigStore.
            global_config: Optional GlobalConfig. If None, uses defaults.
            session_store: Optional SessionStore. If None, creates FakeSessionStore.
            cwd: Optional current working directory. If None, uses Path("/test/repo").
            repo: Optional RepoContext or NoRepoSentinel. If None, uses a
                RepoContext rooted at cwd.
            dry_run: Whether to wrap jj in DryRunJj (default False).

        Example:
            >>> jj = FakeJj(responses={("git", "push"): ("Refusing to push", 1)})
            >>> ctx = JjflowContext.for_test(jj=jj)
        """
        from jjflow.core.config_store import FakeConfigStore
        from jjflow.core.jj.fake import FakeJj
        from jjflow.core.message import FakeEditor, FakePrompter
        from jjflow.core.session import FakeSessionStore
        from jjflow.core.user_feedback import FakeUserFeedback

        if jj is None:
            jj = FakeJj()

        if editor is None:
            editor = FakeEditor()

        if prompter is None:
            prompter = FakePrompter()

        if feedback is None:
            feedback = FakeUserFeedback()

        if global_config is None:
            global_config = GlobalConfig()

        if config_store is None:
            config_store = FakeConfigStore(config=global_config)

        if session_store is None:
            session_store = FakeSessionStore()

        if cwd is None:
            cwd = Path("/test/repo")

        if repo is None:
            repo = RepoContext(root=cwd)

        # Apply dry-run wrapper if needed (matching production behavior)
        if dry_run:
            jj = DryRunJj(jj)

        return JjflowContext(
            jj=jj,
            editor=editor,
            prompter=prompter,
            feedback=feedback,
            config_store=config_store,
            global_config=global_config,
            session_store=session_store,
            cwd=cwd,
            repo=repo,
            dry_run=dry_run,
        )


def safe_cwd() -> tuple[Path | None, str | None]:
    """Get current working directory, detecting if it no longer exists.

    Returns:
        tuple[Path | None, str | None]: (path, error_message)
        - If successful: (Path, None)
        - If directory deleted: (None, error_message)
    """
    try:
        cwd_path = Path.cwd()
        return (cwd_path, None)
    except (FileNotFoundError, OSError):
        return (
            None,
            "Current working directory no longer exists",
        )


def create_context(*, dry_run: bool, quiet: bool = False) -> JjflowContext:
    """Create production context with real implementations.

    Called at CLI entry point to create the context for the entire
    command execution.

    Args:
        dry_run: If True, wrap jj in DryRunJj so mutations are printed, not run
        quiet: If True, use SuppressedFeedback so only errors are shown

    Returns:
        JjflowContext with real implementations
    """
    # 1. Capture cwd (no deps)
    cwd_result, error_msg = safe_cwd()
    if cwd_result is None:
        assert error_msg is not None
        user_output(click.style("Error: ", fg="red") + error_msg)
        user_output("\nThe directory you're running from has been deleted.")
        user_output("Please change to a valid directory and try again.")
        raise SystemExit(1)

    cwd = cwd_result

    # 2. Load global config (defaults when no file exists)
    config_store = RealConfigStore()
    try:
        global_config = config_store.load()
    except ValueError as e:
        user_output(click.style("Error: ", fg="red") + str(e))
        raise SystemExit(1) from e

    # 3. Create jj integration using the configured executable
    jj: Jj = RealJj(executable=global_config.jj_executable)

    # 4. Discover repo
    repo = discover_repo_or_sentinel(cwd, jj)

    # 5. Choose feedback implementation based on mode
    feedback: UserFeedback
    if quiet:
        feedback = SuppressedFeedback()
    else:
        feedback = InteractiveFeedback()

    # 6. Apply dry-run wrapper if needed
    if dry_run:
        jj = DryRunJj(jj)

    return JjflowContext(
        jj=jj,
        editor=ClickEditor(),
        prompter=ClickPrompter(),
        feedback=feedback,
        config_store=config_store,
        global_config=global_config,
        session_store=RealSessionStore(),
        cwd=cwd,
        repo=repo,
        dry_run=dry_run,
    )
