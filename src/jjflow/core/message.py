"""Edit-then-commit interaction for operations that need a description.

The workflow opens an editable text seeded with an initial description and a
trailing comment block. It completes exactly one of two ways:

- Finish: comment lines are stripped and the text trimmed. Empty text aborts
  with an "empty message" notice; otherwise the completion callback runs.
- Abort: the text is discarded after confirmation.

Either way the originating view's focus and selections are restored.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import click

from jjflow.core.session import ViewSession

COMMENT_PREFIX = "JJ:"

EMPTY_MESSAGE_NOTICE = "Aborted: empty message"


class Editor(ABC):
    """Abstract interface for the editable text surface."""

    @abstractmethod
    def edit(self, text: str) -> str | None:
        """Let the user edit ``text``.

        Returns:
            The edited text, or None if the user abandoned the edit
        """
        ...


class Prompter(ABC):
    """Abstract interface for yes/no confirmations."""

    @abstractmethod
    def confirm(self, question: str) -> bool:
        """Ask a yes/no question and return the answer."""
        ...


class ClickEditor(Editor):
    """Opens $EDITOR on a temporary file via click."""

    def edit(self, text: str) -> str | None:
        return click.edit(text, extension=".jjdescription", require_save=True)


class ClickPrompter(Prompter):
    """Asks on the terminal via click."""

    def confirm(self, question: str) -> bool:
        return click.confirm(question, default=False, err=True)


class FakeEditor(Editor):
    """Scripted editor for tests.

    Each call pops the next scripted reply; None simulates quitting without saving.
    Every text handed to the editor is recorded in ``seen``.
    """

    def __init__(self, replies: list[str | None] | None = None) -> None:
        self._replies = list(replies or [])
        self.seen: list[str] = []

    def edit(self, text: str) -> str | None:
        self.seen.append(text)
        if not self._replies:
            return None
        return self._replies.pop(0)


class FakePrompter(Prompter):
    """Prompter that always gives the configured answer and records questions."""

    def __init__(self, answer: bool = True) -> None:
        self._answer = answer
        self.questions: list[str] = []

    def confirm(self, question: str) -> bool:
        self.questions.append(question)
        return self._answer


class MessageStatus(Enum):
    FINISHED = "finished"
    ABORTED = "aborted"
    EMPTY = "empty"


@dataclass(frozen=True)
class MessageRequest:
    """What to edit and what to do with the result.

    Attributes:
        purpose: Short operation name shown in the comment block ("squash")
        initial_description: Seed text, may be empty
        on_finish: Callback receiving the final text and the carried params
        params: Parameters carried through to the callback unchanged
        details: Extra comment lines describing the operation
    """

    purpose: str
    initial_description: str
    on_finish: Callable[[str, Mapping[str, Any]], Any]
    params: Mapping[str, Any] = field(default_factory=dict)
    details: tuple[str, ...] = ()


@dataclass(frozen=True)
class MessageOutcome:
    status: MessageStatus
    message: str | None = None
    result: Any = None
    notice: str | None = None


def build_edit_text(request: MessageRequest) -> str:
    """Seed text: the initial description followed by the comment block."""
    lines = [request.initial_description.rstrip("\n"), ""]
    lines.append(f"{COMMENT_PREFIX} Enter a description for {request.purpose}.")
    for detail in request.details:
        lines.append(f"{COMMENT_PREFIX} {detail}")
    lines.append(f'{COMMENT_PREFIX} Lines starting with "{COMMENT_PREFIX}" will be removed.')
    return "\n".join(lines) + "\n"


def strip_comments(text: str) -> str:
    """Drop comment lines and trim surrounding whitespace."""
    kept = [line for line in text.splitlines() if not line.startswith(COMMENT_PREFIX)]
    return "\n".join(kept).strip()


class MessageWorkflow:
    """Runs one scoped message edit against a view session."""

    def __init__(self, editor: Editor, prompter: Prompter) -> None:
        self._editor = editor
        self._prompter = prompter

    def run(self, session: ViewSession, request: MessageRequest) -> MessageOutcome:
        """Edit a description and complete the request.

        Args:
            session: View whose focus and selections are restored afterwards
            request: What to seed and what to run on finish

        Returns:
            MessageOutcome describing how the interaction completed
        """
        with session.preserved():
            text = build_edit_text(request)
            while True:
                edited = self._editor.edit(text)
                if edited is not None:
                    break
                if self._prompter.confirm(f"Discard the {request.purpose} description?"):
                    return MessageOutcome(status=MessageStatus.ABORTED)

            final = strip_comments(edited)
            if not final:
                return MessageOutcome(status=MessageStatus.EMPTY, notice=EMPTY_MESSAGE_NOTICE)

            result = request.on_finish(final, request.params)
            return MessageOutcome(status=MessageStatus.FINISHED, message=final, result=result)
