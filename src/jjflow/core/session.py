"""Per-view session state and its persistence.

A ViewSession owns everything that outlives a single command inside one view:
the rebase and squash selections, the focused changeset id and the negotiated
template capability. It is passed explicitly into every workflow operation.

The CLI spans one view across several invocations, so the session is stored
per repository by a SessionStore until the view is closed.
"""

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jjflow.core.capability import TemplateCapability
from jjflow.core.selection import RebaseSelection, SquashSelection

logger = logging.getLogger(__name__)

SESSION_FILE_NAME = "jjflow-session.json"


@dataclass
class ViewSession:
    """Mutable state of one view, single writer."""

    rebase: RebaseSelection = field(default_factory=RebaseSelection)
    squash: SquashSelection = field(default_factory=SquashSelection)
    focused_id: str | None = None
    capability: TemplateCapability | None = None
    jj_version: str | None = None

    def focus(self, change_id: str | None) -> None:
        self.focused_id = change_id

    def teardown(self) -> None:
        """Clear every selection so no state leaks into the next view."""
        self.rebase.clear()
        self.squash.clear()
        self.focused_id = None

    @contextmanager
    def preserved(self) -> Iterator["ViewSession"]:
        """Restore focus and both selections exactly once the block exits.

        Used around interactive steps (message editing) that must leave the
        originating view as it was, whether they finish or abort.
        """
        focused_id = self.focused_id
        rebase_source = self.rebase.source
        rebase_destinations = set(self.rebase.destinations)
        squash_from = self.squash.from_id
        squash_into = self.squash.into_id
        try:
            yield self
        finally:
            self.focused_id = focused_id
            self.rebase.source = rebase_source
            self.rebase.destinations = rebase_destinations
            self.squash.from_id = squash_from
            self.squash.into_id = squash_into

    def to_dict(self) -> dict[str, Any]:
        return {
            "focused_id": self.focused_id,
            "capability": self.capability.value if self.capability is not None else None,
            "jj_version": self.jj_version,
            "rebase": {
                "source": self.rebase.source,
                "destinations": sorted(self.rebase.destinations),
            },
            "squash": {
                "from": self.squash.from_id,
                "into": self.squash.into_id,
            },
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "ViewSession":
        rebase_data = data.get("rebase") or {}
        squash_data = data.get("squash") or {}

        capability_value = data.get("capability")
        capability: TemplateCapability | None = None
        if capability_value in {c.value for c in TemplateCapability}:
            capability = TemplateCapability(capability_value)

        return ViewSession(
            rebase=RebaseSelection(
                source=rebase_data.get("source"),
                destinations=set(rebase_data.get("destinations") or []),
            ),
            squash=SquashSelection(
                from_id=squash_data.get("from"),
                into_id=squash_data.get("into"),
            ),
            focused_id=data.get("focused_id"),
            capability=capability,
            jj_version=data.get("jj_version"),
        )


class SessionStore(ABC):
    """Abstract interface for loading and saving the view session of a repository."""

    @abstractmethod
    def load(self, repo_root: Path) -> ViewSession:
        """Load the session, or a fresh one if none is stored."""
        ...

    @abstractmethod
    def save(self, repo_root: Path, session: ViewSession) -> None:
        """Persist the session."""
        ...

    @abstractmethod
    def delete(self, repo_root: Path) -> None:
        """Forget the stored session (view teardown)."""
        ...


class RealSessionStore(SessionStore):
    """Stores the session as JSON inside the repository's ``.jj`` directory."""

    def path(self, repo_root: Path) -> Path:
        return repo_root / ".jj" / SESSION_FILE_NAME

    def load(self, repo_root: Path) -> ViewSession:
        session_path = self.path(repo_root)
        if not session_path.exists():
            return ViewSession()

        try:
            data = json.loads(session_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable session file %s", session_path)
            return ViewSession()
        if not isinstance(data, dict):
            return ViewSession()
        return ViewSession.from_dict(data)

    def save(self, repo_root: Path, session: ViewSession) -> None:
        session_path = self.path(repo_root)
        session_path.parent.mkdir(parents=True, exist_ok=True)
        session_path.write_text(json.dumps(session.to_dict(), indent=2), encoding="utf-8")

    def delete(self, repo_root: Path) -> None:
        session_path = self.path(repo_root)
        if session_path.exists():
            session_path.unlink()


class FakeSessionStore(SessionStore):
    """In-memory session store for tests."""

    def __init__(self, sessions: dict[Path, ViewSession] | None = None) -> None:
        self._sessions = {
            root: ViewSession.from_dict(s.to_dict()) for root, s in (sessions or {}).items()
        }
        self.save_count = 0

    def load(self, repo_root: Path) -> ViewSession:
        stored = self._sessions.get(repo_root)
        if stored is None:
            return ViewSession()
        return ViewSession.from_dict(stored.to_dict())

    def save(self, repo_root: Path, session: ViewSession) -> None:
        self._sessions[repo_root] = ViewSession.from_dict(session.to_dict())
        self.save_count += 1

    def delete(self, repo_root: Path) -> None:
        self._sessions.pop(repo_root, None)

    def stored(self, repo_root: Path) -> ViewSession | None:
        """Return a copy of the stored session (for test assertions)."""
        stored = self._sessions.get(repo_root)
        if stored is None:
            return None
        return ViewSession.from_dict(stored.to_dict())
