"""Bookmark and remote listing: templates and output parsing."""

import logging
from dataclasses import dataclass

from jjflow.core.templates import FIELD_DELIMITER

logger = logging.getLogger(__name__)

_BOOKMARK_FIELDS = 7

BOOKMARK_LIST_TEMPLATE = (
    "concat("
    + f", '{FIELD_DELIMITER}', ".join(
        [
            "self.name()",
            "if(self.remote(), self.remote())",
            "if(self.normal_target(), self.normal_target().change_id().short())",
            "if(self.normal_target(), self.normal_target().commit_id().short())",
            'if(self.tracked(), "tracked")',
            'if(self.conflict(), "conflict")',
            "if(self.normal_target(), self.normal_target().description().first_line())",
        ]
    )
    + ', "\\n")'
)


@dataclass(frozen=True)
class BookmarkInfo:
    """A local or remote bookmark as reported by ``jj bookmark list``."""

    name: str
    remote: str | None
    change_id: str | None
    commit_id: str | None
    is_tracked: bool
    is_conflicted: bool
    description: str

    @property
    def display_name(self) -> str:
        if self.remote is None:
            return self.name
        return f"{self.name}@{self.remote}"


@dataclass(frozen=True)
class RemoteInfo:
    """A git remote of the repository."""

    name: str
    url: str


def parse_bookmark_list(text: str) -> list[BookmarkInfo]:
    """Parse ``jj bookmark list -T BOOKMARK_LIST_TEMPLATE`` output.

    Lines that do not carry every field are skipped.
    """
    bookmarks: list[BookmarkInfo] = []
    for line in text.splitlines():
        fields = line.split(FIELD_DELIMITER)
        if len(fields) != _BOOKMARK_FIELDS:
            if line.strip():
                logger.debug("Skipping unrecognized bookmark line: %r", line)
            continue

        name, remote, change_id, commit_id, tracked, conflict, description = fields
        if not name.strip():
            continue
        bookmarks.append(
            BookmarkInfo(
                name=name.strip(),
                remote=remote.strip() or None,
                change_id=change_id.strip() or None,
                commit_id=commit_id.strip() or None,
                is_tracked=bool(tracked.strip()),
                is_conflicted=bool(conflict.strip()),
                description=description.strip(),
            )
        )
    return bookmarks


def parse_remote_list(text: str) -> list[RemoteInfo]:
    """Parse ``jj git remote list`` output (``<name> <url>`` per line)."""
    remotes: list[RemoteInfo] = []
    for line in text.splitlines():
        parts = line.strip().split(maxsplit=1)
        if len(parts) != 2:
            continue
        remotes.append(RemoteInfo(name=parts[0], url=parts[1]))
    return remotes
