"""Tests for bookmark and remote listing parsers."""

from jjflow.core.bookmarks import parse_bookmark_list, parse_remote_list
from jjflow.core.templates import FIELD_DELIMITER


def _line(*fields: str) -> str:
    return FIELD_DELIMITER.join(fields)


def test_parse_local_and_remote_bookmarks() -> None:
    text = "\n".join(
        [
            _line("main", "", "rlvkpnrz", "1b2c3d4e", "", "", "initial"),
            _line("main", "origin", "rlvkpnrz", "1b2c3d4e", "tracked", "", "initial"),
            _line("feature-x", "", "kkmpptxz", "9a45c67d", "", "conflict", "wip"),
        ]
    )

    bookmarks = parse_bookmark_list(text)

    assert [b.display_name for b in bookmarks] == ["main", "main@origin", "feature-x"]
    assert bookmarks[0].remote is None
    assert bookmarks[1].is_tracked is True
    assert bookmarks[2].is_conflicted is True
    assert bookmarks[2].change_id == "kkmpptxz"
    assert bookmarks[2].description == "wip"


def test_deleted_bookmark_has_no_target() -> None:
    bookmarks = parse_bookmark_list(_line("gone", "", "", "", "", "", "") + "\n")

    assert bookmarks[0].change_id is None
    assert bookmarks[0].commit_id is None


def test_malformed_bookmark_lines_are_skipped() -> None:
    text = "\n".join(["  (deleted)", _line("only", "two"), _line("ok", "", "a", "b", "", "", "")])

    assert [b.name for b in parse_bookmark_list(text)] == ["ok"]


def test_parse_remote_list() -> None:
    text = "origin git@example.com:me/repo.git\nupstream https://example.com/up.git\n\nbad\n"

    remotes = parse_remote_list(text)

    assert [(r.name, r.url) for r in remotes] == [
        ("origin", "git@example.com:me/repo.git"),
        ("upstream", "https://example.com/up.git"),
    ]
