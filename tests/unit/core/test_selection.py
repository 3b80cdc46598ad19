"""Tests for the rebase and squash selection state machines."""

import pytest

from jjflow.core.selection import (
    RebaseSelection,
    SelectionNotReadyError,
    SquashPlan,
    SquashSelection,
    parent_revset,
)


class TestRebaseSelection:
    def test_toggle_destination_is_self_inverse(self) -> None:
        """Toggling the same id twice restores the destination set."""
        selection = RebaseSelection(source="src", destinations={"a"})

        assert selection.toggle_destination("b") is True
        assert selection.destinations == {"a", "b"}
        assert selection.toggle_destination("b") is False
        assert selection.destinations == {"a"}

    def test_set_source_replaces(self) -> None:
        selection = RebaseSelection()

        selection.set_source("first")
        selection.set_source("second")

        assert selection.source == "second"

    def test_clear_yields_empty(self) -> None:
        selection = RebaseSelection(source="src", destinations={"a", "b"})

        selection.clear()

        assert selection.is_empty
        assert selection.source is None
        assert selection.destinations == set()

    def test_is_ready_requires_source_and_destination(self) -> None:
        selection = RebaseSelection()
        assert not selection.is_ready

        selection.set_source("src")
        assert not selection.is_ready

        selection.toggle_destination("dst")
        assert selection.is_ready

    def test_build_args_sorts_destinations(self) -> None:
        selection = RebaseSelection(source="src", destinations={"zzz", "aaa", "mmm"})

        assert selection.build_args() == [
            "rebase",
            "-s",
            "src",
            "-d",
            "aaa",
            "-d",
            "mmm",
            "-d",
            "zzz",
        ]

    def test_build_args_without_source_raises(self) -> None:
        selection = RebaseSelection(destinations={"a"})

        with pytest.raises(SelectionNotReadyError, match="source"):
            selection.build_args()

    def test_build_args_without_destinations_raises(self) -> None:
        selection = RebaseSelection(source="src")

        with pytest.raises(SelectionNotReadyError, match="destination"):
            selection.build_args()


class TestSquashSelection:
    def test_from_and_into_are_used_as_given(self) -> None:
        selection = SquashSelection(from_id="abc", into_id="xyz")

        plan = selection.resolve_plan(focused_id="other")

        assert plan == SquashPlan(from_rev="abc", into_rev="xyz", explicit_into=True)

    def test_from_only_squashes_into_parent(self) -> None:
        selection = SquashSelection(from_id="abc")

        plan = selection.resolve_plan(focused_id="other")

        assert plan == SquashPlan(from_rev="abc", into_rev="abc-", explicit_into=False)

    def test_nothing_selected_squashes_focused_into_parent(self) -> None:
        plan = SquashSelection().resolve_plan(focused_id="foc")

        assert plan == SquashPlan(from_rev="foc", into_rev="foc-", explicit_into=False)

    def test_nothing_selected_and_no_focus_uses_working_copy(self) -> None:
        plan = SquashSelection().resolve_plan(focused_id=None)

        assert plan.from_rev == "@"
        assert plan.into_rev == "@-"

    def test_into_only_squashes_focused_into_it(self) -> None:
        plan = SquashSelection(into_id="xyz").resolve_plan(focused_id="foc")

        assert plan == SquashPlan(from_rev="foc", into_rev="xyz", explicit_into=True)

    def test_set_replaces_and_clear_empties(self) -> None:
        selection = SquashSelection()
        selection.set_from("a")
        selection.set_from("b")
        selection.set_into("c")

        assert selection.from_id == "b"
        assert selection.into_id == "c"

        selection.clear()
        assert selection.is_empty


def test_squash_plan_build_args() -> None:
    plan = SquashPlan(from_rev="abc", into_rev="abc-", explicit_into=False)

    assert plan.build_args("msg", keep_emptied=False) == [
        "squash",
        "--from",
        "abc",
        "--into",
        "abc-",
        "-m",
        "msg",
    ]
    assert plan.build_args(None, keep_emptied=True) == [
        "squash",
        "--from",
        "abc",
        "--into",
        "abc-",
        "--keep-emptied",
    ]


def test_parent_revset() -> None:
    assert parent_revset("abc") == "abc-"
