"""Tests for decoding log template output."""

from jjflow.core.capability import TemplateCapability
from jjflow.core.log_parser import (
    ChangesetRecord,
    DecorationLine,
    DiffStat,
    changeset_records,
    find_record,
    parse_diff_stat,
    parse_log_line,
    parse_log_output,
    relocate_cursor,
)
from jjflow.core.templates import FIELD_DELIMITER, RECORD_MARKER, build_log_template
from tests.test_utils.jj_output import SAMPLE_LOG, record_line, root_line

TEMPLATE = build_log_template(TemplateCapability.MODERN, show_diff_stat=False)


def test_parses_records_and_decorations_in_emission_order() -> None:
    """Records and decoration lines come back in exactly the order jj printed them."""
    entries = parse_log_output(SAMPLE_LOG, TEMPLATE)

    kinds = [type(entry).__name__ for entry in entries]
    assert kinds == [
        "ChangesetRecord",
        "DecorationLine",
        "ChangesetRecord",
        "DecorationLine",
        "ChangesetRecord",
        "DecorationLine",
    ]
    assert [r.change_id for r in changeset_records(entries)] == [
        "qpvuntsm",
        "kkmpptxz",
        "rlvkpnrz",
    ]


def test_two_records_one_decoration() -> None:
    """Two record lines around one connector yield 2 records and 1 decoration."""
    text = "\n".join([record_line("aaaa"), "│", record_line("bbbb")])

    entries = parse_log_output(text, TEMPLATE)

    assert len(changeset_records(entries)) == 2
    assert len([e for e in entries if isinstance(e, DecorationLine)]) == 1
    assert entries[1] == DecorationLine(text="│")


def test_root_commit_line_is_dropped() -> None:
    """The root commit tail is not JSON, so the line produces no entry."""
    entries = parse_log_output(root_line() + "\n", TEMPLATE)
    assert entries == []


def test_malformed_json_tail_skips_only_that_line() -> None:
    """A broken JSON tail drops its own line without disturbing its neighbours."""
    broken = FIELD_DELIMITER.join([RECORD_MARKER + "broken", "c0ffee", "{not json"])
    text = "\n".join([record_line("aaaa"), broken, record_line("bbbb")])

    entries = parse_log_output(text, TEMPLATE)

    assert [r.change_id for r in changeset_records(entries)] == ["aaaa", "bbbb"]
    assert len(entries) == 2


def test_non_object_json_tail_is_skipped() -> None:
    line = FIELD_DELIMITER.join([RECORD_MARKER + "aaaa", "c0ffee", "[1, 2]"])
    assert parse_log_line(line, TEMPLATE) is None


def test_record_fields_are_decoded() -> None:
    """Positional fields and JSON metadata land on the right attributes."""
    line = record_line(
        "qpvuntsm",
        graph="@  ",
        commit_id="230dd059",
        author="Bob",
        timestamp="5 minutes ago",
        bookmarks="main feature-x",
        conflict="conflict",
        empty="empty",
        description="first line",
        long_desc="first line\n\nbody\n",
        working_copy=True,
        trunk=True,
    )

    record = parse_log_line(line, TEMPLATE)

    assert isinstance(record, ChangesetRecord)
    assert record.change_id == "qpvuntsm"
    assert record.commit_id == "230dd059"
    assert record.author == "Bob"
    assert record.timestamp_display == "5 minutes ago"
    assert record.bookmarks == ("main", "feature-x")
    assert record.is_conflicted is True
    assert record.is_empty is True
    assert record.description_first_line == "first line"
    assert record.long_description == "first line\n\nbody"
    assert record.is_current_working_copy is True
    assert record.is_trunk is True
    assert record.graph_prefix == "@  "
    assert record.diff_stat is None


def test_record_without_flags() -> None:
    record = parse_log_line(record_line("kkmpptxz"), TEMPLATE)

    assert isinstance(record, ChangesetRecord)
    assert record.bookmarks == ()
    assert record.is_conflicted is False
    assert record.is_empty is False
    assert record.is_current_working_copy is False
    assert record.long_description is None


def test_divergence_markers_after_change_id_are_dropped() -> None:
    """The divergence-aware formatter may append text after the id itself."""
    record = parse_log_line(record_line("mzvwutvl ??"), TEMPLATE)

    assert isinstance(record, ChangesetRecord)
    assert record.change_id == "mzvwutvl"


def test_empty_change_id_is_skipped() -> None:
    line = record_line("")
    assert parse_log_line(line, TEMPLATE) is None


def test_diff_stat_is_decoded_when_present() -> None:
    template = build_log_template(TemplateCapability.MODERN, show_diff_stat=True)
    record = parse_log_line(record_line("aaaa", diff_stat="+12 -3"), template)

    assert isinstance(record, ChangesetRecord)
    assert record.diff_stat == DiffStat(added=12, removed=3)
    assert str(record.diff_stat) == "+12 -3"


def test_parse_diff_stat_rejects_garbage() -> None:
    assert parse_diff_stat("+1 -2") == DiffStat(added=1, removed=2)
    assert parse_diff_stat("12 3") is None
    assert parse_diff_stat("") is None


def test_find_record_exact_then_prefix() -> None:
    entries = parse_log_output(SAMPLE_LOG, TEMPLATE)

    exact = find_record(entries, "kkmpptxz")
    prefix = find_record(entries, "kkm")
    longer = find_record(entries, "kkmpptxzlong")

    assert exact is not None and exact.change_id == "kkmpptxz"
    assert prefix is not None and prefix.change_id == "kkmpptxz"
    assert longer is not None and longer.change_id == "kkmpptxz"
    assert find_record(entries, "nothere") is None


def test_relocate_cursor_keeps_prior_focus() -> None:
    entries = parse_log_output(SAMPLE_LOG, TEMPLATE)

    index = relocate_cursor(entries, "rlvkpnrz")

    assert index is not None
    entry = entries[index]
    assert isinstance(entry, ChangesetRecord)
    assert entry.change_id == "rlvkpnrz"


def test_relocate_cursor_falls_back_to_working_copy() -> None:
    entries = parse_log_output(SAMPLE_LOG, TEMPLATE)

    assert relocate_cursor(entries, "vanished") == 0
    assert relocate_cursor(entries, None) == 0


def test_relocate_cursor_falls_back_to_first_record() -> None:
    text = "\n".join(["│", record_line("aaaa"), record_line("bbbb")])
    entries = parse_log_output(text, TEMPLATE)

    assert relocate_cursor(entries, None) == 1


def test_relocate_cursor_without_records() -> None:
    entries = parse_log_output("│\n~\n", TEMPLATE)
    assert relocate_cursor(entries, "aaaa") is None
