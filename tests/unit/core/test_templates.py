"""Tests for log template construction."""

from jjflow.core.capability import TemplateCapability
from jjflow.core.templates import (
    FIELD_DELIMITER,
    LOG_FIELDS,
    RECORD_MARKER,
    build_log_template,
)


def test_template_is_deterministic() -> None:
    first = build_log_template(TemplateCapability.MODERN, show_diff_stat=False)
    second = build_log_template(TemplateCapability.MODERN, show_diff_stat=False)

    assert first == second


def test_modern_template_uses_divergence_aware_id_and_json() -> None:
    template = build_log_template(TemplateCapability.MODERN, show_diff_stat=False)

    assert "format_short_change_id_with_hidden_and_divergent_info(self)" in template.text
    assert "json(description)" in template.text
    assert ".escape_json()" not in template.text


def test_divergent_template_keeps_escape_json() -> None:
    """Releases with the divergence-aware id but without json() get escape_json()."""
    template = build_log_template(TemplateCapability.DIVERGENT, show_diff_stat=False)

    assert "format_short_change_id_with_hidden_and_divergent_info(self)" in template.text
    assert "description.escape_json()" in template.text
    assert "json(description)" not in template.text
    assert "json(current_working_copy)" not in template.text


def test_legacy_template_uses_escape_json() -> None:
    template = build_log_template(TemplateCapability.LEGACY, show_diff_stat=False)

    assert "format_short_change_id_with_hidden_and_divergent_info" not in template.text
    assert "description.escape_json()" in template.text
    assert "json(description)" not in template.text
    assert 'if(current_working_copy, "true", "false")' in template.text


def test_delimiters_and_metadata_keys() -> None:
    template = build_log_template(TemplateCapability.MODERN, show_diff_stat=False)

    assert RECORD_MARKER in template.text
    assert FIELD_DELIMITER in template.text
    assert '"long-desc"' in template.text
    assert '"current-working-copy"' in template.text
    assert '"trunk"' in template.text
    assert "self.root()" in template.text


def test_diff_stat_only_when_enabled() -> None:
    without = build_log_template(TemplateCapability.MODERN, show_diff_stat=False)
    with_stat = build_log_template(TemplateCapability.MODERN, show_diff_stat=True)

    assert '"diff-stat"' not in without.text
    assert '"diff-stat"' in with_stat.text
    assert "total_added()" in with_stat.text
    assert with_stat.show_diff_stat is True


def test_fields_are_reported_in_order() -> None:
    template = build_log_template(TemplateCapability.LEGACY, show_diff_stat=False)

    assert template.fields == LOG_FIELDS
    assert template.fields[0] == "change_id"
    assert template.fields[-1] == "metadata"
    assert template.capability is TemplateCapability.LEGACY
