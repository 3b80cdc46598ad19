"""Tests for template capability negotiation."""

import pytest

from jjflow.core.capability import (
    DIVERGENT_CHANGE_ID_MIN_VERSION,
    JSON_TEMPLATE_MIN_VERSION,
    TemplateCapability,
    negotiate_capability,
    parse_jj_version,
)


@pytest.mark.parametrize(
    ("version_text", "expected"),
    [
        ("jj 0.31.0", TemplateCapability.MODERN),
        ("jj 1.2.3-abcdef", TemplateCapability.MODERN),
        ("jj 0.30.0", TemplateCapability.DIVERGENT),
        ("jj 0.26.0", TemplateCapability.DIVERGENT),
        ("jj 0.25.0", TemplateCapability.LEGACY),
        ("jj 0.18.1", TemplateCapability.LEGACY),
    ],
)
def test_negotiates_by_version(version_text: str, expected: TemplateCapability) -> None:
    assert negotiate_capability(version_text) is expected


def test_json_template_threshold() -> None:
    """json() is only used from 0.31.0 on, independently of the change id formatter."""
    assert JSON_TEMPLATE_MIN_VERSION == (0, 31, 0)
    assert DIVERGENT_CHANGE_ID_MIN_VERSION == (0, 26, 0)

    assert not negotiate_capability("jj 0.30.9").has_json
    assert negotiate_capability("jj 0.30.9").has_divergent_change_id
    assert negotiate_capability("jj 0.31.0").has_json


def test_unknown_version_resolves_to_modern() -> None:
    assert negotiate_capability(None) is TemplateCapability.MODERN
    assert negotiate_capability("jj (dev build)") is TemplateCapability.MODERN


def test_parse_jj_version() -> None:
    assert parse_jj_version("jj 0.28.2-0123abcd") == (0, 28, 2)
    assert parse_jj_version("no digits here") is None
