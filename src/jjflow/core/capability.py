"""Template capability negotiation.

The log template differs between jj releases. The divergence-aware change id
formatter and the ``json()`` template function arrived in different releases,
so there are three capability tiers:

    LEGACY     format_short_change_id() and .escape_json()
    DIVERGENT  divergence-aware change id, still .escape_json()
    MODERN     divergence-aware change id and json()

The capability is negotiated once per view session from ``jj --version``.
"""

import logging
import re
from enum import Enum

logger = logging.getLogger(__name__)

# First release with format_short_change_id_with_hidden_and_divergent_info().
DIVERGENT_CHANGE_ID_MIN_VERSION = (0, 26, 0)
# First release whose template language has json().
JSON_TEMPLATE_MIN_VERSION = (0, 31, 0)

_VERSION_RE = re.compile(r"(\d+)\.(\d+)\.(\d+)")


class TemplateCapability(Enum):
    """Which family of template sub-expressions the installed jj understands."""

    MODERN = "modern"
    DIVERGENT = "divergent"
    LEGACY = "legacy"

    @property
    def has_divergent_change_id(self) -> bool:
        return self is not TemplateCapability.LEGACY

    @property
    def has_json(self) -> bool:
        return self is TemplateCapability.MODERN


def parse_jj_version(version_text: str) -> tuple[int, int, int] | None:
    """Extract (major, minor, patch) from ``jj --version`` output.

    Examples:
        >>> parse_jj_version("jj 0.28.2-0123abcd")
        (0, 28, 2)
        >>> parse_jj_version("garbage") is None
        True
    """
    match = _VERSION_RE.search(version_text)
    if match is None:
        return None
    return (int(match.group(1)), int(match.group(2)), int(match.group(3)))


def negotiate_capability(version_text: str | None) -> TemplateCapability:
    """Select the template capability for the reported jj version.

    An unknown or unparsable version resolves to MODERN, the newest form.
    """
    if version_text is None:
        logger.debug("jj version unknown; assuming modern templates")
        return TemplateCapability.MODERN

    version = parse_jj_version(version_text)
    if version is None:
        logger.debug("Could not parse jj version %r; assuming modern templates", version_text)
        return TemplateCapability.MODERN

    if version >= JSON_TEMPLATE_MIN_VERSION:
        return TemplateCapability.MODERN
    if version >= DIVERGENT_CHANGE_ID_MIN_VERSION:
        return TemplateCapability.DIVERGENT
    return TemplateCapability.LEGACY
