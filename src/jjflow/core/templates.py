"""Construction of the ``jj log -T`` template used to list changesets.

Every record line starts with RECORD_MARKER. Positional fields follow,
separated by FIELD_DELIMITER, and the final field is a JSON object with the
values that are multi-line, optional or boolean:

    {"long-desc": str, "current-working-copy": bool, "trunk": bool,
     "diff-stat": "+N -M"}   # diff-stat only when enabled

The root commit emits a tail that is not valid JSON; the log parser drops it.
Building a template performs no I/O.
"""

from dataclasses import dataclass

from jjflow.core.capability import TemplateCapability

RECORD_MARKER = "\x1e"
FIELD_DELIMITER = "\x1f"

LOG_FIELDS: tuple[str, ...] = (
    "change_id",
    "commit_id",
    "author",
    "timestamp",
    "bookmarks",
    "conflict",
    "empty",
    "description",
    "metadata",
)

_DIVERGENT_CHANGE_ID = "format_short_change_id_with_hidden_and_divergent_info(self)"
_PLAIN_CHANGE_ID = "format_short_change_id(self.change_id())"

_DIFF_STAT_WIDTH = 80


@dataclass(frozen=True)
class LogTemplate:
    """A built log template together with its positional field order."""

    text: str
    fields: tuple[str, ...]
    capability: TemplateCapability
    show_diff_stat: bool


def _literal(value: str) -> str:
    return f"'{value}'"


def _json_value(expr: str, capability: TemplateCapability, *, boolean: bool) -> str:
    if capability.has_json:
        return f"json({expr})"
    if boolean:
        return f'if({expr}, "true", "false")'
    return f"{expr}.escape_json()"


def _metadata_template(capability: TemplateCapability, show_diff_stat: bool) -> str:
    parts = [
        _literal('{"long-desc":'),
        _json_value("description", capability, boolean=False),
        _literal(',"current-working-copy":'),
        _json_value("current_working_copy", capability, boolean=True),
        _literal(',"trunk":'),
        _json_value('self.contained_in("trunk()")', capability, boolean=True),
    ]
    if show_diff_stat:
        stat = f"self.diff().stat({_DIFF_STAT_WIDTH})"
        parts.extend(
            [
                _literal(',"diff-stat":"+'),
                f"{stat}.total_added()",
                _literal(" -"),
                f"{stat}.total_removed()",
                _literal('"'),
            ]
        )
    parts.append(_literal("}"))
    return " ++ ".join(parts)


def _root_template() -> str:
    return "concat(" + ", ".join(
        [
            _literal(RECORD_MARKER),
            "format_short_change_id(self.change_id())",
            _literal(FIELD_DELIMITER),
            "format_short_commit_id(self.commit_id())",
            _literal(FIELD_DELIMITER),
            _literal("root()"),
            '"\\n"',
        ]
    ) + ")"


def _record_template(capability: TemplateCapability, show_diff_stat: bool) -> str:
    field_exprs = {
        "change_id": (
            _DIVERGENT_CHANGE_ID if capability.has_divergent_change_id else _PLAIN_CHANGE_ID
        ),
        "commit_id": "format_short_commit_id(self.commit_id())",
        "author": "self.author().name()",
        "timestamp": "self.committer().timestamp().ago()",
        "bookmarks": "self.bookmarks()",
        "conflict": 'if(self.conflict(), "conflict")',
        "empty": 'if(self.empty(), "empty")',
        "description": "self.description().first_line()",
        "metadata": _metadata_template(capability, show_diff_stat),
    }
    delimiter = _literal(FIELD_DELIMITER)
    body = f", {delimiter}, ".join(field_exprs[name] for name in LOG_FIELDS)
    return f"concat({_literal(RECORD_MARKER)}, {body}, " + '"\\n")'


def build_log_template(capability: TemplateCapability, *, show_diff_stat: bool) -> LogTemplate:
    """Build the changeset listing template.

    Args:
        capability: Negotiated template capability of the installed jj
        show_diff_stat: Include the (expensive) per-changeset diff stat

    Returns:
        LogTemplate whose ``text`` is passed to ``jj log -T``
    """
    text = (
        f"if(self.root(), {_root_template()}, "
        f"{_record_template(capability, show_diff_stat)})"
    )
    return LogTemplate(
        text=text,
        fields=LOG_FIELDS,
        capability=capability,
        show_diff_stat=show_diff_stat,
    )
