"""Classification of jj command output into actionable outcomes.

jj frequently reports failures as text with a zero exit status, so outcomes are
derived from the output text rather than the exit code. The rule table below is
plain data: rules are tried in order and the first match wins. Bump
CLASSIFIER_RULES_VERSION whenever a rule's patterns or order change, so that
tests pinned to upstream message wording are revisited.
"""

import re
from dataclasses import dataclass
from enum import Enum

CLASSIFIER_RULES_VERSION = 2


class Category(Enum):
    """Outcome taxonomy for a jj invocation."""

    STALE_WORKING_COPY = "stale-working-copy"
    MERGE_CONFLICT = "merge-conflict"
    REVISION_NOT_FOUND = "revision-not-found"
    EMPTY_SQUASH_TARGET = "empty-squash-target"
    REBASE_CYCLE = "rebase-cycle"
    PUSH_REJECTED = "push-rejected"
    AUTH_FAILURE = "auth-failure"
    NETWORK_FAILURE = "network-failure"
    NON_FAST_FORWARD = "non-fast-forward"
    NOTHING_TO_DO = "nothing-to-do"
    GENERIC_ERROR = "generic-error"
    SUCCESS = "success"


@dataclass(frozen=True)
class ClassifierRule:
    """One row of the classification table."""

    category: Category
    patterns: tuple[str, ...]
    suggestion: str


@dataclass(frozen=True)
class Classification:
    """Derived outcome of a command.

    Attributes:
        category: Matched category, SUCCESS when nothing matched
        message: Text to show the user (output, or configured success message)
        suggestion: Remediation for failures, None on success
        bookmarks: Bookmark names mentioned by a push rejection
    """

    category: Category
    message: str
    suggestion: str | None = None
    bookmarks: tuple[str, ...] = ()

    @property
    def is_success(self) -> bool:
        return self.category is Category.SUCCESS


# Patterns match at the start of a line, optionally after an "Error:"-style
# label. In jj output, descriptions only ever follow a change id on a line.
_LEAD = r"^\s*(?:(?:error|fatal|warning|hint|remote):\s*)?"

CLASSIFIER_RULES: tuple[ClassifierRule, ...] = (
    ClassifierRule(
        category=Category.STALE_WORKING_COPY,
        patterns=(_LEAD + r"(?:the )?working copy is stale",),
        suggestion="Run 'jj workspace update-stale' to refresh the stale workspace.",
    ),
    ClassifierRule(
        category=Category.MERGE_CONFLICT,
        patterns=(
            _LEAD + r"there are unresolved conflicts",
            _LEAD + r"new conflicts appeared in",
            _LEAD + r"unresolved conflicts?\b",
            _LEAD + r".*\bconflicted (?:commits?|changes?) (?:are|is|were) not allowed",
        ),
        suggestion="Resolve the conflicts (e.g. 'jj resolve') and describe the result.",
    ),
    ClassifierRule(
        category=Category.REVISION_NOT_FOUND,
        patterns=(
            _LEAD + r"revision [`'\"]?\S+?[`'\"]? doesn't exist",
            _LEAD + r"no such revision",
            _LEAD + r"revision [`'\"]?\S+?[`'\"]? not found",
        ),
        suggestion="Refresh the log; the revision may have been rewritten or abandoned.",
    ),
    ClassifierRule(
        category=Category.EMPTY_SQUASH_TARGET,
        patterns=(
            _LEAD + r"nothing to squash",
            _LEAD + r"no changes to squash",
            _LEAD + r"the squashed change would be empty",
        ),
        suggestion="Select a source revision that has changes, or pass --keep-emptied.",
    ),
    ClassifierRule(
        category=Category.REBASE_CYCLE,
        patterns=(
            _LEAD + r"cannot rebase \S+ onto (?:itself|descendant)",
            _LEAD + r".*\bwould create a loop\b",
            _LEAD + r".*\bis a descendant of itself\b",
        ),
        suggestion="Pick a destination that is not a descendant of the source.",
    ),
    ClassifierRule(
        category=Category.PUSH_REJECTED,
        patterns=(
            _LEAD + r"refusing to push",
            _LEAD + r"(?:the )?push (?:was )?rejected",
            _LEAD + r"failed to push some bookmarks",
            r"^\s*(?:error|hint|remote):.*\bwould create new heads?\b",
            r"^\s*(?:error|remote):.*\brejected by the remote\b",
        ),
        suggestion="Fetch with 'jj git fetch', rebase onto the remote bookmark, then push again.",
    ),
    ClassifierRule(
        category=Category.AUTH_FAILURE,
        patterns=(
            r"^\s*(?:error|fatal|remote):.*\bauthentication failed\b",
            r"^\s*(?:error|fatal|remote):.*\bfailed to authenticate\b",
            r"^\s*(?:error|fatal|remote):.*\bpermission denied\b",
            r"^\s*(?:error|fatal|remote):.*\bcould not read username\b",
            r"^\s*(?:error|fatal|remote):.*\b(?:http|status)(?: status)?(?: code)?:? 403\b",
            r"^\s*(?:error|fatal|remote):.*\b403 forbidden\b",
        ),
        suggestion="Check your credentials or SSH key for the remote.",
    ),
    ClassifierRule(
        category=Category.NETWORK_FAILURE,
        patterns=(
            r"^\s*(?:error|fatal):.*\bcould not resolve host\b",
            r"^\s*(?:error|fatal):.*\bconnection (?:refused|timed out|reset)\b",
            r"^\s*(?:error|fatal):.*\bnetwork is unreachable\b",
            r"^\s*(?:error|fatal):.*\bfailed to connect\b",
        ),
        suggestion="Check your network connection and the remote URL, then retry.",
    ),
    ClassifierRule(
        category=Category.NON_FAST_FORWARD,
        patterns=(
            _LEAD + r"refusing to move bookmark backwards or sideways",
            r"^\s*(?:error|hint|remote):.*\bnon-fast-forward\b",
            r"^\s*(?:error|hint|remote):.*\bnot a fast-forward\b",
        ),
        suggestion="Fetch first, or move the bookmark with --allow-backwards if intended.",
    ),
    ClassifierRule(
        category=Category.NOTHING_TO_DO,
        patterns=(
            r"^\s*nothing changed\.?\s*$",
            r"^\s*no changes\.?\s*$",
            _LEAD + r"already up to date\.?\s*$",
        ),
        suggestion="No action was needed.",
    ),
    ClassifierRule(
        category=Category.GENERIC_ERROR,
        patterns=(r"^\s*(error|fatal|warning):",),
        suggestion="See the command output above for details.",
    ),
)

_COMPILED_RULES: tuple[tuple[ClassifierRule, tuple[re.Pattern[str], ...]], ...] = tuple(
    (rule, tuple(re.compile(p, re.IGNORECASE | re.MULTILINE) for p in rule.patterns))
    for rule in CLASSIFIER_RULES
)

_BOOKMARK_RE = re.compile(r"bookmark[: ]+[`'\"]?(?P<name>[^\s`'\",;:]+)", re.IGNORECASE)


def extract_bookmark_names(text: str) -> list[str]:
    """Collect bookmark names mentioned as ``bookmark[: ]+<name>``.

    Names are de-duplicated and returned in order of first appearance.

    Examples:
        >>> extract_bookmark_names("Refusing to push ... bookmark: feature-x")
        ['feature-x']
    """
    names: list[str] = []
    for match in _BOOKMARK_RE.finditer(text):
        name = match.group("name").rstrip(".")
        if name and name not in names:
            names.append(name)
    return names


def _match_rule(output: str) -> ClassifierRule | None:
    for rule, patterns in _COMPILED_RULES:
        if any(pattern.search(output) for pattern in patterns):
            return rule
    return None


def classify(
    command_name: str,
    output: str,
    *,
    success_message: str | None = None,
) -> Classification:
    """Classify the output of a jj command.

    Args:
        command_name: Name of the jj operation, used in failure messages
        output: Captured text of the invocation
        success_message: Message to report when the command succeeds silently

    Returns:
        Classification with category, user-facing message and suggestion
    """
    trimmed = output.strip()
    rule = _match_rule(trimmed)

    if rule is None:
        if not trimmed and success_message is not None:
            return Classification(category=Category.SUCCESS, message=success_message)
        return Classification(category=Category.SUCCESS, message=trimmed)

    message = trimmed if trimmed else f"{command_name} failed"
    suggestion = rule.suggestion
    bookmarks: tuple[str, ...] = ()
    if rule.category is Category.PUSH_REJECTED:
        bookmarks = tuple(extract_bookmark_names(trimmed))
        if bookmarks:
            suggestion = (
                f"Fetch with 'jj git fetch', rebase {', '.join(bookmarks)} onto the "
                "remote bookmark, then push again."
            )

    return Classification(
        category=rule.category,
        message=message,
        suggestion=suggestion,
        bookmarks=bookmarks,
    )
