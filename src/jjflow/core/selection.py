"""Staged multi-revision selections for rebase and squash.

Each selection accumulates revision ids over several user actions and then
emits a single jj command. Selections are owned by a ViewSession; nothing here
talks to jj.
"""

from dataclasses import dataclass, field


class SelectionNotReadyError(Exception):
    """Raised when a selection is executed before its preconditions hold."""


@dataclass
class RebaseSelection:
    """One source and a set of destinations for ``jj rebase -s``."""

    source: str | None = None
    destinations: set[str] = field(default_factory=set)

    def set_source(self, change_id: str) -> None:
        """Replace the source unconditionally."""
        self.source = change_id

    def toggle_destination(self, change_id: str) -> bool:
        """Add ``change_id`` to the destinations, or remove it if present.

        Returns:
            True if the id is a destination after the call
        """
        if change_id in self.destinations:
            self.destinations.discard(change_id)
            return False
        self.destinations.add(change_id)
        return True

    def clear(self) -> None:
        self.source = None
        self.destinations = set()

    @property
    def is_empty(self) -> bool:
        return self.source is None and not self.destinations

    @property
    def is_ready(self) -> bool:
        return self.source is not None and bool(self.destinations)

    def build_args(self) -> list[str]:
        """Build the rebase arguments; destinations are sorted for stable output.

        Raises:
            SelectionNotReadyError: If the source or all destinations are missing
        """
        if self.source is None:
            raise SelectionNotReadyError("No rebase source selected")
        if not self.destinations:
            raise SelectionNotReadyError("No rebase destination selected")

        args = ["rebase", "-s", self.source]
        for destination in sorted(self.destinations):
            args.extend(["-d", destination])
        return args


@dataclass(frozen=True)
class SquashPlan:
    """Resolved squash shape: which revision folds into which.

    Attributes:
        from_rev: Revision whose changes are moved
        into_rev: Revision receiving the changes (a parent revset when implicit)
        explicit_into: Whether the user selected ``into_rev`` themselves
    """

    from_rev: str
    into_rev: str
    explicit_into: bool

    def build_args(self, message: str | None, *, keep_emptied: bool) -> list[str]:
        args = ["squash", "--from", self.from_rev, "--into", self.into_rev]
        if keep_emptied:
            args.append("--keep-emptied")
        if message is not None:
            args.extend(["-m", message])
        return args


def parent_revset(change_id: str) -> str:
    """Revset naming the immediate parent of ``change_id``."""
    return f"{change_id}-"


@dataclass
class SquashSelection:
    """Optional "from" and "into" revisions for ``jj squash``."""

    from_id: str | None = None
    into_id: str | None = None

    def set_from(self, change_id: str) -> None:
        """Replace the from revision unconditionally."""
        self.from_id = change_id

    def set_into(self, change_id: str) -> None:
        """Replace the into revision unconditionally."""
        self.into_id = change_id

    def clear(self) -> None:
        self.from_id = None
        self.into_id = None

    @property
    def is_empty(self) -> bool:
        return self.from_id is None and self.into_id is None

    def resolve_plan(self, focused_id: str | None) -> SquashPlan:
        """Resolve the squash shape, in priority order.

        1. from and into both set: squash from into into.
        2. only from set: squash from into its immediate parent.
        3. neither set: squash the focused revision into its immediate parent.

        An into without a from is treated like case 3 for the focused revision,
        with the selected into as the target.

        Args:
            focused_id: Revision currently focused in the view ("@" if none)

        Returns:
            The SquashPlan to execute
        """
        if self.from_id is not None and self.into_id is not None:
            return SquashPlan(from_rev=self.from_id, into_rev=self.into_id, explicit_into=True)
        if self.from_id is not None:
            return SquashPlan(
                from_rev=self.from_id, into_rev=parent_revset(self.from_id), explicit_into=False
            )

        focused = focused_id if focused_id is not None else "@"
        if self.into_id is not None:
            return SquashPlan(from_rev=focused, into_rev=self.into_id, explicit_into=True)
        return SquashPlan(from_rev=focused, into_rev=parent_revset(focused), explicit_into=False)
