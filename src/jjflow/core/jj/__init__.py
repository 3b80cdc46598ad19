"""jj process execution: interface, real, fake and dry-run implementations."""

from jjflow.core.jj.abc import Jj, is_read_only, with_global_flags
from jjflow.core.jj.dry_run import DryRunJj
from jjflow.core.jj.fake import FakeJj
from jjflow.core.jj.real import RealJj
from jjflow.core.jj.types import ColoredOutput, CommandResult, StyleSpan

__all__ = [
    "ColoredOutput",
    "CommandResult",
    "DryRunJj",
    "FakeJj",
    "Jj",
    "RealJj",
    "StyleSpan",
    "is_read_only",
    "with_global_flags",
]
