"""Command and result objects for the command system.

Each group module's parsers return a Command (or raise ParseError).
The caller runs command.execute(store) and shows result.feedback.
"""

from dataclasses import dataclass, fields
from typing import Any, Optional

from salesbook.errors import CommandError


@dataclass
class CommandResult:
    feedback: str             # text shown to the user
    show_help: bool = False   # front-end should show the help text
    exit: bool = False        # front-end should stop its loop
    clear: bool = False       # all data was wiped
    report: Optional[Any] = None  # e.g. MonthlyCountDataSet from "stats"


class Command:
    """Base for all commands. Subclasses are dataclasses holding parsed fields."""

    GROUP = None        # "person", "reminder", ... or None for general words
    COMMAND_WORD = None
    mutates = True      # False for pure reads (list, find, help, ...)

    def execute(self, store):
        raise NotImplementedError

    @property
    def command_name(self):
        if self.GROUP:
            return f"{self.GROUP}.{self.COMMAND_WORD}"
        return self.COMMAND_WORD

    def describe(self):
        """Compact one-line form for the request log and -parse output."""
        parts = [self.command_name]
        for f in fields(self):
            parts.append(f"{f.name}={getattr(self, f.name)!r}")
        return ", ".join(parts)


def lookup(view, index, kind):
    """The record at a one-based index of a displayed view.

    Raises CommandError when the index is past the end of the view.
    """
    if index.zero_based >= len(view):
        raise CommandError(f"The {kind} index provided is invalid: {index}")
    return view[index.zero_based]


def numbered(records):
    """Format records as a numbered list matching their display indexes."""
    return "\n".join(f"{i}. {r}" for i, r in enumerate(records, 1))


def format_value(val):
    """Plain text form of a command field, as printed by `-parse`."""
    if val is None:
        return "none"
    if isinstance(val, bool):
        return "true" if val else "false"
    if isinstance(val, (tuple, frozenset)):
        return " ".join(sorted(str(v) for v in val))
    if hasattr(val, "plain"):
        return val.plain
    return str(val)
