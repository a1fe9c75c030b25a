"""General commands that belong to no record group.

Handles:
    "help"
    "exit"
    "clear"    (deletes all data)
    "stats"    (sales per month, attached as report data)
"""

from dataclasses import dataclass

from salesbook.commands.fields import require_no_args
from salesbook.commands.result import Command, CommandResult
from salesbook.model.records import Sale
from salesbook.model.stats import monthly_sale_counts
from salesbook.model.store import Snapshot

GROUP = None

HELP_TEXT = (
    "Commands are GROUP WORD [ARGUMENTS], where GROUP is one of person, meeting, "
    "reminder, sale, tag.\n"
    "  person   add | edit | delete | list | find | sort\n"
    "  meeting  add | edit | delete | list | find\n"
    "  reminder add | edit | delete | list | find\n"
    "  sale     add | edit | delete | list | find | sort\n"
    "  tag      add | edit | delete | list | find\n"
    "Other commands: help, exit, clear, stats.\n"
    "Type a group and word with no arguments to see its usage.")


@dataclass
class HelpCommand(Command):
    COMMAND_WORD = "help"
    MESSAGE_USAGE = "help: Shows the command overview."
    mutates = False

    def execute(self, store):
        return CommandResult(HELP_TEXT, show_help=True)


@dataclass
class ExitCommand(Command):
    COMMAND_WORD = "exit"
    MESSAGE_USAGE = "exit: Saves and exits."
    mutates = False

    def execute(self, store):
        return CommandResult("Goodbye!", exit=True)


@dataclass
class ClearCommand(Command):
    COMMAND_WORD = "clear"
    MESSAGE_USAGE = "clear: Deletes every person, meeting, reminder, sale and tag."

    def execute(self, store):
        store.reset(Snapshot())
        return CommandResult("All data has been cleared.", clear=True)


@dataclass
class StatsCommand(Command):
    COMMAND_WORD = "stats"
    MESSAGE_USAGE = "stats: Shows the number of sales made in each month."
    mutates = False

    def execute(self, store):
        report = monthly_sale_counts(store.records(Sale))
        return CommandResult(f"Monthly sales:\n{report.format()}", report=report)


def _no_args(command_cls):
    def parse(arguments):
        require_no_args(arguments, command_cls.COMMAND_WORD, command_cls.MESSAGE_USAGE)
        return command_cls()
    return parse


PARSERS = [
    ("help", _no_args(HelpCommand)),
    ("exit", _no_args(ExitCommand)),
    ("clear", _no_args(ClearCommand)),
    ("stats", _no_args(StatsCommand)),
]
