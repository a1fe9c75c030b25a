"""Meeting commands: schedule, edit, cancel, list, and find meetings.

Handles:
    "meeting add i/1 m/Quarterly review d/2023-09-14 15:00"
    "meeting edit 2 d/2023-09-15 10:00"
    "meeting delete 1"
    "meeting list"
    "meeting find review"
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from salesbook.commands.fields import (
    contains_word, parse_index, parse_keywords, parse_value, require_empty_preamble,
    require_no_args, require_prefixes, single,
)
from salesbook.commands.prefix import PrefixPattern
from salesbook.commands.result import Command, CommandResult, lookup, numbered
from salesbook.errors import InvalidFormat
from salesbook.model.records import Meeting
from salesbook.model.values import DateTime, Index, Message

GROUP = "meeting"

_CONTACT, _MESSAGE, _DATE = "i/", "m/", "d/"
_PATTERN = PrefixPattern(_CONTACT, _MESSAGE, _DATE)


@dataclass
class AddCommand(Command):
    GROUP = GROUP
    COMMAND_WORD = "add"
    MESSAGE_USAGE = (
        "meeting add: Schedules a meeting with a contact.\n"
        "Parameters: i/CONTACT_INDEX m/DESCRIPTION d/START\n"
        "Example: meeting add i/1 m/Quarterly review d/2023-09-14 15:00")

    index: Index
    description: Message
    start: DateTime

    def execute(self, store):
        meeting = Meeting(self.index, self.description, self.start)
        store.add(meeting)
        return CommandResult(f"New meeting added: {meeting}")


@dataclass
class EditCommand(Command):
    GROUP = GROUP
    COMMAND_WORD = "edit"
    MESSAGE_USAGE = (
        "meeting edit: Edits the meeting at INDEX in the meeting list.\n"
        "Parameters: INDEX [i/CONTACT_INDEX] [m/DESCRIPTION] [d/START]\n"
        "Example: meeting edit 2 d/2023-09-15 10:00")

    index: Index
    contact: Optional[Index] = None
    description: Optional[Message] = None
    start: Optional[DateTime] = None

    def execute(self, store):
        target = lookup(store.meetings, self.index, "meeting")
        changes = {k: v for k, v in [("contact", self.contact),
                                     ("description", self.description),
                                     ("start", self.start)] if v is not None}
        edited = replace(target, **changes)
        store.replace(target, edited)
        return CommandResult(f"Edited meeting: {edited}")


@dataclass
class DeleteCommand(Command):
    GROUP = GROUP
    COMMAND_WORD = "delete"
    MESSAGE_USAGE = (
        "meeting delete: Deletes the meeting at INDEX in the meeting list.\n"
        "Example: meeting delete 1")

    index: Index

    def execute(self, store):
        target = lookup(store.meetings, self.index, "meeting")
        store.remove(target)
        return CommandResult(f"Deleted meeting: {target}")


@dataclass
class ListCommand(Command):
    GROUP = GROUP
    COMMAND_WORD = "list"
    MESSAGE_USAGE = "meeting list: Lists all meetings in start order."
    mutates = False

    def execute(self, store):
        store.update_filter(Meeting, None)
        n = len(store.meetings)
        if n == 0:
            return CommandResult("You don't have any meetings.")
        return CommandResult(f"Listed {n} meeting{'s' if n != 1 else ''}:\n"
                             f"{numbered(store.meetings)}")


@dataclass
class FindCommand(Command):
    GROUP = GROUP
    COMMAND_WORD = "find"
    MESSAGE_USAGE = (
        "meeting find: Lists meetings whose description contains any of the keywords.\n"
        "Example: meeting find review")
    mutates = False

    keywords: Tuple[str, ...]

    def execute(self, store):
        keywords = self.keywords
        store.update_filter(Meeting, lambda m: contains_word(m.description.value, keywords))
        return CommandResult(f"{len(store.meetings)} meetings listed.")


# --- Parsing ---

def parse_add(arguments):
    usage = AddCommand.MESSAGE_USAGE
    args = _PATTERN.tokenize(arguments)
    require_empty_preamble(args, usage)
    require_prefixes(args, {_CONTACT: "contact index", _MESSAGE: "description",
                            _DATE: "start"}, usage)
    index = parse_index(single(args, _CONTACT, "contact index", usage), usage, "contact index")
    description = parse_value("description", Message,
                              single(args, _MESSAGE, "description", usage), usage)
    start = parse_value("start", DateTime, single(args, _DATE, "start", usage), usage)
    return AddCommand(index, description, start)


def parse_edit(arguments):
    usage = EditCommand.MESSAGE_USAGE
    args = _PATTERN.tokenize(arguments)
    index = parse_index(args.preamble, usage)
    if not args.present():
        raise InvalidFormat("fields", "At least one field to edit must be provided", usage)

    contact = description = start = None
    if args.has(_CONTACT):
        contact = parse_index(single(args, _CONTACT, "contact index", usage), usage, "contact index")
    if args.has(_MESSAGE):
        description = parse_value("description", Message,
                                  single(args, _MESSAGE, "description", usage), usage)
    if args.has(_DATE):
        start = parse_value("start", DateTime, single(args, _DATE, "start", usage), usage)
    return EditCommand(index, contact, description, start)


def parse_delete(arguments):
    return DeleteCommand(parse_index(arguments, DeleteCommand.MESSAGE_USAGE))


def parse_list(arguments):
    require_no_args(arguments, "meeting list", ListCommand.MESSAGE_USAGE)
    return ListCommand()


def parse_find(arguments):
    return FindCommand(parse_keywords(arguments, FindCommand.MESSAGE_USAGE))


PARSERS = [
    ("add", parse_add),
    ("edit", parse_edit),
    ("delete", parse_delete),
    ("list", parse_list),
    ("find", parse_find),
]
