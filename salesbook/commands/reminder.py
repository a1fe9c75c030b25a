"""Reminder commands: add, edit, delete, list, and find reminders.

Handles:
    "reminder add i/2 m/Call Amy d/2023-08-01"
    "reminder add i/1 m/Send quote d/2023-08-01 09:30"
    "reminder edit 1 m/Call Amy back d/2023-08-02"
    "reminder delete 1"
    "reminder list"
    "reminder find Amy quote"

i/ is the contact's index in the person list, m/ the reminder text and
d/ its date (YYYY-MM-DD, optionally followed by HH:MM).
"""

import re
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from salesbook.commands.fields import (
    contains_word, parse_index, parse_keywords, parse_value, require_no_args,
    require_prefixes, single,
)
from salesbook.commands.prefix import PrefixPattern
from salesbook.commands.result import Command, CommandResult, lookup, numbered
from salesbook.errors import InvalidFormat
from salesbook.model.records import Reminder
from salesbook.model.values import DateTime, Index, Message

GROUP = "reminder"

_CONTACT, _MESSAGE, _DATE = "i/", "m/", "d/"
_PATTERN = PrefixPattern(_CONTACT, _MESSAGE, _DATE)

# A bare number before the first prefix is tolerated by "add" and ignored
_NUMERIC_PREAMBLE = re.compile(r"^\d+$")


# --- Commands ---

@dataclass
class AddCommand(Command):
    GROUP = GROUP
    COMMAND_WORD = "add"
    MESSAGE_USAGE = (
        "reminder add: Adds a reminder for a contact.\n"
        "Parameters: i/CONTACT_INDEX m/MESSAGE d/DATE\n"
        "Example: reminder add i/2 m/Call Amy d/2023-08-01")

    index: Index
    message: Message
    date: DateTime

    def execute(self, store):
        reminder = Reminder(self.index, self.message, self.date)
        store.add(reminder)
        return CommandResult(f"New reminder added: {reminder}")


@dataclass
class EditCommand(Command):
    GROUP = GROUP
    COMMAND_WORD = "edit"
    MESSAGE_USAGE = (
        "reminder edit: Edits the reminder at INDEX in the reminder list.\n"
        "Parameters: INDEX [i/CONTACT_INDEX] [m/MESSAGE] [d/DATE]\n"
        "Example: reminder edit 1 m/Call Amy back")

    index: Index
    contact: Optional[Index] = None
    message: Optional[Message] = None
    date: Optional[DateTime] = None

    def execute(self, store):
        target = lookup(store.reminders, self.index, "reminder")
        changes = {}
        if self.contact is not None:
            changes["contact"] = self.contact
        if self.message is not None:
            changes["message"] = self.message
        if self.date is not None:
            changes["date"] = self.date
        edited = replace(target, **changes)
        store.replace(target, edited)
        return CommandResult(f"Edited reminder: {edited}")


@dataclass
class DeleteCommand(Command):
    GROUP = GROUP
    COMMAND_WORD = "delete"
    MESSAGE_USAGE = (
        "reminder delete: Deletes the reminder at INDEX in the reminder list.\n"
        "Example: reminder delete 1")

    index: Index

    def execute(self, store):
        target = lookup(store.reminders, self.index, "reminder")
        store.remove(target)
        return CommandResult(f"Deleted reminder: {target}")


@dataclass
class ListCommand(Command):
    GROUP = GROUP
    COMMAND_WORD = "list"
    MESSAGE_USAGE = "reminder list: Lists all reminders, soonest first."
    mutates = False

    def execute(self, store):
        store.update_filter(Reminder, None)
        n = len(store.reminders)
        if n == 0:
            return CommandResult("You don't have any reminders.")
        noun = "reminder" if n == 1 else "reminders"
        return CommandResult(f"Listed {n} {noun}:\n{numbered(store.reminders)}")


@dataclass
class FindCommand(Command):
    GROUP = GROUP
    COMMAND_WORD = "find"
    MESSAGE_USAGE = (
        "reminder find: Lists reminders whose message contains any of the keywords.\n"
        "Example: reminder find Amy quote")
    mutates = False

    keywords: Tuple[str, ...]

    def execute(self, store):
        keywords = self.keywords
        store.update_filter(Reminder, lambda r: contains_word(r.message.value, keywords))
        return CommandResult(f"{len(store.reminders)} reminders listed.")


# --- Parsing ---

def parse_add(arguments):
    usage = AddCommand.MESSAGE_USAGE
    args = _PATTERN.tokenize(arguments)
    if args.preamble and not _NUMERIC_PREAMBLE.match(args.preamble):
        raise InvalidFormat(
            "preamble", f"Unexpected text before the first prefix: {args.preamble!r}", usage)
    require_prefixes(args, {_CONTACT: "contact index", _MESSAGE: "message", _DATE: "date"}, usage)
    index = parse_index(single(args, _CONTACT, "contact index", usage), usage, "contact index")
    message = parse_value("message", Message, single(args, _MESSAGE, "message", usage), usage)
    date = parse_value("date", DateTime, single(args, _DATE, "date", usage), usage)
    return AddCommand(index, message, date)


def parse_edit(arguments):
    usage = EditCommand.MESSAGE_USAGE
    args = _PATTERN.tokenize(arguments)
    index = parse_index(args.preamble, usage)
    if not args.present():
        raise InvalidFormat("fields", "At least one field to edit must be provided", usage)

    contact = message = date = None
    if args.has(_CONTACT):
        contact = parse_index(single(args, _CONTACT, "contact index", usage), usage, "contact index")
    if args.has(_MESSAGE):
        message = parse_value("message", Message, single(args, _MESSAGE, "message", usage), usage)
    if args.has(_DATE):
        date = parse_value("date", DateTime, single(args, _DATE, "date", usage), usage)
    return EditCommand(index, contact, message, date)


def parse_delete(arguments):
    return DeleteCommand(parse_index(arguments, DeleteCommand.MESSAGE_USAGE))


def parse_list(arguments):
    require_no_args(arguments, "reminder list", ListCommand.MESSAGE_USAGE)
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


# --- Standalone test ---

if __name__ == "__main__":
    tests = [
        "i/2 m/Call Amy d/2023-08-01",
        "1 i/2 m/Call Amy d/2023-08-01",
        "m/Call Amy d/2023-08-01",
        "i/2 m/Call Amy d/2023-13-01",
        "some words i/2 m/Call Amy d/2023-08-01",
    ]
    for t in tests:
        try:
            result = parse_add(t).describe()
        except InvalidFormat as e:
            result = f"InvalidFormat({e.field}): {e.message}"
        print(f"  {t!r:45s} => {result}")
