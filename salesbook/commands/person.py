"""Person (contact) commands.

Handles:
    "person add n/Amy Tan p/91234567 e/amy@example.com a/1 Main St t/friends"
    "person edit 1 p/98765432 t/vip"
    "person edit 1 t/"            (clears all tags)
    "person delete 3"
    "person list"
    "person find amy bob"
    "person sort email desc"
"""

from dataclasses import dataclass, replace
from typing import FrozenSet, Optional, Tuple

from salesbook.commands.fields import (
    contains_word, parse_index, parse_keywords, parse_sort_order, parse_tags, parse_value,
    require_empty_preamble, require_no_args, require_prefixes, single,
)
from salesbook.commands.prefix import PrefixPattern
from salesbook.commands.result import Command, CommandResult, lookup, numbered
from salesbook.errors import InvalidFormat
from salesbook.model.records import Person
from salesbook.model.store import PERSON_SORT_KEYS
from salesbook.model.values import Address, Email, Index, Name, Phone

GROUP = "person"

_NAME, _PHONE, _EMAIL, _ADDRESS, _TAG = "n/", "p/", "e/", "a/", "t/"
_PATTERN = PrefixPattern(_NAME, _PHONE, _EMAIL, _ADDRESS, _TAG)

_FIELDS = [
    (_NAME, "name", Name),
    (_PHONE, "phone", Phone),
    (_EMAIL, "email", Email),
    (_ADDRESS, "address", Address),
]


@dataclass
class AddCommand(Command):
    GROUP = GROUP
    COMMAND_WORD = "add"
    MESSAGE_USAGE = (
        "person add: Adds a person.\n"
        "Parameters: n/NAME p/PHONE e/EMAIL a/ADDRESS [t/TAG]...\n"
        "Example: person add n/Amy Tan p/91234567 e/amy@example.com a/1 Main St t/friends")

    person: Person

    def execute(self, store):
        store.add(self.person)
        return CommandResult(f"New person added: {self.person}")


@dataclass
class EditCommand(Command):
    GROUP = GROUP
    COMMAND_WORD = "edit"
    MESSAGE_USAGE = (
        "person edit: Edits the person at INDEX in the person list. "
        "Given fields replace the old values; t/ with no value clears the tags.\n"
        "Parameters: INDEX [n/NAME] [p/PHONE] [e/EMAIL] [a/ADDRESS] [t/TAG]...\n"
        "Example: person edit 1 p/98765432 e/amy@work.com")

    index: Index
    name: Optional[Name] = None
    phone: Optional[Phone] = None
    email: Optional[Email] = None
    address: Optional[Address] = None
    tags: Optional[FrozenSet] = None

    def execute(self, store):
        target = lookup(store.persons, self.index, "person")
        changes = {f: getattr(self, f) for f in ("name", "phone", "email", "address", "tags")
                   if getattr(self, f) is not None}
        edited = replace(target, **changes)
        store.replace(target, edited)
        return CommandResult(f"Edited person: {edited}")


@dataclass
class DeleteCommand(Command):
    GROUP = GROUP
    COMMAND_WORD = "delete"
    MESSAGE_USAGE = (
        "person delete: Deletes the person at INDEX in the person list.\n"
        "Example: person delete 1")

    index: Index

    def execute(self, store):
        target = lookup(store.persons, self.index, "person")
        store.remove(target)
        return CommandResult(f"Deleted person: {target}")


@dataclass
class ListCommand(Command):
    GROUP = GROUP
    COMMAND_WORD = "list"
    MESSAGE_USAGE = "person list: Lists all persons."
    mutates = False

    def execute(self, store):
        store.update_filter(Person, None)
        n = len(store.persons)
        if n == 0:
            return CommandResult("Your contact list is empty.")
        return CommandResult(f"Listed {n} person{'s' if n != 1 else ''}:\n"
                             f"{numbered(store.persons)}")


@dataclass
class FindCommand(Command):
    GROUP = GROUP
    COMMAND_WORD = "find"
    MESSAGE_USAGE = (
        "person find: Lists persons whose name contains any of the keywords "
        "(case-insensitive, whole words).\n"
        "Example: person find amy bob")
    mutates = False

    keywords: Tuple[str, ...]

    def execute(self, store):
        keywords = self.keywords
        store.update_filter(Person, lambda p: contains_word(p.name.value, keywords))
        n = len(store.persons)
        return CommandResult(f"{n} person{'s' if n != 1 else ''} listed.")


@dataclass
class SortCommand(Command):
    GROUP = GROUP
    COMMAND_WORD = "sort"
    MESSAGE_USAGE = (
        "person sort: Sorts the person list by an attribute.\n"
        "Parameters: name|phone|email|address [desc]\n"
        "Example: person sort email desc")
    mutates = False  # order is saved with the preferences, not the data

    attribute: str
    reverse: bool = False

    def execute(self, store):
        store.sort_persons(self.attribute, self.reverse)
        order = "descending" if self.reverse else "ascending"
        return CommandResult(f"Sorted persons by {self.attribute} ({order}).")


# --- Parsing ---

def _person_fields(args, usage):
    values = {}
    for prefix, field, cls in _FIELDS:
        if args.has(prefix):
            values[field] = parse_value(field, cls, single(args, prefix, field, usage), usage)
    return values


def parse_add(arguments):
    usage = AddCommand.MESSAGE_USAGE
    args = _PATTERN.tokenize(arguments)
    require_empty_preamble(args, usage)
    require_prefixes(args, {prefix: field for prefix, field, _ in _FIELDS}, usage)
    values = _person_fields(args, usage)
    tags = parse_tags(args.get_all(_TAG), usage)
    return AddCommand(Person(tags=tags, **values))


def parse_edit(arguments):
    usage = EditCommand.MESSAGE_USAGE
    args = _PATTERN.tokenize(arguments)
    index = parse_index(args.preamble, usage)
    if not args.present():
        raise InvalidFormat("fields", "At least one field to edit must be provided", usage)

    values = _person_fields(args, usage)
    if args.has(_TAG):
        tag_values = args.get_all(_TAG)
        if tag_values == [""]:
            values["tags"] = frozenset()
        else:
            values["tags"] = parse_tags(tag_values, usage)
    return EditCommand(index, **values)


def parse_delete(arguments):
    return DeleteCommand(parse_index(arguments, DeleteCommand.MESSAGE_USAGE))


def parse_list(arguments):
    require_no_args(arguments, "person list", ListCommand.MESSAGE_USAGE)
    return ListCommand()


def parse_find(arguments):
    return FindCommand(parse_keywords(arguments, FindCommand.MESSAGE_USAGE))


def parse_sort(arguments):
    usage = SortCommand.MESSAGE_USAGE
    return SortCommand(*parse_sort_order(arguments, PERSON_SORT_KEYS, usage))


PARSERS = [
    ("add", parse_add),
    ("edit", parse_edit),
    ("delete", parse_delete),
    ("list", parse_list),
    ("find", parse_find),
    ("sort", parse_sort),
]
