"""Tag commands for the two tag namespaces.

c/ selects contact tags (on persons), s/ selects sale tags (on sales).
Exactly one of them must be given. INDEX is a position in that namespace's
tag list, which is sorted by name.

Handles:
    "tag add c/ t/friends"
    "tag edit 1 c/ t/colleagues"   (renames the tag on every person)
    "tag delete 2 s/"              (removes the tag from every sale)
    "tag list"
    "tag find 1 c/"                (shows persons carrying contact tag 1)
"""

from dataclasses import dataclass

from salesbook.commands.fields import (
    parse_index, parse_value, require_empty_preamble, require_no_args, require_prefixes,
    single,
)
from salesbook.commands.prefix import PrefixPattern
from salesbook.commands.result import Command, CommandResult, lookup
from salesbook.errors import InvalidFormat
from salesbook.model.records import Person, Sale
from salesbook.model.store import CONTACT, SALE
from salesbook.model.values import Index, Tag

GROUP = "tag"

_CONTACT, _SALE, _TAG = "c/", "s/", "t/"
_PATTERN = PrefixPattern(_CONTACT, _SALE, _TAG)


def _tag_label(kind):
    return f"{kind} tag"


@dataclass
class AddCommand(Command):
    GROUP = GROUP
    COMMAND_WORD = "add"
    MESSAGE_USAGE = (
        "tag add: Creates a tag.\n"
        "Parameters: c/|s/ t/NAME\n"
        "Example: tag add c/ t/friends")

    kind: str
    tag: Tag

    def execute(self, store):
        store.add_tag(self.kind, self.tag)
        return CommandResult(f"New {_tag_label(self.kind)} added: {self.tag}")


@dataclass
class EditCommand(Command):
    GROUP = GROUP
    COMMAND_WORD = "edit"
    MESSAGE_USAGE = (
        "tag edit: Renames the tag at INDEX, updating every record that uses it.\n"
        "Parameters: INDEX c/|s/ t/NEW_NAME\n"
        "Example: tag edit 1 c/ t/colleagues")

    index: Index
    kind: str
    tag: Tag

    def execute(self, store):
        old = lookup(store.tag_view(self.kind), self.index, _tag_label(self.kind))
        store.rename_tag(self.kind, old, self.tag)
        return CommandResult(f"Renamed {_tag_label(self.kind)} {old} to {self.tag}")


@dataclass
class DeleteCommand(Command):
    GROUP = GROUP
    COMMAND_WORD = "delete"
    MESSAGE_USAGE = (
        "tag delete: Deletes the tag at INDEX and removes it from every record.\n"
        "Parameters: INDEX c/|s/\n"
        "Example: tag delete 2 s/")

    index: Index
    kind: str

    def execute(self, store):
        target = lookup(store.tag_view(self.kind), self.index, _tag_label(self.kind))
        store.remove_tag(self.kind, target)
        return CommandResult(f"Deleted {_tag_label(self.kind)}: {target}")


@dataclass
class ListCommand(Command):
    GROUP = GROUP
    COMMAND_WORD = "list"
    MESSAGE_USAGE = "tag list: Lists contact tags and sale tags."
    mutates = False

    def execute(self, store):
        sections = []
        for title, view in (("Contact tags", store.contact_tags), ("Sale tags", store.sale_tags)):
            if view:
                body = "\n".join(f"{i}. {t}" for i, t in enumerate(view, 1))
            else:
                body = "(none)"
            sections.append(f"{title}:\n{body}")
        return CommandResult("\n".join(sections))


@dataclass
class FindCommand(Command):
    GROUP = GROUP
    COMMAND_WORD = "find"
    MESSAGE_USAGE = (
        "tag find: Shows the persons (c/) or sales (s/) carrying the tag at INDEX.\n"
        "Parameters: INDEX c/|s/\n"
        "Example: tag find 1 c/")
    mutates = False

    index: Index
    kind: str

    def execute(self, store):
        tag = lookup(store.tag_view(self.kind), self.index, _tag_label(self.kind))
        if self.kind == CONTACT:
            store.update_filter(Person, lambda p: tag in p.tags)
            n = len(store.persons)
            noun = "person" if n == 1 else "persons"
        else:
            store.update_filter(Sale, lambda s: tag in s.tags)
            n = len(store.sales)
            noun = "sale" if n == 1 else "sales"
        return CommandResult(f"{n} {noun} tagged {tag} listed.")


# --- Parsing ---

def _kind(args, usage):
    has_contact, has_sale = args.has(_CONTACT), args.has(_SALE)
    if has_contact == has_sale:
        raise InvalidFormat("tag kind", "Give exactly one of c/ (contact) or s/ (sale)", usage)
    for prefix in (_CONTACT, _SALE):
        if any(args.get_all(prefix)):
            raise InvalidFormat("tag kind", f"{prefix} takes no value", usage)
    return CONTACT if has_contact else SALE


def parse_add(arguments):
    usage = AddCommand.MESSAGE_USAGE
    args = _PATTERN.tokenize(arguments)
    require_empty_preamble(args, usage)
    kind = _kind(args, usage)
    require_prefixes(args, {_TAG: "tag"}, usage)
    tag = parse_value("tag", Tag, single(args, _TAG, "tag", usage), usage)
    return AddCommand(kind, tag)


def parse_edit(arguments):
    usage = EditCommand.MESSAGE_USAGE
    args = _PATTERN.tokenize(arguments)
    index = parse_index(args.preamble, usage)
    kind = _kind(args, usage)
    require_prefixes(args, {_TAG: "tag"}, usage)
    tag = parse_value("tag", Tag, single(args, _TAG, "tag", usage), usage)
    return EditCommand(index, kind, tag)


def _parse_index_and_kind(arguments, usage):
    args = _PATTERN.tokenize(arguments)
    index = parse_index(args.preamble, usage)
    kind = _kind(args, usage)
    if args.has(_TAG):
        raise InvalidFormat("tag", "t/ is not used by this command", usage)
    return index, kind


def parse_delete(arguments):
    return DeleteCommand(*_parse_index_and_kind(arguments, DeleteCommand.MESSAGE_USAGE))


def parse_list(arguments):
    require_no_args(arguments, "tag list", ListCommand.MESSAGE_USAGE)
    return ListCommand()


def parse_find(arguments):
    return FindCommand(*_parse_index_and_kind(arguments, FindCommand.MESSAGE_USAGE))


PARSERS = [
    ("add", parse_add),
    ("edit", parse_edit),
    ("delete", parse_delete),
    ("list", parse_list),
    ("find", parse_find),
]
