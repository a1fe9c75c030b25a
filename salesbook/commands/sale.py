"""Sale commands: record, edit, delete, list, and find sales.

Handles:
    "sale add m/Printer d/2023-08-01 p/199.99 q/2 i/1 t/hardware"
    "sale edit 1 q/3"
    "sale delete 2"
    "sale list"
    "sale find printer"
    "sale sort price desc"

p/ is the unit price in DOLLARS.CENTS form and q/ the quantity (1 to
9999999). i/ (the buyer's contact index) and t/ are optional.
"""

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import FrozenSet, Optional, Tuple

from salesbook.commands.fields import (
    contains_word, parse_index, parse_keywords, parse_sort_order, parse_tags, parse_value,
    require_empty_preamble, require_no_args, require_prefixes, single,
)
from salesbook.commands.prefix import PrefixPattern
from salesbook.commands.result import Command, CommandResult, lookup, numbered
from salesbook.errors import CommandError, InvalidFormat, ValidationError
from salesbook.model.records import Sale
from salesbook.model.store import SALE_SORT_KEYS
from salesbook.model.values import DateTime, Index, Message, Price, Quantity, format_currency

GROUP = "sale"

_CONTACT, _ITEM, _DATE, _PRICE, _QUANTITY, _TAG = "i/", "m/", "d/", "p/", "q/", "t/"
_PATTERN = PrefixPattern(_CONTACT, _ITEM, _DATE, _PRICE, _QUANTITY, _TAG)

_VALUE_FIELDS = [
    (_ITEM, "item", Message),
    (_DATE, "date", DateTime),
    (_PRICE, "unit_price", Price),
    (_QUANTITY, "quantity", Quantity),
]


@dataclass
class AddCommand(Command):
    GROUP = GROUP
    COMMAND_WORD = "add"
    MESSAGE_USAGE = (
        "sale add: Records a sale.\n"
        "Parameters: m/ITEM d/DATE p/UNIT_PRICE q/QUANTITY [i/CONTACT_INDEX] [t/TAG]...\n"
        "Example: sale add m/Printer d/2023-08-01 p/199.99 q/2 i/1 t/hardware")

    sale: Sale

    def execute(self, store):
        store.add(self.sale)
        return CommandResult(f"New sale added: {self.sale}")


@dataclass
class EditCommand(Command):
    GROUP = GROUP
    COMMAND_WORD = "edit"
    MESSAGE_USAGE = (
        "sale edit: Edits the sale at INDEX in the sale list. "
        "t/ with no value clears the tags.\n"
        "Parameters: INDEX [m/ITEM] [d/DATE] [p/UNIT_PRICE] [q/QUANTITY] "
        "[i/CONTACT_INDEX] [t/TAG]...\n"
        "Example: sale edit 1 q/3")

    index: Index
    item: Optional[Message] = None
    date: Optional[DateTime] = None
    unit_price: Optional[Price] = None
    quantity: Optional[Quantity] = None
    contact: Optional[Index] = None
    tags: Optional[FrozenSet] = None

    def execute(self, store):
        target = lookup(store.sales, self.index, "sale")
        names = ("item", "date", "unit_price", "quantity", "contact", "tags")
        changes = {f: getattr(self, f) for f in names if getattr(self, f) is not None}
        try:
            edited = replace(target, **changes)
        except ValidationError as e:
            raise CommandError(str(e)) from None
        store.replace(target, edited)
        return CommandResult(f"Edited sale: {edited}")


@dataclass
class DeleteCommand(Command):
    GROUP = GROUP
    COMMAND_WORD = "delete"
    MESSAGE_USAGE = (
        "sale delete: Deletes the sale at INDEX in the sale list.\n"
        "Example: sale delete 1")

    index: Index

    def execute(self, store):
        target = lookup(store.sales, self.index, "sale")
        store.remove(target)
        return CommandResult(f"Deleted sale: {target}")


def _revenue(sales):
    return format_currency(sum((s.total_price.amount for s in sales), Decimal("0")))


@dataclass
class ListCommand(Command):
    GROUP = GROUP
    COMMAND_WORD = "list"
    MESSAGE_USAGE = "sale list: Lists all sales, with total revenue."
    mutates = False

    def execute(self, store):
        store.update_filter(Sale, None)
        n = len(store.sales)
        if n == 0:
            return CommandResult("No sales recorded.")
        return CommandResult(f"Listed {n} sale{'s' if n != 1 else ''} "
                             f"(total {_revenue(store.sales)}):\n{numbered(store.sales)}")


@dataclass
class FindCommand(Command):
    GROUP = GROUP
    COMMAND_WORD = "find"
    MESSAGE_USAGE = (
        "sale find: Lists sales whose item contains any of the keywords.\n"
        "Example: sale find printer")
    mutates = False

    keywords: Tuple[str, ...]

    def execute(self, store):
        keywords = self.keywords
        store.update_filter(Sale, lambda s: contains_word(s.item.value, keywords))
        n = len(store.sales)
        return CommandResult(f"{n} sale{'s' if n != 1 else ''} listed "
                             f"(total {_revenue(store.sales)}).")


@dataclass
class SortCommand(Command):
    GROUP = GROUP
    COMMAND_WORD = "sort"
    MESSAGE_USAGE = (
        "sale sort: Sorts the sale list by an attribute.\n"
        "Parameters: date|price|quantity|item [desc]\n"
        "Example: sale sort price desc")
    mutates = False

    attribute: str
    reverse: bool = False

    def execute(self, store):
        store.sort_sales(self.attribute, self.reverse)
        order = "descending" if self.reverse else "ascending"
        return CommandResult(f"Sorted sales by {self.attribute} ({order}).")


# --- Parsing ---

def _sale_fields(args, usage):
    values = {}
    for prefix, field, cls in _VALUE_FIELDS:
        if args.has(prefix):
            values[field] = parse_value(field, cls, single(args, prefix, field, usage), usage)
    if args.has(_CONTACT):
        values["contact"] = parse_index(
            single(args, _CONTACT, "contact index", usage), usage, "contact index")
    return values


def parse_add(arguments):
    usage = AddCommand.MESSAGE_USAGE
    args = _PATTERN.tokenize(arguments)
    require_empty_preamble(args, usage)
    require_prefixes(args, {prefix: field for prefix, field, _ in _VALUE_FIELDS}, usage)
    values = _sale_fields(args, usage)
    tags = parse_tags(args.get_all(_TAG), usage)
    try:
        sale = Sale(tags=tags, **values)
    except ValidationError as e:
        raise InvalidFormat("quantity", f"Invalid quantity: {e}", usage) from None
    return AddCommand(sale)


def parse_edit(arguments):
    usage = EditCommand.MESSAGE_USAGE
    args = _PATTERN.tokenize(arguments)
    index = parse_index(args.preamble, usage)
    if not args.present():
        raise InvalidFormat("fields", "At least one field to edit must be provided", usage)

    values = _sale_fields(args, usage)
    if args.has(_TAG):
        tag_values = args.get_all(_TAG)
        values["tags"] = frozenset() if tag_values == [""] else parse_tags(tag_values, usage)
    return EditCommand(index, **values)


def parse_delete(arguments):
    return DeleteCommand(parse_index(arguments, DeleteCommand.MESSAGE_USAGE))


def parse_list(arguments):
    require_no_args(arguments, "sale list", ListCommand.MESSAGE_USAGE)
    return ListCommand()


def parse_find(arguments):
    return FindCommand(parse_keywords(arguments, FindCommand.MESSAGE_USAGE))


def parse_sort(arguments):
    usage = SortCommand.MESSAGE_USAGE
    return SortCommand(*parse_sort_order(arguments, SALE_SORT_KEYS, usage))


PARSERS = [
    ("add", parse_add),
    ("edit", parse_edit),
    ("delete", parse_delete),
    ("list", parse_list),
    ("find", parse_find),
    ("sort", parse_sort),
]
