"""In-memory record store: canonical collections plus their live views.

The store is the only owner of records. Every mutating method validates
first and mutates last, so a raised NotFound/DuplicateRecord leaves the
store untouched.

Tags live in two independent namespaces: "contact" tags (attached to
persons) and "sale" tags (attached to sales). Renaming or removing a tag
cascades only within its own namespace.
"""

from dataclasses import dataclass, replace
from typing import Tuple

from salesbook.errors import DuplicateRecord, NotFound
from salesbook.model.records import Meeting, Person, Reminder, Sale
from salesbook.model.values import Tag
from salesbook.model.views import FilteredView, RecordList, SortedView

CONTACT = "contact"
SALE = "sale"
TAG_KINDS = (CONTACT, SALE)

_KIND_NAMES = {
    Person: "person",
    Meeting: "meeting",
    Reminder: "reminder",
    Sale: "sale",
}

# Tag namespace that each taggable record type draws from
_TAGGED = {
    Person: CONTACT,
    Sale: SALE,
}

PERSON_SORT_KEYS = {
    "name": lambda p: p.name.value.lower(),
    "phone": lambda p: p.phone.value,
    "email": lambda p: p.email.value.lower(),
    "address": lambda p: p.address.value.lower(),
}
DEFAULT_PERSON_SORT = "name"

SALE_SORT_KEYS = {
    "date": lambda s: s.date,
    "price": lambda s: s.unit_price.amount,
    "quantity": lambda s: s.quantity.value,
    "item": lambda s: s.item.value.lower(),
}
DEFAULT_SALE_SORT = "date"


def _tag_key(tag):
    return tag.name.lower()


@dataclass(frozen=True)
class Snapshot:
    """Plain copy of every canonical collection, for storage and reset."""
    persons: Tuple[Person, ...] = ()
    meetings: Tuple[Meeting, ...] = ()
    reminders: Tuple[Reminder, ...] = ()
    sales: Tuple[Sale, ...] = ()
    contact_tags: Tuple[Tag, ...] = ()
    sale_tags: Tuple[Tag, ...] = ()


class RecordStore:

    def __init__(self, snapshot=None):
        self._lists = {
            Person: RecordList(),
            Meeting: RecordList(),
            Reminder: RecordList(),
            Sale: RecordList(),
        }
        self._tags = {kind: RecordList() for kind in TAG_KINDS}

        # Live views read by the front-end after every command. Each group has a
        # filter (set by find/list) with a sorted view on top; indexes typed by
        # the user always refer to the sorted view.
        self._filters = {t: FilteredView(lst) for t, lst in self._lists.items()}
        self.person_sort = (DEFAULT_PERSON_SORT, False)
        self.persons = SortedView(self._filters[Person], PERSON_SORT_KEYS[DEFAULT_PERSON_SORT])
        self.meetings = SortedView(self._filters[Meeting], lambda m: m.start)
        self.reminders = SortedView(self._filters[Reminder], lambda r: r.date)
        self.sale_sort = (DEFAULT_SALE_SORT, False)
        self.sales = SortedView(self._filters[Sale], SALE_SORT_KEYS[DEFAULT_SALE_SORT])
        self.contact_tags = SortedView(self._tags[CONTACT], _tag_key)
        self.sale_tags = SortedView(self._tags[SALE], _tag_key)
        self._displayed = {
            Person: self.persons,
            Meeting: self.meetings,
            Reminder: self.reminders,
            Sale: self.sales,
        }

        if snapshot is not None:
            self.reset(snapshot)

    def __len__(self):
        """Total number of records across all groups (tags excluded)."""
        return sum(len(lst) for lst in self._lists.values())

    def __repr__(self):
        sizes = ", ".join(f"{_KIND_NAMES[t]}s={len(lst)}" for t, lst in self._lists.items())
        return f"RecordStore({sizes})"

    def _list_for(self, record_type):
        try:
            return self._lists[record_type]
        except KeyError:
            raise TypeError(f"Not a record type: {record_type.__name__}") from None

    def records(self, record_type):
        """The canonical (unfiltered, unsorted) collection for a record type."""
        return self._list_for(record_type)

    # --- Records ---

    def has(self, record):
        return record in self._list_for(type(record))

    def add(self, record):
        lst = self._list_for(type(record))
        if record in lst:
            raise DuplicateRecord(f"This {_KIND_NAMES[type(record)]} already exists")
        self._register_tags(record)
        lst.append(record)

    def remove(self, record):
        lst = self._list_for(type(record))
        if record not in lst:
            raise NotFound(f"No such {_KIND_NAMES[type(record)]}: {record}")
        lst.remove(record)

    def replace(self, old, new):
        if type(old) is not type(new):
            raise TypeError("Cannot replace a record with one of another type")
        lst = self._list_for(type(old))
        if old not in lst:
            raise NotFound(f"No such {_KIND_NAMES[type(old)]}: {old}")
        if new != old and new in lst:
            raise DuplicateRecord(f"This {_KIND_NAMES[type(new)]} already exists")
        self._register_tags(new)
        lst.replace(old, new)

    def _register_tags(self, record):
        kind = _TAGGED.get(type(record))
        if kind is None:
            return
        tags = self._tags[kind]
        for tag in sorted(record.tags, key=_tag_key):
            if tag not in tags:
                tags.append(tag)

    # --- Tags ---

    def _tag_list(self, kind):
        try:
            return self._tags[kind]
        except KeyError:
            raise ValueError(f"Unknown tag kind: {kind!r}") from None

    def tag_view(self, kind):
        self._tag_list(kind)
        return self.contact_tags if kind == CONTACT else self.sale_tags

    def has_tag(self, kind, tag):
        return tag in self._tag_list(kind)

    def add_tag(self, kind, tag):
        tags = self._tag_list(kind)
        if tag in tags:
            raise DuplicateRecord(f"The {kind} tag '{tag}' already exists")
        tags.append(tag)

    def remove_tag(self, kind, tag):
        """Delete a tag and strip it from every record in its namespace."""
        tags = self._tag_list(kind)
        if tag not in tags:
            raise NotFound(f"No such {kind} tag: '{tag}'")
        self._retag(kind, lambda ts: ts - {tag})
        tags.remove(tag)

    def rename_tag(self, kind, old, new):
        """Rename a tag and update every record that referenced the old name."""
        tags = self._tag_list(kind)
        if old not in tags:
            raise NotFound(f"No such {kind} tag: '{old}'")
        if new in tags:
            raise DuplicateRecord(f"The {kind} tag '{new}' already exists")
        self._retag(kind, lambda ts: (ts - {old}) | {new} if old in ts else ts)
        tags.replace(old, new)

    def records_with_tag(self, kind, tag):
        record_type = Person if kind == CONTACT else Sale
        self._tag_list(kind)
        return [r for r in self._lists[record_type] if tag in r.tags]

    def _retag(self, kind, fn):
        """Rewrite the tag set of every record in a namespace.

        Records that become identical after the rewrite are merged, keeping the
        first occurrence's position.
        """
        record_type = Person if kind == CONTACT else Sale
        lst = self._lists[record_type]
        if not any(fn(r.tags) != r.tags for r in lst):
            return
        seen = set()
        updated = []
        for record in lst:
            new_tags = fn(record.tags)
            new_record = record if new_tags == record.tags else replace(record, tags=new_tags)
            if new_record in seen:
                continue
            seen.add(new_record)
            updated.append(new_record)
        lst.reset(updated)

    # --- Views ---

    def filtered_view(self, record_type, predicate):
        """A new live view of one group's canonical collection."""
        return FilteredView(self._list_for(record_type), predicate)

    def sorted_view(self, source, key, reverse=False):
        """A new live sorted view over a record type or over another view."""
        if isinstance(source, type):
            source = self._list_for(source)
        return SortedView(source, key, reverse)

    def displayed(self, record_type):
        """The filtered, sorted view of a group that the user sees and indexes."""
        self._list_for(record_type)
        return self._displayed[record_type]

    def update_filter(self, record_type, predicate=None):
        """Set the predicate for a group's displayed view (None shows all)."""
        self._list_for(record_type)
        self._filters[record_type].set_predicate(predicate)

    def sort_persons(self, attribute, reverse=False):
        try:
            key = PERSON_SORT_KEYS[attribute]
        except KeyError:
            raise ValueError(f"Unknown person sort attribute: {attribute!r}") from None
        self.persons.set_comparator(key, reverse)
        self.person_sort = (attribute, reverse)

    def sort_sales(self, attribute, reverse=False):
        try:
            key = SALE_SORT_KEYS[attribute]
        except KeyError:
            raise ValueError(f"Unknown sale sort attribute: {attribute!r}") from None
        self.sales.set_comparator(key, reverse)
        self.sale_sort = (attribute, reverse)

    # --- Snapshots ---

    def snapshot(self):
        return Snapshot(
            persons=tuple(self._lists[Person]),
            meetings=tuple(self._lists[Meeting]),
            reminders=tuple(self._lists[Reminder]),
            sales=tuple(self._lists[Sale]),
            contact_tags=tuple(self._tags[CONTACT]),
            sale_tags=tuple(self._tags[SALE]),
        )

    def reset(self, snapshot):
        """Replace all data with the contents of a snapshot.

        Tags referenced by records but missing from the snapshot's tag lists are
        registered, so the namespaces always cover every tag in use. Filters are
        cleared; the sort orders are kept.
        """
        groups = [
            (Person, snapshot.persons),
            (Meeting, snapshot.meetings),
            (Reminder, snapshot.reminders),
            (Sale, snapshot.sales),
        ]
        for record_type, records in groups:
            self._lists[record_type].reset(dict.fromkeys(records))
        self._tags[CONTACT].reset(dict.fromkeys(snapshot.contact_tags))
        self._tags[SALE].reset(dict.fromkeys(snapshot.sale_tags))
        for record in self._lists[Person]:
            self._register_tags(record)
        for record in self._lists[Sale]:
            self._register_tags(record)
        for view in self._filters.values():
            view.set_predicate(None)
