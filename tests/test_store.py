"""Tests for RecordStore: uniqueness, tag namespaces, views and snapshots."""

import pytest

from salesbook.errors import DuplicateRecord, NotFound, ValidationError
from salesbook.model.records import Meeting, Person, Reminder, Sale
from salesbook.model.store import CONTACT, SALE, RecordStore, Snapshot
from salesbook.model.values import (
    Address, DateTime, Email, Index, Message, Name, Phone, Price, Quantity, Tag,
)


def person(name, tags=(), phone="91234567", email="a@example.com"):
    return Person(Name(name), Phone(phone), Email(email), Address("1 Main St"),
                  frozenset(Tag(t) for t in tags))


def sale(item, when="2023-08-01", tags=()):
    return Sale(Message(item), DateTime(when), Price("10.00"), Quantity(1),
                tags=frozenset(Tag(t) for t in tags))


def reminder(message, when="2023-08-01"):
    return Reminder(Index(1), Message(message), DateTime(when))


def tag_names(view):
    return [t.name for t in view]


# --- Records ---

def test_add_and_len():
    store = RecordStore()
    store.add(person("Amy"))
    store.add(reminder("Call Amy"))
    store.add(Meeting(Index(1), Message("Review"), DateTime("2023-09-14 15:00")))
    store.add(sale("Printer"))
    assert len(store) == 4


def test_add_duplicate_rejected():
    store = RecordStore()
    store.add(reminder("Call Amy"))
    with pytest.raises(DuplicateRecord):
        store.add(reminder("Call Amy"))
    assert len(store) == 1


def test_remove_missing():
    store = RecordStore()
    with pytest.raises(NotFound):
        store.remove(person("Amy"))


def test_replace_in_place():
    store = RecordStore()
    a, b, c = person("Amy"), person("Bob"), person("Cat")
    for p in (a, b, c):
        store.add(p)
    store.replace(b, person("Ben"))
    assert [p.name.value for p in store.records(Person)] == ["Amy", "Ben", "Cat"]


def test_replace_errors_leave_store_unchanged():
    store = RecordStore()
    a, b = person("Amy"), person("Bob")
    store.add(a)
    store.add(b)
    with pytest.raises(NotFound):
        store.replace(person("Zed"), person("Zoe"))
    with pytest.raises(DuplicateRecord):
        store.replace(a, b)
    with pytest.raises(TypeError):
        store.replace(a, reminder("x"))
    assert list(store.records(Person)) == [a, b]


def test_replace_with_itself_allowed():
    store = RecordStore()
    a = person("Amy")
    store.add(a)
    store.replace(a, a)
    assert store.has(a)


# --- Tags ---

def test_adding_records_registers_tags():
    store = RecordStore()
    store.add(person("Amy", ["friends"]))
    store.add(sale("Printer", tags=["hardware"]))
    assert store.has_tag(CONTACT, Tag("friends"))
    assert store.has_tag(SALE, Tag("hardware"))
    assert not store.has_tag(SALE, Tag("friends"))


def test_add_tag_duplicate():
    store = RecordStore()
    store.add_tag(CONTACT, Tag("friends"))
    with pytest.raises(DuplicateRecord):
        store.add_tag(CONTACT, Tag("friends"))
    store.add_tag(SALE, Tag("friends"))


def test_rename_tag_cascades():
    store = RecordStore()
    store.add(person("Amy", ["friends"]))
    store.add(person("Bob", ["friends", "vip"]))
    store.add(person("Cat"))
    store.rename_tag(CONTACT, Tag("friends"), Tag("colleagues"))

    assert store.records_with_tag(CONTACT, Tag("friends")) == []
    names = [p.name.value for p in store.records_with_tag(CONTACT, Tag("colleagues"))]
    assert names == ["Amy", "Bob"]
    assert tag_names(store.contact_tags) == ["colleagues", "vip"]


def test_rename_tag_stays_in_namespace():
    store = RecordStore()
    store.add(person("Amy", ["friends"]))
    store.add(sale("Printer", tags=["friends"]))
    store.rename_tag(CONTACT, Tag("friends"), Tag("colleagues"))
    assert store.records(Sale)[0].tags == {Tag("friends")}
    assert tag_names(store.sale_tags) == ["friends"]


def test_rename_tag_errors():
    store = RecordStore()
    store.add(person("Amy", ["friends", "vip"]))
    with pytest.raises(NotFound):
        store.rename_tag(CONTACT, Tag("family"), Tag("kin"))
    with pytest.raises(DuplicateRecord):
        store.rename_tag(CONTACT, Tag("friends"), Tag("vip"))
    assert store.records(Person)[0].tags == {Tag("friends"), Tag("vip")}


def test_remove_tag_cascades():
    store = RecordStore()
    store.add(sale("Printer", tags=["hardware", "promo"]))
    store.add(sale("Toner", tags=["promo"]))
    store.remove_tag(SALE, Tag("promo"))
    assert [s.tags for s in store.records(Sale)] == [{Tag("hardware")}, frozenset()]
    assert tag_names(store.sale_tags) == ["hardware"]
    with pytest.raises(NotFound):
        store.remove_tag(SALE, Tag("promo"))


def test_remove_tag_merges_identical_records():
    store = RecordStore()
    store.add(person("Amy", ["friends"]))
    store.add(person("Amy"))
    store.remove_tag(CONTACT, Tag("friends"))
    assert list(store.records(Person)) == [person("Amy")]


def test_unknown_tag_kind():
    store = RecordStore()
    with pytest.raises(ValueError):
        store.tag_view("bogus")


def test_tag_views_sorted_case_insensitively():
    store = RecordStore()
    for name in ("vip", "Friends", "alpha"):
        store.add_tag(CONTACT, Tag(name))
    assert tag_names(store.contact_tags) == ["alpha", "Friends", "vip"]


# --- Views ---

def test_persons_sorted_by_name_by_default():
    store = RecordStore()
    store.add(person("bob"))
    store.add(person("Amy"))
    assert [p.name.value for p in store.persons] == ["Amy", "bob"]


def test_sort_persons():
    store = RecordStore()
    store.add(person("Amy", phone="300"))
    store.add(person("Bob", phone="100"))
    store.sort_persons("phone", reverse=True)
    assert [p.phone.value for p in store.persons] == ["300", "100"]
    assert store.person_sort == ("phone", True)
    with pytest.raises(ValueError):
        store.sort_persons("age")


def test_reminders_displayed_by_date():
    store = RecordStore()
    store.add(reminder("Later", "2023-09-01"))
    store.add(reminder("Sooner", "2023-08-01"))
    assert [r.message.value for r in store.reminders] == ["Sooner", "Later"]


def test_filter_then_sort_stay_live():
    store = RecordStore()
    store.add(person("Amy", ["vip"]))
    store.update_filter(Person, lambda p: Tag("vip") in p.tags)
    store.add(person("Bob"))
    store.add(person("Abe", ["vip"]))
    assert [p.name.value for p in store.persons] == ["Abe", "Amy"]
    store.update_filter(Person)
    assert len(store.persons) == 3


def test_custom_views():
    store = RecordStore()
    store.add(sale("Printer", "2023-08-03"))
    store.add(sale("Toner", "2023-08-01"))
    printers = store.filtered_view(Sale, lambda s: s.item.value == "Printer")
    by_date = store.sorted_view(Sale, lambda s: s.date)
    assert [s.item.value for s in printers] == ["Printer"]
    assert [s.item.value for s in by_date] == ["Toner", "Printer"]
    assert store.displayed(Sale) is store.sales


# --- Snapshots ---

def test_snapshot_round_trip():
    store = RecordStore()
    store.add(person("Amy", ["friends"]))
    store.add(sale("Printer", tags=["hardware"]))
    store.add(reminder("Call Amy"))
    store.add_tag(CONTACT, Tag("unused"))

    copy = RecordStore(store.snapshot())
    assert copy.snapshot() == store.snapshot()
    assert len(copy) == 3


def test_reset_registers_missing_tags_and_clears_filters():
    store = RecordStore()
    store.update_filter(Person, lambda p: False)
    store.reset(Snapshot(persons=(person("Amy", ["friends"]),)))
    assert len(store.persons) == 1
    assert tag_names(store.contact_tags) == ["friends"]


def test_reset_empty_clears_everything():
    store = RecordStore()
    store.add(person("Amy", ["friends"]))
    store.reset(Snapshot())
    assert len(store) == 0
    assert len(store.contact_tags) == 0


def test_sort_sales():
    store = RecordStore()
    store.add(sale("Toner", "2023-08-01"))
    store.add(sale("Printer", "2023-08-03"))
    assert [s.item.value for s in store.sales] == ["Toner", "Printer"]
    store.sort_sales("item")
    assert [s.item.value for s in store.sales] == ["Printer", "Toner"]
    store.sort_sales("date", reverse=True)
    assert [s.item.value for s in store.sales] == ["Printer", "Toner"]
    assert store.sale_sort == ("date", True)
    with pytest.raises(ValueError):
        store.sort_sales("colour")


def test_sale_total_must_be_a_valid_price():
    with pytest.raises(ValidationError):
        Sale(Message("Yacht"), DateTime("2023-08-01"),
             Price("99999999999999999999999999.99"), Quantity(2))
