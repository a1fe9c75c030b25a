"""JSON persistence: one file per data group plus a preferences file.

    data/persons.json     [{"name": ..., "phone": ..., "tags": [...]}, ...]
    data/meetings.json
    data/reminders.json
    data/sales.json
    data/tags.json        {"contact": [...], "sale": [...]}
    data/prefs.json       {"person_sort": "name", "person_sort_reverse": false,
                           "sale_sort": "date", "sale_sort_reverse": false}

Files are written to a .tmp sibling and renamed into place. A missing or
unreadable file loads as empty; a single bad entry is skipped rather than
discarding the whole group.
"""

import json
from dataclasses import asdict, dataclass
from pathlib import Path

from salesbook.errors import ValidationError
from salesbook.model.records import Meeting, Person, Reminder, Sale
from salesbook.model.store import (
    DEFAULT_PERSON_SORT, DEFAULT_SALE_SORT, PERSON_SORT_KEYS, SALE_SORT_KEYS, Snapshot,
)
from salesbook.model.values import (
    Address, DateTime, Email, Index, Message, Name, Phone, Price, Quantity, Tag,
)


@dataclass
class Preferences:
    person_sort: str = DEFAULT_PERSON_SORT
    person_sort_reverse: bool = False
    sale_sort: str = DEFAULT_SALE_SORT
    sale_sort_reverse: bool = False


# --- Record <-> JSON ---

def _person_to_json(p):
    return {
        "name": p.name.value,
        "phone": p.phone.value,
        "email": p.email.value,
        "address": p.address.value,
        "tags": sorted(t.name for t in p.tags),
    }


def _person_from_json(d):
    return Person(Name(d["name"]), Phone(d["phone"]), Email(d["email"]),
                  Address(d["address"]), frozenset(Tag(t) for t in d.get("tags", [])))


def _meeting_to_json(m):
    return {"contact": m.contact.one_based, "description": m.description.value,
            "start": m.start.plain}


def _meeting_from_json(d):
    return Meeting(Index(d["contact"]), Message(d["description"]), DateTime(d["start"]))


def _reminder_to_json(r):
    return {"contact": r.contact.one_based, "message": r.message.value, "date": r.date.plain}


def _reminder_from_json(d):
    return Reminder(Index(d["contact"]), Message(d["message"]), DateTime(d["date"]))


def _sale_to_json(s):
    return {
        "item": s.item.value,
        "date": s.date.plain,
        "unit_price": s.unit_price.plain,
        "quantity": s.quantity.value,
        "contact": s.contact.one_based if s.contact is not None else None,
        "tags": sorted(t.name for t in s.tags),
    }


def _sale_from_json(d):
    contact = d.get("contact")
    return Sale(Message(d["item"]), DateTime(d["date"]), Price(d["unit_price"]),
                Quantity(d["quantity"]), Index(contact) if contact is not None else None,
                frozenset(Tag(t) for t in d.get("tags", [])))


_GROUPS = [
    # (file name, Snapshot field, to_json, from_json)
    ("persons.json", "persons", _person_to_json, _person_from_json),
    ("meetings.json", "meetings", _meeting_to_json, _meeting_from_json),
    ("reminders.json", "reminders", _reminder_to_json, _reminder_from_json),
    ("sales.json", "sales", _sale_to_json, _sale_from_json),
]


class JsonStorage:

    def __init__(self, data_dir):
        self.data_dir = Path(data_dir)

    def _read(self, name):
        path = self.data_dir / name
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text())
        except (json.JSONDecodeError, OSError):
            return None

    def _write(self, name, data):
        self.data_dir.mkdir(parents=True, exist_ok=True)
        path = self.data_dir / name
        tmp = path.with_suffix(".tmp")
        tmp.write_text(json.dumps(data, indent=2) + "\n")
        tmp.replace(path)

    def load(self):
        """Read every group file into a Snapshot."""
        groups = {}
        for name, field, _, from_json in _GROUPS:
            data = self._read(name)
            if not isinstance(data, list):
                data = []
            records = []
            for entry in data:
                try:
                    records.append(from_json(entry))
                except (AttributeError, KeyError, TypeError, ValidationError):
                    continue
            groups[field] = tuple(records)

        tags = self._read("tags.json")
        if not isinstance(tags, dict):
            tags = {}
        for kind in ("contact", "sale"):
            names = tags.get(kind)
            if not isinstance(names, list):
                names = []
            parsed = []
            for name in names:
                try:
                    parsed.append(Tag(name))
                except ValidationError:
                    continue
            groups[f"{kind}_tags"] = tuple(parsed)
        return Snapshot(**groups)

    def save(self, snapshot):
        for name, field, to_json, _ in _GROUPS:
            self._write(name, [to_json(r) for r in getattr(snapshot, field)])
        self._write("tags.json", {
            "contact": [t.name for t in snapshot.contact_tags],
            "sale": [t.name for t in snapshot.sale_tags],
        })

    def load_prefs(self):
        data = self._read("prefs.json")
        if not isinstance(data, dict):
            return Preferences()
        prefs = Preferences()
        if data.get("person_sort") in PERSON_SORT_KEYS:
            prefs.person_sort = data["person_sort"]
        prefs.person_sort_reverse = bool(data.get("person_sort_reverse", False))
        if data.get("sale_sort") in SALE_SORT_KEYS:
            prefs.sale_sort = data["sale_sort"]
        prefs.sale_sort_reverse = bool(data.get("sale_sort_reverse", False))
        return prefs

    def save_prefs(self, prefs):
        self._write("prefs.json", asdict(prefs))
