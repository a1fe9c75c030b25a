from salesbook.model.records import Meeting, Person, Reminder, Sale
from salesbook.model.store import CONTACT, SALE, RecordStore, Snapshot
from salesbook.model.values import (
    Address, DateTime, Email, Index, Message, Name, Phone, Price, Quantity, Tag,
)

__all__ = [
    "Meeting", "Person", "Reminder", "Sale",
    "CONTACT", "SALE", "RecordStore", "Snapshot",
    "Address", "DateTime", "Email", "Index", "Message", "Name", "Phone",
    "Price", "Quantity", "Tag",
]
