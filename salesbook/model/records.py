"""Records stored in the RecordStore.

Records are frozen dataclasses: identity is the full set of field values, and
a record is "edited" by building a replacement with dataclasses.replace() and
swapping it in through RecordStore.replace().

Meetings, reminders and sales refer to a contact by its one-based Index in
the person list as it was displayed when the record was created.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from salesbook.errors import ValidationError
from salesbook.model.values import (
    Address, DateTime, Email, Index, Message, Name, Phone, Price, Quantity, Tag,
)


@dataclass(frozen=True)
class Person:
    name: Name
    phone: Phone
    email: Email
    address: Address
    tags: FrozenSet[Tag] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "tags", frozenset(self.tags))

    def __str__(self):
        text = f"{self.name}; Phone: {self.phone}; Email: {self.email}; Address: {self.address}"
        if self.tags:
            text += "; Tags: " + ", ".join(sorted(t.name for t in self.tags))
        return text


@dataclass(frozen=True)
class Meeting:
    contact: Index
    description: Message
    start: DateTime

    def __str__(self):
        return f"{self.description} with contact {self.contact} on {self.start}"


@dataclass(frozen=True)
class Reminder:
    contact: Index
    message: Message
    date: DateTime

    def __str__(self):
        return f"{self.message} (contact {self.contact}) on {self.date}"


@dataclass(frozen=True)
class Sale:
    item: Message
    date: DateTime
    unit_price: Price
    quantity: Quantity
    contact: Optional[Index] = None
    tags: FrozenSet[Tag] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "tags", frozenset(self.tags))
        try:
            Price(self.unit_price.amount * self.quantity.value)
        except ValidationError:
            raise ValidationError(
                f"Total price of {self.quantity} x {self.unit_price} is too large") from None

    @property
    def total_price(self):
        return Price(self.unit_price.amount * self.quantity.value)

    def __str__(self):
        text = (f"{self.quantity} x {self.item} @ {self.unit_price} "
                f"= {self.total_price} on {self.date}")
        if self.contact is not None:
            text += f" (contact {self.contact})"
        if self.tags:
            text += "; Tags: " + ", ".join(sorted(t.name for t in self.tags))
        return text
