"""Value objects: immutable, self-validating wrappers for domain primitives.

Each class validates in __post_init__ and raises ValidationError (with the
class's MESSAGE_CONSTRAINTS text) instead of producing a half-valid object.
Strings are accepted wherever a user could type the value, so parsers can
pass raw field text straight in.
"""

import locale
import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from salesbook.errors import ValidationError

_CENTS = Decimal("0.01")


def format_currency(amount):
    """Format a Decimal amount using the active monetary locale.

    Falls back to "$" and "," grouping when the C locale is in effect
    (which reports an empty currency symbol).
    """
    conv = locale.localeconv()
    symbol = conv.get("currency_symbol") or "$"
    sep = conv.get("mon_thousands_sep") or ","
    point = conv.get("mon_decimal_point") or "."
    whole, _, cents = f"{amount:,.2f}".partition(".")
    return f"{symbol}{whole.replace(',', sep)}{point}{cents}"


# --- Sale values ---

@dataclass(frozen=True)
class Price:
    MESSAGE_CONSTRAINTS = (
        "Price should be in the form \"DOLLARS.CENTS\", where DOLLARS is a "
        "non-negative integer and CENTS is exactly 2 digits. It should not be "
        "blank, and the price should be greater than zero")

    # DOLLARS may be empty (".50"), CENTS is always two digits
    _GRAMMAR = re.compile(r"^(\d*)\.(\d{2})$")

    amount: Decimal

    def __post_init__(self):
        value = self.amount
        if isinstance(value, str):
            value = value.strip()
            if not self._GRAMMAR.match(value):
                raise ValidationError(self.MESSAGE_CONSTRAINTS)
            value = Decimal(value)
        elif isinstance(value, bool) or not isinstance(value, (int, Decimal)):
            raise ValidationError(self.MESSAGE_CONSTRAINTS)
        else:
            value = Decimal(value)
        if not value.is_finite() or value <= 0:
            raise ValidationError(self.MESSAGE_CONSTRAINTS)
        try:
            normalized = value.quantize(_CENTS)
        except InvalidOperation:
            raise ValidationError(self.MESSAGE_CONSTRAINTS) from None
        if normalized != value:
            # more than two decimal places would lose cents silently
            raise ValidationError(self.MESSAGE_CONSTRAINTS)
        object.__setattr__(self, "amount", normalized)

    @property
    def plain(self):
        """The price in its input grammar, e.g. "1234.50"."""
        return f"{self.amount:.2f}"

    def __str__(self):
        return format_currency(self.amount)


@dataclass(frozen=True)
class Quantity:
    MESSAGE_CONSTRAINTS = (
        "Quantity should be a whole number from 1 to 9999999")

    MIN = 1
    MAX = 9_999_999

    value: int

    def __post_init__(self):
        value = self.value
        if isinstance(value, str):
            value = value.strip()
            if not value.isdigit():
                raise ValidationError(self.MESSAGE_CONSTRAINTS)
            value = int(value)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(self.MESSAGE_CONSTRAINTS)
        if not self.is_valid(value):
            raise ValidationError(self.MESSAGE_CONSTRAINTS)
        object.__setattr__(self, "value", value)

    @classmethod
    def is_valid(cls, value):
        return cls.MIN <= value <= cls.MAX

    def __str__(self):
        return str(self.value)


# --- Tags ---

@dataclass(frozen=True, order=True)
class Tag:
    MESSAGE_CONSTRAINTS = "Tag names should be alphanumeric"

    _VALID = re.compile(r"^[A-Za-z0-9]+$")

    name: str

    def __post_init__(self):
        name = self.name.strip() if isinstance(self.name, str) else None
        if not name or not self._VALID.match(name):
            raise ValidationError(self.MESSAGE_CONSTRAINTS)
        object.__setattr__(self, "name", name)

    def __str__(self):
        return self.name


# --- Dates ---

@dataclass(frozen=True, order=True)
class DateTime:
    MESSAGE_CONSTRAINTS = (
        "Dates should be in the form YYYY-MM-DD or YYYY-MM-DD HH:MM, "
        "e.g. 2023-08-01 or 2023-08-01 14:30")

    INPUT_FORMATS = ("%Y-%m-%d %H:%M", "%Y-%m-%d")
    STORAGE_FORMAT = "%Y-%m-%d %H:%M"
    DISPLAY_FORMAT = "%d %b %Y, %H:%M"

    value: datetime

    def __post_init__(self):
        value = self.value
        if isinstance(value, str):
            value = self._parse(value.strip())
        elif isinstance(value, date) and not isinstance(value, datetime):
            value = datetime(value.year, value.month, value.day)
        if not isinstance(value, datetime):
            raise ValidationError(self.MESSAGE_CONSTRAINTS)
        object.__setattr__(self, "value", value.replace(second=0, microsecond=0))

    @classmethod
    def _parse(cls, text):
        for fmt in cls.INPUT_FORMATS:
            try:
                return datetime.strptime(text, fmt)
            except ValueError:
                continue
        raise ValidationError(cls.MESSAGE_CONSTRAINTS)

    @property
    def plain(self):
        return self.value.strftime(self.STORAGE_FORMAT)

    def __str__(self):
        return self.value.strftime(self.DISPLAY_FORMAT)


# --- Person fields ---

@dataclass(frozen=True)
class Name:
    MESSAGE_CONSTRAINTS = (
        "Names should only contain alphanumeric characters and spaces, "
        "and it should not be blank")

    _VALID = re.compile(r"^[A-Za-z0-9][A-Za-z0-9 ]*$")

    value: str

    def __post_init__(self):
        value = " ".join(self.value.split()) if isinstance(self.value, str) else ""
        if not self._VALID.match(value):
            raise ValidationError(self.MESSAGE_CONSTRAINTS)
        object.__setattr__(self, "value", value)

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Phone:
    MESSAGE_CONSTRAINTS = (
        "Phone numbers should only contain numbers, and it should be at "
        "least 3 digits long")

    _VALID = re.compile(r"^\d{3,}$")

    value: str

    def __post_init__(self):
        value = self.value.strip() if isinstance(self.value, str) else ""
        if not self._VALID.match(value):
            raise ValidationError(self.MESSAGE_CONSTRAINTS)
        object.__setattr__(self, "value", value)

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Email:
    MESSAGE_CONSTRAINTS = (
        "Emails should be of the format local-part@domain, where the local "
        "part is alphanumeric with single + _ . - separators, and the domain "
        "ends with a label at least 2 characters long")

    _VALID = re.compile(
        r"^[A-Za-z0-9]+(?:[+_.-][A-Za-z0-9]+)*"
        r"@(?:[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?\.)*[A-Za-z0-9]{2,}$")

    value: str

    def __post_init__(self):
        value = self.value.strip() if isinstance(self.value, str) else ""
        if not self._VALID.match(value):
            raise ValidationError(self.MESSAGE_CONSTRAINTS)
        object.__setattr__(self, "value", value)

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Address:
    MESSAGE_CONSTRAINTS = "Addresses can take any values, and it should not be blank"

    value: str

    def __post_init__(self):
        value = self.value.strip() if isinstance(self.value, str) else ""
        if not value:
            raise ValidationError(self.MESSAGE_CONSTRAINTS)
        object.__setattr__(self, "value", value)

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Message:
    """Free text: meeting descriptions, reminder messages, sale item names."""

    MESSAGE_CONSTRAINTS = "Messages can take any values, and it should not be blank"

    value: str

    def __post_init__(self):
        value = " ".join(self.value.split()) if isinstance(self.value, str) else ""
        if not value:
            raise ValidationError(self.MESSAGE_CONSTRAINTS)
        object.__setattr__(self, "value", value)

    def __str__(self):
        return self.value


# --- Indexes ---

@dataclass(frozen=True)
class Index:
    """A one-based position in a displayed list."""

    MESSAGE_CONSTRAINTS = "Index should be a positive whole number"

    one_based: int

    def __post_init__(self):
        value = self.one_based
        if isinstance(value, str):
            value = value.strip()
            if not value.isdigit():
                raise ValidationError(self.MESSAGE_CONSTRAINTS)
            value = int(value)
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ValidationError(self.MESSAGE_CONSTRAINTS)
        object.__setattr__(self, "one_based", value)

    @classmethod
    def from_zero_based(cls, value):
        return cls(value + 1)

    @property
    def zero_based(self):
        return self.one_based - 1

    def __str__(self):
        return str(self.one_based)
