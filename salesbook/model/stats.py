"""Monthly sale counts, attached to a CommandResult as report data."""

import calendar
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, order=True)
class MonthAndYear:
    year: int
    month: int  # 1-12

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month out of range: {self.month}")

    @classmethod
    def of(cls, dt):
        return cls(dt.year, dt.month)

    def next(self):
        if self.month == 12:
            return MonthAndYear(self.year + 1, 1)
        return MonthAndYear(self.year, self.month + 1)

    def __str__(self):
        return f"{calendar.month_abbr[self.month]} {self.year}"


@dataclass(frozen=True)
class MonthlyCountData:
    month_and_year: MonthAndYear
    count: int

    def __post_init__(self):
        if self.month_and_year is None:
            raise TypeError("month_and_year is required")


@dataclass(frozen=True)
class MonthlyCountDataSet:
    """Chronological monthly counts, with empty months filled in as zero."""
    entries: Tuple[MonthlyCountData, ...] = ()

    def __iter__(self):
        return iter(self.entries)

    def __len__(self):
        return len(self.entries)

    @property
    def total(self):
        return sum(e.count for e in self.entries)

    def format(self):
        if not self.entries:
            return "No sales recorded."
        return "\n".join(f"{e.month_and_year}: {e.count}" for e in self.entries)


def monthly_sale_counts(sales):
    """Count sales per calendar month, from the earliest to the latest sale."""
    counts = {}
    for sale in sales:
        key = MonthAndYear.of(sale.date.value)
        counts[key] = counts.get(key, 0) + 1
    if not counts:
        return MonthlyCountDataSet()

    entries = []
    month, last = min(counts), max(counts)
    while month <= last:
        entries.append(MonthlyCountData(month, counts.get(month, 0)))
        month = month.next()
    return MonthlyCountDataSet(tuple(entries))
