"""Canonical record lists and the live views layered over them.

A RecordList owns its records and bumps `version` on every mutation. Views
never copy records on their own: they hold a reference to their source and
recompute lazily on the next read whenever the source's version or their own
predicate/comparator has changed. Views compose, so a SortedView can sit on
top of a FilteredView and both stay consistent with the canonical list.
"""

from collections.abc import Sequence


def show_all(record):
    return True


class RecordList(Sequence):
    """Ordered, owning collection of records. Read-only from the outside."""

    def __init__(self, records=()):
        self._records = list(records)
        self.version = 0

    def __getitem__(self, i):
        return self._records[i]

    def __len__(self):
        return len(self._records)

    def __contains__(self, record):
        return record in self._records

    def __repr__(self):
        return f"RecordList({self._records!r})"

    # --- Mutation (store only) ---

    def _touch(self):
        self.version += 1

    def append(self, record):
        self._records.append(record)
        self._touch()

    def remove(self, record):
        self._records.remove(record)
        self._touch()

    def replace(self, old, new):
        """Swap `old` for `new` in place, keeping its position."""
        i = self._records.index(old)
        self._records[i] = new
        self._touch()

    def reset(self, records):
        self._records = list(records)
        self._touch()


class _View(Sequence):
    """Shared caching for views: recompute when version() changes."""

    def __init__(self, source):
        self._source = source
        self._own_version = 0
        self._cache = []
        self._cache_key = None

    @property
    def version(self):
        return (self._source.version, self._own_version)

    def _compute(self):
        raise NotImplementedError

    def _items(self):
        key = self.version
        if key != self._cache_key:
            self._cache = self._compute()
            self._cache_key = key
        return self._cache

    def __getitem__(self, i):
        return self._items()[i]

    def __len__(self):
        return len(self._items())

    def __iter__(self):
        return iter(list(self._items()))

    def __repr__(self):
        return f"{type(self).__name__}({list(self._items())!r})"


class FilteredView(_View):
    """Records from `source` that satisfy a predicate."""

    def __init__(self, source, predicate=None):
        super().__init__(source)
        self._predicate = predicate or show_all

    @property
    def predicate(self):
        return self._predicate

    def set_predicate(self, predicate):
        self._predicate = predicate or show_all
        self._own_version += 1

    def _compute(self):
        return [r for r in self._source if self._predicate(r)]


class SortedView(_View):
    """Records from `source` ordered by a key function.

    The sort is stable, so records with equal keys keep the source order.
    """

    def __init__(self, source, key=None, reverse=False):
        super().__init__(source)
        self._key = key
        self._reverse = reverse

    @property
    def key(self):
        return self._key

    @property
    def reverse(self):
        return self._reverse

    def set_comparator(self, key, reverse=False):
        self._key = key
        self._reverse = reverse
        self._own_version += 1

    def _compute(self):
        return sorted(self._source, key=self._key, reverse=self._reverse)
