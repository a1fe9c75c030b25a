"""Prefix tokenizer for command arguments.

Splits an argument string like "i/2 m/Call Amy d/2023-08-01" into a
preamble and the values that follow each recognized prefix.

Syntax:
    preamble     text before the first recognized prefix (often empty,
                 sometimes an index such as "1")
    p/value      a prefix counts only at the start of the string or after
                 whitespace; its value runs until the next recognized prefix
    p/           a prefix with an empty value acts as a flag (e.g. "c/")

A prefix may appear more than once ("t/friends t/vip"); all values are kept
in order.

Examples:
    >>> p = PrefixPattern("i/", "m/", "d/")
    >>> args = p.tokenize("i/2 m/Call Amy d/2023-08-01")
    >>> args.preamble, args.get("m/")
    ('', 'Call Amy')
    >>> args = tokenize("1 c/ t/minions", "c/", "s/", "t/")
    >>> args.preamble, args.has("c/"), args.get("t/")
    ('1', True, 'minions')
"""

import re


class ArgumentMultimap:
    """Result of tokenizing: the preamble plus every value seen per prefix."""

    def __init__(self, preamble, values):
        self.preamble = preamble
        self._values = values  # prefix -> [value, ...]

    def get(self, prefix):
        """The last value given for prefix, or None if it never appeared."""
        values = self._values.get(prefix)
        return values[-1] if values else None

    def get_all(self, prefix):
        return list(self._values.get(prefix, []))

    def has(self, prefix):
        return bool(self._values.get(prefix))

    def present(self):
        """Prefixes that appeared at least once, in pattern order."""
        return [p for p, v in self._values.items() if v]

    def __repr__(self):
        shown = {p: v for p, v in self._values.items() if v}
        return f"ArgumentMultimap(preamble={self.preamble!r}, values={shown!r})"


class PrefixPattern:
    """A compiled set of prefixes that can tokenize argument strings."""

    def __init__(self, *prefixes):
        if len(set(prefixes)) != len(prefixes):
            raise ValueError(f"Duplicate prefixes in {prefixes!r}")
        self.prefixes = prefixes
        self._regex = _compile(prefixes)

    def tokenize(self, text):
        """Tokenize text. Returns an ArgumentMultimap (never fails)."""
        values = {p: [] for p in self.prefixes}
        matches = list(self._regex.finditer(text))
        if not matches:
            return ArgumentMultimap(text.strip(), values)

        preamble = text[:matches[0].start()]
        ends = [m.start() for m in matches[1:]] + [len(text)]
        for m, end in zip(matches, ends):
            values[m.group(1)].append(text[m.end():end].strip())
        return ArgumentMultimap(preamble.strip(), values)

    def __repr__(self):
        return f"PrefixPattern{self.prefixes!r}"


def tokenize(text, *prefixes):
    """One-shot helper: compile the prefixes and tokenize text."""
    return PrefixPattern(*prefixes).tokenize(text)


# --- Compilation internals ---

def _compile(prefixes):
    """Build a regex matching any prefix at the start or after whitespace."""
    # Longest first, so "tag/" wins over "t/" if both are ever registered
    ordered = sorted(prefixes, key=len, reverse=True)
    alts = "|".join(re.escape(p) for p in ordered)
    return re.compile(rf"(?:^|(?<=\s))({alts})")
