"""Command router: maps the first words of the input to a command parser.

Input lines look like "GROUP WORD ARGUMENTS" ("reminder add i/2 m/...") or
"WORD ARGUMENTS" for the general words ("help", "stats", ...).

Each group module must provide:
    GROUP: str | None             # group word, None for general commands
    PARSERS: [(word, parse_fn)]   # parse_fn(arguments: str) -> Command

Command words are checked when a module is registered: a repeated word in a
group, or a general word that clashes with a group name, is rejected.
"""

from salesbook.errors import InvalidFormat, UnknownCommand


def build_table(parsers, group=None):
    """Turn a PARSERS list into a dict, rejecting duplicate command words."""
    table = {}
    for word, parse_fn in parsers:
        if word in table:
            where = f"group {group!r}" if group else "general commands"
            raise ValueError(f"Duplicate command word {word!r} in {where}")
        table[word] = parse_fn
    return table


class Router:

    def __init__(self, modules=()):
        self._groups = {}   # group word -> {command word -> parse_fn}
        self._general = {}  # general word -> parse_fn
        for module in modules:
            self.register(module)

    def register(self, module):
        """Register a group module (must have GROUP and PARSERS)."""
        group = module.GROUP
        table = build_table(module.PARSERS, group)
        if group is None:
            for word in table:
                if word in self._general or word in self._groups:
                    raise ValueError(f"Command word {word!r} is already registered")
            self._general.update(table)
            return
        if group in self._groups or group in self._general:
            raise ValueError(f"Group {group!r} is already registered")
        self._groups[group] = table

    @property
    def groups(self):
        return {g: sorted(t) for g, t in self._groups.items()}

    def parse(self, text):
        """Parse a full input line into a Command.

        Raises UnknownCommand for an unrecognised group or word, and
        InvalidFormat for an empty line or a group given without a word.
        """
        words = text.strip().split(maxsplit=1)
        if not words:
            raise InvalidFormat("command", "Please enter a command. Type 'help' for a list.")
        first = words[0].lower()
        rest = words[1] if len(words) > 1 else ""

        if first in self._general:
            return self._general[first](rest)

        table = self._groups.get(first)
        if table is None:
            raise UnknownCommand(first)

        parts = rest.split(maxsplit=1)
        if not parts:
            raise InvalidFormat(
                "command word", f"Missing {first} command. Use one of: {', '.join(table)}")
        word = parts[0].lower()
        arguments = parts[1] if len(parts) > 1 else ""
        parse_fn = table.get(word)
        if parse_fn is None:
            raise UnknownCommand(word, first)
        return parse_fn(arguments)
