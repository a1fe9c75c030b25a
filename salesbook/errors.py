"""Exceptions raised by the parse/execute pipeline.

Every error is recoverable: front-ends catch SalesbookError and show its
message to the user.
"""


class SalesbookError(Exception):
    """Base class for all user-facing errors."""


class ValidationError(SalesbookError, ValueError):
    """A value object was constructed from input that breaks its constraint."""


class ParseError(SalesbookError):
    """The command text could not be turned into a command."""


class UnknownCommand(ParseError):
    def __init__(self, word, group=None):
        self.word = word
        self.group = group
        if group:
            msg = f"Unknown {group} command: {word!r}"
        else:
            msg = f"Unknown command: {word!r}"
        super().__init__(msg)


class InvalidFormat(ParseError):
    """A field is missing, misplaced or malformed.

    `field` names the offending field (e.g. "date" or "preamble") so the
    feedback can point at it.
    """

    def __init__(self, field, message, usage=None):
        self.field = field
        self.usage = usage
        self.message = message
        text = message if usage is None else f"{message}\n{usage}"
        super().__init__(text)


class CommandError(SalesbookError):
    """The command was well formed but cannot run against the current data."""


class NotFound(CommandError):
    pass


class DuplicateRecord(CommandError):
    pass
