"""Tests for command registration and routing."""

from types import SimpleNamespace

import pytest

from salesbook.commands import ALL_GROUPS, person, reminder
from salesbook.commands.router import Router, build_table
from salesbook.errors import InvalidFormat, UnknownCommand


def _noop(arguments):
    return arguments


def test_build_table_rejects_duplicate_words():
    with pytest.raises(ValueError):
        build_table([("add", _noop), ("add", _noop)], "reminder")


def test_group_registered_twice():
    router = Router([reminder])
    with pytest.raises(ValueError):
        router.register(reminder)


def test_general_word_clashing_with_group():
    router = Router([person])
    clash = SimpleNamespace(GROUP=None, PARSERS=[("person", _noop)])
    with pytest.raises(ValueError):
        router.register(clash)


def test_groups():
    groups = Router(ALL_GROUPS).groups
    assert set(groups) == {"person", "meeting", "reminder", "sale", "tag"}
    assert groups["reminder"] == ["add", "delete", "edit", "find", "list"]
    assert "sort" in groups["person"]
    assert "sort" in groups["sale"]


def test_unknown_group():
    with pytest.raises(UnknownCommand) as excinfo:
        Router(ALL_GROUPS).parse("invoice add x")
    assert excinfo.value.word == "invoice"
    assert excinfo.value.group is None
    assert str(excinfo.value) == "Unknown command: 'invoice'"


def test_unknown_word_in_group():
    with pytest.raises(UnknownCommand) as excinfo:
        Router(ALL_GROUPS).parse("reminder snooze 1")
    assert excinfo.value.group == "reminder"
    assert str(excinfo.value) == "Unknown reminder command: 'snooze'"


@pytest.mark.parametrize("text", ["", "   "])
def test_empty_line(text):
    with pytest.raises(InvalidFormat) as excinfo:
        Router(ALL_GROUPS).parse(text)
    assert excinfo.value.field == "command"


def test_invalid_format_carries_usage():
    with pytest.raises(InvalidFormat) as excinfo:
        Router(ALL_GROUPS).parse("reminder add m/Call Amy d/2023-08-01")
    err = excinfo.value
    assert err.usage == reminder.AddCommand.MESSAGE_USAGE
    assert str(err) == f"{err.message}\n{err.usage}"
    assert err.message == "Missing compulsory field: contact index (i/)"
