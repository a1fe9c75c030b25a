"""Tests for Logic: execute, save-after-mutation and the request log."""

import pytest

from salesbook.errors import CommandError, InvalidFormat, UnknownCommand
from salesbook.logic import Logic
from salesbook.storage import JsonStorage

AMY = "person add n/Amy Tan p/91234567 e/amy@example.com a/1 Main St t/friends"


@pytest.fixture
def storage(tmp_path):
    return JsonStorage(tmp_path / "data")


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "salesbook.log"


def test_mutation_is_saved(storage, log_path):
    logic = Logic(storage=storage, log_path=log_path)
    logic.execute(AMY)
    reloaded = Logic(storage=storage)
    assert [p.name.value for p in reloaded.persons] == ["Amy Tan"]
    assert [t.name for t in reloaded.contact_tags] == ["friends"]


def test_reads_do_not_save(storage):
    logic = Logic(storage=storage)
    logic.execute("person list")
    logic.execute("help")
    assert not (storage.data_dir / "persons.json").exists()


def test_failed_command_leaves_store_unchanged(storage, log_path):
    logic = Logic(storage=storage, log_path=log_path)
    logic.execute("reminder add 1 i/2 m/Call Amy d/2023-08-01")
    with pytest.raises(CommandError):
        logic.execute("reminder delete 4")
    assert len(logic.store) == 1
    assert len(logic.reminders) == 1

    lines = log_path.read_text().splitlines()
    assert lines[1].startswith("  -> reminder.add")
    assert lines[2].endswith("[cli]  reminder delete 4")
    assert lines[3] == "  -> CommandError: The reminder index provided is invalid: 4"


def test_parse_errors_logged(log_path):
    logic = Logic(log_path=log_path)
    with pytest.raises(InvalidFormat):
        logic.execute("reminder add m/Call Amy d/2023-08-01", source="[Telegram:amy]")
    with pytest.raises(UnknownCommand):
        logic.execute("dance")

    lines = log_path.read_text().splitlines()
    assert "[Telegram:amy]" in lines[0]
    assert lines[1] == "  -> InvalidFormat: Missing compulsory field: contact index (i/)"
    assert lines[3] == "  -> UnknownCommand: Unknown command: 'dance'"


def test_no_log_path_writes_nothing(tmp_path):
    logic = Logic()
    logic.execute(AMY)
    assert list(tmp_path.iterdir()) == []


def test_sort_preference_persists(storage):
    logic = Logic(storage=storage)
    logic.execute(AMY)
    logic.execute("person add n/Bob Lee p/81234567 e/bob@example.com a/2 High St")
    logic.execute("person sort name desc")
    assert (storage.data_dir / "prefs.json").exists()

    reloaded = Logic(storage=storage)
    assert reloaded.store.person_sort == ("name", True)
    assert [p.name.value for p in reloaded.persons] == ["Bob Lee", "Amy Tan"]


def test_parse_does_not_execute():
    logic = Logic()
    command = logic.parse(AMY)
    assert command.command_name == "person.add"
    assert len(logic.store) == 0


def test_clear_is_saved(storage):
    logic = Logic(storage=storage)
    logic.execute(AMY)
    result = logic.execute("clear")
    assert result.clear
    assert len(Logic(storage=storage).store) == 0


def test_person_edit_logged_and_saved(storage, log_path):
    logic = Logic(storage=storage, log_path=log_path)
    logic.execute(AMY)
    result = logic.execute("person edit 1 n/Amy Lim p/98765432")
    assert result.feedback.startswith("Edited person: Amy Lim")

    lines = log_path.read_text().splitlines()
    assert lines[3].startswith("  -> person.edit, index=Index(one_based=1), name=Name(")
    reloaded = Logic(storage=storage)
    assert [(p.name.value, p.phone.value) for p in reloaded.persons] == [
        ("Amy Lim", "98765432")]


def test_sale_sort_preference_persists(storage):
    logic = Logic(storage=storage)
    logic.execute("sale add m/Printer d/2023-08-01 p/199.99 q/1")
    logic.execute("sale add m/Toner d/2023-08-03 p/20.00 q/1")
    logic.execute("sale sort price")

    reloaded = Logic(storage=storage)
    assert reloaded.store.sale_sort == ("price", False)
    assert [s.item.value for s in reloaded.sales] == ["Toner", "Printer"]
