"""The single entry point used by the front-ends: execute(command_text).

Logic ties the router, the record store and (optionally) storage together.
After every successful command the data is saved if the command changed
it, and the preferences are saved if a sort order changed.
"""

from datetime import datetime

from salesbook.commands import ALL_GROUPS
from salesbook.commands.router import Router
from salesbook.errors import ParseError, SalesbookError
from salesbook.model.store import RecordStore
from salesbook.storage import Preferences


def _log_request(log_path, text, command, source, error=None):
    """Append a compact 2-line entry to the log file."""
    if log_path is None:
        return
    ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    if error is not None:
        outcome = f"  -> {type(error).__name__}: {str(error).splitlines()[0]}"
    elif command is None:
        outcome = "  -> none"
    else:
        outcome = f"  -> {command.describe()}"
    try:
        with open(log_path, "a") as f:
            f.write(f"{ts} {source}  {text}\n{outcome}\n")
    except OSError:
        pass


class Logic:

    def __init__(self, store=None, storage=None, log_path=None, router=None):
        self.storage = storage
        self.log_path = log_path
        self.router = router or Router(ALL_GROUPS)
        if store is None:
            store = RecordStore(storage.load() if storage is not None else None)
        self.store = store
        if storage is not None:
            prefs = storage.load_prefs()
            store.sort_persons(prefs.person_sort, prefs.person_sort_reverse)
            store.sort_sales(prefs.sale_sort, prefs.sale_sort_reverse)
        self._saved_sort = self._sort_state()

    def parse(self, text):
        """Parse text into a Command without running it."""
        return self.router.parse(text)

    def execute(self, text, source="[cli]"):
        """Parse and run one line of user input.

        Returns a CommandResult. Raises ParseError or CommandError; in both
        cases the store is unchanged. An OSError from saving is raised after
        the command has run, so the store keeps the change and the files do
        not.
        """
        try:
            command = self.router.parse(text)
        except ParseError as e:
            _log_request(self.log_path, text, None, source, e)
            raise

        try:
            result = command.execute(self.store)
        except SalesbookError as e:
            _log_request(self.log_path, text, command, source, e)
            raise

        _log_request(self.log_path, text, command, source)
        if self.storage is not None:
            if command.mutates:
                self.storage.save(self.store.snapshot())
            if self._sort_state() != self._saved_sort:
                self._save_prefs()
        return result

    def _sort_state(self):
        return self.store.person_sort, self.store.sale_sort

    def _save_prefs(self):
        (person_sort, person_reverse), (sale_sort, sale_reverse) = self._sort_state()
        self.storage.save_prefs(
            Preferences(person_sort, person_reverse, sale_sort, sale_reverse))
        self._saved_sort = self._sort_state()

    # --- Views for the front-end ---

    @property
    def persons(self):
        return self.store.persons

    @property
    def meetings(self):
        return self.store.meetings

    @property
    def reminders(self):
        return self.store.reminders

    @property
    def sales(self):
        return self.store.sales

    @property
    def contact_tags(self):
        return self.store.contact_tags

    @property
    def sale_tags(self):
        return self.store.sale_tags
