"""salesbook main loop.

Reads a command per line, runs it, and prints the feedback.

Usage:
    python -m salesbook
"""

import time

from salesbook.config import Config
from salesbook.errors import SalesbookError
from salesbook.logic import Logic
from salesbook.storage import JsonStorage

_PROMPT = "> "


def log(msg):
    print(msg, flush=True)


def build_logic(config):
    storage = JsonStorage(config.data_dir)
    return Logic(storage=storage, log_path=config.log_path)


def main(config=None):
    config = config or Config.from_env()

    log(f"Loading data from {config.data_dir}...")
    t0 = time.time()
    logic = build_logic(config)
    log(f"  {len(logic.store)} records loaded ({time.time() - t0:.1f}s)")
    log("Type 'help' for a list of commands.\n")

    try:
        while True:
            try:
                text = input(_PROMPT)
            except EOFError:
                break
            if not text.strip():
                continue

            try:
                result = logic.execute(text)
            except SalesbookError as e:
                log(str(e))
                continue
            except OSError as e:
                log(f"Could not save data: {e}")
                continue

            log(result.feedback)
            if result.exit:
                break

    except KeyboardInterrupt:
        log("\nShutting down.")


if __name__ == "__main__":
    main()
