"""Entry point for `python -m salesbook`.

    python -m salesbook                 interactive loop
    python -m salesbook -parse TEXT     show how TEXT parses, without running it
    python -m salesbook -telegram       serve the Telegram chat front-end
"""

import sys
from dataclasses import fields


def _parse_cmd(text):
    """Parse a single input and print the result in test_cases.txt format."""
    from salesbook.commands import ALL_GROUPS
    from salesbook.commands.result import format_value
    from salesbook.commands.router import Router
    from salesbook.errors import InvalidFormat, ParseError

    print(f"> {text}")
    try:
        command = Router(ALL_GROUPS).parse(text)
    except InvalidFormat as e:
        print("error: InvalidFormat")
        print(f"field: {e.field}")
        return
    except ParseError as e:
        print(f"error: {type(e).__name__}")
        return

    print(f"command: {command.command_name}")
    for f in fields(command):
        value = getattr(command, f.name)
        if value is not None:
            print(f"{f.name}: {format_value(value)}")


if __name__ == "__main__" or not sys.argv[0]:
    if len(sys.argv) >= 3 and sys.argv[1] == "-parse":
        _parse_cmd(" ".join(sys.argv[2:]))
    elif len(sys.argv) >= 2 and sys.argv[1] == "-telegram":
        from salesbook.telegram_bot import main as telegram_main
        telegram_main()
    else:
        from salesbook.main import main
        main()
