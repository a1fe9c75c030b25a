"""Data-driven test suite for command parsing.

Reads test cases from test_cases.txt and checks that each input parses to
the expected command with the expected fields (or fails with the expected
error), without executing anything.

See test_cases.txt for the file format.
"""

import pytest
from dataclasses import fields
from pathlib import Path

from salesbook.commands import ALL_GROUPS
from salesbook.commands.result import format_value
from salesbook.commands.router import Router
from salesbook.errors import InvalidFormat, ParseError

_ROUTER = Router(ALL_GROUPS)


def _load_test_cases():
    """Load test cases from test_cases.txt."""
    path = Path(__file__).parent / "test_cases.txt"
    cases = []
    current = None

    for line_num, line in enumerate(path.read_text().splitlines(), 1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        if stripped.startswith("> "):
            if current:
                cases.append(current)
            current = {
                "input": stripped[2:],
                "command": None,
                "error": None,
                "field": None,
                "expected": {},   # command field -> formatted value
                "line": line_num,
            }
            continue

        if current is None:
            continue

        key, _, value = stripped.partition(":")
        key = key.strip()
        value = value.strip()

        if key == "command":
            current["command"] = value
        elif key == "error":
            current["error"] = value
        elif key == "field" and current["error"]:
            current["field"] = value
        else:
            current["expected"][key] = value

    if current:
        cases.append(current)

    return cases


_CASES = _load_test_cases()


def _fmt_command(command):
    """Format a Command for failure output."""
    parts = [command.command_name]
    for f in fields(command):
        parts.append(f"{f.name}={format_value(getattr(command, f.name))}")
    return ", ".join(parts)


def test_cases_loaded():
    assert len(_CASES) > 40
    for case in _CASES:
        assert case["command"] or case["error"], f"line {case['line']}: no expectation"


@pytest.mark.parametrize("case", _CASES, ids=[c["input"] for c in _CASES])
def test_parse(case):
    text = case["input"]

    # Error cases
    if case["error"]:
        with pytest.raises(ParseError) as excinfo:
            _ROUTER.parse(text)
        err = excinfo.value
        assert type(err).__name__ == case["error"], (
            f"\n  Input:    {text!r}"
            f"\n  Expected: {case['error']}"
            f"\n  Got:      {type(err).__name__}: {err}"
        )
        if case["field"] is not None:
            assert isinstance(err, InvalidFormat)
            assert err.field == case["field"], (
                f"\n  Input:    {text!r}"
                f"\n  Expected: field={case['field']}"
                f"\n  Got:      field={err.field} ({err.message})"
            )
        return

    command = _ROUTER.parse(text)
    assert command.command_name == case["command"], (
        f"\n  Input:    {text!r}"
        f"\n  Expected: command={case['command']}"
        f"\n  Got:      {_fmt_command(command)}"
    )

    actual = {f.name: getattr(command, f.name) for f in fields(command)}
    for key, expected_val in case["expected"].items():
        assert key in actual, (
            f"\n  Input:    {text!r}"
            f"\n  Expected field {key!r}, which {command.command_name} does not have"
        )
        formatted = format_value(actual[key])
        if expected_val == "nonempty":
            assert actual[key] is not None and formatted, (
                f"\n  Input:    {text!r}"
                f"\n  Expected: {key} nonempty"
                f"\n  Got:      {_fmt_command(command)}"
            )
        else:
            assert formatted == expected_val, (
                f"\n  Input:    {text!r}"
                f"\n  Expected: {key}={expected_val!r}"
                f"\n  Got:      {key}={formatted!r}"
                f"\n  Full:     {_fmt_command(command)}"
            )

    # Every field that was set must be accounted for in the test case
    extra = {k for k, v in actual.items() if v is not None} - set(case["expected"])
    if extra:
        extra_detail = ", ".join(f"{k}={format_value(actual[k])}" for k in sorted(extra))
        assert False, (
            f"\n  Input:    {text!r}"
            f"\n  Unexpected fields not in test case: {extra_detail}"
            f"\n  Full:     {_fmt_command(command)}"
            f"\n  Add these to test_cases.txt or remove from the parse."
        )
