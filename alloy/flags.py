"""Command-line flags shared by the project commands."""

from __future__ import annotations

import sys
from dataclasses import dataclass

_FLAG_HELP = {
    "dir": ("Project directory", "."),
    "output": ("Output path for build", ""),
    "port": ("Port for dev server", "8080"),
}


@dataclass
class Flags:
    """Parsed values of the ``-port``, ``-dir`` and ``-output`` flags."""

    port: str = "8080"
    dir: str = "."
    output: str = ""


def _usage() -> str:
    lines = ["Usage:"]
    for name, (description, default) in _FLAG_HELP.items():
        lines.append(f"  -{name} string")
        suffix = f' (default "{default}")' if default else ""
        lines.append(f"    \t{description}{suffix}")
    return "\n".join(lines)


def _fail(message: str, show_message: bool = True) -> None:
    if show_message:
        print(message, file=sys.stderr)
    print(_usage(), file=sys.stderr)
    raise ValueError(message)


def parse_flags(args):
    """Parse flags from ``args``; return ``(flags, remaining_arguments)``.

    Parsing stops at the first argument that is not a flag, or after ``--``.
    Raises ValueError for unknown flags, bad syntax or a missing value.
    """
    values: dict[str, str] = {}
    remaining = list(args)
    while remaining:
        arg = remaining[0]
        if len(arg) < 2 or not arg.startswith("-"):
            break
        remaining.pop(0)
        if arg == "--":
            break
        body = arg[2:] if arg.startswith("--") else arg[1:]
        if not body or body[0] in "-=":
            _fail(f"bad flag syntax: {arg}")
        name, separator, value = body.partition("=")
        if name not in _FLAG_HELP:
            if name in ("h", "help"):
                _fail("flag: help requested", show_message=False)
            _fail(f"flag provided but not defined: -{name}")
        if not separator:
            if not remaining:
                _fail(f"flag needs an argument: -{name}")
            value = remaining.pop(0)
        values[name] = value
    return Flags(**values), remaining