"""The ``alloy`` command."""

from __future__ import annotations

import sys

from .gobuild import build_cmd
from .godev import dev_cmd
from .install import install_cmd
from .scaffold import new_cmd

VERSION = "0.1.0"

_RULE = "━" * 51

_COMMAND_HELP = (
    ("install", "Install project dependencies", "alloy install [--dir .]"),
    ("dev", "Start development server with hot-reload", "alloy dev [--port 8080] [--dir .]"),
    ("build", "Build for production", "alloy build [--dir .] [--output ./dist/app]"),
    ("new", "Create a new Alloy project", "alloy new <project-name>"),
    ("version", "Print version", None),
    ("help", "Show this help message", None),
)

_OPTION_HELP = (
    ("--port <number>", "Port for server (default: 8080)"),
    ("--dir <path>", "Project directory (default: current directory)"),
    ("--output <path>", "Output binary path for build"),
)

_EXAMPLES = (
    ("Create a new project", ("alloy new my-app", "cd my-app")),
    ("Install dependencies", ("alloy install",)),
    ("Start dev server", ("alloy dev",)),
    ("Start on custom port", ("alloy dev --port 3000",)),
    ("Build for production", ("alloy build",)),
    ("Run production binary", ("./dist/app",)),
)

_COMMANDS = {
    "dev": dev_cmd,
    "build": build_cmd,
    "install": install_cmd,
    "new": new_cmd,
}


def _usage() -> str:
    lines = ["", _RULE, "  Alloy - React SSR for Go", _RULE, ""]
    lines += ["USAGE:", "  alloy <command> [options]", "", "COMMANDS:"]
    for name, description, usage in _COMMAND_HELP:
        lines.append(f"  {name:<16} {description}")
        if usage:
            lines.append(" " * 19 + f"Usage: {usage}")
        lines.append("")
    lines.append("OPTIONS:")
    lines += [f"  {option:<15}  {description}" for option, description in _OPTION_HELP]
    lines += ["", "EXAMPLES:"]
    for title, commands in _EXAMPLES:
        lines.append(f"  # {title}")
        lines += [f"  {command}" for command in commands]
        lines.append("")
    lines.append(_RULE)
    return "\n".join(lines) + "\n"


def print_usage() -> None:
    """Print the command overview."""
    print(_usage(), end="")


def main(argv=None) -> int:
    """Dispatch to a subcommand; exit with status 1 on misuse."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print_usage()
        raise SystemExit(1)

    command, rest = args[0], args[1:]
    handler = _COMMANDS.get(command)
    if handler is not None:
        handler(rest)
    elif command == "version":
        print(f"alloy version {VERSION}")
    elif command in ("help", "-h", "--help"):
        print_usage()
    else:
        print(f"❌ Unknown command: {command}\n", file=sys.stderr)
        print_usage()
        raise SystemExit(1)
    return 0


if __name__ == "__main__":
    sys.exit(main())