"""Running a project's development server."""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
import tempfile

from .generate import FRAMEWORK_MODULE

DEFAULT_PORT = "8080"


def parse_module_name(mod_content: str) -> str:
    """Return the module path declared in ``go.mod`` text, or an empty string."""
    for line in mod_content.split("\n"):
        if line.startswith("module "):
            parts = line.split()
            if len(parts) >= 2:
                return parts[1]
    return ""


def generate_dev_program(module_name: str) -> str:
    """Return the source of the program that starts the development server."""
    return f"""package main

import (
	"{FRAMEWORK_MODULE}"
	"{FRAMEWORK_MODULE}/cli"
	"{module_name}/pages"
)

func main() {{
	options := alloy.Options{{
		EmbedFS:  nil,
		Title:    "My Alloy App",
		Loaders:  pages.LoaderRegistry,
		Handlers: pages.HandlerRegistry,
	}}
	if err := cli.Dev(alloy.New(options)); err != nil {{
		panic(err)
	}}
}}
"""


def _read_module_name(directory: str) -> str:
    try:
        with open(os.path.join(directory, "go.mod"), encoding="utf-8") as handle:
            content = handle.read()
    except OSError as exc:
        raise FileNotFoundError(f"go.mod not found in {directory}") from exc
    module_name = parse_module_name(content)
    if not module_name:
        raise ValueError("could not parse module name from go.mod")
    return module_name


def load_project(directory: str) -> int:
    """Run the development program of the project in ``directory``.

    Blocks until the server stops and returns its exit status. A non-zero
    status (an interrupted server) is not treated as an error.
    Raises FileNotFoundError without ``go.mod``, ValueError when it names
    no module and OSError when the toolchain cannot be started.
    """
    module_name = _read_module_name(directory)
    program = generate_dev_program(module_name)

    with tempfile.TemporaryDirectory(prefix="alloy-dev-") as temp_dir:
        temp_file = os.path.join(temp_dir, "main.go")
        with open(temp_file, "w", encoding="utf-8") as handle:
            handle.write(program)
        result = subprocess.run(
            ["go", "run", "-mod=mod", temp_file], cwd=directory, check=False
        )
    return result.returncode


def _require_project(directory: str) -> str:
    abs_dir = os.path.abspath(directory)
    if not os.path.exists(os.path.join(abs_dir, "main.go")):
        raise FileNotFoundError(
            f"main.go not found in {directory} - are you in an Alloy project?"
        )
    return abs_dir


def run_dev(port: str = DEFAULT_PORT, directory: str = ".") -> int:
    """Start the development server of the project in ``directory``."""
    abs_dir = _require_project(directory)
    print(f"📁 Loading project from: {abs_dir}")
    print(f"🚀 Starting dev server on port {port}...\n")
    return load_project(abs_dir)


def dev_cmd(args=None) -> None:
    """Run ``dev [--port 8080] [--dir .]``; exit with status 1 on failure."""
    parser = argparse.ArgumentParser(prog="dev", allow_abbrev=False)
    parser.add_argument("-port", "--port", dest="port", default=DEFAULT_PORT,
                        help="Port for dev server")
    parser.add_argument("-dir", "--dir", dest="dir", default=".", help="Project directory")
    parser.add_argument("rest", nargs="*", help=argparse.SUPPRESS)
    options = parser.parse_args(sys.argv[1:] if args is None else list(args))
    try:
        run_dev(options.port, options.dir)
    except (OSError, ValueError) as exc:
        print(f"❌ Dev server error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc