"""Building a project for production."""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
import tempfile

from .env import ENV_VAR, AlloyEnv
from .generate import FRAMEWORK_MODULE
from .godev import _read_module_name, _require_project


def generate_build_program(module_name: str) -> str:
    """Return the source of the program that bundles every page."""
    return f"""package main

import (
	"embed"
	"{FRAMEWORK_MODULE}"
	"{FRAMEWORK_MODULE}/cli"
	"{module_name}/pages"
)

//go:embed .alloy
var EmbedFS embed.FS

func main() {{
	options := alloy.Options{{
		EmbedFS:  &EmbedFS,
		Title:    "My Alloy App",
		Loaders:  pages.LoaderRegistry,
		Handlers: pages.HandlerRegistry,
	}}
	if err := cli.Build(alloy.New(options)); err != nil {{
		panic(err)
	}}
}}
"""


def generate_app_program(module_name: str) -> str:
    """Return the source of the production application."""
    return f"""package main

import (
	"embed"
	"{FRAMEWORK_MODULE}"
	"{module_name}/pages"
)

//go:embed .alloy
var EmbedFS embed.FS

func main() {{
	alloy.SetProduction(true)
	options := alloy.Options{{
		EmbedFS:  &EmbedFS,
		Title:    "My Alloy App",
		Loaders:  pages.LoaderRegistry,
		Handlers: pages.HandlerRegistry,
	}}
	engine := alloy.New(options)
	engine.Start()
}}
"""


def _production_env() -> dict[str, str]:
    return {**os.environ, ENV_VAR: AlloyEnv.PRODUCTION.value}


def _run_program(command: list[str], program: str, prefix: str, cwd: str, label: str) -> None:
    with tempfile.TemporaryDirectory(prefix=prefix) as temp_dir:
        temp_file = os.path.join(temp_dir, "main.go")
        with open(temp_file, "w", encoding="utf-8") as handle:
            handle.write(program)
        try:
            result = subprocess.run(
                [*command, temp_file], cwd=cwd, env=_production_env(), check=False
            )
        except OSError as exc:
            raise RuntimeError(f"{label}: {exc}") from exc
    if result.returncode != 0:
        raise RuntimeError(f"{label}: exit status {result.returncode}")


def run_build(directory: str = ".", output: str = "") -> str:
    """Bundle every page and build the production binary; return its path.

    Raises FileNotFoundError when ``directory`` is not a project, ValueError
    when ``go.mod`` names no module and RuntimeError when a build step fails.
    """
    abs_dir = _require_project(directory)
    print(f"📁 Building project from: {abs_dir}")

    try:
        module_name = _read_module_name(abs_dir)
    except FileNotFoundError as exc:
        raise FileNotFoundError(f"go.mod not found in {directory}") from exc

    _run_program(
        ["go", "run", "-mod=mod"],
        generate_build_program(module_name),
        "alloy-build-",
        abs_dir,
        "build failed",
    )

    print("📦 Building production binary...")

    output_path = output or os.path.join(abs_dir, "dist", "app")
    resolved = os.path.join(abs_dir, output_path)
    try:
        os.makedirs(os.path.dirname(resolved), exist_ok=True)
    except OSError as exc:
        raise OSError(f"failed to create output directory: {exc}") from exc

    _run_program(
        ["go", "build", "-ldflags=-s -w", "-o", output_path, "-mod=mod"],
        generate_app_program(module_name),
        "alloy-app-",
        abs_dir,
        "binary build failed",
    )

    print(f"✓ Production binary built: {output_path}")
    return output_path


def build_cmd(args=None) -> None:
    """Run ``build [--dir .] [--output ./dist/app]``; exit with status 1 on failure."""
    parser = argparse.ArgumentParser(prog="build", allow_abbrev=False)
    parser.add_argument("-dir", "--dir", dest="dir", default=".", help="Project directory")
    parser.add_argument("-output", "--output", dest="output", default="",
                        help="Output binary path")
    parser.add_argument("rest", nargs="*", help=argparse.SUPPRESS)
    options = parser.parse_args(sys.argv[1:] if args is None else list(args))
    try:
        run_build(options.dir, options.output)
    except (OSError, ValueError, RuntimeError) as exc:
        print(f"❌ Build error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc