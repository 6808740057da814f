"""Installing a project's dependencies."""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .page import discover_pages
from .tailwind import TAILWIND_DIRECTIVE, TailwindError, ensure_tailwind

_RULE = "━" * 51


@contextmanager
def _working_directory(path: str) -> Iterator[None]:
    previous = os.getcwd()
    os.chdir(path)
    try:
        yield
    finally:
        os.chdir(previous)


def _uses_tailwind(path: Path) -> bool:
    try:
        return TAILWIND_DIRECTIVE in path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return False


def has_tailwind_in_project(directory) -> bool:
    """True if ``styles.css`` or a stylesheet directly in ``pages`` imports Tailwind."""
    root = Path(directory)
    if _uses_tailwind(root / "styles.css"):
        return True
    try:
        entries = sorted((root / "pages").iterdir())
    except OSError:
        return False
    return any(
        not entry.is_dir() and entry.name.endswith(".css") and _uses_tailwind(entry)
        for entry in entries
    )


def _run_step(command: list[str], cwd: str, label: str) -> None:
    try:
        result = subprocess.run(command, cwd=cwd, check=False)
    except OSError as exc:
        raise RuntimeError(f"{label} failed: {exc}") from exc
    if result.returncode != 0:
        raise RuntimeError(f"{label} failed: exit status {result.returncode}")


def _prepare_tailwind(abs_dir: str) -> None:
    print("\n📦 Checking for Tailwind CSS...")
    if not has_tailwind_in_project(abs_dir):
        print("✓ Tailwind CSS (will download on first use if needed)")
        return
    with _working_directory(abs_dir):
        try:
            pages = discover_pages(os.path.join(abs_dir, "pages"), None)
        except (OSError, ValueError):
            pages = []
        if not pages:
            print("✓ Tailwind CSS (will download on first use if needed)")
            return
        try:
            ensure_tailwind(pages)
        except TailwindError as exc:
            print(f"⚠️  Warning: Failed to download Tailwind: {exc}")
        else:
            print("✓ Tailwind CSS downloaded and ready")


def run_install(directory=".") -> None:
    """Install Go and npm dependencies and prepare the bundle directory.

    Raises FileNotFoundError when ``directory`` is not a project, RuntimeError
    when a tool fails and OSError when the bundle directory cannot be made.
    """
    abs_dir = os.path.abspath(directory)
    try:
        os.stat(os.path.join(abs_dir, "main.go"))
    except OSError as exc:
        raise FileNotFoundError(
            f"main.go not found in {directory} - are you in an Alloy project?"
        ) from exc

    print("📦 Installing dependencies...\n")

    print("📦 Running 'go mod tidy'...")
    _run_step(["go", "mod", "tidy"], abs_dir, "go mod tidy")
    print("✓ Go dependencies tidied")

    print("\n📦 Running 'npm install'...")
    _run_step(["npm", "install"], abs_dir, "npm install")
    print("✓ NPM packages installed")

    print("\n📦 Creating .alloy directory...")
    alloy_dir = os.path.join(abs_dir, ".alloy")
    try:
        os.makedirs(alloy_dir, exist_ok=True)
    except OSError as exc:
        raise OSError(f"failed to create .alloy directory: {exc}") from exc
    print("✓ .alloy directory created")

    print("\n📦 Creating .alloy/keep file...")
    try:
        Path(alloy_dir, "keep").write_text("")
    except OSError as exc:
        raise OSError(f"failed to create .alloy/keep file: {exc}") from exc
    print("✓ .alloy/keep file created")

    _prepare_tailwind(abs_dir)

    print("\n" + _RULE)
    print("✓ Installation complete!")
    print(_RULE)
    print("\nNext steps:")
    print("  1. Start development:  alloy dev")
    print("  2. Build for production: alloy build")
    print("  3. Run production: ./dist/app")


def install_cmd(args=None) -> None:
    """Run ``install [--dir .]``; exit with status 1 on failure."""
    parser = argparse.ArgumentParser(prog="install", allow_abbrev=False)
    parser.add_argument("-dir", "--dir", dest="dir", default=".", help="Project directory")
    parser.add_argument("rest", nargs="*", help=argparse.SUPPRESS)
    options = parser.parse_args(sys.argv[1:] if args is None else list(args))
    try:
        run_install(options.dir)
    except (OSError, RuntimeError) as exc:
        print(f"❌ Install error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc