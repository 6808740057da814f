"""Fetching and running the Tailwind CSS command-line tool."""

from __future__ import annotations

import os
import platform
import shutil
import subprocess
import urllib.error
import urllib.request
from typing import Iterable, Optional

from .page import Page

TAILWIND_CACHE_DIR = "./.alloy-cache"
TAILWIND_PATH = "./.alloy-cache/tailwindcss"
TAILWIND_DIRECTIVE = '@import "tailwindcss"'

_RELEASES = "https://github.com/tailwindlabs/tailwindcss/releases/latest/download/"
_ASSETS = {
    ("windows", "amd64"): "tailwindcss-windows-x64.exe",
    ("linux", "arm64"): "tailwindcss-linux-arm64",
    ("linux", "amd64"): "tailwindcss-linux-x64",
    ("darwin", "arm64"): "tailwindcss-macos-arm64",
    ("darwin", "amd64"): "tailwindcss-macos-x64",
}
_MACHINE_ALIASES = {"x86_64": "amd64", "amd64": "amd64", "aarch64": "arm64", "arm64": "arm64"}


class TailwindError(Exception):
    """Raised when Tailwind cannot be fetched or run."""


def tailwind_url(system: Optional[str] = None, machine: Optional[str] = None) -> str:
    """Return the download URL of the Tailwind binary for a platform.

    Defaults to the running platform.
    """
    system = (system or platform.system()).lower()
    machine = (machine or platform.machine()).lower()
    arch = _MACHINE_ALIASES.get(machine, machine)
    asset = _ASSETS.get((system, arch))
    if asset is None:
        raise TailwindError(f"unsupported platform: {system}/{arch}")
    return _RELEASES + asset


def download(url: str, path: str) -> None:
    """Download ``url`` into an executable file at ``path``."""
    try:
        fd = os.open(path, os.O_RDWR | os.O_CREAT | os.O_TRUNC, 0o755)
    except OSError as exc:
        raise TailwindError(f"failed to create tailwind binary file: {exc}") from exc
    with os.fdopen(fd, "wb") as out:
        try:
            response = urllib.request.urlopen(url)
        except urllib.error.HTTPError as exc:
            raise TailwindError(f"tailwind download failed with status {exc.code}") from exc
        except (urllib.error.URLError, OSError, ValueError) as exc:
            raise TailwindError(f"failed to download tailwind from {url}: {exc}") from exc
        with response:
            status = response.getcode()
            if status is not None and status != 200:
                raise TailwindError(f"tailwind download failed with status {status}")
            try:
                shutil.copyfileobj(response, out)
            except OSError as exc:
                raise TailwindError(f"failed to write tailwind binary: {exc}") from exc


def get_tailwind_path() -> str:
    """Return the path of the Tailwind binary, downloading it if missing."""
    if not os.path.exists(TAILWIND_PATH):
        try:
            os.makedirs(TAILWIND_CACHE_DIR, exist_ok=True)
        except OSError as exc:
            raise TailwindError(f"failed to create cache directory: {exc}") from exc
        url = tailwind_url()
        print("downloading tailwind...")
        download(url, TAILWIND_PATH)
        print("tailwind downloaded successfully")
    return TAILWIND_PATH


def run_tailwind(input_file: str, output_file: str, minify: bool) -> None:
    """Compile ``input_file`` into ``output_file`` with Tailwind."""
    try:
        command = get_tailwind_path()
    except TailwindError as exc:
        raise TailwindError(f"failed to get tailwind path: {exc}") from exc

    args = [command, "-i", input_file, "-o", output_file]
    if minify:
        args.append("-m")

    try:
        result = subprocess.run(
            args, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, check=False
        )
    except OSError as exc:
        raise TailwindError(f"tailwind processing failed: {exc}\noutput: ") from exc
    if result.returncode != 0:
        output = result.stdout.decode("utf-8", errors="replace")
        raise TailwindError(
            f"tailwind processing failed: exit status {result.returncode}\noutput: {output}"
        )


def _uses_tailwind(path: str) -> bool:
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            return TAILWIND_DIRECTIVE in handle.read()
    except OSError:
        return False


def detect_tailwind(pages: Iterable[Page]) -> bool:
    """True if the root stylesheet or any CSS beside a page imports Tailwind."""
    if _uses_tailwind("styles.css"):
        return True
    for page in pages:
        page_dir = os.path.dirname(page.file) or "."
        try:
            entries = sorted(os.scandir(page_dir), key=lambda entry: entry.name)
        except OSError:
            continue
        for entry in entries:
            if entry.is_dir() or not entry.name.endswith(".css"):
                continue
            if _uses_tailwind(os.path.join(page_dir, entry.name)):
                return True
    return False


def ensure_tailwind(pages: Iterable[Page]) -> Optional[str]:
    """Fetch Tailwind ahead of time if the project uses it.

    Returns the binary path, or None when Tailwind is not used.
    """
    if not detect_tailwind(pages):
        return None
    try:
        return get_tailwind_path()
    except TailwindError as exc:
        raise TailwindError(f"failed to ensure tailwind is available: {exc}") from exc