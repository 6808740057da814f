"""Runtime environment detection and the on-disk bundle cache directory."""

from __future__ import annotations

import os
import posixpath
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

CACHE_DIR = ".alloy"
ENV_VAR = "Alloy_ENV"
_PRESERVED = frozenset({"favicon.svg", "keep"})


class AlloyEnv(str, Enum):
    """Named environments."""

    PRODUCTION = "production"


@dataclass
class _Settings:
    production: bool = False


_settings = _Settings()


def is_prod() -> bool:
    """True when production was forced or the environment variable says so."""
    if _settings.production:
        return True
    return os.environ.get(ENV_VAR) == AlloyEnv.PRODUCTION.value


def is_dev() -> bool:
    """True when production is not forced and no environment is set."""
    if _settings.production:
        return False
    return os.environ.get(ENV_VAR, "") == ""


def set_production(prod: bool) -> None:
    """Force (or stop forcing) production mode."""
    _settings.production = bool(prod)


def _ext(path: str) -> str:
    base_start = path.rfind("/") + 1
    dot = path.rfind(".")
    return path[dot:] if dot >= base_start else ""


def page_cache_key(page: str, extension: str) -> str:
    """Return the cache path of a page's bundle with the given extension."""
    ext = _ext(page)
    stem = page[: len(page) - len(ext)] if ext else page
    return posixpath.normpath(f"{CACHE_DIR}/{stem}.{extension}")


def clean_cache() -> None:
    """Empty the cache directory, keeping the favicon and keep marker."""
    cache = Path(CACHE_DIR)
    if not cache.exists():
        cache.mkdir(parents=True, exist_ok=True)
        (cache / "keep").write_text("")
        return
    for entry in cache.iterdir():
        if entry.name in _PRESERVED:
            continue
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()