"""In-memory cache of server bundles and readers that load bundle files."""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

_bundle_cache: dict[str, str] = {}
_cache_lock = threading.Lock()


def clear_bundle_cache() -> None:
    """Forget every cached bundle."""
    with _cache_lock:
        _bundle_cache.clear()


@dataclass
class FileSystemBundleReader:
    """Reads bundles from disk, or from an embedded bundle tree in production.

    ``embed_root`` is the directory the built bundles were packaged into;
    bundle names are resolved relative to it.
    """

    dev: bool = False
    embed_root: Optional[Union[str, os.PathLike]] = None

    def read_bundle(self, name: str) -> bytes:
        if self.dev or self.embed_root is None:
            return Path(name).read_bytes()
        return (Path(self.embed_root) / name).read_bytes()


def get_server_bundle(reader, cache_key: str) -> str:
    """Return the server bundle for ``cache_key``, reading it once."""
    with _cache_lock:
        cached = _bundle_cache.get(cache_key)
    if cached is not None:
        return cached
    bundle = reader.read_bundle(cache_key).decode("utf-8", errors="replace")
    with _cache_lock:
        _bundle_cache[cache_key] = bundle
    return bundle


def get_client_bundles(reader, js_key: str, css_key: str) -> tuple[str, str]:
    """Check both client bundles exist and return their keys."""
    failure: Optional[OSError] = None
    for key in (js_key, css_key):
        try:
            reader.read_bundle(key)
        except OSError as exc:
            failure = failure or exc
    if failure is not None:
        raise failure
    return js_key, css_key