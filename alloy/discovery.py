"""Finding page components in a pages directory and mapping them to routes."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class PageInfo:
    """A page component file and the route it serves."""

    route: str
    file: str


def _walk_files(root: str) -> Iterator[str]:
    """Yield every non-directory path under root in lexical order."""
    if not stat.S_ISDIR(os.lstat(root).st_mode):
        yield root
        return
    for name in sorted(os.listdir(root)):
        path = os.path.join(root, name)
        if os.path.isdir(path) and not os.path.islink(path):
            yield from _walk_files(path)
        else:
            yield path


def discover_page_files(pages_dir: str) -> list[PageInfo]:
    """Return every ``.tsx`` page under ``pages_dir`` with its route."""
    if not pages_dir:
        raise ValueError("pagesDir is required")
    abs_dir = os.path.abspath(pages_dir)
    pages = []
    for path in _walk_files(abs_dir):
        if not path.endswith(".tsx"):
            continue
        route = file_path_to_route(path, abs_dir)
        rel = os.path.relpath(path, abs_dir)
        pages.append(PageInfo(route=route, file=os.path.normpath(os.path.join(pages_dir, rel))))
    return pages


def _route_segment(part: str) -> str:
    if part.startswith("[") and part.endswith("]"):
        return ":" + part.removeprefix("[").removesuffix("]")
    return part


def file_path_to_route(file_path: str, pages_dir: str) -> str:
    """Map a page file path to its route; ``[name]`` becomes ``:name``."""
    relative = file_path.removeprefix(pages_dir).removeprefix(os.sep).removesuffix(".tsx")
    if relative == "index":
        return "/"
    return "/" + "/".join(_route_segment(part) for part in relative.split(os.sep))