"""Pages, the options shared between them, and page discovery."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Union

from .cache import FileSystemBundleReader, get_client_bundles, get_server_bundle
from .discovery import discover_page_files
from .env import is_dev, page_cache_key

PageLoader = Callable[[Any], Any]
ErrorHandler = Callable[[Any, Exception, "Page"], None]

DEFAULT_LANG = "en"


@dataclass
class MetaTag:
    """A ``<meta>`` tag placed in every page head."""

    name: str = ""
    content: str = ""
    property: str = ""


@dataclass
class Link:
    """A ``<link>`` tag placed in every page head."""

    rel: str = ""
    href: str = ""


@dataclass
class Options:
    """Settings shared by all pages of an application."""

    title: str = ""
    meta_tags: list[MetaTag] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)
    pages_dir: str = "./pages"
    loaders: dict[str, PageLoader] = field(default_factory=dict)
    handlers: dict[str, Callable[..., Any]] = field(default_factory=dict)
    lang: str = ""
    css_class: str = ""
    port: str = ""
    error_handler: Optional[ErrorHandler] = None
    embed_root: Optional[Union[str, os.PathLike]] = None


@dataclass
class Page:
    """A single route with its component file and head metadata."""

    route: str
    file: str
    interactive: bool = True
    props: Any = None
    title: str = ""
    meta_tags: list[MetaTag] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)
    lang: str = ""
    css_class: str = ""
    loader: Optional[PageLoader] = None
    error_handler: Optional[ErrorHandler] = None
    embed_root: Optional[Union[str, os.PathLike]] = None

    def assign_options(self, options: Options) -> None:
        """Apply the application-wide options to this page."""
        self.embed_root = options.embed_root
        self.error_handler = options.error_handler
        self.css_class = options.css_class
        self.links = [*self.links, *options.links]
        self.meta_tags = [*self.meta_tags, *options.meta_tags]
        self.lang = options.lang or DEFAULT_LANG
        if not self.title:
            self.title = options.title

    def asset_url(self, path: str) -> str:
        """Return the absolute URL path of a bundle asset."""
        url = "/" + path
        if url.startswith("//"):
            url = url[1:]
        return url

    def _bundle_reader(self) -> FileSystemBundleReader:
        return FileSystemBundleReader(dev=is_dev(), embed_root=self.embed_root)

    def server_bundle(self) -> str:
        """Return the source of this page's server-side rendering bundle."""
        return get_server_bundle(self._bundle_reader(), page_cache_key(self.file, "ssr.js"))

    def client_bundles(self) -> tuple[str, str]:
        """Return the paths of this page's client JavaScript and CSS bundles.

        Raises OSError when either bundle is missing.
        """
        return get_client_bundles(
            self._bundle_reader(),
            page_cache_key(self.file, "js"),
            page_cache_key(self.file, "css"),
        )


def discover_pages(
    pages_dir: str, loaders: Optional[Mapping[str, PageLoader]] = None
) -> list[Page]:
    """Find every page under ``pages_dir`` and attach its loader, if any."""
    loaders = loaders or {}
    return [
        Page(route=info.route, file=info.file, interactive=True, loader=loaders.get(info.route))
        for info in discover_page_files(pages_dir)
    ]