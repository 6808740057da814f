"""Generating the Go loader and handler registry for a pages directory."""

from __future__ import annotations

import os
from typing import Iterable, Optional

from .loaderutil import LoaderInfo, discover_loaders

GENERATED_FILE = "loaders_generated.go"
DEFAULT_PAGES_DIR = "pages"
FRAMEWORK_MODULE = "alloy"
GIN_MODULE = "github.com/gin-gonic/gin"


def find_module_info(start_dir: str) -> Optional[tuple[str, str]]:
    """Walk up from ``start_dir`` to the nearest ``go.mod``.

    Returns ``(module_name, module_root)``, or None when no module is found.
    """
    current = os.path.abspath(start_dir)
    while True:
        try:
            with open(os.path.join(current, "go.mod"), encoding="utf-8") as handle:
                lines = handle.read().splitlines()
        except (OSError, UnicodeDecodeError):
            lines = []
        for line in lines:
            if line.startswith("module "):
                return line.removeprefix("module").strip(), current
        parent = os.path.dirname(current)
        if parent == current:
            return None
        current = parent


def calculate_api_import_path(pages_dir: str, module_name: str, module_root: str) -> str:
    """Return the Go import path of the ``api`` package inside ``pages_dir``."""
    api_dir = os.path.join(os.path.abspath(pages_dir), "api")
    try:
        relative = os.path.relpath(api_dir, os.path.abspath(module_root))
    except ValueError:
        return ""
    return module_name + "/" + relative.replace(os.sep, "/")


def _package_name(pages_dir: str) -> str:
    stripped = pages_dir.rstrip("/" + os.sep) or pages_dir
    return os.path.basename(stripped) or stripped


def generate_loader_registry(
    pages_dir: str, api_import_path: str, loaders: Iterable[LoaderInfo]
) -> str:
    """Return the Go source of the registry for the given loaders."""
    loaders = list(loaders)
    has_api = any(loader.is_api for loader in loaders)

    parts = [
        "// Code generated by alloy. DO NOT EDIT.\n",
        f"// Generated for loaders in {pages_dir}/\n",
        "\n",
        f"package {_package_name(pages_dir)}\n",
        "\n",
        "import (\n",
        f'\t"{FRAMEWORK_MODULE}"\n',
        f'\t"{GIN_MODULE}"',
    ]
    if has_api and api_import_path:
        parts.append(f'\n\tapi "{api_import_path}"')
    parts.append(
        "\n)\n"
        "\n"
        "// LoaderRegistry maps page routes to their corresponding loader functions.\n"
        "// Loaders return (any, error) and their data is used as props for SSR.\n"
        "var LoaderRegistry = map[string]alloy.PageLoader{\n"
    )
    parts.extend(
        f'\t"{loader.route}": {loader.function_name},\n'
        for loader in loaders
        if not loader.is_api
    )
    parts.append(
        "}\n"
        "\n"
        "// HandlerRegistry maps API routes to their corresponding handler functions.\n"
        "var HandlerRegistry = map[string]gin.HandlerFunc{\n"
    )
    prefix = "api." if api_import_path else ""
    parts.extend(
        f'\t"{loader.route}": {prefix}{loader.function_name},\n'
        for loader in loaders
        if loader.is_api
    )
    parts.append("}\n")
    return "".join(parts)


def generate_loaders(pages_dir: str = DEFAULT_PAGES_DIR) -> Optional[str]:
    """Write the loader registry into ``pages_dir``.

    Returns the path written, or None when there was nothing to write or a
    problem was reported as a warning.
    """
    pages_dir = pages_dir or DEFAULT_PAGES_DIR
    if not os.path.isdir(pages_dir):
        return None

    print("📝 Generating loader registry...")

    try:
        loaders = discover_loaders(pages_dir)
    except (OSError, ValueError) as exc:
        print(f"⚠️  Warning: failed to discover loaders: {exc}")
        return None

    if not loaders:
        return None

    loaders = sorted(loaders, key=lambda loader: loader.route)

    api_import_path = ""
    info = find_module_info(os.path.dirname(os.path.abspath(pages_dir)))
    if info is not None:
        module_name, module_root = info
        if module_name and module_root:
            api_import_path = calculate_api_import_path(pages_dir, module_name, module_root)

    code = generate_loader_registry(pages_dir, api_import_path, loaders)
    output_file = os.path.join(pages_dir, GENERATED_FILE)
    try:
        with open(output_file, "w", encoding="utf-8") as handle:
            handle.write(code)
    except OSError as exc:
        print(f"⚠️  Warning: failed to write {output_file}: {exc}")
        return None

    print(f"✓ Generated {output_file} with {len(loaders)} loaders")
    return output_file


def ensure_generated_loaders(pages_dir: str = DEFAULT_PAGES_DIR) -> Optional[str]:
    """Generate the registry unless it already exists; return its path if present."""
    pages_dir = pages_dir or DEFAULT_PAGES_DIR
    generated = os.path.join(pages_dir, GENERATED_FILE)
    if os.path.exists(generated):
        return generated
    return generate_loaders(pages_dir)