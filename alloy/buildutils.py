"""Page validation and progress reporting for production builds."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .page import Page

RULE = "━" * 51
VALID_EXTENSIONS = (".tsx", ".jsx", ".ts", ".js")
_MAX_CONTEXT_LENGTH = 150

_BUILD_ERROR_HINTS = (
    ("Cannot find module", "Import error: Check that imported modules exist and are installed"),
    ("Module not found", "Module import error: Check npm dependencies"),
    ("SyntaxError", "TypeScript/JSX syntax error: Check component syntax"),
    ("Unexpected token", "Parsing error: Invalid syntax in component"),
    ("Invalid JSX", "Invalid JSX: Check component JSX syntax"),
)


@dataclass
class BuildStats:
    """Totals gathered over a build."""

    total_pages: int = 0
    success_count: int = 0
    failure_count: int = 0
    warnings: list[str] = field(default_factory=list)
    total_bundle_size: int = 0


@dataclass(frozen=True)
class PageError:
    """A page that failed validation."""

    page: str
    error: str
    file: str = ""


class ValidationFailed(Exception):
    """Raised when one or more pages failed validation."""

    def __init__(self, errors: Sequence[PageError]) -> None:
        self.errors = list(errors)
        super().__init__(f"{len(self.errors)} validation errors found")


def _ext(path: str) -> str:
    base = os.path.basename(path)
    dot = base.rfind(".")
    return base[dot:] if dot >= 0 else ""


def validate_pages(pages: Iterable[Page]) -> tuple[list[PageError], list[str]]:
    """Check every page file; return ``(errors, warnings)``."""
    errors: list[PageError] = []
    warnings: list[str] = []

    for page in pages:
        if not page.file:
            errors.append(PageError(page=page.route, error="Page.File is empty", file=""))
            continue

        try:
            info = os.stat(page.file)
        except OSError as exc:
            errors.append(
                PageError(page=page.route, error=f"File not found: {exc}", file=page.file)
            )
            continue

        ext = _ext(page.file)
        if ext not in VALID_EXTENSIONS:
            errors.append(
                PageError(
                    page=page.route,
                    error=f"Invalid file extension '{ext}'. Expected .tsx, .jsx, .ts, or .js",
                    file=page.file,
                )
            )
            continue

        if os.path.isdir(page.file):
            errors.append(
                PageError(page=page.route, error="Path is a directory, not a file", file=page.file)
            )
            continue

        if info.st_size == 0:
            warnings.append(f"⚠️  Page {page.route} ({page.file}) is empty")

        if "export" not in page.file:
            try:
                with open(page.file, encoding="utf-8", errors="replace") as handle:
                    content = handle.read()
            except OSError:
                content = ""
            if "export" not in content:
                warnings.append(f"⚠️  Page {page.route} might not export a component")

    return errors, warnings


def print_validation_results(errors: Sequence[PageError], warnings: Sequence[str]) -> None:
    """Report validation results; raise ValidationFailed if there were errors."""
    if errors:
        print()
        print("❌ Build validation failed:")
        print()
        for number, err in enumerate(errors, start=1):
            print(f"  {number}. Route '{err.page}':")
            print(f"     Error: {err.error}")
            if err.file:
                print(f"     File: {err.file}")
            print()
        raise ValidationFailed(errors)

    if warnings:
        print()
        for warning in warnings:
            print(warning)
        print()


def print_build_start(pages: Sequence[Page]) -> None:
    """Announce the start of a production build."""
    print()
    print(RULE)
    print("📦 Starting Production Build")
    print(RULE)
    print(f"📄 Pages to bundle: {len(pages)}")
    for page in pages:
        print(f"   • {page.route} → {page.file}")
    print()


def print_page_build_start(route: str, file: str) -> None:
    """Announce that one page is being bundled."""
    print(f"📌 Bundling {route} ({file})...")


def print_page_build_complete(route: str) -> None:
    """Announce that one page was bundled."""
    print(f"✓ {route} bundled")


def print_page_build_error(route: str, file: str, err: object) -> None:
    """Report that one page failed to bundle."""
    print(f"❌ {route} failed: {err}")


def print_build_complete(total_pages: int, warnings: Sequence[str]) -> None:
    """Announce a successful build."""
    print()
    print(RULE)
    print("✓ Production Build Complete")
    print(RULE)
    print(f"📦 Successfully bundled {total_pages} pages")
    if warnings:
        print(f"⚠️  {len(warnings)} warnings")
    print()
    print("Next steps:")
    print("  • Run production: ./dist/app")
    print("  • Or run in development: alloy dev")
    print()
    print(RULE)
    print()


def print_build_failed(failed_count: int, total_count: int) -> None:
    """Announce a failed build."""
    print()
    print(RULE)
    print(f"❌ Build failed: {failed_count} of {total_count} pages could not be bundled")
    print(RULE)
    print()


def extract_build_error_context(err_msg: str) -> str:
    """Return a short, readable hint for a bundler error message."""
    err_msg = err_msg.strip()
    for marker, hint in _BUILD_ERROR_HINTS:
        if marker in err_msg:
            return hint
    if len(err_msg) > _MAX_CONTEXT_LENGTH:
        return err_msg[:_MAX_CONTEXT_LENGTH] + "..."
    return err_msg