import pytest

from alloy.buildutils import (
    BuildStats,
    PageError,
    ValidationFailed,
    extract_build_error_context,
    print_build_complete,
    print_build_failed,
    print_build_start,
    print_page_build_complete,
    print_page_build_error,
    print_page_build_start,
    print_validation_results,
    validate_pages,
)
from alloy.page import Page


def test_valid_page_has_no_errors_or_warnings(tmp_path):
    page_file = tmp_path / "index.tsx"
    page_file.write_text("export default function Home() { return null; }")
    errors, warnings = validate_pages([Page(route="/", file=str(page_file))])
    assert errors == []
    assert warnings == []


def test_empty_file_field_is_an_error():
    errors, warnings = validate_pages([Page(route="/x", file="")])
    assert errors == [PageError(page="/x", error="Page.File is empty", file="")]
    assert warnings == []


def test_missing_file_is_an_error(tmp_path):
    missing = str(tmp_path / "gone.tsx")
    errors, _ = validate_pages([Page(route="/gone", file=missing)])
    assert len(errors) == 1
    assert errors[0].error.startswith("File not found: ")
    assert errors[0].file == missing


def test_wrong_extension_is_an_error(tmp_path):
    page_file = tmp_path / "page.txt"
    page_file.write_text("export")
    errors, _ = validate_pages([Page(route="/page", file=str(page_file))])
    assert errors[0].error == "Invalid file extension '.txt'. Expected .tsx, .jsx, .ts, or .js"


def test_directory_is_an_error(tmp_path):
    directory = tmp_path / "folder.tsx"
    directory.mkdir()
    errors, _ = validate_pages([Page(route="/folder", file=str(directory))])
    assert errors[0].error == "Path is a directory, not a file"


def test_empty_page_produces_warnings(tmp_path):
    page_file = tmp_path / "blank.tsx"
    page_file.write_text("")
    errors, warnings = validate_pages([Page(route="/blank", file=str(page_file))])
    assert errors == []
    assert warnings == [
        f"⚠️  Page /blank ({page_file}) is empty",
        "⚠️  Page /blank might not export a component",
    ]


def test_print_validation_results_raises_with_errors(capsys):
    errors = [PageError(page="/a", error="bad", file="a.tsx")]
    with pytest.raises(ValidationFailed) as info:
        print_validation_results(errors, [])
    assert str(info.value) == "1 validation errors found"
    assert info.value.errors == errors
    out = capsys.readouterr().out
    assert "Route '/a':" in out
    assert "File: a.tsx" in out


def test_print_validation_results_prints_warnings(capsys):
    print_validation_results([], ["careful"])
    assert "careful" in capsys.readouterr().out


def test_print_build_start_lists_pages(capsys):
    print_build_start([Page(route="/", file="pages/index.tsx")])
    out = capsys.readouterr().out
    assert "📄 Pages to bundle: 1" in out
    assert "   • / → pages/index.tsx" in out


def test_page_progress_messages(capsys):
    print_page_build_start("/about", "pages/about.tsx")
    print_page_build_complete("/about")
    print_page_build_error("/about", "pages/about.tsx", "oops")
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "📌 Bundling /about (pages/about.tsx)...",
        "✓ /about bundled",
        "❌ /about failed: oops",
    ]


def test_build_complete_and_failed_messages(capsys):
    print_build_complete(3, ["w1", "w2"])
    print_build_failed(1, 3)
    out = capsys.readouterr().out
    assert "📦 Successfully bundled 3 pages" in out
    assert "⚠️  2 warnings" in out
    assert "❌ Build failed: 1 of 3 pages could not be bundled" in out


@pytest.mark.parametrize(
    "message, hint",
    [
        ("Cannot find module 'x'", "Import error: Check that imported modules exist and are installed"),
        ("Module not found: y", "Module import error: Check npm dependencies"),
        ("SyntaxError: bad", "TypeScript/JSX syntax error: Check component syntax"),
        ("Unexpected token <", "Parsing error: Invalid syntax in component"),
        ("Invalid JSX here", "Invalid JSX: Check component JSX syntax"),
    ],
)
def test_extract_build_error_context_hints(message, hint):
    assert extract_build_error_context(message) == hint


def test_extract_build_error_context_truncates_long_messages():
    message = "z" * 300
    result = extract_build_error_context(message)
    assert result.endswith("...")
    assert result[:-3] == message[:150]


def test_extract_build_error_context_strips_short_messages():
    assert extract_build_error_context("  short  ") == "short"


def test_build_stats_defaults_are_independent():
    first, second = BuildStats(), BuildStats()
    first.warnings.append("w")
    assert second.warnings == []
    assert first.total_pages == 0