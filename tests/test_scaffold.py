import json

import pytest

from alloy.discovery import discover_page_files
from alloy.loaderutil import discover_loaders
from alloy.scaffold import create_project, new_cmd


@pytest.fixture
def project(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return create_project("my-app")


def test_creates_expected_files(project):
    for relative in (
        ".alloy/keep",
        ".alloy/favicon.svg",
        "main.go",
        "pages/generate.go",
        "pages/index.tsx",
        "pages/index.go",
        "pages/loaders_generated.go",
        "pages/api/hello.go",
        "styles.css",
        "go.mod",
        "tsconfig.json",
        "package.json",
        ".gitignore",
    ):
        assert (project / relative).is_file(), relative


def test_keep_file_is_empty_and_styles_import_tailwind(project):
    assert (project / ".alloy" / "keep").read_text() == ""
    assert (project / "styles.css").read_text() == '@import "tailwindcss";\n'


def test_json_files_are_valid(project):
    package = json.loads((project / "package.json").read_text())
    assert package["name"] == "my-alloy-app"
    assert package["dependencies"]["react"] == "^19"
    tsconfig = json.loads((project / "tsconfig.json").read_text())
    assert tsconfig["compilerOptions"]["jsx"] == "react-jsx"


def test_go_mod_names_module(project):
    first_line = (project / "go.mod").read_text().splitlines()[0]
    assert first_line == "module my-app"


def test_no_placeholders_left(project):
    for path in project.rglob("*"):
        if path.is_file():
            assert "$alloy" not in path.read_text()
            assert "$gin" not in path.read_text()


def test_loaders_in_skeleton_are_discoverable(project):
    loaders = {info.route: info.function_name for info in discover_loaders(str(project / "pages"))}
    assert loaders == {"/": "LoadIndex", "/api/hello": "Hello"}


def test_generated_registry_lists_skeleton_loaders(project):
    code = (project / "pages" / "loaders_generated.go").read_text()
    assert '\t"/": LoadIndex,\n' in code
    assert '\t"/api/hello": api.Hello,\n' in code


def test_index_page_discovered(project):
    routes = [page.route for page in discover_page_files(str(project / "pages"))]
    assert routes == ["/"]


def test_existing_directory_fails(project):
    with pytest.raises(FileExistsError):
        create_project("my-app")


def test_new_cmd_without_name_exits(capsys):
    with pytest.raises(SystemExit) as excinfo:
        new_cmd([])
    assert excinfo.value.code == 1
    assert "Usage: alloy new <project-name>" in capsys.readouterr().err


def test_new_cmd_creates_project(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    new_cmd(["site"])
    routes = [page.route for page in discover_page_files(str(tmp_path / "site" / "pages"))]
    assert routes == ["/"]


def test_new_cmd_on_existing_directory_exits(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "taken").mkdir()
    with pytest.raises(SystemExit) as excinfo:
        new_cmd(["taken"])
    assert excinfo.value.code == 1
    assert "Failed to create project" in capsys.readouterr().err