import pytest

from alloy.main import main, print_usage


def test_version(capsys):
    assert main(["version"]) == 0
    assert capsys.readouterr().out == "alloy version 0.1.0\n"


def test_no_arguments_prints_usage_and_fails(capsys):
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code == 1
    assert "USAGE:" in capsys.readouterr().out


@pytest.mark.parametrize("flag", ["help", "-h", "--help"])
def test_help(flag, capsys):
    assert main([flag]) == 0
    assert "alloy <command> [options]" in capsys.readouterr().out


def test_unknown_command(capsys):
    with pytest.raises(SystemExit) as info:
        main(["bogus"])
    captured = capsys.readouterr()
    assert info.value.code == 1
    assert "Unknown command: bogus" in captured.err
    assert "COMMANDS:" in captured.out


def test_print_usage_lists_every_command(capsys):
    print_usage()
    out = capsys.readouterr().out
    for command in ("install", "dev", "build", "new", "version", "help"):
        assert f"\n  {command} " in out


def test_new_dispatch_creates_project(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["new", "site"]) == 0
    assert (tmp_path / "site" / "pages" / "index.tsx").is_file()
    assert (tmp_path / "site" / "go.mod").is_file()


def test_dev_dispatch_reports_missing_project(tmp_path, capsys):
    with pytest.raises(SystemExit) as info:
        main(["dev", "--dir", str(tmp_path)])
    assert info.value.code == 1
    assert "main.go not found" in capsys.readouterr().err


def test_build_dispatch_reports_missing_project(tmp_path, capsys):
    with pytest.raises(SystemExit) as info:
        main(["build", "--dir", str(tmp_path)])
    assert info.value.code == 1
    assert "Build error" in capsys.readouterr().err